from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .search import DEFAULT_SEARCH_ENGINE_ID


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass
class WhenConfig:
    matlab_root: Path | None = None
    release: str | None = None
    api_key: str | None = None
    search_engine_id: str = DEFAULT_SEARCH_ENGINE_ID
    timeout_s: float = 30
    retries: int = 0
    force_search: bool = False

    @classmethod
    def from_env(cls) -> WhenConfig:
        root = _env("MATLAB_ROOT")
        return cls(
            matlab_root=Path(root) if root else None,
            release=_env("MATLAB_WHEN_RELEASE"),
            api_key=_env("MATLAB_WHEN_GOOGLE_API_KEY"),
            search_engine_id=_env("MATLAB_WHEN_GOOGLE_CX") or DEFAULT_SEARCH_ENGINE_ID,
        )

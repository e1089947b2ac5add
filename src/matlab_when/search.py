from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from .errors import FetchError, SearchError
from .http_client import HttpClient
from .urls import SEARCH_SCOPE

logger = logging.getLogger(__name__)

CUSTOM_SEARCH_ENDPOINT = "https://customsearch.googleapis.com/customsearch/v1"
DEFAULT_SEARCH_ENGINE_ID = "35ad73502cee43a8e"
# The Custom Search API caps a single request at 10 results.
MAX_RESULTS = 10


@dataclass(frozen=True)
class SearchConfig:
    api_key: str | None
    search_engine_id: str = DEFAULT_SEARCH_ENGINE_ID
    scope: str = SEARCH_SCOPE
    num: int = MAX_RESULTS


def build_query(name: str, scope: str = SEARCH_SCOPE) -> str:
    return f'"{name}" site:{scope}'


class GoogleSearch:
    """Scoped exact-name search over the webdocs host.

    ``links`` returns result URLs in ranking order, an empty list when the
    engine has no items, and raises :class:`SearchError` when the request or
    its JSON body fails.
    """

    def __init__(self, http: HttpClient, config: SearchConfig) -> None:
        self._http = http
        self._cfg = config

    def links(self, name: str) -> list[str]:
        if not self._cfg.api_key:
            logger.warning(
                "No search API key configured "
                "(set MATLAB_WHEN_GOOGLE_API_KEY or pass --api-key)"
            )
            raise SearchError("search API key is not configured")

        params = {
            "cx": self._cfg.search_engine_id,
            "key": self._cfg.api_key,
            "q": build_query(name, self._cfg.scope),
            "num": str(self._cfg.num),
        }
        try:
            res = self._http.get(CUSTOM_SEARCH_ENDPOINT, params=params)
        except FetchError as e:
            raise SearchError(str(e)) from e
        if not res.ok:
            raise SearchError(f"search request failed (status={res.status_code})")

        try:
            payload = json.loads(res.text)
        except json.JSONDecodeError as e:
            raise SearchError(f"search returned invalid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise SearchError("search returned an unexpected payload")

        items = payload.get("items") or []
        out: list[str] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            link = str(item.get("link") or "").strip()
            if link:
                out.append(link)
        logger.debug(f"Search returned links (name={name} count={len(out)})")
        return out

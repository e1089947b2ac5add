"""Scraping rules for MathWorks reference pages.

Each fact has its own finder so that a markup change on the documentation
site means swapping one function in :class:`ExtractionPolicy`, not touching
the lookup pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Final

from bs4 import BeautifulSoup

from .model import RenameDetected
from .urls import page_name_from_url

NO_VERSION_MESSAGE: Final[str] = "No release information found on webdocs page"

_VERSION_RE: Final[re.Pattern[str]] = re.compile(r">(Introduced \w+ R20\d{2}[ab])<")

# Version History notes read e.g. "R2022a: Renamed from caxis"; inline tags
# (<code>, <span>) may sit between any of the tokens.
_TAGS = r"(?:\s|<[^>]*>)*"
_RENAME_RE: Final[re.Pattern[str]] = re.compile(
    rf"(R20\d{{2}}[ab]){_TAGS}:{_TAGS}Renamed\s+from{_TAGS}([A-Za-z]\w*(?:\.\w+)*)",
    re.IGNORECASE,
)


def find_version(content: str) -> str | None:
    m = _VERSION_RE.search(content)
    if not m:
        return None
    return m.group(1)


def find_canonical_name(content: str) -> str | None:
    soup = BeautifulSoup(content, "html.parser")
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if "canonical" not in [r.lower() for r in rel]:
            continue
        href = str(link.get("href") or "").strip()
        if not href.lower().split("?", 1)[0].endswith(".html"):
            continue
        name = page_name_from_url(href)
        if name:
            return name
    return None


def find_rename(content: str) -> tuple[str, str] | None:
    """Return ``(version, old_name)`` for a "Renamed from" note, if any."""

    m = _RENAME_RE.search(content)
    if not m:
        return None
    return m.group(1), m.group(2)


@dataclass(frozen=True)
class ExtractionPolicy:
    version: Callable[[str], str | None] = find_version
    canonical_name: Callable[[str], str | None] = find_canonical_name
    rename: Callable[[str], tuple[str, str] | None] = find_rename


DEFAULT_POLICY = ExtractionPolicy()


@dataclass(frozen=True)
class PageFacts:
    version: str | None
    canonical_name: str | None
    display_name: str
    rename: RenameDetected | None = field(default=None)


def extract(
    content: str,
    fallback_name: str,
    *,
    policy: ExtractionPolicy = DEFAULT_POLICY,
) -> PageFacts:
    version = policy.version(content)
    canonical = policy.canonical_name(content)

    rename: RenameDetected | None = None
    found = policy.rename(content)
    if found is not None:
        rename_version, old_name = found
        rename = RenameDetected(
            old_name=old_name,
            version=rename_version,
            new_name=canonical,
        )

    return PageFacts(
        version=version,
        canonical_name=canonical,
        display_name=canonical or fallback_name,
        rename=rename,
    )

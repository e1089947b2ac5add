"""Locate the webdocs page(s) for a function name.

Strategies run in order until one reports FOUND (or the search fallback
reports a connection error):

1. direct guess under the MATLAB reference tree
2. direct guess under the Simulink reference tree
3. scoped web search, filtered to ``.../<name>.html`` links

Direct guesses only survive a rename when the site redirects the old URL.
The search filter matches the queried name, so a renamed page is rejected
there even when it shows up in the results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Sequence

from .errors import SearchError, SearchUnavailableError
from .http_client import HttpClient
from .model import CandidatePage
from .releases import SEARCH_MIN_RELEASE, ReleaseId, is_release_id
from .urls import (
    MATLAB_REF_TEMPLATE,
    SIMULINK_REF_TEMPLATE,
    is_reference_page_for,
    page_name_from_url,
    reference_url,
)

logger = logging.getLogger(__name__)


class ResolutionStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    CONNECTION_ERROR = "connection_error"


@dataclass(frozen=True)
class Resolution:
    status: ResolutionStatus
    candidates: tuple[CandidatePage, ...] = field(default=())

    @classmethod
    def not_found(cls) -> Resolution:
        return cls(ResolutionStatus.NOT_FOUND)


class LinkSearch(Protocol):
    def links(self, name: str) -> list[str]: ...


class Strategy(Protocol):
    label: str

    def resolve(self, name: str) -> Resolution: ...


class DirectGuess:
    def __init__(self, http: HttpClient, template: str, *, label: str) -> None:
        self._http = http
        self._template = template
        self.label = label

    def resolve(self, name: str) -> Resolution:
        url = reference_url(self._template, name)
        res = self._http.fetch_page(url)
        if res is None:
            return Resolution.not_found()
        # Renamed pages redirect; report where the site actually sent us.
        return Resolution(
            ResolutionStatus.FOUND,
            (CandidatePage(url=res.final_url, content=res.text, name=name),),
        )


class SearchFallback:
    label = "search"

    def __init__(
        self,
        http: HttpClient,
        search: LinkSearch,
        *,
        current_release: str | None,
    ) -> None:
        self._http = http
        self._search = search
        self._current_release = current_release

    def _check_release(self) -> None:
        current = self._current_release
        if current is None or not is_release_id(current):
            return
        if ReleaseId.parse(current) < ReleaseId.parse(SEARCH_MIN_RELEASE):
            raise SearchUnavailableError(
                "Unable to guess the webdocs URL directly; the search fallback "
                f"requires {SEARCH_MIN_RELEASE} or newer (current={current})"
            )

    def resolve(self, name: str) -> Resolution:
        self._check_release()

        try:
            links = self._search.links(name)
        except SearchError as e:
            logger.warning(f"Web search failed (name={name} error={e})")
            return Resolution(ResolutionStatus.CONNECTION_ERROR)

        kept = [u for u in links if is_reference_page_for(u, name)]
        logger.debug(
            f"Filtered search links (name={name} total={len(links)} kept={len(kept)})"
        )

        candidates: list[CandidatePage] = []
        for url in kept:
            content, ok = self._http.fetch_text(url)
            if not ok:
                logger.warning(f"Skipping search hit that failed to fetch (url={url})")
                continue
            candidates.append(
                CandidatePage(url=url, content=content, name=page_name_from_url(url))
            )

        if not candidates:
            return Resolution.not_found()
        return Resolution(ResolutionStatus.FOUND, tuple(candidates))


class Resolver:
    def __init__(self, strategies: Sequence[Strategy]) -> None:
        self._strategies = list(strategies)

    @classmethod
    def default(
        cls,
        http: HttpClient,
        search: LinkSearch,
        *,
        current_release: str | None,
        force_search: bool = False,
    ) -> Resolver:
        strategies: list[Strategy] = []
        if not force_search:
            strategies.append(DirectGuess(http, MATLAB_REF_TEMPLATE, label="matlab"))
            strategies.append(
                DirectGuess(http, SIMULINK_REF_TEMPLATE, label="simulink")
            )
        strategies.append(
            SearchFallback(http, search, current_release=current_release)
        )
        return cls(strategies)

    def resolve(self, name: str) -> Resolution:
        for strategy in self._strategies:
            result = strategy.resolve(name)
            logger.debug(
                f"Strategy finished (name={name} strategy={strategy.label} "
                f"status={result.status.value} candidates={len(result.candidates)})"
            )
            if result.status is not ResolutionStatus.NOT_FOUND:
                return result
        return Resolution.not_found()

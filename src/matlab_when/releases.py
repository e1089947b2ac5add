from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import total_ordering

from .errors import FetchError, LatestReleaseError
from .http_client import HttpClient

logger = logging.getLogger(__name__)

LATEST_RELEASE_PAGE = "https://www.mathworks.com/help/matlab/index.html"

# First release with webread()/weboptions(); the search fallback is gated on it.
SEARCH_MIN_RELEASE = "R2014b"

_RELEASE_RE = re.compile(r"^R(\d{4})([ab])$", re.IGNORECASE)
_LATEST_RE = re.compile(r'src="/help/releases/R20(.*?)/includes/')


@total_ordering
@dataclass(frozen=True)
class ReleaseId:
    year: int
    half: str

    @classmethod
    def parse(cls, text: str) -> ReleaseId:
        m = _RELEASE_RE.match(text.strip())
        if not m:
            raise ValueError(f"Not a release identifier: {text!r}")
        return cls(year=int(m.group(1)), half=m.group(2).lower())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ReleaseId):
            return NotImplemented
        return (self.year, self.half) < (other.year, other.half)

    def __str__(self) -> str:
        return f"R{self.year}{self.half}"


def is_release_id(text: str) -> bool:
    return _RELEASE_RE.match(text.strip()) is not None


def latest_release(http: HttpClient) -> str:
    """Scrape the short release string (e.g. ``R2024b``) of the newest
    documented MATLAB release.

    The help index embeds its release in asset paths; this may lag for a few
    days around a new release.
    """

    try:
        res = http.get(LATEST_RELEASE_PAGE)
    except FetchError as e:
        raise LatestReleaseError(f"Failed to fetch webdocs: {e}") from e
    if not res.ok:
        raise LatestReleaseError(
            f"Failed to fetch webdocs (status={res.status_code})"
        )

    m = _LATEST_RE.search(res.text)
    if not m:
        raise LatestReleaseError(
            "Found no version string; the webdocs URL structure has "
            "probably changed"
        )
    release = "R20" + m.group(1)
    logger.debug(f"Latest release scraped (release={release})")
    return release

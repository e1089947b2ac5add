from __future__ import annotations


class WhenError(Exception):
    """Base class for matlab-when failures."""


class InputShapeError(WhenError, TypeError):
    """Raised when the batch input is not a name or a collection of names."""


class SearchUnavailableError(WhenError):
    """Raised when the search fallback is attempted from a release that
    predates it."""


class SearchError(WhenError):
    """Search request failed in transport or returned an unreadable body."""


class LatestReleaseError(WhenError):
    """The latest-release scrape failed."""


class FetchError(WhenError):
    """A page could not be fetched at all (no HTTP response)."""

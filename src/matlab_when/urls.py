from __future__ import annotations

import re
from urllib.parse import ParseResult, urlparse, urlunparse

DOCS_HOST = "www.mathworks.com"
MATLAB_REF_TEMPLATE = "https://mathworks.com/help/matlab/ref/{name}.html"
SIMULINK_REF_TEMPLATE = "https://mathworks.com/help/simulink/slref/{name}.html"
SEARCH_SCOPE = f"{DOCS_HOST}/help/"

_TRACKING_QUERY_EXACT = {"agt=index"}


def normalize_url(raw_url: str) -> str:
    """Normalize a URL before fetching.

    - Lowercases scheme + hostname.
    - Strips fragments.
    - Drops trivial tracking query params.
    """

    parsed: ParseResult = urlparse(raw_url)
    scheme = (parsed.scheme or "").lower()
    netloc = (parsed.netloc or "").lower()

    query = parsed.query
    if query.strip().lower() in _TRACKING_QUERY_EXACT:
        query = ""

    parsed = parsed._replace(
        scheme=scheme,
        netloc=netloc,
        fragment="",
        query=query,
    )
    return urlunparse(parsed)


def reference_url(template: str, name: str) -> str:
    return template.format(name=name)


def is_reference_page_for(url: str, name: str) -> bool:
    """True when the URL path ends in ``<name>.html`` right after a ``/`` or
    ``.``, so ``.../ref/rand.html`` and ``.../ref/pkg.rand.html`` match but
    ``.../ref/grand.html`` does not."""

    path = urlparse(url).path
    pattern = rf"[/.]{re.escape(name)}\.html$"
    return re.search(pattern, path, flags=re.IGNORECASE) is not None


def page_name_from_url(url: str) -> str:
    """Last path segment without ``.html``."""

    segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    if segment.lower().endswith(".html"):
        segment = segment[: -len(".html")]
    return segment

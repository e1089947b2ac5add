from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests
from requests import exceptions as req_exc

from .errors import FetchError
from .urls import normalize_url

logger = logging.getLogger(__name__)

TRANSIENT_HTTP_STATUSES = {429, 500, 502, 503, 504}

USER_AGENT = "matlab-when/0.1 (+https://www.mathworks.com/help/)"


def _retry_after_seconds(headers: dict[str, str]) -> float | None:
    retry_after = headers.get("Retry-After")
    if not retry_after:
        return None
    try:
        return float(retry_after)
    except ValueError:
        return None


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpClient:
    """Blocking GET client.

    Retries are off unless ``max_retries`` is raised; a lookup treats any
    failed fetch as terminal for its stage and moves on to the next one.
    """

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 30,
        max_retries: int = 0,
        backoff_base_s: float = 1.0,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._backoff_base_s = backoff_base_s

    def get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        normalized = normalize_url(url)
        merged_headers = {"User-Agent": USER_AGENT}
        if headers:
            merged_headers.update(headers)
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.get(
                    normalized,
                    params=params,
                    timeout=self._timeout_s,
                    headers=merged_headers,
                )

                if (
                    resp.status_code in TRANSIENT_HTTP_STATUSES
                    and attempt < self._max_retries
                ):
                    retry_after = _retry_after_seconds(dict(resp.headers))
                    wait_s = (
                        retry_after
                        if retry_after is not None
                        else self._backoff_base_s * (2**attempt)
                    )
                    time.sleep(wait_s)
                    continue

                return FetchResult(
                    url=normalized,
                    final_url=str(resp.url),
                    status_code=int(resp.status_code),
                    body=resp.content,
                )
            except req_exc.RequestException as e:
                last_error = e
                if attempt >= self._max_retries:
                    break
                time.sleep(self._backoff_base_s * (2**attempt))

        raise FetchError(f"Failed to fetch {normalized}: {last_error}")

    def fetch_page(self, url: str) -> FetchResult | None:
        """Successful response for ``url`` (redirects followed), or ``None`` on
        HTTP errors and transport failures."""

        try:
            res = self.get(url)
        except FetchError as e:
            logger.debug(f"Fetch failed (url={url} error={e})")
            return None
        if not res.ok:
            logger.debug(
                f"Fetch returned error status (url={url} status={res.status_code})"
            )
            return None
        return res

    def fetch_text(self, url: str) -> tuple[str, bool]:
        """Return ``(body_text, ok)``; the body is empty when ``ok`` is false."""

        res = self.fetch_page(url)
        if res is None:
            return "", False
        return res.text, True

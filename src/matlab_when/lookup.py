from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import requests

from .classify import classify, latest_or_placeholder
from .config import WhenConfig
from .errors import InputShapeError
from .extract import DEFAULT_POLICY, ExtractionPolicy
from .http_client import HttpClient
from .installation import MatlabInstallation, discover_root
from .model import Outcome
from .releases import latest_release
from .resolver import LinkSearch, Resolver
from .search import GoogleSearch, SearchConfig

logger = logging.getLogger(__name__)


def flatten_names(names: object) -> list[str]:
    """Flatten a name or an arbitrarily nested collection of names, keeping
    order. Anything that is not text at the leaves is rejected up front."""

    if isinstance(names, str):
        return [names]
    if isinstance(names, (bytes, bytearray)) or not isinstance(names, Iterable):
        raise InputShapeError(
            "Input should be a function name or a collection of function names "
            f"(got {type(names).__name__})"
        )
    out: list[str] = []
    for item in names:
        out.extend(flatten_names(item))
    return out


class WhenClient:
    def __init__(
        self,
        *,
        http: HttpClient,
        search: LinkSearch,
        installation: MatlabInstallation,
        force_search: bool = False,
        policy: ExtractionPolicy = DEFAULT_POLICY,
    ) -> None:
        self.http = http
        self.installation = installation
        self.policy = policy
        self.resolver = Resolver.default(
            http,
            search,
            current_release=installation.release(),
            force_search=force_search,
        )

    @classmethod
    def from_config(cls, config: WhenConfig) -> WhenClient:
        session = requests.Session()
        http = HttpClient(
            session, timeout_s=config.timeout_s, max_retries=config.retries
        )
        search = GoogleSearch(
            http,
            SearchConfig(
                api_key=config.api_key,
                search_engine_id=config.search_engine_id,
            ),
        )
        root = config.matlab_root or discover_root()
        installation = MatlabInstallation(root, configured_release=config.release)
        return cls(
            http=http,
            search=search,
            installation=installation,
            force_search=config.force_search,
        )

    def latest_release(self) -> str:
        return latest_release(self.http)

    def current_release(self) -> str:
        # Without a local install the caller is effectively on the newest docs.
        found = self.installation.release()
        if found:
            return found
        return latest_or_placeholder(self.latest_release)

    def lookup(self, name: str) -> list[Outcome]:
        fname = name.lower()
        resolution = self.resolver.resolve(fname)
        logger.debug(
            f"Resolved (name={fname} status={resolution.status.value} "
            f"candidates={len(resolution.candidates)})"
        )
        return classify(
            resolution,
            fname,
            self.installation,
            current_release=self.current_release,
            latest_release=self.latest_release,
            policy=self.policy,
        )


def iter_outcomes(
    names: object,
    *,
    client: WhenClient | None = None,
    config: WhenConfig | None = None,
) -> Iterator[tuple[str, list[Outcome]]]:
    """Yield ``(name, outcomes)`` per name, one name fully resolved before the
    next is started."""

    flat = flatten_names(names)
    if client is None:
        client = WhenClient.from_config(config or WhenConfig.from_env())
    for name in flat:
        yield name, client.lookup(name)


def when(
    names: object,
    *,
    client: WhenClient | None = None,
    config: WhenConfig | None = None,
) -> list[Outcome]:
    out: list[Outcome] = []
    for _, outcomes in iter_outcomes(names, client=client, config=config):
        out.extend(outcomes)
    return out

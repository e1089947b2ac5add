from __future__ import annotations

import logging
from typing import Callable

from .errors import LatestReleaseError
from .extract import DEFAULT_POLICY, ExtractionPolicy, extract
from .installation import MatlabInstallation
from .model import (
    CandidatePage,
    ConnectionFailed,
    ExistsLocallyUndocumented,
    NotFoundAnywhere,
    Outcome,
    PageFoundNoVersion,
    VersionFound,
)
from .resolver import Resolution, ResolutionStatus

logger = logging.getLogger(__name__)

LATEST_RELEASE_PLACEHOLDER = "the latest version"


def outcome_for_page(
    page: CandidatePage,
    *,
    policy: ExtractionPolicy = DEFAULT_POLICY,
) -> Outcome:
    facts = extract(page.content, page.name, policy=policy)
    page.name = facts.display_name
    if facts.version is None:
        return PageFoundNoVersion(name=page.name, url=page.url)
    return VersionFound(
        name=page.name,
        version=facts.version,
        url=page.url,
        rename=facts.rename,
    )


def latest_or_placeholder(latest_release: Callable[[], str]) -> str:
    try:
        return latest_release()
    except LatestReleaseError as e:
        logger.warning(f"Latest release lookup failed (error={e})")
        return LATEST_RELEASE_PLACEHOLDER


def classify(
    resolution: Resolution,
    name: str,
    installation: MatlabInstallation,
    *,
    current_release: Callable[[], str],
    latest_release: Callable[[], str],
    policy: ExtractionPolicy = DEFAULT_POLICY,
) -> list[Outcome]:
    """Turn a resolution into reportable outcomes.

    Found pages give one outcome each, in resolver order. Every other
    terminus gives exactly one outcome for the whole query.
    """

    if resolution.status is ResolutionStatus.FOUND:
        return [outcome_for_page(p, policy=policy) for p in resolution.candidates]

    if resolution.status is ResolutionStatus.CONNECTION_ERROR:
        return [ConnectionFailed(name=name)]

    fpath = installation.locate(name)
    if fpath is not None:
        logger.debug(f"Undocumented symbol exists locally (name={name} path={fpath})")
        return [
            ExistsLocallyUndocumented(
                name=name,
                local_release=current_release(),
                latest_release=latest_or_placeholder(latest_release),
            )
        ]
    return [NotFoundAnywhere(name=name, local_release=current_release())]

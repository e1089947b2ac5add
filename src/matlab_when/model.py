from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass
class CandidatePage:
    url: str
    content: str
    name: str


@dataclass(frozen=True)
class RenameDetected:
    old_name: str
    version: str
    new_name: str | None = None


@dataclass(frozen=True)
class VersionFound:
    name: str
    version: str
    url: str
    rename: RenameDetected | None = None


@dataclass(frozen=True)
class PageFoundNoVersion:
    name: str
    url: str


@dataclass(frozen=True)
class ExistsLocallyUndocumented:
    name: str
    local_release: str
    latest_release: str


@dataclass(frozen=True)
class NotFoundAnywhere:
    name: str
    local_release: str


@dataclass(frozen=True)
class ConnectionFailed:
    name: str


Outcome = Union[
    VersionFound,
    PageFoundNoVersion,
    ExistsLocallyUndocumented,
    NotFoundAnywhere,
    ConnectionFailed,
]

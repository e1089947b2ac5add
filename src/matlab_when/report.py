from __future__ import annotations

from .extract import NO_VERSION_MESSAGE
from .model import (
    ConnectionFailed,
    ExistsLocallyUndocumented,
    NotFoundAnywhere,
    Outcome,
    PageFoundNoVersion,
    RenameDetected,
    VersionFound,
)

CONNECTION_ERROR_MESSAGE = (
    "Connection error.  Direct lookups and web searches all failed."
)


def _indent(name: str) -> str:
    # Aligns continuation lines under the text after "## <name> -- ".
    return " " * (len(name) + 7)


def _headline(name: str, text: str) -> str:
    return f"## {name} -- {text}"


def rename_message(rename: RenameDetected) -> str:
    if rename.new_name:
        return (
            f"{rename.old_name} was renamed to {rename.new_name} "
            f"in {rename.version}"
        )
    return f"{rename.old_name} was renamed in {rename.version}"


def format_outcome(outcome: Outcome, *, show_url: bool = False) -> list[str]:
    if isinstance(outcome, ConnectionFailed):
        return [CONNECTION_ERROR_MESSAGE]

    pad = _indent(outcome.name)

    if isinstance(outcome, VersionFound):
        lines = [_headline(outcome.name, outcome.version)]
        if outcome.rename is not None:
            lines.append(pad + rename_message(outcome.rename))
        if show_url:
            lines.append(pad + outcome.url)
        return lines

    if isinstance(outcome, PageFoundNoVersion):
        lines = [_headline(outcome.name, NO_VERSION_MESSAGE)]
        if show_url:
            lines.append(pad + outcome.url)
        return lines

    if isinstance(outcome, ExistsLocallyUndocumented):
        return [
            _headline(outcome.name, "Exists, but no online documentation found"),
            pad
            + "Function may have been removed between "
            + f"{outcome.local_release} and {outcome.latest_release}",
        ]

    if isinstance(outcome, NotFoundAnywhere):
        return [
            _headline(
                outcome.name,
                "Does not exist in this installation; no online documentation found",
            ),
            pad
            + "If this is part of MATLAB, it may have been removed before "
            + outcome.local_release,
        ]

    raise TypeError(f"Unknown outcome: {outcome!r}")


def format_outcomes(outcomes: list[Outcome], *, show_url: bool = False) -> str:
    lines: list[str] = []
    for outcome in outcomes:
        lines.extend(format_outcome(outcome, show_url=show_url))
    return "\n".join(lines)

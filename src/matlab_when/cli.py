from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from tqdm import tqdm

from .config import WhenConfig
from .errors import LatestReleaseError, WhenError
from .lookup import WhenClient, flatten_names
from .releases import is_release_id
from .report import format_outcome


def _stderr_handler() -> RichHandler:
    # stdout carries the report lines; logs go to stderr.
    return RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_path=False
    )


def configure_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[_stderr_handler()],
    )


def _release_arg(text: str) -> str:
    if not is_release_id(text):
        raise argparse.ArgumentTypeError(f"expected a release like R2021a: {text!r}")
    return text[0].upper() + text[1:].lower()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matlab-when",
        description=(
            "Report the MATLAB release in which a function was introduced, "
            "scraped from MathWorks webdocs."
        ),
    )
    parser.add_argument("names", nargs="*", metavar="NAME")
    parser.add_argument(
        "--latest",
        action="store_true",
        help="Print the latest documented release (e.g. R2024b) and exit",
    )
    parser.add_argument(
        "--matlab-root",
        type=Path,
        default=None,
        help="MATLAB installation to check for undocumented functions",
    )
    parser.add_argument(
        "--release",
        type=_release_arg,
        default=None,
        help="Current release when no installation is available",
    )
    parser.add_argument("--api-key", default=None, help="Custom Search API key")
    parser.add_argument("--cx", default=None, help="Custom Search engine id")
    parser.add_argument("--timeout", type=float, default=30)
    parser.add_argument("--retries", type=int, default=0)
    parser.add_argument(
        "--force-search",
        action="store_true",
        help="Skip direct URL guesses and go straight to web search",
    )
    parser.add_argument(
        "--urls",
        action="store_true",
        help="Print the webdocs URL under each page result",
    )
    parser.add_argument("--progress", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _config_from_args(args: argparse.Namespace) -> WhenConfig:
    cfg = WhenConfig.from_env()
    if args.matlab_root is not None:
        cfg.matlab_root = args.matlab_root
    if args.release is not None:
        cfg.release = args.release
    if args.api_key:
        cfg.api_key = args.api_key
    if args.cx:
        cfg.search_engine_id = args.cx
    cfg.timeout_s = float(args.timeout)
    cfg.retries = max(0, int(args.retries))
    cfg.force_search = bool(args.force_search)
    return cfg


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        client = WhenClient.from_config(_config_from_args(args))

        if bool(args.latest):
            try:
                print(client.latest_release())
            except LatestReleaseError as e:
                print(str(e), file=sys.stderr)
                return 2
            return 0

        if not args.names:
            parser.print_usage(sys.stderr)
            print("matlab-when: at least one NAME is required", file=sys.stderr)
            return 2

        names = flatten_names(args.names)
        for name in tqdm(names, disable=not args.progress, file=sys.stderr):
            for outcome in client.lookup(name):
                for line in format_outcome(outcome, show_url=bool(args.urls)):
                    print(line)
    except WhenError as e:
        print(str(e), file=sys.stderr)
        return 2
    return 0

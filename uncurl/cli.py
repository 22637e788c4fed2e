"""Command-line interface for inspecting curl captures."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console

from . import __version__
from .config import LoggingSettings, load_environment
from .errors import UncurlError
from .logging_utils import configure_logging, redact_capture
from .parser import parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uncurl",
        description='Inspect a browser "Copy as cURL" capture as a structured request.',
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "source",
        nargs="?",
        type=Path,
        help="File holding the curl capture (reads stdin when omitted)",
    )
    parser.add_argument("--url", help="Derive a request for this URL instead of the captured one")
    parser.add_argument("--method", help="Override the HTTP method of the derived request")
    parser.add_argument("--data", help="Override the body of the derived request")
    parser.add_argument("--show-raw", action="store_true", help="Include the original capture in the output")
    parser.add_argument("--log-json", action="store_true", help="Emit structured JSON logs to the log file")
    parser.add_argument("--log-file", type=Path, help="Write logs to the specified path")
    parser.add_argument("--redact", action="append", default=[], help="Additional header names to redact in logs")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors")
    return parser


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(None if argv is None else list(argv))


def configure_cli_logging(args: argparse.Namespace) -> None:
    settings = LoggingSettings.from_env()
    level = settings.level
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    configure_logging(
        level=level,
        json_logs=args.log_json or settings.json_logs,
        logfile=args.log_file or settings.logfile,
        extra_redact=args.redact,
    )


def _read_capture(source: Path | None) -> bytes:
    if source is None:
        return sys.stdin.buffer.read()
    return source.read_bytes()


def main(argv: Optional[Iterable[str]] = None) -> int:
    load_environment()
    args = parse_args(argv)

    try:
        configure_cli_logging(args)
    except ValueError as exc:
        print(f"uncurl: {exc}", file=sys.stderr)
        return 2
    logger = logging.getLogger("uncurl.cli")

    try:
        capture = _read_capture(args.source)
    except OSError as exc:
        logger.error("Unable to read capture: %s", exc)
        return 1

    try:
        parsed = parse(capture)
        request = parsed.new_request(args.method, args.url, args.data)
    except UncurlError as exc:
        logger.error(
            "Failed to parse curl capture (%s): %s",
            type(exc).__name__,
            redact_capture(str(exc), args.redact),
        )
        return 1

    summary: dict[str, object] = {
        "target": request.url,
        "method": request.method,
        "headers": request.headers,
        "accept_encoding": parsed.accept_encoding,
        "body": (request.body or b"").decode("utf-8", errors="replace"),
    }
    if args.show_raw:
        summary["raw"] = parsed.original_text()

    Console().print_json(json.dumps(summary))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())

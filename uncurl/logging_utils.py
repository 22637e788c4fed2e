"""Logging configuration for uncurl command-line use.

Library modules only create loggers; handlers are installed here, by the CLI
or by applications that want uncurl's console and file output.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5

# Captured browser requests routinely carry session material.
SENSITIVE_HEADERS = {
    "cookie",
    "set-cookie",
    "authorization",
    "proxy-authorization",
    "x-csrf-token",
    "x-xsrf-token",
}


class JsonFormatter(logging.Formatter):
    """Emit logs as structured JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True)


class SensitiveDataFilter(logging.Filter):
    """Redact sensitive header values passed as a mapping argument."""

    def __init__(self, extra_headers: Iterable[str] = ()) -> None:
        super().__init__(name="")
        self.sensitive = SENSITIVE_HEADERS | {name.lower() for name in extra_headers}

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, dict):
            sanitized = {}
            for key, value in record.args.items():
                if isinstance(key, str) and key.strip().lower() in self.sensitive:
                    sanitized[key] = "[redacted]"
                else:
                    sanitized[key] = value
            record.args = sanitized
        return True


_CAPTURE_HEADER_PATTERN = re.compile(r"(-H\s+'\s*([^:']+?)\s*:\s*)([^']*)(')")


def redact_capture(text: str, extra_headers: Iterable[str] = ()) -> str:
    """Mask sensitive ``-H`` values inside a curl capture."""

    sensitive = SENSITIVE_HEADERS | {name.lower() for name in extra_headers}

    def _mask(match: re.Match[str]) -> str:
        if match.group(2).lower() in sensitive:
            return f"{match.group(1)}[redacted]{match.group(4)}"
        return match.group(0)

    return _CAPTURE_HEADER_PATTERN.sub(_mask, text)


def _rich_handler(level: int) -> logging.Handler:
    from rich.logging import RichHandler

    return RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_path=False,
        level=level,
    )


def configure_logging(
    level: int = logging.INFO,
    *,
    json_logs: bool = False,
    logfile: Optional[Path | str] = None,
    suppress: Optional[Iterable[str]] = None,
    extra_redact: Iterable[str] = (),
) -> None:
    """Configure root logging with rotation and optional JSON output."""

    handlers: list[logging.Handler] = []
    redactor = SensitiveDataFilter(extra_redact)

    console_handler = _rich_handler(level)
    console_handler.addFilter(redactor)
    handlers.append(console_handler)

    if logfile:
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.addFilter(redactor)
        if json_logs:
            file_handler.setFormatter(JsonFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in suppress or ("urllib3",):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


__all__ = [
    "configure_logging",
    "JsonFormatter",
    "SensitiveDataFilter",
    "SENSITIVE_HEADERS",
    "redact_capture",
]

"""Configuration helpers and .env loading for uncurl's command line."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

ENV_FILE = Path(".env")

_TRUTHY = {"1", "true", "yes", "on"}


@lru_cache(maxsize=1)
def load_environment() -> dict[str, str]:
    """Merge a .env file from the working directory into the environment, once.

    Variables already set in the process environment take precedence.
    """

    if ENV_FILE.is_file():
        load_dotenv(ENV_FILE, override=False)
    return dict(os.environ)


@dataclass(frozen=True)
class LoggingSettings:
    """Logging defaults, overridable by command-line flags."""

    level: int = logging.WARNING
    logfile: Optional[Path] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LoggingSettings":
        env = os.environ if environ is None else environ
        level_name = env.get("UNCURL_LOG_LEVEL", "WARNING").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level in UNCURL_LOG_LEVEL: {level_name!r}")
        logfile = env.get("UNCURL_LOG_FILE") or None
        return cls(
            level=level,
            logfile=Path(logfile) if logfile else None,
            json_logs=env.get("UNCURL_LOG_JSON", "false").strip().lower() in _TRUTHY,
        )


__all__ = ["load_environment", "LoggingSettings", "ENV_FILE"]

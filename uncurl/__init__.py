"""Turn browser "Copy as cURL" captures into reusable request templates."""

from __future__ import annotations

# Semantic version for package consumers.
__version__ = "0.1.0"

from .builder import ReplayRequest, build_request
from .errors import (
    InvalidInputError,
    InvalidTargetError,
    MissingTargetError,
    RequestBuildError,
    UncurlError,
)
from .parser import ParsedRequest, parse, parse_string

__all__ = [
    "__version__",
    "InvalidInputError",
    "InvalidTargetError",
    "MissingTargetError",
    "ParsedRequest",
    "ReplayRequest",
    "RequestBuildError",
    "UncurlError",
    "build_request",
    "parse",
    "parse_string",
]

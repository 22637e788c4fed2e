"""Error types raised while parsing curl captures and building requests."""

from __future__ import annotations

__all__ = [
    "UncurlError",
    "InvalidInputError",
    "MissingTargetError",
    "InvalidTargetError",
    "RequestBuildError",
]


class UncurlError(ValueError):
    """Base class for every failure raised by uncurl."""


class InvalidInputError(UncurlError):
    """Raised when the curl capture is empty."""


class MissingTargetError(UncurlError):
    """Raised when no ``curl '<url>' `` prefix can be found."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Failed to find target URL in curl string {text}")
        self.text = text


class InvalidTargetError(UncurlError):
    """Raised when the target is not an absolute URL."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Target url {target} failed to parse: {reason}")
        self.target = target
        self.reason = reason


class RequestBuildError(UncurlError):
    """Raised when a method/url/body combination cannot form a request."""

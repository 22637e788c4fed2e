"""Parse Chrome/Chromium "Copy as cURL" captures.

In the browser's developer tools, the Network tab offers "Copy as cURL" for
every request. The resulting command reproduces the request when pasted into
a shell. :func:`parse` turns that text into a :class:`ParsedRequest` from
which any number of requests can be derived, with different targets or
bodies, while keeping the captured header values.

Only what Chromium emits is understood: single-quoted arguments, ``-H`` for
headers and ``--data`` for the body. Anything else is ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .builder import (
    BodyInput,
    ReplayRequest,
    TimeoutValue,
    absolute_url_problem,
    assemble_request,
    build_request,
)
from .errors import (
    InvalidInputError,
    InvalidTargetError,
    MissingTargetError,
    RequestBuildError,
)

__all__ = ["ParsedRequest", "parse", "parse_string"]

LOGGER = logging.getLogger(__name__)

# These patterns match output from Chrome/Chromium.
TARGET_PATTERN = re.compile(rb"^\s*curl\s+'([^']+?)' ")
HEADER_PATTERN = re.compile(rb"-H\s+'([^:]+?):\s+(.+?)'")
DATA_PATTERN = re.compile(rb" --data '([^']+?)' ")
ACCEPT_ENCODING_PATTERN = re.compile(r"^\s*accept-encoding\s*$", re.IGNORECASE)

RawInput = Union[bytes, bytearray, str]


def _text(value: bytes) -> str:
    return value.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ParsedRequest:
    """Immutable result of parsing one curl capture.

    ``accept_encoding`` holds the captured ``Accept-Encoding`` value. The
    header is kept out of :attr:`headers` because sending it explicitly stops
    ``requests``/urllib3 from negotiating and decoding compression for us;
    callers who want manual content negotiation can add it back themselves.
    """

    raw_input: RawInput
    target: str
    method: str = "GET"
    accept_encoding: str = ""
    _headers: Mapping[str, str] = field(default_factory=dict, repr=False, hash=False)
    _body: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        problem = absolute_url_problem(self.target)
        if problem:
            raise InvalidTargetError(self.target, problem)
        if self.method not in {"GET", "POST"}:
            raise RequestBuildError(f"Unsupported captured method {self.method!r}")
        if (self.method == "POST") != bool(self._body):
            raise RequestBuildError("Captured method must be POST exactly when a body is present")
        if isinstance(self.raw_input, bytearray):
            object.__setattr__(self, "raw_input", bytes(self.raw_input))
        object.__setattr__(self, "_headers", MappingProxyType(dict(self._headers)))
        object.__setattr__(self, "_body", bytes(self._body))

    def __str__(self) -> str:
        return self.original_text()

    def original_text(self) -> str:
        """Return the original curl string."""

        if isinstance(self.raw_input, str):
            return self.raw_input
        return _text(self.raw_input)

    @property
    def headers(self) -> dict[str, str]:
        """A new dict of the captured headers, without ``Accept-Encoding``."""

        return dict(self._headers)

    @property
    def body(self) -> bytes:
        """A copy of the ``--data`` argument; empty when it was absent."""

        return bytes(self._body)

    def request(self) -> ReplayRequest:
        """Return the captured request as a :class:`ReplayRequest`."""

        # Method and target were validated during construction.
        return build_request(self)

    def new_request(
        self,
        method: Optional[str] = None,
        url: Optional[str] = None,
        body: BodyInput = None,
        *,
        timeout: TimeoutValue = None,
    ) -> ReplayRequest:
        """Like :meth:`request`, with the method, url and body overridable."""

        return build_request(self, method, url, body, timeout=timeout)


def _extract_headers(data: bytes) -> tuple[dict[str, str], str]:
    headers: dict[str, str] = {}
    accept_encoding = ""
    for match in HEADER_PATTERN.finditer(data):
        name = _text(match.group(1))
        if not name:
            continue
        value = _text(match.group(2))
        if ACCEPT_ENCODING_PATTERN.match(name):
            accept_encoding = value
            continue
        headers[name] = value
    return headers, accept_encoding


def parse(data: RawInput) -> ParsedRequest:
    """Parse a Chrome/Chromium "Copy as cURL" capture.

    ``data`` may be ``bytes`` (convenient when loading from a file) or
    ``str``. Raises a subclass of :class:`~uncurl.errors.UncurlError` when the
    capture cannot be turned into a request.
    """

    if not data:
        raise InvalidInputError("parse called with empty input")
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    target_match = TARGET_PATTERN.search(raw)
    if target_match is None:
        raise MissingTargetError(_text(raw))
    target = _text(target_match.group(1))
    problem = absolute_url_problem(target)
    if problem:
        raise InvalidTargetError(target, problem)

    headers, accept_encoding = _extract_headers(raw)

    method = "GET"
    body = b""
    data_match = DATA_PATTERN.search(raw)
    if data_match is not None:
        method = "POST"
        body = data_match.group(1)

    try:
        assemble_request(method, target, body=body).prepare()
    except RequestBuildError as exc:
        raise RequestBuildError(f"Unable to create new request from curl: {exc}") from exc

    LOGGER.debug("Parsed curl capture: %s %s", method, target)
    LOGGER.debug("Captured headers: %s", headers)
    return ParsedRequest(
        raw_input=data,
        target=target,
        method=method,
        accept_encoding=accept_encoding,
        _headers=headers,
        _body=body,
    )


def parse_string(text: str) -> ParsedRequest:
    """Parse a curl capture given as text."""

    return parse(text)

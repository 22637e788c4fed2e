"""Derive concrete HTTP requests from a parsed curl capture.

A :class:`~uncurl.parser.ParsedRequest` is a template; every call into this
module yields a new :class:`ReplayRequest` holding its own copy of the
captured headers. Transport stays with the caller's ``requests.Session``.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING, Any, Optional, Tuple, Union

import requests
from requests import exceptions as requests_exceptions
from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from .errors import RequestBuildError

if TYPE_CHECKING:
    from .parser import ParsedRequest

__all__ = [
    "ReplayRequest",
    "absolute_url_problem",
    "assemble_request",
    "build_request",
]

LOGGER = logging.getLogger(__name__)

# RFC 7230 "token": the characters allowed in a request method.
METHOD_PATTERN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

BodyInput = Union[bytes, bytearray, memoryview, str, IO[bytes], None]
TimeoutValue = Union[float, Tuple[float, float], None]


def absolute_url_problem(url: object) -> Optional[str]:
    """Return why ``url`` is not an absolute request URL, or ``None``."""

    if not isinstance(url, str) or not url:
        return "empty url"
    try:
        parsed = parse_url(url)
    except LocationParseError as exc:
        return str(exc)
    if not parsed.scheme:
        return "missing scheme"
    if not parsed.host:
        return "missing host"
    return None


def _coerce_body(body: BodyInput) -> Optional[bytes]:
    if body is None:
        return None
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    if isinstance(body, str):
        return body.encode("utf-8")
    read = getattr(body, "read", None)
    if callable(read):
        # Drain single-use streams so the request can be replayed.
        data = read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        return bytes(data)
    raise RequestBuildError(f"Unsupported request body type: {type(body).__name__}")


@dataclass
class ReplayRequest:
    """A concrete request derived from a curl capture."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: TimeoutValue = None

    def body_stream(self) -> Optional[io.BytesIO]:
        """Return a fresh single-use reader over the body."""

        if self.body is None:
            return None
        return io.BytesIO(self.body)

    def prepare(self, session: Optional[requests.Session] = None) -> requests.PreparedRequest:
        """Prepare for transport, merging ``session`` defaults when given.

        With a session, its default headers (``Accept-Encoding`` included),
        cookies and auth are applied; captured headers win on conflicts.
        """

        request = requests.Request(
            method=self.method,
            url=self.url,
            headers=dict(self.headers),
            data=self.body,
        )
        try:
            if session is None:
                return request.prepare()
            return session.prepare_request(request)
        except (requests_exceptions.RequestException, ValueError) as exc:
            raise RequestBuildError(f"Error building request: {exc}") from exc

    def send(self, session: requests.Session, **kwargs: Any) -> requests.Response:
        """Send through a caller-supplied session; no retries are attempted."""

        kwargs.setdefault("timeout", self.timeout)
        prepared = self.prepare(session)
        LOGGER.debug("Sending %s %s", prepared.method, prepared.url)
        return session.send(prepared, **kwargs)


def assemble_request(
    method: str,
    url: str,
    headers: Mapping[str, str] | None = None,
    body: BodyInput = None,
    *,
    timeout: TimeoutValue = None,
) -> ReplayRequest:
    """Validate a method/url/body combination and wrap it in a request."""

    if not isinstance(method, str) or not METHOD_PATTERN.fullmatch(method):
        raise RequestBuildError(f"Error building request: invalid method {method!r}")
    problem = absolute_url_problem(url)
    if problem:
        raise RequestBuildError(f"Error building request: {url!r}: {problem}")
    return ReplayRequest(
        method=method,
        url=url,
        headers=dict(headers or {}),
        body=_coerce_body(body) or None,
        timeout=timeout,
    )


def build_request(
    parsed: "ParsedRequest",
    method: Optional[str] = None,
    url: Optional[str] = None,
    body: BodyInput = None,
    *,
    timeout: TimeoutValue = None,
) -> ReplayRequest:
    """Build a request from ``parsed``, overriding any of method, url or body.

    Omitted values fall back to the captured ones. The captured headers are
    always copied, and ``Accept-Encoding`` is never among them, so the
    transport keeps negotiating and decoding compression on its own.
    """

    return assemble_request(
        parsed.method if method is None else method,
        parsed.target if url is None else url,
        parsed.headers,
        parsed.body if body is None else body,
        timeout=timeout,
    )

# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Error taxonomy for the RESO client.

Every failure surfaced by the library is one of a closed set of
:class:`ResoError` subclasses:

- :class:`ConfigError`: missing or invalid client configuration.
- :class:`NetworkError`: transport failure before any HTTP status exists.
- :class:`HttpError` subclasses, one per status family:
  :class:`UnauthorizedError` (401), :class:`ForbiddenError` (403),
  :class:`NotFoundError` (404), :class:`RateLimitedError` (429),
  :class:`ServerError` (5xx) and :class:`ODataError` (any other status).
- :class:`ParseError`: a 2xx response whose body could not be decoded.
- :class:`InvalidQueryError`: a query rejected by builder validation.

:func:`http_error_from_status` is the single classifier used by every request
path to turn a non-success response into one of the HTTP classes.
"""

from __future__ import annotations

import datetime as _dt
import json
from typing import Any, Dict, Optional, Tuple

from ._error_codes import (
    CONFIG_ERROR,
    FORBIDDEN,
    INVALID_QUERY,
    NETWORK_ERROR,
    NOT_FOUND,
    ODATA_ERROR,
    PARSE_ERROR,
    RATE_LIMITED,
    SERVER_ERROR,
    UNAUTHORIZED,
    http_status_to_subcode,
)

MAX_ERROR_BODY_CHARS = 500
TRUNCATION_SUFFIX = "... (truncated)"


class ResoError(Exception):
    """Base structured error for the RESO client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ConfigError(ResoError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code=CONFIG_ERROR, details=details, source="client")


class NetworkError(ResoError):
    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code=NETWORK_ERROR, details=details, source="network")


class ParseError(ResoError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=PARSE_ERROR, subcode=subcode, details=details, source="client")


class InvalidQueryError(ResoError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=INVALID_QUERY, subcode=subcode, details=details, source="client")


class HttpError(ResoError):
    """
    Base class for errors that carry an HTTP status code.

    Not raised directly; :func:`http_error_from_status` picks the concrete subclass.

    :param message: Error message extracted from the response body.
    :type message: str
    :param status_code: Original HTTP status code.
    :type status_code: int
    :param service_error_code: ``error.code`` from an OData error envelope, if any.
    :type service_error_code: str or None
    :param body_excerpt: Raw (possibly truncated) body when no envelope was found.
    :type body_excerpt: str or None
    """

    error_code = ODATA_ERROR

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        service_error_code: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code=self.error_code,
            subcode=http_status_to_subcode(status_code),
            status_code=status_code,
            details=d,
            source="server",
        )


class UnauthorizedError(HttpError):
    """401: invalid or missing authentication token."""

    error_code = UNAUTHORIZED


class ForbiddenError(HttpError):
    """403: valid credentials without sufficient permissions."""

    error_code = FORBIDDEN


class NotFoundError(HttpError):
    """404: resource or endpoint not found."""

    error_code = NOT_FOUND


class RateLimitedError(HttpError):
    """429: rate limit exceeded."""

    error_code = RATE_LIMITED


class ServerError(HttpError):
    """5xx: server-side failure."""

    error_code = SERVER_ERROR


class ODataError(HttpError):
    """Any other non-success status (400, 405, 409, 418, ...)."""

    error_code = ODATA_ERROR


def _parse_error_envelope(body: str) -> Optional[Tuple[str, str]]:
    """Return ``(message, code)`` from ``{"error": {"code"?, "message"}}`` or None."""
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    code = error.get("code", "")
    if not isinstance(message, str) or not isinstance(code, str):
        return None
    return message, code


def parse_error_body(body: str) -> str:
    """
    Extract a human-readable message from an error response body.

    Structured OData errors yield ``"{message} (code: {code})"`` (or the bare
    message when ``code`` is empty). Any other body is returned as-is, cut to
    500 characters with a ``"... (truncated)"`` suffix when longer.

    :param body: Raw response body text.
    :type body: str
    :return: Message suitable for an error.
    :rtype: str
    """
    parsed = _parse_error_envelope(body)
    if parsed is not None:
        message, code = parsed
        if code:
            return f"{message} (code: {code})"
        return message
    if len(body) > MAX_ERROR_BODY_CHARS:
        return body[:MAX_ERROR_BODY_CHARS] + TRUNCATION_SUFFIX
    return body


def _error_class_for_status(status_code: int) -> type:
    if status_code == 401:
        return UnauthorizedError
    if status_code == 403:
        return ForbiddenError
    if status_code == 404:
        return NotFoundError
    if status_code == 429:
        return RateLimitedError
    if 500 <= status_code <= 599:
        return ServerError
    return ODataError


def http_error_from_status(status_code: int, body: str) -> HttpError:
    """
    Map an HTTP status and response body to an :class:`HttpError` subclass.

    :param status_code: HTTP status code of a non-success response.
    :type status_code: int
    :param body: Response body text (may be empty).
    :type body: str
    :return: The classified error; callers raise it.
    :rtype: HttpError

    Example::

        err = http_error_from_status(401, '{"error":{"code":"X","message":"Y"}}')
        assert isinstance(err, UnauthorizedError)
        assert err.message == "Y (code: X)"
    """
    body = body or ""
    message = parse_error_body(body)
    envelope = _parse_error_envelope(body)
    service_code = envelope[1] if envelope is not None and envelope[1] else None
    excerpt = message if envelope is None and body else None
    cls = _error_class_for_status(status_code)
    return cls(message, status_code, service_error_code=service_code, body_excerpt=excerpt)


__all__ = [
    "ResoError",
    "ConfigError",
    "NetworkError",
    "ParseError",
    "InvalidQueryError",
    "HttpError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "ODataError",
    "parse_error_body",
    "http_error_from_status",
]

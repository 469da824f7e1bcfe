# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exception hierarchy for the FileMaker Data API client.

Every failure surfaced by the client is a :class:`FileMakerError`. Errors that
originate from a service response derive from :class:`HttpError` and carry the
HTTP status code, the FileMaker service error code (``messages[0].code``) and a
short excerpt of the response body in :attr:`FileMakerError.details`.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class FileMakerError(Exception):
    """Base structured error for the FileMaker client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class TransportError(FileMakerError):
    """The request never produced an HTTP response (DNS, refused connection, timeout)."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="transport_error", details=details, source="client", is_transient=True)


class ValidationError(FileMakerError):
    """Malformed input, rejected either locally or by the service."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="validation_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="client" if status_code is None else "server",
        )


class DecodeError(FileMakerError):
    """A successful response whose body did not match the expected structure."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="decode_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server",
        )


class HttpError(FileMakerError):
    """Non-2xx response from the Data API."""

    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: bool = False,
        subcode: Optional[str] = None,
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
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )

    @property
    def service_error_code(self) -> Optional[str]:
        return self.details.get("service_error_code")


class AuthenticationError(HttpError):
    """Login failed, or the session token was rejected.

    :attr:`is_token_error` distinguishes an expired/invalid session token, which
    the session manager recovers from once, from rejected account credentials.
    """

    def __init__(self, message: str, status_code: int, *, is_token_error: bool = False, **kwargs: Any) -> None:
        super().__init__(message, status_code, **kwargs)
        self.is_token_error = is_token_error


class NotFoundError(HttpError):
    """Record, layout or database does not exist."""


class ServerError(HttpError):
    """Any other non-2xx response."""


__all__ = [
    "FileMakerError",
    "TransportError",
    "ValidationError",
    "DecodeError",
    "HttpError",
    "AuthenticationError",
    "NotFoundError",
    "ServerError",
]

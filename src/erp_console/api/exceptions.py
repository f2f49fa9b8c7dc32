"""Exceptions raised by the backend client."""

from __future__ import annotations

from typing import Any


class ApiError(RuntimeError):
    """Base class for failures talking to the enrollment backend."""


class ResponseError(ApiError):
    """The backend answered with a non-success status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body: dict[str, Any] = dict(body or {})


class AuthenticationRequired(ResponseError):
    """Raised on 401; the session is missing or expired."""


class NetworkError(ApiError):
    """Raised when the request never produced a response."""


class ResponseFormatError(ApiError):
    """Raised when a success response cannot be decoded into a record."""


__all__ = [
    "ApiError",
    "AuthenticationRequired",
    "NetworkError",
    "ResponseError",
    "ResponseFormatError",
]

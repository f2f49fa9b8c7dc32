"""Backend client, error types and user-facing error messages."""

from .client import ErpApiClient
from .exceptions import (
    ApiError,
    AuthenticationRequired,
    NetworkError,
    ResponseError,
    ResponseFormatError,
)
from .messages import ErrorBody, classify_error, classify_response, humanize_field_name

__all__ = [
    "ApiError",
    "AuthenticationRequired",
    "ErpApiClient",
    "ErrorBody",
    "NetworkError",
    "ResponseError",
    "ResponseFormatError",
    "classify_error",
    "classify_response",
    "humanize_field_name",
]

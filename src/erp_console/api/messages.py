"""Translate backend failures into sentences fit for the console.

The backend reports errors as ``{message?, error?, errors?, type?}`` bodies.
``classify_error`` picks the first matching rule below and never raises, so
callers can use it directly in an ``except`` block.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ApiError, NetworkError, ResponseError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = (
    "A student with this email address already exists. Please use a different email."
)
DUPLICATE_ROLL_NUMBER = (
    "A student with this roll number already exists. Please contact the administrator."
)
DUPLICATE_RECORD = "This record already exists. Please check your input."
DATABASE_ERROR = "Database error occurred. Please try again."
STUDENT_NOT_FOUND = (
    "The requested student could not be found. Please check the student ID and try again."
)
DOMAIN_NOT_FOUND = (
    "The requested domain could not be found. Please check the domain ID and try again."
)
RESOURCE_NOT_FOUND = (
    "The requested resource could not be found. Please check your input and try again."
)
CAPACITY_EXHAUSTED = (
    "This domain has reached its maximum capacity. "
    "No more students can be admitted at this time."
)
PHOTO_UPLOAD = (
    "Photo upload error. Please ensure you selected a valid image file "
    "(JPEG, PNG, GIF, or WebP)."
)
INVALID_DEGREE = (
    "The program name must include a valid degree type (B.Tech, M.Tech, IM.Tech, M.Sc, "
    'or Ph.D). Examples: "Bachelor of Technology in CSE", "B.Tech CSE". '
    "Please update the program name."
)
UNKNOWN_DEPARTMENT = (
    "The program name must include a recognized department (CSE, ECE, or AIDS). "
    'Examples: "Bachelor of Technology in CSE", "B.Tech ECE". '
    "Please update the program name."
)
VALIDATION_FAILED = (
    "Validation failed. Please check all fields and ensure they meet the requirements."
)
INVALID_REQUEST = "Invalid request. Please check your input."
AUTHENTICATION_REQUIRED = "Authentication required. Please log in again."
PERMISSION_DENIED = "You do not have permission to perform this action."
VALIDATION_ERROR = (
    "Validation error. Please check your input and ensure all required fields "
    "are filled correctly."
)
AUTO_FIX_SUFFIX = (
    " The system is attempting to fix this automatically. "
    "Please refresh the page in a moment."
)
SERVER_ERROR = "Server error. Please try again later."
BAD_GATEWAY = "Service temporarily unavailable. Please try again later."
SERVICE_UNAVAILABLE = "Service unavailable. Please try again later."
NETWORK_ERROR = "Network error. Please check your connection and try again."
UNEXPECTED_ERROR = "An unexpected error occurred."
GENERIC_FALLBACK = "An unexpected error occurred. Please try again."

_BAD_REQUEST_PATTERNS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("student not found",), STUDENT_NOT_FOUND),
    (("domain not found",), DOMAIN_NOT_FOUND),
    (("seat", "capacity", "exhausted"), CAPACITY_EXHAUSTED),
    (("photo", "image file"), PHOTO_UPLOAD),
    (("invalid degree", "degree type"), INVALID_DEGREE),
    (("unknown department", "department"), UNKNOWN_DEPARTMENT),
    (("validation failed",), VALIDATION_FAILED),
)
_DUPLICATE_MARKERS = ("duplicate", "unique", "already exists")
_DATABASE_MARKERS = ("database", "table", "sql")


@dataclass(frozen=True)
class ErrorBody:
    """Tolerant view over a backend error payload."""

    message: str | None = None
    error: str | None = None
    errors: Any = None
    type: str = ""
    suggestion: str | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: object) -> ErrorBody:
        if not isinstance(payload, Mapping):
            return cls()
        errors = payload.get("errors")
        field_errors: dict[str, str] = {}
        if isinstance(errors, Mapping):
            field_errors = {str(key): str(value) for key, value in errors.items()}
        return cls(
            message=_text_or_none(payload.get("message")),
            error=_text_or_none(payload.get("error")),
            errors=errors,
            type=_text_or_none(payload.get("type")) or "",
            suggestion=_text_or_none(payload.get("suggestion")),
            field_errors=field_errors,
        )


def _text_or_none(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def humanize_field_name(name: str) -> str:
    """``examMarks`` -> ``Exam Marks``."""

    spaced = re.sub(r"([A-Z])", r" \1", name)
    return (spaced[:1].upper() + spaced[1:]).strip()


def _format_field_error(field_name: str, message: str) -> str:
    return f"{humanize_field_name(field_name)}: {message}"


def classify_error(error: BaseException | None) -> str:
    """Return a single human-readable sentence describing ``error``."""

    try:
        text = _classify(error)
    except Exception:
        logger.debug("Error classification failed", exc_info=True)
        return GENERIC_FALLBACK
    if not text or not text.strip():
        return GENERIC_FALLBACK
    return text


def _classify(error: BaseException | None) -> str:
    if isinstance(error, ResponseError):
        return classify_response(error.status_code, error.body, fallback=str(error))
    if isinstance(error, NetworkError):
        return NETWORK_ERROR
    if isinstance(error, ApiError):
        return str(error) or UNEXPECTED_ERROR
    if isinstance(error, BaseException):
        return str(error) or GENERIC_FALLBACK
    return GENERIC_FALLBACK


def classify_response(
    status_code: int | None,
    payload: object,
    *,
    fallback: str | None = None,
) -> str:
    """Classify an HTTP failure from its status code and decoded body."""

    body = ErrorBody.from_payload(payload)

    if "DUPLICATE" in body.type or "DATA_INTEGRITY" in body.type:
        if body.type == "DUPLICATE_EMAIL":
            return DUPLICATE_EMAIL
        if body.type == "DUPLICATE_ROLL_NUMBER":
            return DUPLICATE_ROLL_NUMBER
        return body.error or body.message or DUPLICATE_RECORD

    if "DATABASE" in body.type or "SQL" in body.type:
        lowered = (body.error or body.message or "").lower()
        if "email" in lowered and any(marker in lowered for marker in _DUPLICATE_MARKERS):
            return DUPLICATE_EMAIL
        return body.error or body.message or DATABASE_ERROR

    raw = body.message or body.error
    if raw is None:
        # A present errors object counts as a message, even when empty.
        raw = body.errors if body.errors not in (None, "") else fallback
    message = raw if isinstance(raw, str) and raw else None
    lowered = message.lower() if message else ""

    if status_code == 400:
        if body.field_errors:
            return "\n".join(
                _format_field_error(name, text) for name, text in body.field_errors.items()
            )
        for markers, sentence in _BAD_REQUEST_PATTERNS:
            if any(marker in lowered for marker in markers):
                return sentence
        return message or INVALID_REQUEST
    if status_code == 401:
        return AUTHENTICATION_REQUIRED
    if status_code == 403:
        return PERMISSION_DENIED
    if status_code == 404:
        if "student" in lowered:
            return STUDENT_NOT_FOUND
        if "domain" in lowered:
            return DOMAIN_NOT_FOUND
        return RESOURCE_NOT_FOUND
    if status_code == 409:
        if body.type == "DUPLICATE_EMAIL" or ("email" in lowered and "already exists" in lowered):
            return DUPLICATE_EMAIL
        if body.type == "DUPLICATE_ROLL_NUMBER" or (
            "roll" in lowered and "already exists" in lowered
        ):
            return DUPLICATE_ROLL_NUMBER
        return message or DUPLICATE_RECORD
    if status_code == 422:
        if body.field_errors:
            name, text = next(iter(body.field_errors.items()))
            return _format_field_error(name, text)
        return message or VALIDATION_ERROR
    if status_code == 500:
        if message and any(marker in lowered for marker in _DATABASE_MARKERS):
            return message + AUTO_FIX_SUFFIX
        return message or SERVER_ERROR
    if status_code == 502:
        return BAD_GATEWAY
    if status_code == 503:
        return SERVICE_UNAVAILABLE
    if message and message.strip():
        return message
    return (
        f"An error occurred ({status_code}). "
        "Please try again or contact support if the issue persists."
    )


__all__ = [
    "DUPLICATE_EMAIL",
    "DUPLICATE_ROLL_NUMBER",
    "ErrorBody",
    "NETWORK_ERROR",
    "classify_error",
    "classify_response",
    "humanize_field_name",
]

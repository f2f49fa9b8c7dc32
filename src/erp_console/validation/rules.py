"""Field validation rules.

Every rule takes the raw form value and returns an empty string when the value
is acceptable, otherwise the message shown next to the field.
"""

from __future__ import annotations

import math
import re

from erp_console.domain import FormValue

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
YEAR_PATTERN = re.compile(r"^[0-9]{4}$")
ID_PATTERN = re.compile(r"^[0-9]+$")

JOIN_YEAR_RANGE = (2021, 2026)
BATCH_RANGE = (2020, 2026)
MARKS_RANGE = (0.0, 100.0)
CAPACITY_RANGE = (0, 150)


def _is_blank(value: FormValue) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def _as_text(value: FormValue) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def to_number(value: FormValue) -> float | None:
    """Parse a form value as a finite number, or ``None`` if it is not one."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        try:
            number = float(value.strip())
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def validate_required(value: FormValue, field_name: str) -> str:
    if _is_blank(value):
        return f"{field_name} is required"
    return ""


def validate_first_name(value: FormValue) -> str:
    return validate_required(value, "First name")


def validate_last_name(value: FormValue) -> str:
    return validate_required(value, "Last name")


def validate_program(value: FormValue) -> str:
    return validate_required(value, "Program")


def validate_exam_name(value: FormValue) -> str:
    return validate_required(value, "Exam name")


def validate_domain_selection(value: FormValue) -> str:
    if _is_blank(value) or isinstance(value, bool):
        return "Domain is required"
    text = _as_text(value)
    if not ID_PATTERN.fullmatch(text) or int(text) < 1:
        return "Please select a valid domain"
    return ""


def validate_email(value: FormValue) -> str:
    if _is_blank(value):
        return "Email is required"
    if not EMAIL_PATTERN.fullmatch(_as_text(value)):
        return "Please enter a valid email address"
    return ""


def validate_join_year(value: FormValue) -> str:
    if _is_blank(value) or isinstance(value, bool):
        return "Join year is required"
    text = _as_text(value)
    if not YEAR_PATTERN.fullmatch(text):
        return "Join year must be 4 digits"
    low, high = JOIN_YEAR_RANGE
    if not low <= int(text) <= high:
        return f"Join year must be between {low} and {high}"
    return ""


def validate_batch(value: FormValue) -> str:
    if _is_blank(value) or isinstance(value, bool):
        return "Batch is required"
    text = _as_text(value)
    low, high = BATCH_RANGE
    if not YEAR_PATTERN.fullmatch(text) or not low <= int(text) <= high:
        return f"Batch must be between {low} and {high}"
    return ""


def validate_exam_marks(value: FormValue) -> str:
    if _is_blank(value):
        return "Exam marks is required"
    number = to_number(value)
    if number is None:
        return "Exam marks must be a valid number"
    low, high = MARKS_RANGE
    if number < low:
        return "Exam marks must be greater than or equal to 0"
    if number > high:
        return "Exam marks must be less than or equal to 100"
    return ""


def validate_cutoff_marks(value: FormValue) -> str:
    if _is_blank(value):
        return "Cutoff marks is required"
    number = to_number(value)
    if number is None:
        return "Cutoff marks must be a valid number"
    low, high = MARKS_RANGE
    if number < low:
        return "Cutoff marks must be at least 0"
    if number > high:
        return "Cutoff marks must be at most 100"
    return ""


def validate_capacity(value: FormValue) -> str:
    if _is_blank(value):
        return "Capacity is required"
    number = to_number(value)
    if number is None:
        return "Capacity must be a valid number"
    if not number.is_integer():
        return "Capacity must be a whole number"
    low, high = CAPACITY_RANGE
    if number < low:
        return "Capacity must be at least 0"
    if number > high:
        return "Capacity must be at most 150"
    return ""


__all__ = [
    "BATCH_RANGE",
    "CAPACITY_RANGE",
    "EMAIL_PATTERN",
    "JOIN_YEAR_RANGE",
    "MARKS_RANGE",
    "to_number",
    "validate_batch",
    "validate_capacity",
    "validate_cutoff_marks",
    "validate_domain_selection",
    "validate_email",
    "validate_exam_marks",
    "validate_exam_name",
    "validate_first_name",
    "validate_join_year",
    "validate_last_name",
    "validate_program",
    "validate_required",
]

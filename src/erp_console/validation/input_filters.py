"""Keystroke filters for numeric text inputs.

These run as the user types, before validation: non-numeric characters are
dropped, only the first decimal separator survives, and anything above the
field maximum is pulled down to the maximum.
"""

from __future__ import annotations

import re

from erp_console.domain import FormValue

from .rules import CAPACITY_RANGE, MARKS_RANGE

_NON_DECIMAL = re.compile(r"[^0-9.]")
_NON_DIGIT = re.compile(r"[^0-9]")


def _raw_text(raw: FormValue) -> str:
    if raw is None or isinstance(raw, bool):
        return ""
    return str(raw)


def filter_decimal_input(raw: FormValue) -> str:
    cleaned = _NON_DECIMAL.sub("", _raw_text(raw))
    head, separator, tail = cleaned.partition(".")
    if not separator:
        return head
    return head + separator + tail.replace(".", "")


def filter_integer_input(raw: FormValue) -> str:
    return _NON_DIGIT.sub("", _raw_text(raw))


def clamp_decimal_input(raw: FormValue, maximum: float) -> float | None:
    text = filter_decimal_input(raw)
    if not text.strip("."):
        return None
    return min(float(text), maximum)


def clamp_integer_input(raw: FormValue, maximum: int) -> int | None:
    text = filter_integer_input(raw)
    if not text:
        return None
    return min(int(text), maximum)


def clamp_marks_input(raw: FormValue) -> float | None:
    return clamp_decimal_input(raw, MARKS_RANGE[1])


def clamp_capacity_input(raw: FormValue) -> int | None:
    return clamp_integer_input(raw, CAPACITY_RANGE[1])


__all__ = [
    "clamp_capacity_input",
    "clamp_decimal_input",
    "clamp_integer_input",
    "clamp_marks_input",
    "filter_decimal_input",
    "filter_integer_input",
]

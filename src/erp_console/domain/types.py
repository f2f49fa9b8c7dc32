"""Shared type aliases for the domain layer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NewType

DomainId = NewType("DomainId", int)
StudentId = NewType("StudentId", int)
JsonMapping = Mapping[str, Any]
FormValue = str | int | float | None

__all__ = [
    "DomainId",
    "FormValue",
    "JsonMapping",
    "StudentId",
]

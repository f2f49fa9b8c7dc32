"""Records and request bodies exchanged with the enrollment backend."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field, field_validator

from .base import DomainModel, PayloadModel
from .types import DomainId, StudentId

Marks = Annotated[float, Field(ge=0.0, le=100.0)]


class Domain(DomainModel):
    """Academic program/cohort offering with a seat capacity and cutoff."""

    domain_id: DomainId
    program: str
    batch: str | None = None
    capacity: int = 0
    exam_name: str | None = None
    cutoff_marks: float | None = None
    student_count: int | None = None

    @field_validator("batch", mode="before")
    @classmethod
    def stringify_batch(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Student(DomainModel):
    """Enrollee admitted into exactly one domain."""

    student_id: StudentId
    roll_number: str | None = None
    first_name: str
    last_name: str
    email: str
    domain_id: DomainId | None = None
    domain_program: str | None = None
    join_year: int
    exam_marks: float | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class UpdateImpact(DomainModel):
    """Server-computed effect of a proposed domain update or deletion."""

    domain_id: DomainId
    affected_students_count: int = 0
    message: str = ""

    @property
    def has_impact(self) -> bool:
        return self.affected_students_count > 0


class UserProfile(DomainModel):
    """Signed-in user as reported by ``/api/auth/me``."""

    email: str
    name: str
    picture: str | None = None


class DomainRequest(PayloadModel):
    """Body for domain create, update and impact requests."""

    program: Annotated[str, Field(min_length=1)]
    batch: str
    capacity: Annotated[int, Field(ge=0, le=150)]
    exam_name: Annotated[str, Field(min_length=1)]
    cutoff_marks: Marks


class StudentAdmission(PayloadModel):
    """Body for ``POST /api/students/admit``; the server assigns ids."""

    first_name: Annotated[str, Field(min_length=1)]
    last_name: Annotated[str, Field(min_length=1)]
    email: str
    domain_id: DomainId
    join_year: int
    exam_marks: Marks


class StudentUpdate(StudentAdmission):
    """Body for ``PATCH /api/students/{id}``."""

    student_id: StudentId


__all__ = [
    "Domain",
    "DomainRequest",
    "Student",
    "StudentAdmission",
    "StudentUpdate",
    "UpdateImpact",
    "UserProfile",
]

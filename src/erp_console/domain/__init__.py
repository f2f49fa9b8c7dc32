"""Domain layer exports."""

from .base import DomainModel, PayloadModel
from .enums import EditorMode, EditorState, MenuState, SortOrder, SubmitOutcome
from .models import (
    Domain,
    DomainRequest,
    Student,
    StudentAdmission,
    StudentUpdate,
    UpdateImpact,
    UserProfile,
)
from .types import DomainId, FormValue, JsonMapping, StudentId

__all__ = [
    "Domain",
    "DomainId",
    "DomainModel",
    "DomainRequest",
    "EditorMode",
    "EditorState",
    "FormValue",
    "JsonMapping",
    "MenuState",
    "PayloadModel",
    "SortOrder",
    "Student",
    "StudentAdmission",
    "StudentId",
    "StudentUpdate",
    "SubmitOutcome",
    "UpdateImpact",
    "UserProfile",
]

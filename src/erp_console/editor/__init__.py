"""Record editor dialogs for domains and students."""

from .base import FieldSpec, PendingConfirmation, RecordEditor
from .domain_editor import DEFAULT_FORM_YEAR, DomainEditor
from .exceptions import (
    EditorBusyError,
    EditorError,
    FieldLockedError,
    InvalidTransitionError,
)
from .student_editor import StudentEditor

__all__ = [
    "DEFAULT_FORM_YEAR",
    "DomainEditor",
    "EditorBusyError",
    "EditorError",
    "FieldLockedError",
    "FieldSpec",
    "InvalidTransitionError",
    "PendingConfirmation",
    "RecordEditor",
    "StudentEditor",
]

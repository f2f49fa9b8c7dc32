"""Enumerations used across the console."""

from __future__ import annotations

from enum import StrEnum


class EditorState(StrEnum):
    """State machine shared by the record editor dialogs."""

    CLOSED = "closed"
    OPEN = "open"
    CHECKING_IMPACT = "checking_impact"
    CONFIRMING_IMPACT = "confirming_impact"
    SUBMITTING = "submitting"


class EditorMode(StrEnum):
    """Whether an editor creates a new record or patches an existing one."""

    CREATE = "create"
    EDIT = "edit"


class SubmitOutcome(StrEnum):
    """Result of a submit or confirm action on an editor."""

    INVALID = "invalid"
    NEEDS_CONFIRMATION = "needs_confirmation"
    SAVED = "saved"
    FAILED = "failed"
    DISCARDED = "discarded"


class SortOrder(StrEnum):
    """Exam-marks ordering for student tables."""

    ASC = "asc"
    DESC = "desc"
    NONE = "none"


class MenuState(StrEnum):
    """Open state of a hover/click dropdown."""

    CLOSED = "closed"
    HOVERED_OPEN = "hovered_open"
    PINNED_OPEN = "pinned_open"

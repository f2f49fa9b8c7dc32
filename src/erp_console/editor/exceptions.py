"""Exceptions for the record editor dialogs."""

from __future__ import annotations


class EditorError(RuntimeError):
    """Base class for editor misuse."""


class InvalidTransitionError(EditorError):
    """Raised when an action is not allowed in the editor's current state."""


class EditorBusyError(EditorError):
    """Raised when a second submit is attempted while one is in flight."""


class FieldLockedError(EditorError):
    """Raised when writing to a field that is disabled for this editor."""


__all__ = [
    "EditorBusyError",
    "EditorError",
    "FieldLockedError",
    "InvalidTransitionError",
]

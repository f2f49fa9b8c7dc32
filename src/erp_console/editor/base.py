"""Record editor dialog state machine.

An editor moves through ``CLOSED -> OPEN -> [CHECKING_IMPACT] ->
[CONFIRMING_IMPACT] -> SUBMITTING`` and back to ``CLOSED`` on success or
``OPEN`` (with an error message) on failure. Nothing is written to the
backend until the user confirms, so cancelling needs no compensation.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from erp_console.api import ApiError, classify_error
from erp_console.domain import (
    DomainModel,
    EditorMode,
    EditorState,
    FormValue,
    PayloadModel,
    SubmitOutcome,
    UpdateImpact,
)
from erp_console.validation import Rule, validate_form

from .exceptions import (
    EditorBusyError,
    EditorError,
    FieldLockedError,
    InvalidTransitionError,
)

RecordT = TypeVar("RecordT", bound=DomainModel)
PayloadT = TypeVar("PayloadT", bound=PayloadModel)

SuccessCallback = Callable[[RecordT], Awaitable[None] | None]
CloseCallback = Callable[[], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """A form field with its validation rule and optional keystroke filter."""

    label: str
    rule: Rule
    input_filter: Callable[[FormValue], FormValue] | None = None


@dataclass(frozen=True)
class PendingConfirmation(Generic[PayloadT]):
    """Write held back until the user accepts the reported impact."""

    payload: PayloadT
    impact: UpdateImpact


class RecordEditor(ABC, Generic[RecordT, PayloadT]):
    """Form bound to validation rules that submits through the backend client."""

    entity_name = "record"
    fields: Mapping[str, FieldSpec] = {}

    def __init__(
        self,
        *,
        check_impact: bool = False,
        on_success: SuccessCallback[RecordT] | None = None,
        on_close: CloseCallback | None = None,
    ) -> None:
        self._check_impact_enabled = check_impact
        self._on_success = on_success
        self._on_close = on_close
        self._state = EditorState.CLOSED
        self._mode = EditorMode.CREATE
        self._record: RecordT | None = None
        self._values: dict[str, FormValue] = {}
        self._error = ""
        self._pending: PendingConfirmation[PayloadT] | None = None
        self._session = 0
        self._saved: RecordT | None = None

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def mode(self) -> EditorMode:
        return self._mode

    @property
    def record(self) -> RecordT | None:
        return self._record

    @property
    def values(self) -> dict[str, FormValue]:
        return dict(self._values)

    @property
    def error(self) -> str:
        return self._error

    @property
    def saved_record(self) -> RecordT | None:
        """Record returned by the most recent successful write."""

        return self._saved

    @property
    def pending(self) -> PendingConfirmation[PayloadT] | None:
        return self._pending

    @property
    def title(self) -> str:
        if self._mode is EditorMode.EDIT:
            return f"Edit {self.entity_name.title()}"
        return f"Add New {self.entity_name.title()}"

    @property
    def is_open(self) -> bool:
        return self._state is not EditorState.CLOSED

    @property
    def busy(self) -> bool:
        return self._state in (EditorState.CHECKING_IMPACT, EditorState.SUBMITTING)

    @property
    def errors(self) -> dict[str, str]:
        return validate_form(
            self._values,
            {name: spec.rule for name, spec in self.fields.items()},
        )

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def can_submit(self) -> bool:
        return self._state is EditorState.OPEN and self.is_valid

    def locked_fields(self) -> frozenset[str]:
        return frozenset()

    def is_locked(self, name: str) -> bool:
        return name in self.locked_fields()

    def open(self, record: RecordT | None = None) -> None:
        """Show the dialog, prefilled from ``record`` or reset to defaults."""

        self._session += 1
        self._record = record
        self._mode = EditorMode.EDIT if record is not None else EditorMode.CREATE
        self._values = self._prefill(record) if record is not None else self._defaults()
        self._error = ""
        self._pending = None
        self._state = EditorState.OPEN
        logger.debug("Opened %s editor in %s mode", self.entity_name, self._mode)

    def close(self) -> None:
        if self._state is EditorState.CLOSED:
            return
        if self.busy:
            logger.warning(
                "Closing %s editor while a request is in flight; its response will be ignored",
                self.entity_name,
            )
        self._session += 1
        self._state = EditorState.CLOSED
        self._pending = None
        self._error = ""
        self._values = self._defaults()
        if self._on_close is not None:
            self._on_close()

    def set_field(self, name: str, raw: FormValue) -> FormValue:
        """Apply a keystroke to ``name`` and return the value that was stored."""

        if self._state is not EditorState.OPEN:
            msg = f"Cannot edit fields while the {self.entity_name} editor is {self._state}"
            raise InvalidTransitionError(msg)
        spec = self.fields.get(name)
        if spec is None:
            msg = f"Unknown {self.entity_name} field '{name}'"
            raise EditorError(msg)
        if self.is_locked(name):
            msg = f"{spec.label} cannot be changed here"
            raise FieldLockedError(msg)
        value = spec.input_filter(raw) if spec.input_filter is not None else raw
        self._values[name] = value
        return value

    async def submit(self) -> SubmitOutcome:
        if self.busy:
            msg = f"A {self.entity_name} request is already in flight"
            raise EditorBusyError(msg)
        if self._state is not EditorState.OPEN:
            msg = f"Cannot submit a {self.entity_name} editor that is {self._state}"
            raise InvalidTransitionError(msg)
        if self.errors:
            return SubmitOutcome.INVALID

        self._error = ""
        payload = self._build_payload()
        session = self._session

        if self._mode is EditorMode.EDIT and self._check_impact_enabled:
            self._state = EditorState.CHECKING_IMPACT
            try:
                impact = await self._fetch_impact(payload)
            except ApiError as exc:
                if self._is_stale(session):
                    return self._discard("impact check failure")
                self._error = classify_error(exc)
                self._state = EditorState.OPEN
                return SubmitOutcome.FAILED
            except BaseException:
                if not self._is_stale(session):
                    self._state = EditorState.OPEN
                raise
            if self._is_stale(session):
                return self._discard("impact check")
            if impact is not None and impact.has_impact:
                self._pending = PendingConfirmation(payload=payload, impact=impact)
                self._state = EditorState.CONFIRMING_IMPACT
                logger.info(
                    "%s update affects %s student(s); awaiting confirmation",
                    self.entity_name.title(),
                    impact.affected_students_count,
                )
                return SubmitOutcome.NEEDS_CONFIRMATION

        return await self._commit(payload, session)

    async def confirm(self) -> SubmitOutcome:
        """Send the write that was held back for impact confirmation."""

        if self.busy:
            msg = f"A {self.entity_name} request is already in flight"
            raise EditorBusyError(msg)
        if self._state is not EditorState.CONFIRMING_IMPACT or self._pending is None:
            msg = f"No pending {self.entity_name} change to confirm"
            raise InvalidTransitionError(msg)
        return await self._commit(self._pending.payload, self._session)

    def cancel_confirmation(self) -> None:
        if self._state is not EditorState.CONFIRMING_IMPACT:
            msg = f"No pending {self.entity_name} change to cancel"
            raise InvalidTransitionError(msg)
        self._pending = None
        self._state = EditorState.OPEN

    def press_escape(self) -> None:
        """Dismiss the innermost dialog: the confirmation first, then the editor."""

        if self._state is EditorState.CONFIRMING_IMPACT:
            self.cancel_confirmation()
        else:
            self.close()

    def click_backdrop(self) -> None:
        self.press_escape()

    async def _commit(self, payload: PayloadT, session: int) -> SubmitOutcome:
        self._state = EditorState.SUBMITTING
        try:
            saved = await self._write(payload)
        except ApiError as exc:
            if self._is_stale(session):
                return self._discard("failed write")
            self._error = classify_error(exc)
            self._pending = None
            self._state = EditorState.OPEN
            return SubmitOutcome.FAILED
        except BaseException:
            if not self._is_stale(session):
                self._pending = None
                self._state = EditorState.OPEN
            raise

        if self._is_stale(session):
            return self._discard("completed write")

        logger.info("Saved %s (%s)", self.entity_name, self._mode)
        self._saved = saved
        self._state = EditorState.OPEN
        self.close()
        if self._on_success is not None:
            result = self._on_success(saved)
            if inspect.isawaitable(result):
                await result
        return SubmitOutcome.SAVED

    def _is_stale(self, session: int) -> bool:
        return session != self._session

    def _discard(self, what: str) -> SubmitOutcome:
        # Known race: the dialog was closed or reopened while the request ran.
        logger.warning(
            "Discarding %s response for a %s editor that was closed or reopened",
            what,
            self.entity_name,
        )
        return SubmitOutcome.DISCARDED

    @abstractmethod
    def _defaults(self) -> dict[str, FormValue]: ...

    @abstractmethod
    def _prefill(self, record: RecordT) -> dict[str, FormValue]: ...

    @abstractmethod
    def _build_payload(self) -> PayloadT: ...

    @abstractmethod
    async def _write(self, payload: PayloadT) -> RecordT: ...

    async def _fetch_impact(self, payload: PayloadT) -> UpdateImpact | None:
        return None


__all__ = [
    "CloseCallback",
    "FieldSpec",
    "PendingConfirmation",
    "RecordEditor",
    "SuccessCallback",
]

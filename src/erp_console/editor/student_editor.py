"""Editor dialog for admitting and updating students."""

from __future__ import annotations

import logging

from erp_console.api import ApiError, ErpApiClient, classify_error
from erp_console.domain import (
    Domain,
    DomainId,
    EditorMode,
    FormValue,
    Student,
    StudentAdmission,
    StudentId,
    StudentUpdate,
)
from erp_console.validation import (
    clamp_marks_input,
    to_number,
    validate_domain_selection,
    validate_email,
    validate_exam_marks,
    validate_first_name,
    validate_join_year,
    validate_last_name,
)

from .base import CloseCallback, FieldSpec, RecordEditor, SuccessCallback
from .domain_editor import DEFAULT_FORM_YEAR

logger = logging.getLogger(__name__)


class StudentEditor(RecordEditor[Student, StudentAdmission]):
    """Admit a student or patch an existing one.

    The domain and join year are fixed once a student exists, so both are
    locked in edit mode. The domain is also locked when the editor is opened
    from a domain's own student list.
    """

    entity_name = "student"
    fields = {
        "first_name": FieldSpec("First name", validate_first_name),
        "last_name": FieldSpec("Last name", validate_last_name),
        "email": FieldSpec("Email", validate_email),
        "domain_id": FieldSpec("Domain", validate_domain_selection),
        "join_year": FieldSpec("Join year", validate_join_year),
        "exam_marks": FieldSpec("Exam marks", validate_exam_marks, clamp_marks_input),
    }

    def __init__(
        self,
        api: ErpApiClient,
        *,
        default_domain_id: int | None = None,
        default_year: int = DEFAULT_FORM_YEAR,
        on_success: SuccessCallback[Student] | None = None,
        on_close: CloseCallback | None = None,
    ) -> None:
        self._api = api
        self._default_domain_id = default_domain_id
        self._default_year = default_year
        self._domain_choices: list[Domain] = []
        super().__init__(check_impact=False, on_success=on_success, on_close=on_close)

    @property
    def domain_choices(self) -> list[Domain]:
        return list(self._domain_choices)

    def locked_fields(self) -> frozenset[str]:
        locked: set[str] = set()
        if self._mode is EditorMode.EDIT:
            locked.update({"domain_id", "join_year"})
        if self._default_domain_id is not None:
            locked.add("domain_id")
        return frozenset(locked)

    async def load_domain_choices(self) -> list[Domain]:
        """Fetch the domains offered in the domain selector."""

        try:
            self._domain_choices = await self._api.list_domains()
        except ApiError as exc:
            logger.info("Could not load domain choices: %s", exc)
            self._error = classify_error(exc)
        return self.domain_choices

    def _default_domain_value(self) -> str:
        if self._default_domain_id is None:
            return ""
        return str(self._default_domain_id)

    def _defaults(self) -> dict[str, FormValue]:
        return {
            "first_name": "",
            "last_name": "",
            "email": "",
            "domain_id": self._default_domain_value(),
            "join_year": str(self._default_year),
            "exam_marks": 0,
        }

    def _prefill(self, record: Student) -> dict[str, FormValue]:
        domain_value = (
            str(record.domain_id) if record.domain_id is not None else self._default_domain_value()
        )
        return {
            "first_name": record.first_name,
            "last_name": record.last_name,
            "email": record.email,
            "domain_id": domain_value,
            "join_year": str(record.join_year),
            "exam_marks": record.exam_marks,
        }

    def _build_payload(self) -> StudentAdmission:
        values = self._values
        fields = {
            "first_name": str(values.get("first_name") or "").strip(),
            "last_name": str(values.get("last_name") or "").strip(),
            "email": str(values.get("email") or "").strip(),
            "domain_id": DomainId(int(to_number(values.get("domain_id")) or 0)),
            "join_year": int(to_number(values.get("join_year")) or 0),
            "exam_marks": to_number(values.get("exam_marks")) or 0.0,
        }
        if self._record is not None:
            return StudentUpdate(student_id=StudentId(self._record.student_id), **fields)
        return StudentAdmission(**fields)

    async def _write(self, payload: StudentAdmission) -> Student:
        if isinstance(payload, StudentUpdate):
            return await self._api.update_student(payload)
        return await self._api.admit_student(payload)


__all__ = ["StudentEditor"]

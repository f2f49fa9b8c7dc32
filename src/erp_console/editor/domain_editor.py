"""Editor dialog for academic domains."""

from __future__ import annotations

from erp_console.api import ErpApiClient
from erp_console.domain import Domain, DomainRequest, FormValue, UpdateImpact
from erp_console.validation import (
    clamp_capacity_input,
    clamp_marks_input,
    to_number,
    validate_batch,
    validate_capacity,
    validate_cutoff_marks,
    validate_exam_name,
    validate_program,
)

from .base import CloseCallback, FieldSpec, RecordEditor, SuccessCallback

DEFAULT_FORM_YEAR = 2026


class DomainEditor(RecordEditor[Domain, DomainRequest]):
    """Create or update a domain, asking for confirmation when students are affected."""

    entity_name = "domain"
    fields = {
        "program": FieldSpec("Program", validate_program),
        "batch": FieldSpec("Batch", validate_batch),
        "capacity": FieldSpec("Capacity", validate_capacity, clamp_capacity_input),
        "exam_name": FieldSpec("Exam name", validate_exam_name),
        "cutoff_marks": FieldSpec("Cutoff marks", validate_cutoff_marks, clamp_marks_input),
    }

    def __init__(
        self,
        api: ErpApiClient,
        *,
        check_impact: bool = True,
        default_year: int = DEFAULT_FORM_YEAR,
        on_success: SuccessCallback[Domain] | None = None,
        on_close: CloseCallback | None = None,
    ) -> None:
        self._api = api
        self._default_year = default_year
        super().__init__(check_impact=check_impact, on_success=on_success, on_close=on_close)

    def _defaults(self) -> dict[str, FormValue]:
        return {
            "program": "",
            "batch": str(self._default_year),
            "capacity": None,
            "exam_name": "",
            "cutoff_marks": None,
        }

    def _prefill(self, record: Domain) -> dict[str, FormValue]:
        return {
            "program": record.program or "",
            "batch": record.batch or str(self._default_year),
            "capacity": record.capacity,
            "exam_name": record.exam_name or "",
            "cutoff_marks": record.cutoff_marks,
        }

    def _build_payload(self) -> DomainRequest:
        values = self._values
        capacity = to_number(values.get("capacity"))
        cutoff = to_number(values.get("cutoff_marks"))
        return DomainRequest(
            program=str(values.get("program") or "").strip(),
            batch=str(values.get("batch") or "").strip(),
            capacity=int(capacity or 0),
            exam_name=str(values.get("exam_name") or "").strip(),
            cutoff_marks=cutoff or 0.0,
        )

    async def _write(self, payload: DomainRequest) -> Domain:
        if self._record is None:
            return await self._api.create_domain(payload)
        return await self._api.update_domain(self._record.domain_id, payload)

    async def _fetch_impact(self, payload: DomainRequest) -> UpdateImpact | None:
        if self._record is None:
            return None
        return await self._api.domain_update_impact(self._record.domain_id, payload)


__all__ = ["DEFAULT_FORM_YEAR", "DomainEditor"]

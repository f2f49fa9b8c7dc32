"""Single-domain view with its student table."""

from __future__ import annotations

import logging
from collections.abc import Callable

from erp_console.api import ApiError, ErpApiClient, classify_error
from erp_console.domain import Domain, SortOrder, Student
from erp_console.editor import DEFAULT_FORM_YEAR, DomainEditor, StudentEditor

from .sorting import next_sort_order, sort_by_exam_marks

DELETE_STUDENT_PROMPT = (
    "Are you sure you want to delete this student? This action cannot be undone."
)

logger = logging.getLogger(__name__)


class DomainDetailView:
    """Domain details plus enrolled students, sortable by exam marks."""

    def __init__(
        self,
        api: ErpApiClient,
        domain_id: int,
        *,
        default_year: int = DEFAULT_FORM_YEAR,
        sort_order: SortOrder = SortOrder.ASC,
    ) -> None:
        self._api = api
        self.domain_id = domain_id
        self._default_year = default_year
        self.sort_order = sort_order
        self.domain: Domain | None = None
        self.students: list[Student] = []
        self.error = ""
        self.loading = False

    @property
    def sorted_students(self) -> list[Student]:
        return sort_by_exam_marks(self.students, self.sort_order)

    def toggle_sort(self) -> SortOrder:
        self.sort_order = next_sort_order(self.sort_order)
        return self.sort_order

    async def load(self) -> None:
        self.loading = True
        self.error = ""
        try:
            self.domain = await self._api.get_domain(self.domain_id)
            self.students = await self._api.list_students_by_domain(self.domain_id)
        except ApiError as exc:
            logger.warning("Error fetching domain %s: %s", self.domain_id, exc)
            self.error = classify_error(exc)
        finally:
            self.loading = False

    async def refresh_students(self) -> None:
        try:
            self.students = await self._api.list_students_by_domain(self.domain_id)
        except ApiError as exc:
            self.error = classify_error(exc)

    def domain_editor(self) -> DomainEditor:
        if self.domain is None:
            msg = "Domain has not been loaded"
            raise RuntimeError(msg)
        editor = DomainEditor(
            self._api,
            check_impact=True,
            default_year=self._default_year,
            on_success=self._after_domain_saved,
        )
        editor.open(self.domain)
        return editor

    def student_editor(self, student: Student | None = None) -> StudentEditor:
        editor = StudentEditor(
            self._api,
            default_domain_id=self.domain_id,
            default_year=self._default_year,
            on_success=self._after_student_saved,
        )
        editor.open(student)
        return editor

    async def delete_student(self, student_id: int, confirm: Callable[[str], bool]) -> bool:
        """Delete after a plain yes/no prompt; students have no impact check."""

        if not confirm(DELETE_STUDENT_PROMPT):
            return False
        try:
            await self._api.delete_student(student_id)
        except ApiError as exc:
            self.error = classify_error(exc)
            return False
        logger.info("Deleted student %s from domain %s", student_id, self.domain_id)
        await self.refresh_students()
        return True

    async def _after_domain_saved(self, _domain: Domain) -> None:
        await self.load()

    async def _after_student_saved(self, _student: Student) -> None:
        await self.refresh_students()


__all__ = ["DELETE_STUDENT_PROMPT", "DomainDetailView"]

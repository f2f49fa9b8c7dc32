"""Domain list view: load, edit, delete with impact confirmation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from erp_console.api import ApiError, ErpApiClient, classify_error
from erp_console.domain import Domain, UpdateImpact
from erp_console.editor import DEFAULT_FORM_YEAR, DomainEditor

Sleeper = Callable[[float], Awaitable[None]]

DELETE_DOMAIN_PROMPT = "Are you sure you want to delete this domain? This action cannot be undone."
NO_STUDENTS_NOTICE = "No students are associated with this domain."

_DATABASE_HINTS = ("database", "table", "being created", "doesn't exist")
_TABLES_READY_HINTS = ("have been created", "created successfully")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingDelete:
    """Delete request waiting for the user to accept its impact."""

    domain_id: int
    impact: UpdateImpact

    @property
    def lines(self) -> tuple[str, ...]:
        if self.impact.has_impact:
            count = self.impact.affected_students_count
            return (
                DELETE_DOMAIN_PROMPT,
                self.impact.message,
                f"All {count} student(s) will be permanently removed from the database.",
            )
        return (DELETE_DOMAIN_PROMPT, NO_STUDENTS_NOTICE)

    @property
    def prompt(self) -> str:
        return "\n".join(line for line in self.lines if line)


class DomainListView:
    """Collection of domains, re-fetched in full after every write."""

    def __init__(
        self,
        api: ErpApiClient,
        *,
        init_retry_delay: float = 1.0,
        check_impact_on_edit: bool = False,
        default_year: int = DEFAULT_FORM_YEAR,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self._api = api
        self._init_retry_delay = init_retry_delay
        self._check_impact_on_edit = check_impact_on_edit
        self._default_year = default_year
        self._sleep = sleep
        self.domains: list[Domain] = []
        self.error = ""
        self.loading = False
        self.pending_delete: PendingDelete | None = None

    async def load(self) -> list[Domain]:
        self.loading = True
        self.error = ""
        try:
            self.domains = await self._api.list_domains()
        except ApiError as exc:
            logger.warning("Error fetching domains: %s", exc)
            self.error = classify_error(exc)
        finally:
            self.loading = False
        return self.domains

    @property
    def needs_database_init(self) -> bool:
        """Whether the current error looks like missing tables the backend can create."""

        lowered = self.error.lower()
        if not lowered or any(hint in lowered for hint in _TABLES_READY_HINTS):
            return False
        return any(hint in lowered for hint in _DATABASE_HINTS)

    async def initialize_database(self) -> list[Domain]:
        """Ask the backend to create its tables, wait, then retry the fetch once."""

        self.loading = True
        try:
            await self._api.init_database()
        except ApiError as exc:
            self.error = classify_error(exc)
            self.loading = False
            return self.domains
        logger.info("Database initialisation requested; retrying in %ss", self._init_retry_delay)
        await self._sleep(self._init_retry_delay)
        return await self.load()

    def new_editor(self) -> DomainEditor:
        editor = self._editor(check_impact=False)
        editor.open()
        return editor

    def edit_editor(self, domain: Domain) -> DomainEditor:
        editor = self._editor(check_impact=self._check_impact_on_edit)
        editor.open(domain)
        return editor

    async def request_delete(self, domain_id: int) -> PendingDelete | None:
        try:
            impact = await self._api.domain_delete_impact(domain_id)
        except ApiError as exc:
            self.error = classify_error(exc)
            return None
        self.pending_delete = PendingDelete(domain_id=domain_id, impact=impact)
        return self.pending_delete

    async def confirm_delete(self) -> bool:
        pending = self.pending_delete
        if pending is None:
            return False
        try:
            await self._api.delete_domain(pending.domain_id)
        except ApiError as exc:
            self.error = classify_error(exc)
            return False
        logger.info("Deleted domain %s", pending.domain_id)
        self.pending_delete = None
        await self.load()
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def _editor(self, *, check_impact: bool) -> DomainEditor:
        return DomainEditor(
            self._api,
            check_impact=check_impact,
            default_year=self._default_year,
            on_success=self._after_save,
        )

    async def _after_save(self, _domain: Domain) -> None:
        await self.load()


__all__ = ["DELETE_DOMAIN_PROMPT", "DomainListView", "PendingDelete"]

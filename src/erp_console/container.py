"""Service container wiring application components."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from erp_console.api import ErpApiClient
from erp_console.config import AppSettings
from erp_console.views import DomainDetailView, DomainListView

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Settings plus the backend client shared by every view."""

    settings: AppSettings
    api_client: ErpApiClient

    def domain_list_view(self) -> DomainListView:
        return DomainListView(
            self.api_client,
            init_retry_delay=self.settings.db_init_retry_delay,
            check_impact_on_edit=self.settings.list_edit_checks_impact,
            default_year=self.settings.form_default_year,
        )

    def domain_detail_view(self, domain_id: int) -> DomainDetailView:
        return DomainDetailView(
            self.api_client,
            domain_id,
            default_year=self.settings.form_default_year,
        )


def build_container(settings: AppSettings | None = None) -> ServiceContainer:
    """Construct the primary service container."""

    resolved_settings = settings or AppSettings.from_env()
    if not resolved_settings.session_cookie:
        logger.debug("No session cookie configured; authenticated calls will return 401")
    api_client = ErpApiClient(
        resolved_settings.api_base_url,
        timeout=resolved_settings.api_timeout,
        cookies=resolved_settings.cookies,
    )
    return ServiceContainer(settings=resolved_settings, api_client=api_client)


__all__ = ["ServiceContainer", "build_container"]

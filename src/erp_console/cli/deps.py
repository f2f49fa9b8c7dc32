"""Container lookup shared by the CLI commands."""

from __future__ import annotations

import logging
from functools import lru_cache

from erp_console.container import ServiceContainer, build_container

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    """Build the container from ``ERP_*`` variables once per process."""

    container = build_container()
    logger.debug(
        "Console targets %s (%s)",
        container.api_client.api_root,
        container.settings.environment,
    )
    return container


def reset_container() -> None:
    """Forget the cached container so changed ``ERP_*`` variables take effect."""

    get_container.cache_clear()


__all__ = ["get_container", "reset_container"]

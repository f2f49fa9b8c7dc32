"""Lightweight application configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        msg = f"{name} must be a number, got {raw!r}"
        raise ValueError(msg) from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from exc


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    api_base_url: str = "http://localhost:8080"
    api_timeout: float = 10.0
    session_cookie_name: str = "JSESSIONID"
    session_cookie: str | None = None
    db_init_retry_delay: float = 1.0
    form_default_year: int = 2026
    list_edit_checks_impact: bool = False
    log_level: str = "WARNING"

    @property
    def cookies(self) -> dict[str, str]:
        if not self.session_cookie:
            return {}
        return {self.session_cookie_name: self.session_cookie}

    @classmethod
    def from_env(cls) -> AppSettings:
        return cls(
            environment=os.getenv("ERP_ENV", cls.environment),
            api_base_url=os.getenv("ERP_API_BASE_URL", cls.api_base_url),
            api_timeout=_env_float("ERP_API_TIMEOUT", cls.api_timeout),
            session_cookie_name=os.getenv("ERP_SESSION_COOKIE_NAME", cls.session_cookie_name),
            session_cookie=os.getenv("ERP_SESSION_COOKIE") or None,
            db_init_retry_delay=_env_float("ERP_DB_INIT_RETRY_DELAY", cls.db_init_retry_delay),
            form_default_year=_env_int("ERP_FORM_DEFAULT_YEAR", cls.form_default_year),
            list_edit_checks_impact=_env_bool(
                "ERP_LIST_EDIT_CHECKS_IMPACT", cls.list_edit_checks_impact
            ),
            log_level=os.getenv("ERP_LOG_LEVEL", cls.log_level).upper(),
        )


__all__ = ["AppSettings"]

"""Backend paths, relative to the ``/api`` root."""

from __future__ import annotations

CURRENT_USER = "/auth/me"
DOMAINS = "/domains"
ADMIT_STUDENT = "/students/admit"
INIT_DATABASE = "/database/init"


def domain_by_id(domain_id: int) -> str:
    return f"/domains/{domain_id}"


def domain_impact(domain_id: int) -> str:
    return f"/domains/{domain_id}/impact"


def domain_delete_impact(domain_id: int) -> str:
    return f"/domains/{domain_id}/delete-impact"


def students_by_domain(domain_id: int) -> str:
    return f"/students/domain/{domain_id}"


def student_by_id(student_id: int) -> str:
    return f"/students/{student_id}"

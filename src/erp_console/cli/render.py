"""Rich table rendering for CLI output."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from erp_console.domain import Domain, SortOrder, Student

_SORT_MARKERS = {SortOrder.ASC: " ▲", SortOrder.DESC: " ▼", SortOrder.NONE: ""}


def _or_na(value: object) -> str:
    if value is None or value == "":
        return "N/A"
    return str(value)


def _marks(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:g}"


def console() -> Console:
    return Console(soft_wrap=True)


def domains_table(domains: Sequence[Domain]) -> Table:
    table = Table(title="Academic Domains")
    table.add_column("ID", justify="right")
    table.add_column("Program")
    table.add_column("Batch")
    table.add_column("Capacity", justify="right")
    table.add_column("Students", justify="right")
    table.add_column("Qualification")
    table.add_column("Cutoff", justify="right")
    for domain in domains:
        table.add_row(
            str(domain.domain_id),
            domain.program,
            _or_na(domain.batch),
            str(domain.capacity),
            _or_na(domain.student_count),
            _or_na(domain.exam_name),
            _marks(domain.cutoff_marks),
        )
    return table


def students_table(students: Sequence[Student], order: SortOrder) -> Table:
    table = Table(title="Students")
    table.add_column("ID", justify="right")
    table.add_column("Roll Number")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Join Year", justify="right")
    table.add_column("Exam Marks" + _SORT_MARKERS[order], justify="right")
    for student in students:
        table.add_row(
            str(student.student_id),
            _or_na(student.roll_number),
            student.full_name,
            student.email,
            str(student.join_year),
            _marks(student.exam_marks),
        )
    return table


def domain_summary(domain: Domain) -> list[str]:
    return [
        f"Domain {domain.domain_id}: {domain.program}",
        f"Batch: {_or_na(domain.batch)}",
        f"Capacity: {domain.capacity}",
        f"Qualification: {_or_na(domain.exam_name)}",
        f"Cutoff marks: {_marks(domain.cutoff_marks)}",
    ]


__all__ = ["console", "domain_summary", "domains_table", "students_table"]

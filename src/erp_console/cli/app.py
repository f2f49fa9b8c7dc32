"""Typer CLI wiring the ERP console services."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import typer

from erp_console.api import ApiError, AuthenticationRequired, classify_error
from erp_console.domain import FormValue, SortOrder, SubmitOutcome
from erp_console.editor import EditorError, RecordEditor
from erp_console.views import DomainDetailView

from . import render
from .deps import get_container

app = typer.Typer(help="Academic ERP administration console")
domains_app = typer.Typer(help="Manage academic domains")
students_app = typer.Typer(help="Manage students within a domain")
app.add_typer(domains_app, name="domains")
app.add_typer(students_app, name="students")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""

    level = "DEBUG" if verbose else get_container().settings.log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_sort(value: str) -> SortOrder:
    try:
        return SortOrder(value.lower())
    except ValueError as exc:
        raise typer.BadParameter("sort must be one of: asc, desc, none") from exc


def _fail(message: str) -> typer.Exit:
    typer.echo(message)
    return typer.Exit(code=1)


def _apply_fields(editor: RecordEditor, values: Mapping[str, FormValue]) -> None:
    for name, value in values.items():
        if value is None:
            continue
        try:
            editor.set_field(name, value)
        except EditorError as exc:
            raise _fail(str(exc)) from exc


def _run_editor(editor: RecordEditor, *, assume_yes: bool) -> SubmitOutcome:
    """Drive an open editor through submit and, if needed, impact confirmation."""

    outcome = asyncio.run(editor.submit())
    if outcome is SubmitOutcome.INVALID:
        for message in editor.errors.values():
            typer.echo(message)
        raise typer.Exit(code=1)

    if outcome is SubmitOutcome.NEEDS_CONFIRMATION:
        pending = editor.pending
        if pending is not None:
            typer.echo(pending.impact.message)
            typer.echo(f"Affected students: {pending.impact.affected_students_count}")
        if assume_yes or typer.confirm("Apply this change?", default=False):
            outcome = asyncio.run(editor.confirm())
        else:
            editor.cancel_confirmation()
            editor.close()
            typer.echo("Update cancelled")
            return outcome

    if outcome is SubmitOutcome.FAILED:
        raise _fail(editor.error)
    return outcome


def _load_detail(domain_id: int) -> DomainDetailView:
    view = get_container().domain_detail_view(domain_id)
    asyncio.run(view.load())
    if view.error or view.domain is None:
        raise _fail(view.error or f"Domain {domain_id} not found")
    return view


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved application settings."""

    settings = get_container().settings
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("API Base URL:\t" + settings.api_base_url)
    typer.echo(f"Timeout:\t{settings.api_timeout}s")
    typer.echo("Session cookie:\t" + ("set" if settings.session_cookie else "not set"))


@app.command("whoami")
def whoami() -> None:
    """Show the signed-in user."""

    api = get_container().api_client
    try:
        profile = asyncio.run(api.current_user())
    except AuthenticationRequired as exc:
        raise _fail("Not logged in") from exc
    except ApiError as exc:
        raise _fail(classify_error(exc)) from exc
    typer.echo(f"{profile.name} <{profile.email}>")


@app.command("init-db")
def init_db() -> None:
    """Ask the backend to create its database tables."""

    api = get_container().api_client
    try:
        asyncio.run(api.init_database())
    except ApiError as exc:
        raise _fail(classify_error(exc)) from exc
    typer.echo("Database initialisation requested")


@domains_app.command("list")
def domains_list(
    yes: bool = typer.Option(False, "--yes", "-y", help="Create missing tables without asking"),
) -> None:
    """List all domains."""

    view = get_container().domain_list_view()
    asyncio.run(view.load())
    if view.error:
        typer.echo(view.error)
        if not view.needs_database_init:
            raise typer.Exit(code=1)
        if not (yes or typer.confirm("Create the database tables now?", default=False)):
            raise typer.Exit(code=1)
        asyncio.run(view.initialize_database())
        if view.error:
            raise _fail(view.error)

    if not view.domains:
        typer.echo("No domains found")
        return
    render.console().print(render.domains_table(view.domains))


@domains_app.command("show")
def domains_show(
    domain_id: int,
    sort: str = typer.Option("asc", help="Exam marks order: asc, desc or none"),
) -> None:
    """Show a domain and its students."""

    order = _parse_sort(sort)
    view = _load_detail(domain_id)
    view.sort_order = order
    if view.domain is not None:
        for line in render.domain_summary(view.domain):
            typer.echo(line)
    if not view.students:
        typer.echo("No students enrolled")
        return
    render.console().print(render.students_table(view.sorted_students, order))


@domains_app.command("add")
def domains_add(
    program: str = typer.Option(..., help="Program name, e.g. 'B.Tech CSE'"),
    batch: str | None = typer.Option(None, help="Batch year (2020-2026)"),
    capacity: str = typer.Option(..., help="Seat capacity (0-150)"),
    exam_name: str = typer.Option(..., help="Qualifying exam"),
    cutoff_marks: str = typer.Option(..., help="Admission cutoff (0-100)"),
) -> None:
    """Create a domain."""

    editor = get_container().domain_list_view().new_editor()
    _apply_fields(
        editor,
        {
            "program": program,
            "batch": batch,
            "capacity": capacity,
            "exam_name": exam_name,
            "cutoff_marks": cutoff_marks,
        },
    )
    outcome = _run_editor(editor, assume_yes=True)
    if outcome is SubmitOutcome.SAVED and editor.saved_record is not None:
        typer.echo(f"Created domain {editor.saved_record.domain_id}")


@domains_app.command("edit")
def domains_edit(
    domain_id: int,
    program: str | None = typer.Option(None),
    batch: str | None = typer.Option(None),
    capacity: str | None = typer.Option(None),
    exam_name: str | None = typer.Option(None),
    cutoff_marks: str | None = typer.Option(None),
    yes: bool = typer.Option(False, "--yes", "-y", help="Accept the update impact"),
) -> None:
    """Update a domain, confirming first when enrolled students are affected."""

    view = _load_detail(domain_id)
    editor = view.domain_editor()
    _apply_fields(
        editor,
        {
            "program": program,
            "batch": batch,
            "capacity": capacity,
            "exam_name": exam_name,
            "cutoff_marks": cutoff_marks,
        },
    )
    outcome = _run_editor(editor, assume_yes=yes)
    if outcome is SubmitOutcome.SAVED:
        typer.echo(f"Updated domain {domain_id}")


@domains_app.command("delete")
def domains_delete(
    domain_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete a domain and every student enrolled in it."""

    view = get_container().domain_list_view()
    pending = asyncio.run(view.request_delete(domain_id))
    if pending is None:
        raise _fail(view.error)
    typer.echo(pending.prompt)
    if not (yes or typer.confirm("Delete this domain?", default=False)):
        view.cancel_delete()
        typer.echo("Delete cancelled")
        return
    if not asyncio.run(view.confirm_delete()):
        raise _fail(view.error)
    typer.echo(f"Deleted domain {domain_id}")


@students_app.command("list")
def students_list(
    domain_id: int,
    sort: str = typer.Option("asc", help="Exam marks order: asc, desc or none"),
) -> None:
    """List the students of a domain."""

    order = _parse_sort(sort)
    view = _load_detail(domain_id)
    view.sort_order = order
    if not view.students:
        typer.echo("No students enrolled")
        return
    render.console().print(render.students_table(view.sorted_students, order))


@students_app.command("add")
def students_add(
    domain_id: int,
    first_name: str = typer.Option(...),
    last_name: str = typer.Option(...),
    email: str = typer.Option(...),
    exam_marks: str = typer.Option(..., help="Qualifying exam marks (0-100)"),
    join_year: str | None = typer.Option(None, help="Join year (2021-2026)"),
) -> None:
    """Admit a student into a domain."""

    view = get_container().domain_detail_view(domain_id)
    editor = view.student_editor()
    _apply_fields(
        editor,
        {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "join_year": join_year,
            "exam_marks": exam_marks,
        },
    )
    outcome = _run_editor(editor, assume_yes=True)
    student = editor.saved_record
    if outcome is SubmitOutcome.SAVED and student is not None:
        typer.echo(f"Student admitted. Generated roll number: {student.roll_number}")


@students_app.command("edit")
def students_edit(
    domain_id: int,
    student_id: int,
    first_name: str | None = typer.Option(None),
    last_name: str | None = typer.Option(None),
    email: str | None = typer.Option(None),
    exam_marks: str | None = typer.Option(None),
) -> None:
    """Update a student's name, email or marks."""

    view = _load_detail(domain_id)
    student = next((s for s in view.students if s.student_id == student_id), None)
    if student is None:
        raise _fail(f"Student {student_id} not found in domain {domain_id}")
    editor = view.student_editor(student)
    _apply_fields(
        editor,
        {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "exam_marks": exam_marks,
        },
    )
    outcome = _run_editor(editor, assume_yes=True)
    if outcome is SubmitOutcome.SAVED:
        typer.echo(f"Updated student {student_id}")


@students_app.command("delete")
def students_delete(
    domain_id: int,
    student_id: int,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete a student."""

    view = get_container().domain_detail_view(domain_id)

    def _confirm(prompt: str) -> bool:
        return yes or typer.confirm(prompt, default=False)

    deleted = asyncio.run(view.delete_student(student_id, _confirm))
    if deleted:
        typer.echo(f"Deleted student {student_id}")
        return
    if view.error:
        raise _fail(view.error)
    typer.echo("Delete cancelled")

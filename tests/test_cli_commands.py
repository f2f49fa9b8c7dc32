from __future__ import annotations

from importlib import import_module

import pytest
from fake_backend import FakeBackend
from typer.testing import CliRunner

from erp_console.api.messages import DOMAIN_NOT_FOUND, DUPLICATE_EMAIL
from erp_console.cli.app import app
from erp_console.cli.deps import reset_container
from erp_console.config import AppSettings
from erp_console.container import ServiceContainer

app_module = import_module("erp_console.cli.app")


def _install(monkeypatch: pytest.MonkeyPatch, backend: FakeBackend) -> ServiceContainer:
    reset_container()
    settings = AppSettings(
        environment="test",
        api_base_url="http://testserver",
        db_init_retry_delay=0.0,
    )
    container = ServiceContainer(settings=settings, api_client=backend.client())
    monkeypatch.setattr(app_module, "get_container", lambda: container)
    return container


def _seed_domain(backend: FakeBackend, *, enrolled: int = 0) -> None:
    backend.add_domain(capacity=10)
    for _ in range(enrolled):
        backend.add_student(1)


def test_show_settings(monkeypatch: pytest.MonkeyPatch, backend: FakeBackend) -> None:
    _install(monkeypatch, backend)

    result = CliRunner().invoke(app, ["show-settings"])

    assert result.exit_code == 0
    assert "Environment:\ttest" in result.stdout
    assert "API Base URL:\thttp://testserver" in result.stdout
    assert "Session cookie:\tnot set" in result.stdout


def test_whoami(monkeypatch: pytest.MonkeyPatch, backend: FakeBackend) -> None:
    _install(monkeypatch, backend)
    runner = CliRunner()

    result = runner.invoke(app, ["whoami"])
    assert result.exit_code == 1
    assert "Not logged in" in result.stdout

    backend.user = {"email": "admin@example.edu", "name": "Admin"}
    result = runner.invoke(app, ["whoami"])
    assert result.exit_code == 0
    assert "Admin <admin@example.edu>" in result.stdout


def test_domains_list_empty_and_populated(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    runner = CliRunner()

    result = runner.invoke(app, ["domains", "list"])
    assert result.exit_code == 0
    assert "No domains found" in result.stdout

    _seed_domain(backend)
    result = runner.invoke(app, ["domains", "list"])
    assert result.exit_code == 0
    assert "Academic Domains" in result.stdout


def test_domains_list_offers_database_init(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    backend.fail("GET", "/api/domains", 500, {"message": "Table 'domains' doesn't exist"})

    result = CliRunner().invoke(app, ["domains", "list"], input="n\n")

    assert result.exit_code == 1
    assert "doesn't exist" in result.stdout
    assert backend.count("POST", "/api/database/init") == 0


def test_domains_add(monkeypatch: pytest.MonkeyPatch, backend: FakeBackend) -> None:
    _install(monkeypatch, backend)

    result = CliRunner().invoke(
        app,
        [
            "domains",
            "add",
            "--program",
            "B.Tech CSE",
            "--batch",
            "2024",
            "--capacity",
            "60",
            "--exam-name",
            "JEE Main",
            "--cutoff-marks",
            "75",
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "Created domain 1" in result.stdout
    assert backend.domains[1]["examName"] == "JEE Main"


def test_domains_add_reports_validation_errors(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)

    result = CliRunner().invoke(
        app,
        [
            "domains",
            "add",
            "--program",
            "B.Tech CSE",
            "--batch",
            "2019",
            "--capacity",
            "60",
            "--exam-name",
            "JEE Main",
            "--cutoff-marks",
            "75",
        ],
    )

    assert result.exit_code == 1
    assert "Batch must be between 2020 and 2026" in result.stdout
    assert backend.calls == []


def test_domains_edit_declined_impact_sends_no_update(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    _seed_domain(backend, enrolled=5)

    result = CliRunner().invoke(app, ["domains", "edit", "1", "--capacity", "2"], input="n\n")

    assert result.exit_code == 0
    assert "Affected students: 3" in result.stdout
    assert "Update cancelled" in result.stdout
    assert backend.count("PATCH") == 0


def test_domains_edit_accepted_impact(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    _seed_domain(backend, enrolled=5)

    result = CliRunner().invoke(app, ["domains", "edit", "1", "--capacity", "2", "--yes"])

    assert result.exit_code == 0, result.stdout
    assert "Updated domain 1" in result.stdout
    assert backend.count("PATCH", "/api/domains/1") == 1
    assert backend.domains[1]["capacity"] == 2


def test_domains_show_missing_domain(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)

    result = CliRunner().invoke(app, ["domains", "show", "9"])

    assert result.exit_code == 1
    assert DOMAIN_NOT_FOUND in result.stdout


def test_domains_delete(monkeypatch: pytest.MonkeyPatch, backend: FakeBackend) -> None:
    _install(monkeypatch, backend)
    _seed_domain(backend)

    result = CliRunner().invoke(app, ["domains", "delete", "1", "--yes"])

    assert result.exit_code == 0
    assert "No students are associated with this domain." in result.stdout
    assert "Deleted domain 1" in result.stdout
    assert backend.count("DELETE", "/api/domains/1") == 1


def test_students_add_and_duplicate(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    _seed_domain(backend)
    runner = CliRunner()
    args = [
        "students",
        "add",
        "1",
        "--first-name",
        "Asha",
        "--last-name",
        "Rao",
        "--email",
        "asha@example.edu",
        "--exam-marks",
        "88",
    ]

    result = runner.invoke(app, args)
    assert result.exit_code == 0, result.stdout
    assert "Student admitted. Generated roll number: BT01001" in result.stdout

    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert DUPLICATE_EMAIL in result.stdout


def test_students_edit_unknown_student(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    _seed_domain(backend)

    result = CliRunner().invoke(app, ["students", "edit", "1", "9", "--exam-marks", "70"])

    assert result.exit_code == 1
    assert "Student 9 not found in domain 1" in result.stdout


def test_students_delete_can_be_cancelled(
    monkeypatch: pytest.MonkeyPatch, backend: FakeBackend
) -> None:
    _install(monkeypatch, backend)
    _seed_domain(backend, enrolled=1)
    runner = CliRunner()

    result = runner.invoke(app, ["students", "delete", "1", "1"], input="n\n")
    assert result.exit_code == 0
    assert "Delete cancelled" in result.stdout
    assert backend.count("DELETE") == 0

    result = runner.invoke(app, ["students", "delete", "1", "1", "--yes"])
    assert result.exit_code == 0
    assert "Deleted student 1" in result.stdout

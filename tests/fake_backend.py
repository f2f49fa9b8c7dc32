"""In-memory stand-in for the enrollment REST API, served via httpx.MockTransport."""

from __future__ import annotations

import json
import re
from typing import Any

import httpx

from erp_console.api import ErpApiClient

BASE_URL = "http://testserver"

_DOMAIN = re.compile(r"^/api/domains/(\d+)$")
_DOMAIN_IMPACT = re.compile(r"^/api/domains/(\d+)/impact$")
_DOMAIN_DELETE_IMPACT = re.compile(r"^/api/domains/(\d+)/delete-impact$")
_STUDENTS_BY_DOMAIN = re.compile(r"^/api/students/domain/(\d+)$")
_STUDENT = re.compile(r"^/api/students/(\d+)$")


class FakeBackend:
    def __init__(self) -> None:
        self.domains: dict[int, dict[str, Any]] = {}
        self.students: dict[int, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.bodies: list[dict[str, Any] | None] = []
        self.failures: dict[tuple[str, str], httpx.Response] = {}
        self.user: dict[str, Any] | None = None
        self._next_domain_id = 1
        self._next_student_id = 1

    # -- seeding -----------------------------------------------------------

    def add_domain(self, **fields: Any) -> dict[str, Any]:
        domain_id = self._next_domain_id
        self._next_domain_id += 1
        record = {
            "domainId": domain_id,
            "program": "B.Tech CSE",
            "batch": "2024",
            "capacity": 60,
            "examName": "JEE Main",
            "cutoffMarks": 75.0,
        }
        record.update(fields)
        self.domains[domain_id] = record
        return record

    def add_student(self, domain_id: int, **fields: Any) -> dict[str, Any]:
        student_id = self._next_student_id
        self._next_student_id += 1
        record = {
            "studentId": student_id,
            "rollNumber": f"BT{domain_id:02d}{student_id:03d}",
            "firstName": f"Student{student_id}",
            "lastName": "Doe",
            "email": f"student{student_id}@example.edu",
            "domainId": domain_id,
            "domainProgram": self.domains[domain_id]["program"],
            "joinYear": 2024,
            "examMarks": 80.0,
        }
        record.update(fields)
        self.students[student_id] = record
        return record

    def fail(
        self,
        method: str,
        path: str,
        status: int,
        body: dict[str, Any] | None = None,
    ) -> None:
        self.failures[(method, path)] = httpx.Response(status, json=body or {})

    # -- inspection --------------------------------------------------------

    def count(self, method: str, path: str | None = None) -> int:
        return sum(
            1
            for call_method, call_path in self.calls
            if call_method == method and (path is None or call_path == path)
        )

    def client(self) -> ErpApiClient:
        transport = httpx.MockTransport(self.handler)
        return ErpApiClient(BASE_URL, client=httpx.AsyncClient(transport=transport))

    # -- routing -----------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path
        body = json.loads(request.content) if request.content else None
        self.calls.append((method, path))
        self.bodies.append(body)

        failure = self.failures.get((method, path))
        if failure is not None:
            return failure

        if path == "/api/auth/me":
            if self.user is None:
                return httpx.Response(401, json={"error": "Unauthorized"})
            return httpx.Response(200, json=self.user)
        if path == "/api/database/init" and method == "POST":
            return httpx.Response(200, json={"message": "Database tables have been created"})
        if path == "/api/domains":
            if method == "GET":
                return httpx.Response(200, json=[self._domain_view(d) for d in self.domains.values()])
            if method == "POST":
                record = self.add_domain(**body)
                return httpx.Response(201, json=self._domain_view(record))
        if path == "/api/students/admit" and method == "POST":
            return self._admit(body)

        if match := _DOMAIN_IMPACT.match(path):
            return self._update_impact(int(match.group(1)), body)
        if match := _DOMAIN_DELETE_IMPACT.match(path):
            return self._delete_impact(int(match.group(1)))
        if match := _DOMAIN.match(path):
            return self._domain(method, int(match.group(1)), body)
        if match := _STUDENTS_BY_DOMAIN.match(path):
            domain_id = int(match.group(1))
            listing = [s for s in self.students.values() if s["domainId"] == domain_id]
            return httpx.Response(200, json=listing)
        if match := _STUDENT.match(path):
            return self._student(method, int(match.group(1)), body)
        return httpx.Response(404, json={"message": f"No route for {method} {path}"})

    def _domain_view(self, record: dict[str, Any]) -> dict[str, Any]:
        enrolled = sum(1 for s in self.students.values() if s["domainId"] == record["domainId"])
        return {**record, "studentCount": enrolled}

    def _domain(self, method: str, domain_id: int, body: Any) -> httpx.Response:
        record = self.domains.get(domain_id)
        if record is None:
            return httpx.Response(404, json={"message": f"Domain not found with id: {domain_id}"})
        if method == "GET":
            return httpx.Response(200, json=self._domain_view(record))
        if method == "PATCH":
            record.update(body)
            return httpx.Response(200, json=self._domain_view(record))
        if method == "DELETE":
            del self.domains[domain_id]
            for student_id in [k for k, s in self.students.items() if s["domainId"] == domain_id]:
                del self.students[student_id]
            return httpx.Response(204)
        return httpx.Response(405)

    def _update_impact(self, domain_id: int, body: Any) -> httpx.Response:
        record = self.domains.get(domain_id)
        if record is None:
            return httpx.Response(404, json={"message": f"Domain not found with id: {domain_id}"})
        enrolled = sum(1 for s in self.students.values() if s["domainId"] == domain_id)
        new_capacity = body["capacity"]
        affected = 0
        message = "No impact on students."
        if new_capacity < record["capacity"]:
            affected = max(0, enrolled - new_capacity)
            if affected:
                message = (
                    f"Warning: Capacity will be reduced from {record['capacity']} to "
                    f"{new_capacity}. {affected} student(s) with lower marks will be deactivated."
                )
        return httpx.Response(
            200,
            json={"domainId": domain_id, "affectedStudentsCount": affected, "message": message},
        )

    def _delete_impact(self, domain_id: int) -> httpx.Response:
        if domain_id not in self.domains:
            return httpx.Response(404, json={"message": f"Domain not found with id: {domain_id}"})
        enrolled = sum(1 for s in self.students.values() if s["domainId"] == domain_id)
        message = "No students will be deleted."
        if enrolled:
            message = (
                f"Warning: {enrolled} student(s) will be permanently deleted along with this domain."
            )
        return httpx.Response(
            200,
            json={"domainId": domain_id, "affectedStudentsCount": enrolled, "message": message},
        )

    def _admit(self, body: Any) -> httpx.Response:
        if any(s["email"] == body["email"] for s in self.students.values()):
            return httpx.Response(409, json={"type": "DUPLICATE_EMAIL"})
        if body["domainId"] not in self.domains:
            return httpx.Response(404, json={"message": "Domain not found"})
        record = self.add_student(body["domainId"], **body)
        return httpx.Response(201, json=record)

    def _student(self, method: str, student_id: int, body: Any) -> httpx.Response:
        record = self.students.get(student_id)
        if record is None:
            return httpx.Response(404, json={"message": "Student not found"})
        if method == "PATCH":
            record.update({k: v for k, v in body.items() if k != "studentId"})
            return httpx.Response(200, json=record)
        if method == "DELETE":
            del self.students[student_id]
            return httpx.Response(204)
        return httpx.Response(405)

"""Async HTTP client for the enrollment backend."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from erp_console.domain import (
    Domain,
    DomainModel,
    DomainRequest,
    Student,
    StudentAdmission,
    StudentUpdate,
    UpdateImpact,
    UserProfile,
)

from . import endpoints
from .exceptions import (
    AuthenticationRequired,
    NetworkError,
    ResponseError,
    ResponseFormatError,
)

ModelT = TypeVar("ModelT", bound=DomainModel)

logger = logging.getLogger(__name__)


class ErpApiClient:
    """Thin adapter over the REST API; every call is an independent request."""

    DEFAULT_BASE_URL = "http://localhost:8080"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        cookies: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_root = base_url.rstrip("/") + "/api"
        self._timeout = timeout
        self._cookies = dict(cookies or {})
        self._client = client

    @property
    def api_root(self) -> str:
        return self._api_root

    async def list_domains(self) -> list[Domain]:
        payload = await self._request("GET", endpoints.DOMAINS)
        return self._parse_list(Domain, payload)

    async def get_domain(self, domain_id: int) -> Domain:
        payload = await self._request("GET", endpoints.domain_by_id(domain_id))
        return self._parse(Domain, payload)

    async def create_domain(self, request: DomainRequest) -> Domain:
        payload = await self._request("POST", endpoints.DOMAINS, json=request.to_wire())
        return self._parse(Domain, payload)

    async def update_domain(self, domain_id: int, request: DomainRequest) -> Domain:
        payload = await self._request(
            "PATCH",
            endpoints.domain_by_id(domain_id),
            json=request.to_wire(),
        )
        return self._parse(Domain, payload)

    async def delete_domain(self, domain_id: int) -> None:
        await self._request("DELETE", endpoints.domain_by_id(domain_id))

    async def domain_update_impact(
        self,
        domain_id: int,
        request: DomainRequest,
    ) -> UpdateImpact:
        payload = await self._request(
            "POST",
            endpoints.domain_impact(domain_id),
            json=request.to_wire(),
        )
        return self._parse(UpdateImpact, payload)

    async def domain_delete_impact(self, domain_id: int) -> UpdateImpact:
        payload = await self._request("GET", endpoints.domain_delete_impact(domain_id))
        return self._parse(UpdateImpact, payload)

    async def list_students_by_domain(self, domain_id: int) -> list[Student]:
        payload = await self._request("GET", endpoints.students_by_domain(domain_id))
        return self._parse_list(Student, payload)

    async def admit_student(self, admission: StudentAdmission) -> Student:
        payload = await self._request(
            "POST",
            endpoints.ADMIT_STUDENT,
            json=admission.to_wire(),
        )
        return self._parse(Student, payload)

    async def update_student(self, update: StudentUpdate) -> Student:
        payload = await self._request(
            "PATCH",
            endpoints.student_by_id(update.student_id),
            json=update.to_wire(),
        )
        return self._parse(Student, payload)

    async def delete_student(self, student_id: int) -> None:
        await self._request("DELETE", endpoints.student_by_id(student_id))

    async def init_database(self) -> object:
        return await self._request("POST", endpoints.INIT_DATABASE)

    async def current_user(self) -> UserProfile:
        payload = await self._request("GET", endpoints.CURRENT_USER)
        return self._parse(UserProfile, payload)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> object:
        url = f"{self._api_root}{path}"
        logger.debug("%s %s", method, url)
        try:
            async with self._client_scope() as client:
                response = await client.request(method, url, json=json)
        except httpx.RequestError as exc:
            msg = f"{method} {path} failed before a response was received"
            raise NetworkError(msg) from exc

        if response.is_error:
            raise self._response_error(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            msg = f"{method} {path} returned a body that is not JSON"
            raise ResponseFormatError(msg) from exc

    @staticmethod
    def _response_error(response: httpx.Response) -> ResponseError:
        status = response.status_code
        body: dict[str, Any] = {}
        try:
            decoded = response.json()
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            body = decoded
        msg = f"Request failed with status code {status}"
        logger.info("Backend returned %s for %s", status, response.request.url)
        if status == 401:
            return AuthenticationRequired(msg, status_code=status, body=body)
        return ResponseError(msg, status_code=status, body=body)

    @staticmethod
    def _parse(model: type[ModelT], payload: object) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            msg = f"Unexpected {model.__name__} payload from backend"
            raise ResponseFormatError(msg) from exc

    @classmethod
    def _parse_list(cls, model: type[ModelT], payload: object) -> list[ModelT]:
        if not isinstance(payload, list):
            msg = f"Expected a list of {model.__name__} records"
            raise ResponseFormatError(msg)
        return [cls._parse(model, item) for item in payload]

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout, cookies=self._cookies) as client:
            yield client


__all__ = ["ErpApiClient"]

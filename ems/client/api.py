"""Async HTTP client for the Employee Management API.

One coroutine per API operation. Responses come back as plain decoded
JSON (dicts and lists); any non-2xx status raises :class:`ApiError`.
No retries, caching or request de-duplication.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ems.client.config import get_client_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call, carrying the server's ``error`` message."""

    def __init__(self, status_code: Optional[int], message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("error") or body.get("message") or response.text)
    return response.text


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` rooted at the API base URL."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if base_url is None or timeout is None:
            cfg = get_client_settings()
            base_url = base_url or cfg.API_URL
            timeout = timeout if timeout is not None else cfg.REQUEST_TIMEOUT
        self._client = httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Transport ───────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v not in (None, "")}
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.TransportError as exc:
            raise ApiError(None, f"Could not reach the API: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.debug("%s %s failed: %s %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        return response.json()

    # ── Dashboard ───────────────────────────────────────────────────

    async def get_dashboard_data(self) -> dict[str, int]:
        return await self._request("GET", "/dashboard")

    # ── Employees ───────────────────────────────────────────────────

    async def get_all_employees(
        self,
        *,
        search: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET", "/employees",
            params={"search": search, "department_id": department_id},
        )

    async def get_employee_by_id(self, employee_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/employees/{employee_id}")

    async def create_employee(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/employees", json=data)

    async def update_employee(self, employee_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/employees/{employee_id}", json=data)

    async def delete_employee(self, employee_id: int) -> dict[str, Any]:
        return await self._request("DELETE", f"/employees/{employee_id}")

    # ── Departments / projects ──────────────────────────────────────

    async def get_all_departments(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/departments")

    async def get_department_by_id(self, department_id: int) -> dict[str, Any]:
        return await self._request("GET", f"/departments/{department_id}")

    async def get_all_projects(
        self,
        *,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        return await self._request(
            "GET", "/projects", params={"search": search, "status": status},
        )

    # ── Employee-scoped records ─────────────────────────────────────

    async def get_employee_projects(self, employee_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/employees/{employee_id}/projects")

    async def get_employee_leaves(self, employee_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/employees/{employee_id}/leaves")

    async def get_employee_benefits(self, employee_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/employees/{employee_id}/benefits")

    async def get_employee_dependents(self, employee_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/employees/{employee_id}/dependents")

    async def get_employee_time_tracking(self, employee_id: int) -> list[dict[str, Any]]:
        return await self._request("GET", f"/employees/{employee_id}/timetracking")


# ═════════════════════════════════════════════════════════════════════
# Organisation-wide aggregation
# ═════════════════════════════════════════════════════════════════════


def employee_name(employee: dict[str, Any]) -> str:
    parts = [employee.get("first_name"), employee.get("last_name")]
    return " ".join(p for p in parts if p)


async def _fetch_for_all(api: ApiClient, fetch_name: str) -> list[dict[str, Any]]:
    """Run one per-employee fetch for every employee and tag the rows.

    Employees are fetched one at a time. A failing fetch is logged and
    that employee's rows are skipped.
    """
    rows: list[dict[str, Any]] = []
    for employee in await api.get_all_employees():
        fetch = getattr(api, fetch_name)
        try:
            items = await fetch(employee["id"])
        except ApiError as exc:
            logger.warning(
                "Skipping employee %s: %s failed: %s", employee["id"], fetch_name, exc,
            )
            continue
        name = employee_name(employee)
        for item in items:
            rows.append({**item, "employee_id": employee["id"], "employee_name": name})
    return rows


async def fetch_all_leaves(api: ApiClient) -> list[dict[str, Any]]:
    return await _fetch_for_all(api, "get_employee_leaves")


async def fetch_all_benefits(api: ApiClient) -> list[dict[str, Any]]:
    return await _fetch_for_all(api, "get_employee_benefits")


async def fetch_all_time_entries(api: ApiClient) -> list[dict[str, Any]]:
    return await _fetch_for_all(api, "get_employee_time_tracking")

# src/taskpad/client/api.py

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api/tasks"


class TaskApiError(RuntimeError):
    """A task API call failed (network error, bad status, or unparsable body)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class TaskApiClient:
    """
    Async client for the /api/tasks endpoints.

    One httpx.AsyncClient is reused for all calls; call `aclose()` (or use
    `async with`) when done. No retries: a failed call raises TaskApiError
    and the caller decides what to do.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | httpx.Timeout = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            transport=transport,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TaskApiError(f"{method} {path or '/'} failed: {e}") from e

        logger.debug("%s %s -> %s", method, response.url, response.status_code)
        if response.is_error:
            raise TaskApiError(_error_message(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise TaskApiError(
                f"{method} {path or '/'} returned invalid JSON", status_code=response.status_code
            ) from e

    @staticmethod
    def _task(data: Any) -> Task:
        try:
            return Task.from_json(data)
        except (TypeError, ValueError) as e:
            raise TaskApiError(f"Malformed task in response: {e}") from e

    async def list_tasks(self) -> list[Task]:
        data = await self._request("GET", "")
        if not isinstance(data, list):
            raise TaskApiError("Task list response is not an array")
        return [self._task(item) for item in data]

    async def create_task(self, text: str) -> Task:
        return self._task(await self._request("POST", "", json={"text": text}))

    async def toggle_task(self, task_id: str) -> Task:
        return self._task(await self._request("PUT", quote(task_id, safe="")))

    async def delete_task(self, task_id: str) -> str:
        data = await self._request("DELETE", quote(task_id, safe=""))
        return str(data.get("message", "")) if isinstance(data, dict) else ""

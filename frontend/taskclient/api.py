import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from taskclient.config import API_BASE_URL

logger = logging.getLogger(__name__)


async def _log_request(request: httpx.Request) -> None:
    logger.info("API Request: %s %s", request.method, request.url.path)


def _error_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class TaskAPI:
    """Async HTTP client for the task endpoints.

    Every call returns the decoded JSON envelope. Failures are logged and
    re-raised untouched: ``httpx.HTTPStatusError`` for non-2xx responses,
    ``httpx.RequestError`` when the server could not be reached.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url or API_BASE_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            transport=transport,
            event_hooks={"request": [_log_request]},
        )

    async def __aenter__(self) -> "TaskAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("API Error: %s", _error_detail(e.response))
            raise
        except httpx.RequestError as e:
            logger.error("API Error: %s", e)
            raise
        return response.json()

    async def get_all_tasks(self) -> Dict[str, Any]:
        return await self._request("GET", "/tasks")

    async def get_task(self, task_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/tasks/{task_id}")

    async def create_task(self, task_data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/tasks", json=dict(task_data))

    async def update_task(self, task_id: int, task_data: Mapping[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/tasks/{task_id}", json=dict(task_data))

    async def delete_task(self, task_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/tasks/{task_id}")

    async def get_stats(self) -> Dict[str, Any]:
        return await self._request("GET", "/tasks/stats/summary")

# tests/test_api_client.py

from __future__ import annotations

import json
import logging

import httpx
import pytest

from taskclient.api import TaskAPI

BASE_URL = "http://tasks.test/api"


def _api(handler) -> TaskAPI:
    return TaskAPI(BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_routes_and_methods() -> None:
    seen: list[tuple[str, str, bytes]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.content))
        return httpx.Response(200, json={"success": True, "data": []})

    async with _api(handler) as api:
        await api.get_all_tasks()
        await api.get_task(3)
        await api.create_task({"title": "New"})
        await api.update_task(3, {"title": "Renamed"})
        await api.delete_task(3)
        await api.get_stats()

    assert [(method, path) for method, path, _ in seen] == [
        ("GET", "/api/tasks"),
        ("GET", "/api/tasks/3"),
        ("POST", "/api/tasks"),
        ("PUT", "/api/tasks/3"),
        ("DELETE", "/api/tasks/3"),
        ("GET", "/api/tasks/stats/summary"),
    ]
    assert json.loads(seen[2][2]) == {"title": "New"}
    assert json.loads(seen[3][2]) == {"title": "Renamed"}


@pytest.mark.asyncio
async def test_returns_envelope_and_sends_json() -> None:
    task = {"id": 1, "title": "New", "status": "pending", "priority": "medium"}

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["content-type"] == "application/json"
        return httpx.Response(201, json={"success": True, "data": task})

    async with _api(handler) as api:
        body = await api.create_task({"title": "New", "status": "pending", "priority": "medium"})

    assert body == {"success": True, "data": task}


@pytest.mark.asyncio
async def test_http_errors_pass_through(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="taskclient.api")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"success": False, "error": "Task not found"})

    async with _api(handler) as api:
        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            await api.get_task(99)

    assert excinfo.value.response.status_code == 404
    assert "API Request: GET /api/tasks/99" in caplog.text
    assert "Task not found" in caplog.text


@pytest.mark.asyncio
async def test_transport_errors_pass_through() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _api(handler) as api:
        with pytest.raises(httpx.ConnectError):
            await api.get_all_tasks()

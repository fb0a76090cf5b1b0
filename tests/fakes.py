# tests/fakes.py

from __future__ import annotations

from typing import Any, Mapping

import httpx


class FakeTaskAPI:
    """
    In-memory stand-in for TaskAPI used by the board tests.

    - Records every call name in ``calls``
    - Any method whose name is in ``fail`` raises ``httpx.ConnectError``
    """

    def __init__(self, tasks: list[dict[str, Any]] | None = None) -> None:
        self.tasks: list[dict[str, Any]] = [dict(t) for t in tasks or []]
        self.calls: list[str] = []
        self.payloads: list[tuple[str, Any]] = []
        self.fail: set[str] = set()
        self._next_id = max((t["id"] for t in self.tasks), default=0) + 1

    def _record(self, name: str, payload: Any = None) -> None:
        self.calls.append(name)
        if payload is not None:
            self.payloads.append((name, payload))
        if name in self.fail:
            raise httpx.ConnectError(f"{name} failed")

    async def get_all_tasks(self) -> dict[str, Any]:
        self._record("get_all_tasks")
        return {"success": True, "data": [dict(t) for t in self.tasks]}

    async def get_stats(self) -> dict[str, Any]:
        self._record("get_stats")
        summary = {"total": 0, "pending": 0, "in-progress": 0, "completed": 0}
        for t in self.tasks:
            summary[t["status"]] += 1
            summary["total"] += 1
        return {"success": True, "data": summary}

    async def create_task(self, task_data: Mapping[str, Any]) -> dict[str, Any]:
        self._record("create_task", dict(task_data))
        task = {
            "id": self._next_id,
            "created_at": "2026-10-19T09:30:00",
            "updated_at": "2026-10-19T09:30:00",
            **task_data,
        }
        self._next_id += 1
        self.tasks.insert(0, task)
        return {"success": True, "data": task}

    async def update_task(self, task_id: int, task_data: Mapping[str, Any]) -> dict[str, Any]:
        self._record("update_task", (task_id, dict(task_data)))
        for t in self.tasks:
            if t["id"] == task_id:
                t.update(task_data)
                return {"success": True, "data": t}
        raise httpx.HTTPStatusError(
            "404 Not Found",
            request=httpx.Request("PUT", f"http://testserver/api/tasks/{task_id}"),
            response=httpx.Response(404, json={"success": False, "error": "Task not found"}),
        )

    async def delete_task(self, task_id: int) -> dict[str, Any]:
        self._record("delete_task", task_id)
        self.tasks = [t for t in self.tasks if t["id"] != task_id]
        return {"success": True, "message": "Task deleted successfully"}


def make_task(task_id: int, title: str, **overrides: Any) -> dict[str, Any]:
    task = {
        "id": task_id,
        "title": title,
        "description": "",
        "status": "pending",
        "priority": "medium",
        "created_at": "2026-10-18T12:00:00",
        "updated_at": "2026-10-18T12:00:00",
    }
    task.update(overrides)
    return task

import asyncio
import logging
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from taskclient.api import TaskAPI

logger = logging.getLogger(__name__)

STATUS_OPTIONS = {"pending": "Pending", "in-progress": "In Progress", "completed": "Completed"}
PRIORITY_OPTIONS = {"low": "Low", "medium": "Medium", "high": "High"}

FETCH_TASKS_ERROR = "Failed to fetch tasks. Please make sure the backend is running."
FETCH_STATS_ERROR = "Failed to fetch statistics."
CONFIRM_DELETE = "Are you sure you want to delete this task?"

# Transport failures, non-2xx responses and bodies that are not the expected envelope.
_REQUEST_ERRORS = (httpx.HTTPError, KeyError, ValueError)


def _empty_stats() -> Dict[str, int]:
    return {"total": 0, "pending": 0, "in-progress": 0, "completed": 0}


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    status: str = "pending"
    priority: str = "medium"

    @classmethod
    def from_task(cls, task: Mapping[str, Any]) -> "TaskForm":
        return cls(
            title=task["title"],
            description=task.get("description") or "",
            status=task["status"],
            priority=task["priority"],
        )

    def set(self, name: str, value: str) -> None:
        if name not in {f.name for f in fields(self)}:
            raise KeyError(name)
        setattr(self, name, value)

    def as_payload(self) -> Dict[str, str]:
        return asdict(self)


class TaskBoard:
    """
    Client-side mirror of the task list and the stats summary.

    After every successful mutation both are re-fetched from the server
    instead of being patched locally. Failures never raise out of the
    public actions; they set ``error`` and leave the rest of the state as
    it was before the action.
    """

    def __init__(self, api: TaskAPI, confirm: Callable[[str], bool]) -> None:
        self.api = api
        self.confirm = confirm

        self.tasks: List[Dict[str, Any]] = []
        self.stats: Dict[str, int] = _empty_stats()
        self.loading = True
        self.error: Optional[str] = None
        self.editing_id: Optional[int] = None

        self.form = TaskForm()
        self.edit_form = TaskForm()

    # ---- fetching ----

    async def mount(self) -> None:
        await self.refresh()

    async def refresh(self) -> None:
        await asyncio.gather(self.fetch_tasks(), self.fetch_stats())

    async def fetch_tasks(self) -> None:
        self.loading = True
        try:
            body = await self.api.get_all_tasks()
            self.tasks = body["data"]
            self.error = None
        except _REQUEST_ERRORS as e:
            logger.error("Failed to fetch tasks: %s", e)
            self.error = FETCH_TASKS_ERROR
        finally:
            self.loading = False

    async def fetch_stats(self) -> None:
        try:
            body = await self.api.get_stats()
            self.stats = body["data"]
        except _REQUEST_ERRORS as e:
            logger.error("Failed to fetch stats: %s", e)
            self.error = FETCH_STATS_ERROR

    # ---- forms ----

    def set_field(self, name: str, value: str) -> None:
        self.form.set(name, value)

    def set_edit_field(self, name: str, value: str) -> None:
        self.edit_form.set(name, value)

    # ---- mutations ----

    async def submit_create(self) -> bool:
        try:
            await self.api.create_task(self.form.as_payload())
        except _REQUEST_ERRORS as e:
            logger.error("Failed to create task: %s", e)
            self.error = "Failed to create task"
            return False

        await self.refresh()
        self.form = TaskForm()
        return True

    def start_edit(self, task: Mapping[str, Any]) -> None:
        self.editing_id = task["id"]
        self.edit_form = TaskForm.from_task(task)

    def cancel_edit(self) -> None:
        self.editing_id = None

    async def save_edit(self) -> bool:
        if self.editing_id is None:
            return False

        try:
            await self.api.update_task(self.editing_id, self.edit_form.as_payload())
        except _REQUEST_ERRORS as e:
            logger.error("Failed to update task %s: %s", self.editing_id, e)
            self.error = "Failed to update task"
            return False

        self.editing_id = None
        await self.refresh()
        return True

    async def delete(self, task_id: int) -> bool:
        if not self.confirm(CONFIRM_DELETE):
            return False

        try:
            await self.api.delete_task(task_id)
        except _REQUEST_ERRORS as e:
            logger.error("Failed to delete task %s: %s", task_id, e)
            self.error = "Failed to delete task"
            return False

        await self.refresh()
        return True

    # ---- view ----

    def find_task(self, task_id: int) -> Optional[Dict[str, Any]]:
        for task in self.tasks:
            if task["id"] == task_id:
                return task
        return None

    def render(self) -> str:
        if self.loading:
            return "Loading tasks..."

        lines = ["Task Manager", "=" * 12]
        if self.error:
            lines.append(f"! {self.error}")

        lines.append(
            "Total Tasks: {total} | Pending: {pending} | In Progress: {in_progress} | Completed: {completed}".format(
                total=self.stats.get("total", 0),
                pending=self.stats.get("pending", 0),
                in_progress=self.stats.get("in-progress", 0),
                completed=self.stats.get("completed", 0),
            )
        )

        lines.append("")
        lines.append("Create New Task")
        lines.extend(_render_form(self.form, title_label="Task Title *"))

        lines.append("")
        lines.append(f"Tasks ({len(self.tasks)})")
        if not self.tasks:
            lines.append("  No tasks yet")
            lines.append("  Create your first task to get started!")

        for task in self.tasks:
            if task["id"] == self.editing_id:
                lines.append(f"  #{task['id']} (editing)")
                lines.extend("  " + line for line in _render_form(self.edit_form, title_label="Title"))
                lines.append("    [Save] [Cancel]")
                continue

            lines.append(f"  #{task['id']} {task['title']}  [{task['status']}] [{task['priority']}]")
            if task.get("description"):
                lines.append(f"    {task['description']}")
            lines.append(f"    Created: {_format_date(task.get('created_at'))}")

        return "\n".join(lines)


def _render_form(form: TaskForm, title_label: str) -> List[str]:
    return [
        f"  {title_label}: {form.title}",
        f"  Description: {form.description}",
        "  Status: {status}   Priority: {priority}".format(
            status=STATUS_OPTIONS.get(form.status, form.status),
            priority=PRIORITY_OPTIONS.get(form.priority, form.priority),
        ),
    ]


def _format_date(value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).strftime("%d.%m.%Y")
    except ValueError:
        return value

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status

from taskmanager.core.errors import StorageError
from taskmanager.core.task_store import TaskStore
from taskmanager.schemas.task import TaskPayload, TaskResponse, TaskStats

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={404: {"description": "Not found"}},
)

TaskId = Annotated[int, Path(ge=1, description="Task ID")]


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


def _storage_failure(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("")
async def get_tasks(store: TaskStore = Depends(get_store)):
    try:
        tasks = await store.list_tasks()
    except StorageError:
        raise _storage_failure("Failed to fetch tasks")
    return {"success": True, "data": [TaskResponse.model_validate(t) for t in tasks]}


@router.get("/stats/summary")
async def get_stats(store: TaskStore = Depends(get_store)):
    try:
        counts = await store.count_by_status()
    except StorageError:
        raise _storage_failure("Failed to fetch statistics")
    return {"success": True, "data": TaskStats.from_counts(counts).as_summary()}


@router.get("/{task_id}")
async def get_task(task_id: TaskId, store: TaskStore = Depends(get_store)):
    try:
        task = await store.get_task(task_id)
    except StorageError:
        raise _storage_failure("Failed to fetch task")
    if task is None:
        raise _not_found()
    return {"success": True, "data": TaskResponse.model_validate(task)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskPayload, store: TaskStore = Depends(get_store)):
    try:
        task = await store.create_task(**payload.to_fields())
    except StorageError:
        raise _storage_failure("Failed to create task")
    logger.info("Task %s created", task.id)
    return {"success": True, "data": TaskResponse.model_validate(task)}


@router.put("/{task_id}")
async def update_task(
    payload: TaskPayload,
    task_id: TaskId,
    store: TaskStore = Depends(get_store),
):
    try:
        changes = await store.update_task(task_id, **payload.to_fields())
        if changes == 0:
            raise _not_found()
        task = await store.get_task(task_id)
    except StorageError:
        raise _storage_failure("Failed to update task")
    # Deleted between the update and the re-read.
    if task is None:
        raise _not_found()
    logger.info("Task %s updated", task_id)
    return {"success": True, "data": TaskResponse.model_validate(task)}


@router.delete("/{task_id}")
async def delete_task(task_id: TaskId, store: TaskStore = Depends(get_store)):
    try:
        changes = await store.delete_task(task_id)
    except StorageError:
        raise _storage_failure("Failed to delete task")
    if changes == 0:
        raise _not_found()
    logger.info("Task %s deleted", task_id)
    return {"success": True, "message": "Task deleted successfully"}

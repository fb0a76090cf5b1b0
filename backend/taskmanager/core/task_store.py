import logging
from typing import Dict, List, Optional, Union

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from taskmanager.core.database import Base, create_session_factory
from taskmanager.core.errors import StorageError
from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

# Largest rowid SQLite can store; bigger ids cannot match any row.
MAX_TASK_ID = 2**63 - 1


class TaskStore:
    """
    Persistence for the ``tasks`` table.

    Every method opens its own session and runs a single statement, so there
    are no transactions spanning calls and nothing is retried. Engine
    failures are logged and re-raised as ``StorageError``.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessions = create_session_factory(engine)

    async def init_schema(self) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.exception("Error creating tasks table")
            raise StorageError("Failed to initialise schema") from e
        logger.info("Tasks table ready url=%s", self._engine.url)

    async def close(self) -> None:
        await self._engine.dispose()

    async def list_tasks(self) -> List[Task]:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    select(Task).order_by(Task.created_at.desc(), Task.id.desc())
                )
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception("Error fetching tasks")
            raise StorageError("Failed to fetch tasks") from e

    async def get_task(self, task_id: int) -> Optional[Task]:
        if task_id > MAX_TASK_ID:
            return None
        try:
            async with self._sessions() as session:
                result = await session.execute(select(Task).where(Task.id == task_id))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception("Error fetching task %s", task_id)
            raise StorageError("Failed to fetch task") from e

    async def create_task(
        self,
        title: str,
        description: str,
        status: Union[TaskStatus, str],
        priority: Union[TaskPriority, str],
    ) -> Task:
        task = Task(
            title=title,
            description=description,
            status=TaskStatus(status).value,
            priority=TaskPriority(priority).value,
        )
        try:
            async with self._sessions() as session:
                session.add(task)
                await session.commit()
                # created_at / updated_at come from the engine
                await session.refresh(task)
        except SQLAlchemyError as e:
            logger.exception("Error creating task")
            raise StorageError("Failed to create task") from e

        logger.debug("Created task id=%s", task.id)
        return task

    async def update_task(
        self,
        task_id: int,
        title: str,
        description: str,
        status: Union[TaskStatus, str],
        priority: Union[TaskPriority, str],
    ) -> int:
        """Overwrite all mutable fields; returns the number of rows changed."""
        if task_id > MAX_TASK_ID:
            return 0
        stmt = (
            update(Task)
            .where(Task.id == task_id)
            .values(
                title=title,
                description=description,
                status=TaskStatus(status).value,
                priority=TaskPriority(priority).value,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception("Error updating task %s", task_id)
            raise StorageError("Failed to update task") from e

        logger.debug("Updated task id=%s changes=%s", task_id, result.rowcount)
        return result.rowcount

    async def delete_task(self, task_id: int) -> int:
        """Hard delete; returns the number of rows removed."""
        if task_id > MAX_TASK_ID:
            return 0
        stmt = delete(Task).where(Task.id == task_id).execution_options(synchronize_session=False)
        try:
            async with self._sessions() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.exception("Error deleting task %s", task_id)
            raise StorageError("Failed to delete task") from e

        logger.debug("Deleted task id=%s changes=%s", task_id, result.rowcount)
        return result.rowcount

    async def count_by_status(self) -> Dict[str, int]:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    select(Task.status, func.count(Task.id)).group_by(Task.status)
                )
                return {row_status: count for row_status, count in result.all()}
        except SQLAlchemyError as e:
            logger.exception("Error fetching stats")
            raise StorageError("Failed to fetch statistics") from e

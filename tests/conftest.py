# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from taskmanager.core.config import Settings
from taskmanager.core.database import create_engine
from taskmanager.core.task_store import TaskStore
from taskmanager.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh SQLite file per test."""
    return Settings(DATABASE_PATH=str(tmp_path / "tasks.sqlite"))


@pytest_asyncio.fixture()
async def store(settings: Settings):
    task_store = TaskStore(create_engine(settings.database_url))
    await task_store.init_schema()
    yield task_store
    await task_store.close()


@pytest.fixture()
def client(settings: Settings):
    """TestClient whose lifespan creates the schema and disposes the engine."""
    with TestClient(create_app(settings=settings)) as test_client:
        yield test_client

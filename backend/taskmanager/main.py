import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskmanager.core.config import Settings, settings as default_settings
from taskmanager.core.database import create_engine
from taskmanager.core.errors import register_exception_handlers
from taskmanager.core.task_store import TaskStore
from taskmanager.routers import health, tasks

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """Build the API around an explicitly constructed task store."""
    settings = settings or default_settings
    if store is None:
        store = TaskStore(create_engine(settings.database_url, echo=settings.SQL_ECHO))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.init_schema()
        yield
        await store.close()

    app = FastAPI(title="Task Manager API", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(tasks.router, prefix="/api")
    app.include_router(health.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from taskmanager.core.logging_setup import setup_logging

    setup_logging(default_settings.LOG_LEVEL)
    logger.info("Starting Task Manager API on port %s", default_settings.API_PORT)
    uvicorn.run(app, host=default_settings.API_HOST, port=default_settings.API_PORT)

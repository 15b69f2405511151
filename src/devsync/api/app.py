"""FastAPI application for devsync."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from devsync import __version__, db
from devsync.api.routers import search_router
from devsync.config import ConfigManager, init_api_logging


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover
    """Lifecycle manager for the FastAPI app."""
    init_api_logging()
    app_config = ConfigManager().config
    logger.info(f"Starting devsync API {__version__} (backend={app_config.database_backend.value})")

    await db.get_or_create_db(
        db_path=app_config.database_path,
        db_type=db.DatabaseType.for_config(app_config),
        config=app_config,
    )
    yield

    logger.info("Shutting down devsync API")
    await db.shutdown_db()


app = FastAPI(
    title="devsync",
    description="Search API for devsync workspaces, projects and knowledge",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(search_router)

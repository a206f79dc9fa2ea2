"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from portfolio_cms.config import get_settings
from portfolio_cms.infrastructure.database import Base, engine
from portfolio_cms.infrastructure.dependencies import (
    get_edit_session,
    get_migration_runner,
    get_rate_limiter,
)
from portfolio_cms.infrastructure.logging.log_config import setup_logging
from portfolio_cms.presentation.api.error_handlers import register_exception_handlers
from portfolio_cms.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, migrate legacy data, start the sweeper."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # 3. Copy legacy local data into the record store, once per collection
    try:
        await get_migration_runner().run_all()
    except Exception:
        logger.exception("Legacy data migration failed — continuing with remote data only")

    # 4. Periodic rate-limit counter sweep
    limiter = get_rate_limiter()
    await limiter.start_sweeper(settings.rate_limit_sweep_seconds)

    yield

    # Shutdown
    await limiter.stop_sweeper()
    get_edit_session().close()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    # Uploaded images, read-only
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.public_upload_url,
        StaticFiles(directory=settings.upload_dir),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portfolio_cms.main:app",
        host="0.0.0.0",
        port=8030,
        reload=True,
    )

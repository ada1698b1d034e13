"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from issuegroup import __version__
from issuegroup.api.dependencies import close_tracker_factory, init_tracker_factory
from issuegroup.api.models import APIResponse
from issuegroup.api.routes import groups, relationships
from issuegroup.config import ConfigError, Settings, load_settings
from issuegroup.detection import DependencyCycleError, SeedNotFoundError
from issuegroup.tracker import TicketNotFoundError, TrackerError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP responses."""

    @app.exception_handler(SeedNotFoundError)
    async def seed_not_found_handler(_request: Request, exc: SeedNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(TicketNotFoundError)
    async def ticket_not_found_handler(
        _request: Request, exc: TicketNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(DependencyCycleError)
    async def cycle_handler(_request: Request, exc: DependencyCycleError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(_request: Request, exc: TrackerError) -> JSONResponse:
        logger.error("Tracker request failed: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(ConfigError)
    async def config_error_handler(_request: Request, exc: ConfigError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings or load_settings()
    init_tracker_factory(settings)
    if not settings.github_token:
        logger.warning("No GitHub token configured; tracker requests will fail")
    yield
    close_tracker_factory()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="issuegroup API",
        description="Detects and orders groups of related GitHub issues",
        version=__version__,
        lifespan=lifespan,
    )

    # Loaded lazily by the lifespan manager when not given
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(groups.router, prefix="/api/v1")
    app.include_router(relationships.router, prefix="/api/v1")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()

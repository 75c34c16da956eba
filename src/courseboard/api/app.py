"""FastAPI application factory.

- Serves the dashboard payload for the UI
- Forbidden: aggregation logic, direct data-service parsing
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from courseboard.config import Settings, load_settings
from courseboard.providers.base import DataService
from courseboard.providers.living_apps import LivingAppsService
from courseboard.providers.mock import MockDataService
from courseboard.worker.loader import DashboardLoader


def build_data_service(settings: Settings) -> DataService:
    """Create the data service selected by ``settings.provider``."""
    if settings.provider == "living_apps":
        return LivingAppsService.from_settings(settings)
    return MockDataService()


def get_loader(request: Request) -> DashboardLoader:
    """Dependency to get the application's dashboard loader."""
    return request.app.state.loader


def create_app(service: DataService | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        service: Optional data service. Defaults to the one configured
            through ``COURSEBOARD_*`` environment variables.

    Returns:
        Configured FastAPI application.
    """
    if service is None:
        service = build_data_service(load_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.loader.close()
        await service.aclose()

    app = FastAPI(
        title="courseboard API",
        description="Course administration dashboard statistics",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.loader = DashboardLoader(service)

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",  # Vite dev server
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from courseboard.api.routes import dashboard

    app.include_router(dashboard.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()

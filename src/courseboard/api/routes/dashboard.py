"""Dashboard API endpoints.

GET  /api/dashboard         - Dashboard overview (loads on first request)
POST /api/dashboard/refresh - Reload all collections and return the overview
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from courseboard.api.app import get_loader
from courseboard.models.types import DashboardOverview
from courseboard.worker.loader import DashboardLoader

router = APIRouter()


@router.get("/dashboard", response_model=DashboardOverview)
async def get_dashboard(
    loader: DashboardLoader = Depends(get_loader),
) -> DashboardOverview:
    """Get the dashboard overview.

    The first request triggers a load; concurrent first requests share it. A failed load still returns 200 with
    the retained state and ``error`` set.
    """
    await loader.ensure_loaded()
    return loader.overview()


@router.post("/dashboard/refresh", response_model=DashboardOverview)
async def refresh_dashboard(
    loader: DashboardLoader = Depends(get_loader),
) -> DashboardOverview:
    """Reload the dashboard and return the resulting overview."""
    await loader.load()
    return loader.overview()

#!/usr/bin/env python3
"""
Series Routes - chart data, shared zoom window and manual refresh
"""

import logging

from fastapi import APIRouter

from ...dashboard import DashboardController
from ...tasks.series_poller import SeriesPoller
from ...web.template_helpers import format_time
from ..schemas import RangeRequest, RefreshResponse, SeriesResponse, ViewportResponse

logger = logging.getLogger("climatedash.server")


def create_series_routes(dashboard_controller: DashboardController, poller: SeriesPoller) -> APIRouter:
    """Create JSON API routes used by the chart widgets."""
    router = APIRouter(prefix="/api")
    viewport = dashboard_controller.viewport

    @router.get("/series", response_model=SeriesResponse)
    async def get_series(visible_only: bool = False):
        """Full normalized series plus the visible window (or only the window's rows)."""
        return dashboard_controller.get_series_payload(visible_only=visible_only)

    @router.get("/viewport", response_model=ViewportResponse)
    async def get_viewport():
        return dashboard_controller.get_viewport_data()

    @router.post("/viewport/range", response_model=ViewportResponse)
    async def set_viewport_range(body: RangeRequest):
        """Brush gesture from any chart; every chart follows."""
        viewport.set_range(body.start, body.end)
        return dashboard_controller.get_viewport_data()

    @router.post("/viewport/reset", response_model=ViewportResponse)
    async def reset_viewport():
        viewport.reset_zoom()
        return dashboard_controller.get_viewport_data()

    @router.post("/refresh", response_model=RefreshResponse)
    async def refresh_series():
        """Manual refresh; failures are reported in the body, not as HTTP errors."""
        state = await poller.refresh()
        return {
            "status": dashboard_controller.get_status(state),
            "error": state.error,
            "last_updated": format_time(state.last_updated) or None,
            "point_count": len(state.points or ()),
        }

    return router

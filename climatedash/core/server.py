#!/usr/bin/env python3
"""
climatedash FastAPI application factory

Wires the sheet client, background poller, shared viewport and dashboard
controller together and mounts the routes.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..api.routes.dashboard_routes import create_dashboard_routes
from ..api.routes.series_routes import create_series_routes
from ..api.sheet_client import SheetClient
from ..dashboard import DashboardController, SyncedViewport
from ..tasks.series_poller import SeriesPoller
from .config import DashboardConfig

logger = logging.getLogger("climatedash.server")


def create_app(config: DashboardConfig, poller: Optional[SeriesPoller] = None,
               start_polling: bool = True) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        config: Loaded dashboard configuration
        poller: Pre-built poller (tests inject one with a fake client)
        start_polling: Start the background refresh loop on startup
    """
    if poller is None:
        client = SheetClient(config.data_url, timeout=config.request_timeout)
        poller = SeriesPoller(client, interval_seconds=config.refresh_interval)

    viewport = SyncedViewport()
    poller.add_listener(lambda points: viewport.set_data_length(len(points)))

    dashboard_controller = DashboardController(
        poller,
        viewport,
        page_title=config.page_title,
        refresh_interval=config.refresh_interval,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if start_polling:
            poller.start()
        logger.info("climatedash started")
        yield
        await poller.stop()
        logger.info("climatedash stopped")

    app = FastAPI(title="climatedash", lifespan=lifespan)
    app.state.config = config
    app.state.poller = poller
    app.state.viewport = viewport
    app.state.dashboard_controller = dashboard_controller

    app.include_router(create_dashboard_routes(dashboard_controller))
    app.include_router(create_series_routes(dashboard_controller, poller))

    @app.get("/health")
    def health_check():
        """Poller status summary."""
        state = poller.state
        return {
            "status": dashboard_controller.get_status(state),
            "error": state.error,
            "point_count": len(state.points or ()),
            "last_updated": state.last_updated.isoformat() if state.last_updated else None,
        }

    return app

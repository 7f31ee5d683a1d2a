#!/usr/bin/env python3
"""
Dashboard Routes - Web UI and Template Rendering
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ...dashboard import DashboardController

logger = logging.getLogger("climatedash.server")

UI_DIR = Path(__file__).resolve().parents[2] / "ui"


def create_dashboard_routes(dashboard_controller: DashboardController) -> APIRouter:
    """Create dashboard and web UI routes."""
    router = APIRouter()

    templates = Jinja2Templates(directory=str(UI_DIR))

    @router.get("/", response_class=HTMLResponse)
    @router.get("/dashboard", response_class=HTMLResponse)
    async def dashboard_main(request: Request, theme: str = "light"):
        """Main dashboard page - status panels and the four synchronized charts."""
        logger.debug("Rendering main dashboard")
        dashboard_data = dashboard_controller.get_dashboard_data(theme=theme)
        return templates.TemplateResponse(request, "dashboard.html", dashboard_data)

    return router

"""
climatedash Dashboard Module

Chart data preparation and the synchronized zoom window, in pure Python so
the page template stays thin.
"""

from .controller import DashboardController
from .viewport import SyncedViewport, VisibleRange

__all__ = ["DashboardController", "SyncedViewport", "VisibleRange"]

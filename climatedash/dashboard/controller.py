"""
Dashboard Controller

Prepares everything the dashboard page and JSON API render: page status,
one shared row projection of the series for all charts, the synchronized
visible window, and the latest readings per chart.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..models import CHANNEL_NAMES, SamplePoint
from ..tasks.series_poller import SeriesPoller, SeriesState
from ..web.template_helpers import format_time, format_time_ago
from .config import CHARTS, THEMES, format_channel_value
from .viewport import SyncedViewport

logger = logging.getLogger("climatedash.dashboard")

ROW_COLUMNS = ["timestamp_ms", "time_label", "full_timestamp", *CHANNEL_NAMES]


def series_to_frame(points: Sequence[SamplePoint]) -> pd.DataFrame:
    """
    Project the series into a DataFrame with display columns.

    Columns: timestamp, timestamp_ms (epoch milliseconds), time_label
    (HH:MM:SS), full_timestamp (YYYY-MM-DD HH:MM:SS) and one per channel.
    """
    if not points:
        return pd.DataFrame(columns=["timestamp", *ROW_COLUMNS])

    df = pd.DataFrame([p.to_dict() for p in points])
    # Naive timestamps are local time; datetime.timestamp() honours that
    df["timestamp_ms"] = [int(p.timestamp.timestamp() * 1000) for p in points]
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    df["time_label"] = df["timestamp"].dt.strftime("%H:%M:%S")
    df["full_timestamp"] = df["timestamp"].dt.strftime("%Y-%m-%d %H:%M:%S")
    return df[["timestamp", *ROW_COLUMNS]]


def build_rows(df: pd.DataFrame, start: Optional[int] = None, end: Optional[int] = None) -> List[Dict[str, Any]]:
    """Convert the frame (optionally rows start..end inclusive) to JSON-friendly dicts, NaN -> None."""
    if df.empty:
        return []
    if start is not None and end is not None:
        df = df.iloc[start:end + 1]

    out = df[ROW_COLUMNS].astype(object)
    out = out.where(out.notna(), None)
    rows = out.to_dict("records")
    for row in rows:
        for key, value in row.items():
            if isinstance(value, np.generic):
                row[key] = value.item()
    return rows


class DashboardController:
    """All dashboard data preparation, independent of the web layer."""

    def __init__(self, poller: SeriesPoller, viewport: SyncedViewport,
                 page_title: str = "Conceptmachine Live Data", refresh_interval: int = 10):
        self.poller = poller
        self.viewport = viewport
        self.page_title = page_title
        self.refresh_interval = refresh_interval

    @staticmethod
    def get_status(state: SeriesState) -> str:
        """One of 'loading', 'error', 'no_data', 'ok'."""
        if state.is_loading:
            return "loading"
        if state.is_error:
            return "error"
        if not state.points:
            return "no_data"
        return "ok"

    def get_viewport_data(self, points: Optional[Sequence[SamplePoint]] = None) -> Dict[str, Any]:
        """Visible window clamped against the series being served."""
        if points is None:
            points = self.poller.state.points or ()
        self.viewport.set_data_length(len(points))
        visible = self.viewport.visible_range()
        return {
            "start": visible.start,
            "end": visible.end,
            "is_zoomed": self.viewport.is_zoomed,
            "data_length": self.viewport.data_length,
        }

    def get_latest_readings(self, points: Sequence[SamplePoint]) -> Dict[str, List[Dict[str, Any]]]:
        """Most recent value of every channel, grouped by chart key."""
        latest = points[-1] if points else None
        readings = {}
        for chart in CHARTS:
            readings[chart["key"]] = [
                {
                    "name": ch["name"],
                    "label": ch["label"],
                    "value": latest.channel(ch["name"]) if latest else None,
                    "display": format_channel_value(latest.channel(ch["name"]) if latest else None, ch["unit"]),
                }
                for ch in chart["channels"]
            ]
        return readings

    def get_dashboard_data(self, theme: str = "light") -> Dict[str, Any]:
        """
        Complete data structure for the dashboard page.

        The theme is per-request UI state passed straight through to the
        template.
        """
        state = self.poller.state
        points = state.points or ()
        status = self.get_status(state)
        logger.debug(f"Generating dashboard data (status={status}, points={len(points)})")

        readings = self.get_latest_readings(points)
        charts = [dict(chart, latest=readings[chart["key"]]) for chart in CHARTS]

        return {
            "page_title": self.page_title,
            "status": status,
            "error": state.error,
            "has_data": bool(points),
            "is_refetching": state.is_refetching,
            "last_updated": format_time(state.last_updated) or None,
            "last_updated_ago": format_time_ago(state.last_updated),
            "refresh_interval": self.refresh_interval,
            "point_count": len(points),
            "viewport": self.get_viewport_data(points),
            "charts": charts,
            "theme": theme if theme in THEMES else "light",
        }

    def get_series_payload(self, visible_only: bool = False) -> Dict[str, Any]:
        """
        Rows for the chart API.

        Charts normally receive the full series together with the visible
        range; visible_only clips the rows to the window instead.
        """
        state = self.poller.state
        points = state.points or ()
        viewport = self.get_viewport_data(points)

        df = series_to_frame(points)
        if visible_only and points:
            rows = build_rows(df, viewport["start"], viewport["end"])
        else:
            rows = build_rows(df)

        return {
            "status": self.get_status(state),
            "error": state.error,
            "last_updated": format_time(state.last_updated) or None,
            "viewport": viewport,
            "rows": rows,
        }

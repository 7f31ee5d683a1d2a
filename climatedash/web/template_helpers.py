#!/usr/bin/env python3
"""
Template Helpers for climatedash Dashboard
"""

from datetime import datetime
from typing import Optional


def format_time(value: Optional[datetime]) -> str:
    """Format timestamp as time only."""
    if not value:
        return ""
    return value.strftime("%H:%M:%S")


def format_time_ago(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Format timestamp as relative time (e.g., '5m ago')."""
    if not value:
        return "Never"
    diff = int(((now or datetime.now()) - value).total_seconds())
    if diff < 60:
        return f"{max(diff, 0)}s ago"
    elif diff < 3600:
        return f"{diff // 60}m ago"
    elif diff < 86400:
        return f"{diff // 3600}h ago"
    else:
        return f"{diff // 86400}d ago"

#!/usr/bin/env python3
"""
climatedash API Schemas - Pydantic Models for Request/Response Validation
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class RangeRequest(BaseModel):
    start: int
    end: int


class ViewportResponse(BaseModel):
    start: int
    end: int
    is_zoomed: bool
    data_length: int


class SeriesResponse(BaseModel):
    status: str
    error: Optional[str] = None
    last_updated: Optional[str] = None
    viewport: ViewportResponse
    rows: List[Dict[str, Any]]


class RefreshResponse(BaseModel):
    status: str
    error: Optional[str] = None
    last_updated: Optional[str] = None
    point_count: int

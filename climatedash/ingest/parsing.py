"""
Field parsers for raw spreadsheet values.

Both parsers are total: any input yields a value or None, never an exception.
"""

import math
import re
from datetime import datetime
from typing import Any, Optional

# Longest leading float literal, after comma -> period normalization
_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|^[+-]?Infinity")

# DD/MM/YY HH:mm:ss, single-digit components accepted
_DDMMYY = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2})\s+(\d{1,2}):(\d{1,2}):(\d{1,2})$")


def parse_numeric_field(value: Any) -> Optional[float]:
    """
    Parse a numeric value that may be a number or a locale-formatted string.

    Examples: "71,86" -> 71.86, "71.86" -> 71.86, 71.86 -> 71.86, NaN -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            # Integers past the double range saturate like a JSON number would
            return math.inf if value > 0 else -math.inf
        return None if math.isnan(value) else value

    if isinstance(value, str):
        normalized = value.strip().replace(",", ".", 1)
        match = _LEADING_FLOAT.match(normalized)
        if not match:
            return None
        literal = match.group(0).replace("Infinity", "inf")
        try:
            parsed = float(literal)
        except ValueError:
            return None
        return None if math.isnan(parsed) else parsed

    return None


def parse_timestamp_field(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp in DD/MM/YY HH:mm:ss format, falling back to ISO-8601.

    Returns a naive datetime in local time. Offset-aware ISO values are
    converted to local time first so every parsed timestamp is comparable.
    """
    if not value or not isinstance(value, str):
        return None

    match = _DDMMYY.match(value)
    if match:
        day, month, year, hour, minute, second = (int(g) for g in match.groups())
        try:
            return datetime(2000 + year, month, day, hour, minute, second)
        except ValueError:
            return None

    iso = value.strip()
    if iso.endswith(("Z", "z")):
        iso = iso[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return None
    return parsed

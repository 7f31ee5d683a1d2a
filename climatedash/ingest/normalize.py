"""
Normalization of raw spreadsheet records into SamplePoints.

Unit conversions are applied here, once, rather than by each chart.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

from ..models import CHANNEL_FIELDS, REQUIRED_CHANNELS, TIMESTAMP_FIELD, SamplePoint
from .parsing import parse_numeric_field, parse_timestamp_field

logger = logging.getLogger("climatedash.ingest")

CO2_SENSOR_SCALE = 0.001


def co2_sensor_to_percent(value: Optional[float]) -> Optional[float]:
    """Raw CO2 sensor units -> percent."""
    return None if value is None else value * CO2_SENSOR_SCALE


def cooling_to_percent(value: Optional[float]) -> Optional[float]:
    """Cooling actuator 3.0-10.0 V -> 0-100 %."""
    return None if value is None else (value - 3.0) / 7.0 * 100.0


def heating_to_percent(value: Optional[float]) -> Optional[float]:
    """Heating PWM signal 0-10 -> 0-100 %."""
    return None if value is None else value * 10.0


def ventilation_to_percent(value: Optional[float]) -> Optional[float]:
    """Ventilation actuator 2.0-10.0 V -> 0-100 %."""
    return None if value is None else (value - 2.0) / 8.0 * 100.0


CONVERSIONS = {
    "co2_right": co2_sensor_to_percent,
    "co2_left": co2_sensor_to_percent,
    "cooling": cooling_to_percent,
    "heating": heating_to_percent,
    "ventilation": ventilation_to_percent,
}


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or math.isnan(value):
        return None
    return value


def normalize_record(record: Any, required: Sequence[str] = REQUIRED_CHANNELS) -> Optional[SamplePoint]:
    """
    Build a SamplePoint from one raw record.

    Returns None when the record is not a mapping, its timestamp does not
    parse, or any required channel is missing after parsing.
    """
    if not isinstance(record, Mapping):
        return None

    timestamp = parse_timestamp_field(record.get(TIMESTAMP_FIELD))
    if timestamp is None:
        return None

    channels = {}
    for channel, field_name in CHANNEL_FIELDS.items():
        value = parse_numeric_field(record.get(field_name))
        convert = CONVERSIONS.get(channel)
        if convert is not None:
            value = convert(value)
        channels[channel] = _finite_or_none(value)

    if any(channels.get(name) is None for name in required):
        return None

    return SamplePoint(timestamp=timestamp, **channels)


def normalize(records: Iterable[Any], required: Sequence[str] = REQUIRED_CHANNELS) -> List[SamplePoint]:
    """
    Turn raw records into SamplePoints sorted ascending by timestamp.

    Malformed records are dropped silently. Ties keep input order. Returns an
    empty list when nothing survives; the caller decides whether that is an
    error.
    """
    if records is None or isinstance(records, (str, bytes, Mapping)):
        return []
    try:
        records = list(records)
    except TypeError:
        return []

    points = []
    for record in records:
        point = normalize_record(record, required)
        if point is not None:
            points.append(point)

    dropped = len(records) - len(points)
    if dropped:
        logger.debug(f"normalize: dropped {dropped} of {len(records)} records")

    return sorted(points, key=lambda p: p.timestamp)

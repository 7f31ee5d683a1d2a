"""
Ingestion & Normalization

Parses locale-formatted numbers and dual-format timestamps, applies fixed
unit conversions, and produces a chronologically ordered series.
"""

from .parsing import parse_numeric_field, parse_timestamp_field
from .normalize import (
    normalize,
    normalize_record,
    co2_sensor_to_percent,
    cooling_to_percent,
    heating_to_percent,
    ventilation_to_percent,
)

__all__ = [
    'parse_numeric_field',
    'parse_timestamp_field',
    'normalize',
    'normalize_record',
    'co2_sensor_to_percent',
    'cooling_to_percent',
    'heating_to_percent',
    'ventilation_to_percent',
]

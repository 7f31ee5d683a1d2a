#!/usr/bin/env python3
"""
climatedash Data Model

SamplePoint is the normalized unit of a series: one timestamped observation
with a fixed set of optional channels. Raw field names of the spreadsheet
endpoint are mapped to channel names here so both the normalizer and the
dashboard share a single source of truth.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Dict, Optional, Tuple

# Raw spreadsheet column -> SamplePoint channel
TIMESTAMP_FIELD = "Timestamp"

CHANNEL_FIELDS: Dict[str, str] = {
    "temperature_filtered": "Temperature Filtered(F)",
    "temperature_csv": "Temperature CSV(F)",
    "co2_right": "CO2 Rechts",
    "co2_left": "CO2 Links",
    "co2_csv": "CO2 CSV(%)",
    "cooling": "Cooling(V)",
    "heating": "Heating(PWM)",
    "ventilation": "Ventilation(V)",
    "fan1_v": "Fan 1(V)",
    "fan2_v": "Fan 2(V)",
    "fan3_v": "Fan 3(V)",
    "flow_control_pa": "Stuursignaal debiet(Pa)",
}

# Channels the temperature and CO2 charts cannot do without
REQUIRED_CHANNELS: Tuple[str, ...] = (
    "temperature_filtered",
    "temperature_csv",
    "co2_right",
    "co2_left",
    "co2_csv",
)


@dataclass(frozen=True)
class SamplePoint:
    """One normalized observation. Channels are None when absent."""
    timestamp: datetime
    temperature_filtered: Optional[float] = None
    temperature_csv: Optional[float] = None
    co2_right: Optional[float] = None
    co2_left: Optional[float] = None
    co2_csv: Optional[float] = None
    cooling: Optional[float] = None
    heating: Optional[float] = None
    ventilation: Optional[float] = None
    fan1_v: Optional[float] = None
    fan2_v: Optional[float] = None
    fan3_v: Optional[float] = None
    flow_control_pa: Optional[float] = None

    def channel(self, name: str) -> Optional[float]:
        """Return a channel value by name."""
        if name not in CHANNEL_FIELDS:
            raise KeyError(f"unknown channel: {name}")
        return getattr(self, name)

    def to_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


CHANNEL_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(SamplePoint) if f.name != "timestamp")

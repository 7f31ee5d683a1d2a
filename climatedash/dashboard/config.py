"""
Dashboard Configuration

Chart definitions and value formatting for the four sensor charts.
"""

from typing import Any, Dict, List

# Each chart lists its channels in drawing order. "axis" selects the y-axis
# the line is plotted against; "domain" of None lets the chart autoscale.
CHARTS: List[Dict[str, Any]] = [
    {
        "key": "temperature",
        "title": "Temperature Over Time",
        "axes": {"left": {"label": "Temperature (°F)", "domain": [70, 102]}},
        "channels": [
            {"name": "temperature_filtered", "label": "Temperature Filtered", "unit": "°F", "axis": "left"},
            {"name": "temperature_csv", "label": "Temperature Setpoint", "unit": "°F", "axis": "left"},
        ],
    },
    {
        "key": "co2",
        "title": "CO₂ Levels",
        "axes": {"left": {"label": "CO₂ Level (%)", "domain": None}},
        "channels": [
            {"name": "co2_right", "label": "CO2 Right", "unit": "%", "axis": "left"},
            {"name": "co2_left", "label": "CO2 Left", "unit": "%", "axis": "left"},
            {"name": "co2_csv", "label": "CO2 CSV", "unit": "%", "axis": "left", "dashed": True},
        ],
    },
    {
        "key": "actuators",
        "title": "Cooling, Heating & Ventilation",
        "axes": {"left": {"label": "Percentage (%)", "domain": [0, 100]}},
        "channels": [
            {"name": "cooling", "label": "Cooling", "unit": "%", "axis": "left"},
            {"name": "heating", "label": "Heating", "unit": "%", "axis": "left"},
            {"name": "ventilation", "label": "Ventilation", "unit": "%", "axis": "left"},
        ],
    },
    {
        "key": "fans",
        "title": "Fan Voltage & Flow Control",
        "axes": {
            "left": {"label": "Voltage (V)", "domain": [0, 10]},
            "right": {"label": "Pressure (Pa)", "domain": [0, 1000]},
        },
        "channels": [
            {"name": "fan1_v", "label": "Fan 1", "unit": "V", "axis": "left"},
            {"name": "fan2_v", "label": "Fan 2", "unit": "V", "axis": "left"},
            {"name": "fan3_v", "label": "Fan 3", "unit": "V", "axis": "left"},
            {"name": "flow_control_pa", "label": "Flow Control", "unit": "Pa", "axis": "right"},
        ],
    },
]

THEMES = ("light", "dark")


def format_channel_value(value: Any, unit: str) -> str:
    """
    Format a channel value with two decimals and its unit.

    Args:
        value: Channel value, None when absent
        unit: Unit string (e.g., "°F", "%", "Pa")

    Returns:
        "71.86°F", "50.00 %" style string, or "N/A" when missing
    """
    if value is None or isinstance(value, bool):
        return "N/A"
    try:
        num_val = float(value)
    except (TypeError, ValueError):
        return "N/A"
    if num_val != num_val:
        return "N/A"

    if unit == "°F":
        return f"{num_val:.2f}°F"
    return f"{num_val:.2f} {unit}"

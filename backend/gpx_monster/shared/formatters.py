"""
Formatting utilities for display.

Used by the CLI and the statistics log summary.
"""
import math
from typing import Optional


def round_half_up(value: float) -> int:
    """
    Round to nearest integer, halves away from zero.

    Python's round() rounds halves to even (round(0.5) == 0), which
    is not what a user expects for elevation meters.
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def format_distance_km(km: float) -> str:
    """
    Format distance.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '12.50 km' or '850 m')
    """
    if km < 1:
        return f"{int(km * 1000)} m"
    return f"{km:.2f} km"


def format_elevation(meters: float) -> str:
    """
    Format elevation change with sign.

    Args:
        meters: Elevation in meters

    Returns:
        Formatted string (e.g., '+850 m')
    """
    if meters >= 0:
        return f"+{int(meters)} m"
    return f"{int(meters)} m"


def format_elevation_range(
    min_m: Optional[int],
    max_m: Optional[int]
) -> str:
    """Format 'min m - max m', or a dash when the route has no elevation."""
    if min_m is None or max_m is None:
        return "—"
    return f"{min_m}m - {max_m}m"

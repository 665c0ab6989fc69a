"""
Shared utilities (NOT business logic).

Usage:
    from gpx_monster.shared import haversine, distance_km
    from gpx_monster.shared.formatters import format_distance_km
"""
from .geo import (
    haversine,
    distance_km,
    calculate_total_distance,
    EARTH_RADIUS_KM,
)
from .elevation import (
    calculate_elevation_changes,
    elevation_range,
)
from .formatters import (
    round_half_up,
    format_distance_km,
    format_elevation,
    format_elevation_range,
)

__all__ = [
    # geo
    "haversine",
    "distance_km",
    "calculate_total_distance",
    "EARTH_RADIUS_KM",
    # elevation
    "calculate_elevation_changes",
    "elevation_range",
    # formatters
    "round_half_up",
    "format_distance_km",
    "format_elevation",
    "format_elevation_range",
]

"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.
"""
import math
from typing import Iterable, Protocol

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


class Coordinate(Protocol):
    """Anything with latitude/longitude in decimal degrees."""
    lat: float
    lon: float


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinate objects, in km."""
    return haversine(a.lat, a.lon, b.lat, b.lon)


def calculate_total_distance(points: Iterable[Coordinate]) -> float:
    """
    Calculate total distance for a route.

    Args:
        points: Ordered coordinates (anything with .lat/.lon)

    Returns:
        Total distance in kilometers
    """
    total = 0.0
    prev = None

    for point in points:
        if prev is not None:
            total += distance_km(prev, point)
        prev = point

    return total

"""
Route statistics.

Distance and elevation summary for an ordered point sequence.
"""

from typing import Sequence

from gpx_monster.shared.elevation import calculate_elevation_changes, elevation_range
from gpx_monster.shared.formatters import round_half_up
from gpx_monster.shared.geo import calculate_total_distance

from .models import RouteStatistics, TrackPoint


def calculate_route_stats(points: Sequence[TrackPoint]) -> RouteStatistics:
    """
    Calculate distance and elevation statistics.

    Points must already be in route order. Gain/loss only use
    consecutive pairs where both points have an elevation, and are
    rounded after summation.

    Args:
        points: Ordered trackpoints

    Returns:
        RouteStatistics (zeroed with no elevation range for < 2 points)
    """
    if len(points) < 2:
        return RouteStatistics(total_points=len(points))

    elevations = [p.elevation for p in points]
    gain, loss = calculate_elevation_changes(elevations)
    min_ele, max_ele = elevation_range(elevations)

    return RouteStatistics(
        total_distance_km=round(calculate_total_distance(points), 2),
        elevation_gain_m=round_half_up(gain),
        elevation_loss_m=round_half_up(loss),
        min_elevation_m=round_half_up(min_ele) if min_ele is not None else None,
        max_elevation_m=round_half_up(max_ele) if max_ele is not None else None,
        total_points=len(points),
    )

"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from typing import List, Optional, Tuple


def calculate_elevation_changes(
    elevations: List[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Consecutive pairs where either value is None are skipped, they
    do not count as a zero delta.

    Args:
        elevations: Elevation values in route order (None = unknown)

    Returns:
        Tuple of (gain_m, loss_m), unrounded
    """
    gain = 0.0
    loss = 0.0

    for i in range(1, len(elevations)):
        prev, curr = elevations[i - 1], elevations[i]
        if prev is None or curr is None:
            continue

        diff = curr - prev
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)

    return gain, loss


def elevation_range(
    elevations: List[Optional[float]]
) -> Tuple[Optional[float], Optional[float]]:
    """
    Min and max over the known elevations.

    Returns:
        (min_m, max_m), both None if no value is known
    """
    known = [e for e in elevations if e is not None]
    if not known:
        return None, None
    return min(known), max(known)

"""
Point ordering for merged routes.

The branch is decided once per run from a full scan of timestamp
coverage:

- every point timestamped -> chronological (stable sort by time)
- some timestamped        -> arrival order, flagged as mixed
- none timestamped        -> arrival order

Arrival order means (file_index, point_index): the order files were
supplied in, then document order inside each file. Day numbers in file
names are display-only and never influence this.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .models import IndexedPoint, OrderingDecision, OrderingMode, TrackPoint
from .naming import unique_name

logger = logging.getLogger(__name__)

FilePoints = Tuple[str, Sequence[TrackPoint]]


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 GPX time into an aware datetime.

    Naive values are taken as UTC. Returns None when missing or
    unparseable.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def has_timestamp(point: TrackPoint) -> bool:
    return parse_timestamp(point.timestamp) is not None


def index_points(files: Sequence[FilePoints]) -> List[IndexedPoint]:
    """Tag every point with its (file_index, point_index) in arrival order."""
    return [
        IndexedPoint(point=point, file_index=file_index, point_index=point_index)
        for file_index, (_, points) in enumerate(files)
        for point_index, point in enumerate(points)
    ]


def file_timestamp_coverage(files: Sequence[FilePoints]) -> Dict[str, bool]:
    """
    Per file name: True if the file has points and all carry a timestamp.

    A repeated file name gets a numeric suffix ("t.gpx", "t_2.gpx") so
    every input keeps its own entry.
    """
    coverage: Dict[str, bool] = {}
    taken: Set[str] = set()
    for name, points in files:
        key = unique_name(name, taken)
        coverage[key] = bool(points) and all(has_timestamp(p) for p in points)
    return coverage


def chronological_file_order(files: Sequence[FilePoints]) -> List[str]:
    """
    File names sorted by the timestamp of each file's first point.

    Files without a usable first timestamp keep arrival order after
    the dated ones.
    """
    dated: List[Tuple[datetime, int, str]] = []
    undated: List[str] = []

    for file_index, (name, points) in enumerate(files):
        first = parse_timestamp(points[0].timestamp) if points else None
        if first is None:
            undated.append(name)
        else:
            dated.append((first, file_index, name))

    dated.sort(key=lambda item: (item[0], item[1]))
    return [name for _, _, name in dated] + undated


def order_points(files: Sequence[FilePoints]) -> OrderingDecision:
    """
    Decide the emission order of all points of a merge run.

    Args:
        files: (file_name, points) pairs in arrival order, points in
            document order

    Returns:
        OrderingDecision with the ordered points and file metadata
    """
    indexed = index_points(files)
    times = [parse_timestamp(ip.point.timestamp) for ip in indexed]
    coverage = file_timestamp_coverage(files)

    all_timed = bool(indexed) and all(t is not None for t in times)
    any_timed = any(t is not None for t in times)

    if all_timed:
        order = sorted(
            range(len(indexed)),
            key=lambda i: times[i]
        )
        logger.info("All points have timestamps, sorting chronologically")
        return OrderingDecision(
            mode=OrderingMode.CHRONOLOGICAL,
            mixed_timestamps=False,
            file_order=chronological_file_order(files),
            file_has_timestamps=coverage,
            points=[indexed[i].point for i in order],
        )

    if any_timed:
        logger.warning(
            "Mixed timestamps across files, falling back to file upload order"
        )
    else:
        logger.info("No timestamps found, using file upload order")

    fallback = sorted(indexed, key=lambda ip: (ip.file_index, ip.point_index))
    return OrderingDecision(
        mode=OrderingMode.FILENAME_FALLBACK,
        mixed_timestamps=any_timed,
        file_order=[name for name, _ in files],
        file_has_timestamps=coverage,
        points=[ip.point for ip in fallback],
    )


def sort_file_points(points: Sequence[TrackPoint]) -> List[TrackPoint]:
    """
    Intra-file ordering for normalize mode.

    Sorted by timestamp when every point has one, otherwise parse order.
    """
    times = [parse_timestamp(p.timestamp) for p in points]
    if not points or any(t is None for t in times):
        return list(points)

    order = sorted(range(len(points)), key=lambda i: times[i])
    return [points[i] for i in order]

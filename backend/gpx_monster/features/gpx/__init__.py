"""
GPX file handling module.

Usage:
    from gpx_monster.features.gpx import GPXBatchProcessor, ProcessingMode
    from gpx_monster.features.gpx import PathSource, TextSource

Components:
- GPXParser: Parse GPX XML into validated TrackPoints
- order_points / sort_file_points: Merge and per-file ordering
- calculate_route_stats: Distance and elevation statistics
- GPXSerializer: Write merged / normalized GPX documents
- GPXBatchProcessor: Sequential batch orchestration
- BatchResponse: Pydantic schema for the API
"""

from .exceptions import GPXProcessingError, GPXParseError, NoPointsError, SourceReadError
from .models import (
    BatchResult,
    FileResult,
    GeneratedOutput,
    IndexedPoint,
    OrderingDecision,
    OrderingMode,
    ProcessingMode,
    RouteStatistics,
    TrackPoint,
)
from .naming import extract_day_number, group_outputs_by_day
from .ordering import order_points, sort_file_points
from .parser import GPXParser
from .serializer import GPXSerializer
from .service import GPXBatchProcessor
from .sources import GPXSource, PathSource, TextSource, UploadSource
from .statistics import calculate_route_stats
from .schemas import BatchResponse

__all__ = [
    # Errors
    "GPXProcessingError",
    "GPXParseError",
    "NoPointsError",
    "SourceReadError",
    # Models
    "BatchResult",
    "FileResult",
    "GeneratedOutput",
    "IndexedPoint",
    "OrderingDecision",
    "OrderingMode",
    "ProcessingMode",
    "RouteStatistics",
    "TrackPoint",
    # Services
    "GPXParser",
    "GPXSerializer",
    "GPXBatchProcessor",
    "order_points",
    "sort_file_points",
    "calculate_route_stats",
    "extract_day_number",
    "group_outputs_by_day",
    # Sources
    "GPXSource",
    "PathSource",
    "TextSource",
    "UploadSource",
    # Schemas
    "BatchResponse",
]

"""
GPX processing domain models.

Plain dataclasses passed between parser, ordering, statistics and
serializer. API-facing pydantic versions live in schemas.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ProcessingMode(str, Enum):
    """What a batch run produces."""
    MERGE = "merge"
    NORMALIZE = "normalize"


class OrderingMode(str, Enum):
    """How merged points were ordered."""
    CHRONOLOGICAL = "chronological"
    FILENAME_FALLBACK = "filename"


@dataclass(frozen=True)
class TrackPoint:
    """
    A single validated <trkpt>.

    elevation and timestamp stay None when the source has no
    <ele>/<time>, they are never defaulted to zero.
    """
    lat: float
    lon: float
    source_file: str
    elevation: Optional[float] = None
    timestamp: Optional[str] = None

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.lat, self.lon)


@dataclass(frozen=True)
class IndexedPoint:
    """TrackPoint plus its position in the input (file arrival, in-file)."""
    point: TrackPoint
    file_index: int
    point_index: int


@dataclass
class RouteStatistics:
    """Distance and elevation summary of an ordered route."""
    total_distance_km: float = 0.0
    elevation_gain_m: int = 0
    elevation_loss_m: int = 0
    min_elevation_m: Optional[int] = None
    max_elevation_m: Optional[int] = None
    total_points: int = 0

    def to_dict(self) -> dict:
        """Convert to dict for API response."""
        return {
            "total_distance_km": self.total_distance_km,
            "elevation_gain_m": self.elevation_gain_m,
            "elevation_loss_m": self.elevation_loss_m,
            "min_elevation_m": self.min_elevation_m,
            "max_elevation_m": self.max_elevation_m,
            "total_points": self.total_points,
        }


@dataclass
class FileResult:
    """Outcome of processing one input file."""
    file_name: str
    success: bool
    point_count: int = 0
    error: Optional[str] = None

    def __post_init__(self):
        if not self.success and self.point_count != 0:
            raise ValueError("Failed file result cannot carry points")


@dataclass
class OrderingDecision:
    """Result of the merge ordering strategy."""
    mode: OrderingMode
    mixed_timestamps: bool
    file_order: List[str]
    file_has_timestamps: Dict[str, bool]
    points: List[TrackPoint] = field(default_factory=list)

    @property
    def chronological(self) -> bool:
        return self.mode == OrderingMode.CHRONOLOGICAL

    def info(self) -> dict:
        """Ordering metadata surfaced to the caller."""
        return {
            "mode": self.mode.value,
            "chronological": self.chronological,
            "mixed_timestamps": self.mixed_timestamps,
        }


@dataclass(frozen=True)
class GeneratedOutput:
    """A generated GPX document and its suggested file name."""
    name: str
    content: str


@dataclass
class BatchResult:
    """Everything a batch run hands back to the UI or CLI."""
    results: List[FileResult]
    outputs: List[GeneratedOutput]
    coordinates: List[Tuple[float, float]] = field(default_factory=list)
    stats: Optional[RouteStatistics] = None
    ordering_info: Optional[dict] = None
    file_order: List[str] = field(default_factory=list)
    file_timestamp_info: Dict[str, bool] = field(default_factory=dict)

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if not r.success]

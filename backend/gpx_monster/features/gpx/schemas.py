"""
GPX-related schemas.

Pydantic models for the processing API.
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Tuple

from .models import BatchResult


class FileResultSchema(BaseModel):
    """Outcome for one uploaded file."""

    file_name: str
    success: bool
    point_count: int = 0
    error: Optional[str] = None


class GeneratedOutputSchema(BaseModel):
    """Generated GPX document."""

    name: str
    content: str


class RouteStatisticsSchema(BaseModel):
    """Merged route metrics."""

    total_distance_km: float = Field(..., ge=0)
    elevation_gain_m: int = Field(..., ge=0)
    elevation_loss_m: int = Field(..., ge=0)
    min_elevation_m: Optional[int] = None
    max_elevation_m: Optional[int] = None
    total_points: int = 0


class OrderingInfoSchema(BaseModel):
    """How merged points were ordered."""

    mode: str
    chronological: bool
    mixed_timestamps: bool


class BatchResponse(BaseModel):
    """Response for a processing request."""

    mode: str
    results: List[FileResultSchema]
    outputs: List[GeneratedOutputSchema]
    coordinates: List[Tuple[float, float]] = []
    stats: Optional[RouteStatisticsSchema] = None
    ordering_info: Optional[OrderingInfoSchema] = None
    file_order: List[str] = []
    file_timestamp_info: Dict[str, bool] = {}

    @classmethod
    def from_result(cls, mode: str, result: BatchResult) -> "BatchResponse":
        return cls(
            mode=mode,
            results=[
                FileResultSchema(
                    file_name=r.file_name,
                    success=r.success,
                    point_count=r.point_count,
                    error=r.error,
                )
                for r in result.results
            ],
            outputs=[
                GeneratedOutputSchema(name=o.name, content=o.content)
                for o in result.outputs
            ],
            coordinates=result.coordinates,
            stats=RouteStatisticsSchema(**result.stats.to_dict()) if result.stats else None,
            ordering_info=OrderingInfoSchema(**result.ordering_info) if result.ordering_info else None,
            file_order=result.file_order,
            file_timestamp_info=result.file_timestamp_info,
        )

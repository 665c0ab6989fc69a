"""
GPX Batch Processor

Drives the parser over a list of input files and turns the result into
either one merged route or one normalized document per file:

- Parser: per file, point-level defects are skipped
- File failures: recorded in FileResult, the batch continues
- Ordering strategy + statistics: merge mode only
- Serializer: merged.gpx or <name>_normalized.gpx

This is the main entry point used by the API and the CLI.
"""

import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

from gpx_monster.config import settings
from gpx_monster.shared.formatters import format_elevation_range
from gpx_monster.shared.log import StructuredLogger

from .exceptions import GPXProcessingError, NoPointsError
from .models import (
    BatchResult,
    FileResult,
    GeneratedOutput,
    ProcessingMode,
    RouteStatistics,
    TrackPoint,
)
from .naming import matches_filter, normalized_output_name, unique_name
from .ordering import file_timestamp_coverage, order_points, sort_file_points
from .parser import GPXParser
from .serializer import GPXSerializer
from .sources import GPXSource
from .statistics import calculate_route_stats

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float, str], None]


class GPXBatchProcessor:
    """
    Sequential batch processor for GPX files.

    Files are read and parsed strictly one after another. Nothing is
    shared between runs; each call to process_files owns its own
    accumulators.
    """

    def __init__(
        self,
        log: StructuredLogger | None = None,
        parser: GPXParser | None = None,
        serializer: GPXSerializer | None = None,
    ):
        self.log = log or logger
        self.parser = parser or GPXParser(self.log)
        self.serializer = serializer or GPXSerializer()

    async def process_files(
        self,
        sources: Sequence[GPXSource],
        mode: ProcessingMode | str,
        specific_files: Optional[Sequence[str]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> BatchResult:
        """
        Process a batch of GPX files.

        Args:
            sources: Input files in arrival order
            mode: merge or normalize
            specific_files: If given, only files whose name contains one
                of these substrings are processed
            progress_callback: Called after each file with
                (percent, status); purely informational

        Returns:
            BatchResult with per-file results and generated outputs

        Raises:
            NoPointsError: Merge mode and no file yielded a single point
        """
        mode = ProcessingMode(mode)
        specific_files = list(specific_files or [])

        self.log.log(logging.INFO, f"Processing {len(sources)} files in {mode.value} mode")
        if specific_files:
            self.log.log(logging.INFO, f"Filtering for files: {', '.join(specific_files)}")

        to_process = [s for s in sources if matches_filter(s.name, specific_files)]
        self.log.log(logging.INFO, f"Files to process: {len(to_process)}")

        results: List[FileResult] = []
        outputs: List[GeneratedOutput] = []
        parsed: List[Tuple[str, List[TrackPoint]]] = []
        output_names: Set[str] = set()

        for i, source in enumerate(to_process):
            self.log.log(logging.INFO, f"Processing: {source.name}")

            try:
                content = await source.read()
                points = self.parser.parse(content, source.name)
            except GPXProcessingError as e:
                self.log.log(logging.WARNING, f"Error processing {source.name}: {e}")
                results.append(FileResult(
                    file_name=source.name,
                    success=False,
                    point_count=0,
                    error=str(e),
                ))
            else:
                results.append(FileResult(
                    file_name=source.name,
                    success=True,
                    point_count=len(points),
                ))
                parsed.append((source.name, points))

                if mode == ProcessingMode.NORMALIZE:
                    outputs.append(self._normalize(source.name, points, output_names))

            if progress_callback:
                progress = (i + 1) / len(to_process) * 100
                progress_callback(progress, f"Processed {source.name}")

        if mode == ProcessingMode.NORMALIZE:
            self.log.log(logging.INFO, f"Normalized {len(outputs)} of {len(to_process)} files individually")
            return BatchResult(
                results=results,
                outputs=outputs,
                file_order=[name for name, _ in parsed],
                file_timestamp_info=file_timestamp_coverage(parsed),
            )

        return self._merge(results, parsed)

    def _normalize(
        self,
        file_name: str,
        points: List[TrackPoint],
        taken: Set[str],
    ) -> GeneratedOutput:
        output_name = unique_name(normalized_output_name(file_name), taken)
        content = self.serializer.single_track(sort_file_points(points), file_name)
        self.log.log(logging.INFO, f"  Normalized file prepared: {output_name}")
        return GeneratedOutput(name=output_name, content=content)

    def _merge(
        self,
        results: List[FileResult],
        parsed: List[Tuple[str, List[TrackPoint]]],
    ) -> BatchResult:
        total_points = sum(len(points) for _, points in parsed)
        if total_points == 0:
            raise NoPointsError()

        self.log.log(logging.INFO, f"Total files processed: {len(results)}")
        self.log.log(logging.INFO, f"Total points found: {total_points}")

        decision = order_points(parsed)
        stats = calculate_route_stats(decision.points)
        self._log_stats(stats)

        output = GeneratedOutput(
            name=settings.merged_output_name,
            content=self.serializer.merged(decision.points),
        )
        self.log.log(logging.INFO, f"Merged GPX prepared: {output.name}")

        return BatchResult(
            results=results,
            outputs=[output],
            coordinates=[p.coordinates for p in decision.points],
            stats=stats,
            ordering_info=decision.info(),
            file_order=decision.file_order,
            file_timestamp_info=decision.file_has_timestamps,
        )

    def _log_stats(self, stats: RouteStatistics) -> None:
        self.log.log(logging.INFO, "Route Statistics:")
        self.log.log(logging.INFO, f"  Total Distance: {stats.total_distance_km} km")
        self.log.log(logging.INFO, f"  Elevation Gain: {stats.elevation_gain_m} m")
        self.log.log(logging.INFO, f"  Elevation Loss: {stats.elevation_loss_m} m")
        if stats.min_elevation_m is not None:
            self.log.log(
                logging.INFO,
                f"  Elevation Range: {format_elevation_range(stats.min_elevation_m, stats.max_elevation_m)}"
            )
        self.log.log(logging.INFO, f"  Total Points: {stats.total_points}")

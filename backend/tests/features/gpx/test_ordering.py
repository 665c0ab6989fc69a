"""
Tests for merge ordering and per-file sorting.
"""

from datetime import datetime, timezone

from gpx_monster.features.gpx import OrderingMode, TrackPoint, order_points, sort_file_points
from gpx_monster.features.gpx.ordering import (
    chronological_file_order,
    file_timestamp_coverage,
    index_points,
    parse_timestamp,
)


def _pt(name, lat, time=None):
    return TrackPoint(lat=lat, lon=11.0, source_file=name, timestamp=time)


def _file(name, *specs):
    """(name, [points]) with specs as (lat, time) pairs."""
    return (name, [_pt(name, lat, time) for lat, time in specs])


# =============================================================================
# Timestamp parsing
# =============================================================================

class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_zulu(self):
        assert parse_timestamp("2024-08-01T10:00:00Z") == datetime(2024, 8, 1, 10, tzinfo=timezone.utc)

    def test_offset_normalized(self):
        assert parse_timestamp("2024-08-01T12:00:00+02:00") == parse_timestamp("2024-08-01T10:00:00Z")

    def test_fractional_seconds(self):
        assert parse_timestamp("2024-08-01T10:00:00.500Z").microsecond == 500000

    def test_naive_taken_as_utc(self):
        assert parse_timestamp("2024-08-01T10:00:00").tzinfo == timezone.utc

    def test_missing_or_garbage(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp("yesterday") is None


# =============================================================================
# Merge ordering
# =============================================================================

class TestChronological:
    """Every point timestamped."""

    def test_sorted_regardless_of_file_order(self):
        files = [
            _file("Day_3.gpx", (3.0, "2024-08-03T08:00:00Z"), (3.1, "2024-08-03T09:00:00Z")),
            _file("Day_1.gpx", (1.0, "2024-08-01T08:00:00Z"), (1.1, "2024-08-01T09:00:00Z")),
            _file("Day_2.gpx", (2.0, "2024-08-02T08:00:00Z")),
        ]
        decision = order_points(files)

        times = [parse_timestamp(p.timestamp) for p in decision.points]
        assert times == sorted(times)
        assert [p.lat for p in decision.points] == [1.0, 1.1, 2.0, 3.0, 3.1]
        assert decision.mode == OrderingMode.CHRONOLOGICAL
        assert decision.mixed_timestamps is False

    def test_file_order_by_first_point(self):
        files = [
            _file("b.gpx", (2.0, "2024-08-02T08:00:00Z")),
            _file("a.gpx", (1.0, "2024-08-01T08:00:00Z")),
        ]
        assert order_points(files).file_order == ["a.gpx", "b.gpx"]

    def test_file_order_uses_first_encountered_point(self):
        """A file whose later points are earliest still sorts by its first point."""
        files = [
            _file("x.gpx", (1.0, "2024-08-02T10:00:00Z"), (1.1, "2024-08-01T00:00:00Z")),
            _file("y.gpx", (2.0, "2024-08-01T12:00:00Z")),
        ]
        assert order_points(files).file_order == ["y.gpx", "x.gpx"]

    def test_stable_for_equal_timestamps(self):
        same = "2024-08-01T08:00:00Z"
        files = [
            _file("a.gpx", (1.0, same), (1.1, same)),
            _file("b.gpx", (2.0, same)),
        ]
        assert [p.lat for p in order_points(files).points] == [1.0, 1.1, 2.0]

    def test_interleaved_files(self):
        files = [
            _file("a.gpx", (1.0, "2024-08-01T08:00:00Z"), (1.2, "2024-08-01T10:00:00Z")),
            _file("b.gpx", (2.0, "2024-08-01T09:00:00Z")),
        ]
        assert [p.lat for p in order_points(files).points] == [1.0, 2.0, 1.2]


class TestFallback:
    """Partial or no timestamp coverage."""

    def test_mixed_uses_arrival_order(self):
        files = [
            _file("Day_3.gpx", (3.0, "2024-08-03T08:00:00Z")),
            _file("Day_1.gpx", (1.0, None), (1.1, None)),
            _file("Day_2.gpx", (2.0, "2024-08-02T08:00:00Z")),
        ]
        decision = order_points(files)

        assert [p.lat for p in decision.points] == [3.0, 1.0, 1.1, 2.0]
        assert decision.mode == OrderingMode.FILENAME_FALLBACK
        assert decision.mixed_timestamps is True
        assert decision.info()["mixed_timestamps"] is True
        assert decision.file_order == ["Day_3.gpx", "Day_1.gpx", "Day_2.gpx"]

    def test_mixed_within_one_file(self):
        files = [_file("a.gpx", (1.0, "2024-08-01T09:00:00Z"), (1.1, None), (1.2, "2024-08-01T08:00:00Z"))]
        decision = order_points(files)
        assert [p.lat for p in decision.points] == [1.0, 1.1, 1.2]
        assert decision.mixed_timestamps is True

    def test_no_timestamps_plain_fallback(self):
        files = [_file("b.gpx", (2.0, None)), _file("a.gpx", (1.0, None))]
        decision = order_points(files)
        assert [p.lat for p in decision.points] == [2.0, 1.0]
        assert decision.mode == OrderingMode.FILENAME_FALLBACK
        assert decision.mixed_timestamps is False

    def test_unparseable_time_counts_as_missing(self):
        files = [
            _file("a.gpx", (1.0, "2024-08-02T08:00:00Z")),
            _file("b.gpx", (2.0, "not a time")),
        ]
        decision = order_points(files)
        assert decision.mixed_timestamps is True
        assert [p.lat for p in decision.points] == [1.0, 2.0]

    def test_day_numbers_do_not_affect_order(self):
        files = [_file("Day_2.gpx", (2.0, None)), _file("Day_1.gpx", (1.0, None))]
        assert [p.lat for p in order_points(files).points] == [2.0, 1.0]


class TestCoverageHelpers:
    """file_timestamp_coverage, index_points, chronological_file_order."""

    def test_coverage_per_file(self):
        files = [
            _file("a.gpx", (1.0, "2024-08-01T08:00:00Z")),
            _file("b.gpx", (2.0, "2024-08-01T08:00:00Z"), (2.1, None)),
            ("empty.gpx", []),
        ]
        assert file_timestamp_coverage(files) == {"a.gpx": True, "b.gpx": False, "empty.gpx": False}

    def test_coverage_keeps_repeated_names_apart(self):
        files = [
            _file("t.gpx", (1.0, "2024-08-01T08:00:00Z")),
            _file("t.gpx", (2.0, None)),
        ]
        assert file_timestamp_coverage(files) == {"t.gpx": True, "t_2.gpx": False}

    def test_index_points(self):
        files = [_file("a.gpx", (1.0, None), (1.1, None)), _file("b.gpx", (2.0, None))]
        indexed = index_points(files)
        assert [(ip.file_index, ip.point_index) for ip in indexed] == [(0, 0), (0, 1), (1, 0)]
        assert indexed[2].point is files[1][1][0]

    def test_empty_file_goes_last(self):
        files = [("empty.gpx", []), _file("a.gpx", (1.0, "2024-08-01T08:00:00Z"))]
        assert chronological_file_order(files) == ["a.gpx", "empty.gpx"]

    def test_points_are_not_copied(self):
        files = [_file("a.gpx", (1.0, None))]
        assert order_points(files).points[0] is files[0][1][0]


# =============================================================================
# Normalize-mode sorting
# =============================================================================

class TestSortFilePoints:
    """Tests for sort_file_points."""

    def test_sorted_when_all_timestamped(self):
        points = [
            _pt("a.gpx", 1.2, "2024-08-01T10:00:00Z"),
            _pt("a.gpx", 1.0, "2024-08-01T08:00:00Z"),
            _pt("a.gpx", 1.1, "2024-08-01T09:00:00Z"),
        ]
        assert [p.lat for p in sort_file_points(points)] == [1.0, 1.1, 1.2]

    def test_parse_order_when_any_missing(self):
        points = [
            _pt("a.gpx", 1.2, "2024-08-01T10:00:00Z"),
            _pt("a.gpx", 1.0, None),
            _pt("a.gpx", 1.1, "2024-08-01T09:00:00Z"),
        ]
        assert [p.lat for p in sort_file_points(points)] == [1.2, 1.0, 1.1]

    def test_input_not_mutated(self):
        points = [_pt("a.gpx", 1.1, "2024-08-01T09:00:00Z"), _pt("a.gpx", 1.0, "2024-08-01T08:00:00Z")]
        sort_file_points(points)
        assert [p.lat for p in points] == [1.1, 1.0]

    def test_empty(self):
        assert sort_file_points([]) == []

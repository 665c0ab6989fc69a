"""
GPX 1.1 writer.

Renders trackpoint sequences as a single-track, single-segment GPX
document, either one merged route or one normalized file.
"""

import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional, Sequence

from gpx_monster.config import settings

from .models import TrackPoint

GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def format_number(value: float) -> str:
    """Shortest round-tripping decimal, never in exponent notation."""
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def xml_text(value: str) -> str:
    """Drop characters XML 1.0 does not allow (control chars, lone surrogates)."""
    return INVALID_XML_CHARS.sub("", value)


def format_time(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and 'Z' suffix."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GPXSerializer:
    """Builds GPX documents from TrackPoints."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or _utc_now

    def merged(self, points: Sequence[TrackPoint]) -> str:
        """
        Merged route: every point in one track, in the given order.

        Args:
            points: Points already ordered by the ordering strategy
        """
        return self._document(
            points,
            creator=settings.merge_creator,
            name=settings.merged_track_name,
            description=settings.merged_track_description,
            track_name=settings.merged_track_name,
            track_type=settings.merged_track_type,
        )

    def single_track(self, points: Sequence[TrackPoint], file_name: str) -> str:
        """Normalized copy of one input file, track named after the file."""
        return self._document(
            points,
            creator=settings.normalize_creator,
            name=f"Normalized: {file_name}",
            description=f"Normalized GPX file from {file_name}",
            track_name=file_name,
        )

    def _document(
        self,
        points: Sequence[TrackPoint],
        creator: str,
        name: str,
        description: str,
        track_name: str,
        track_type: Optional[str] = None,
    ) -> str:
        gpx = ET.Element("gpx", {
            "version": "1.1",
            "creator": xml_text(creator),
            "xmlns": GPX_NAMESPACE,
        })

        metadata = ET.SubElement(gpx, "metadata")
        ET.SubElement(metadata, "name").text = xml_text(name)
        ET.SubElement(metadata, "desc").text = xml_text(description)
        ET.SubElement(metadata, "time").text = format_time(self.clock())

        trk = ET.SubElement(gpx, "trk")
        ET.SubElement(trk, "name").text = xml_text(track_name)
        if track_type:
            ET.SubElement(trk, "type").text = xml_text(track_type)

        trkseg = ET.SubElement(trk, "trkseg")
        for point in points:
            trkpt = ET.SubElement(trkseg, "trkpt", {
                "lat": format_number(point.lat),
                "lon": format_number(point.lon),
            })
            if point.elevation is not None:
                ET.SubElement(trkpt, "ele").text = format_number(point.elevation)
            if point.timestamp:
                ET.SubElement(trkpt, "time").text = point.timestamp

        ET.indent(gpx, space="  ")
        return f"{XML_DECLARATION}\n{ET.tostring(gpx, encoding='unicode')}\n"

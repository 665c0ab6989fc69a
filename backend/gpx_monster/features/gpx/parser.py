"""
GPX Parser Service

Extracts validated trackpoints from raw GPX XML.
"""

import logging
import math
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional

from gpx_monster.shared.log import StructuredLogger

from .exceptions import GPXParseError
from .models import TrackPoint

logger = logging.getLogger(__name__)


def _local_name(tag) -> str:
    """'{http://www.topografix.com/GPX/1/1}trkpt' -> 'trkpt'."""
    if not isinstance(tag, str):
        # comments / processing instructions
        return ""
    return tag.rsplit("}", 1)[-1]


class XMLDocument:
    """
    Parsed XML tree with namespace-agnostic lookups.

    Elements are matched on their local name, so GPX 1.0, GPX 1.1 and
    documents without a namespace all read the same way.
    """

    def __init__(self, root: ET.Element):
        self.root = root

    @classmethod
    def from_string(cls, xml_content: str, file_name: str | None = None) -> "XMLDocument":
        """
        Parse XML text.

        Raises:
            GPXParseError: If the text is not well-formed XML
        """
        try:
            root = ET.fromstring(xml_content.lstrip("\ufeff"))
        except ET.ParseError as e:
            raise GPXParseError(f"XML parsing error: {e}", file_name) from e
        return cls(root)

    @property
    def root_name(self) -> str:
        return _local_name(self.root.tag)

    @staticmethod
    def find_all(node: ET.Element, name: str) -> Iterator[ET.Element]:
        """All descendants named `name`, in document order."""
        for element in node.iter():
            if element is not node and _local_name(element.tag) == name:
                yield element

    @staticmethod
    def find(node: ET.Element, name: str) -> Optional[ET.Element]:
        """First descendant named `name`, or None."""
        return next(XMLDocument.find_all(node, name), None)

    @staticmethod
    def attribute(node: ET.Element, name: str) -> Optional[str]:
        return node.get(name)

    @staticmethod
    def child_text(node: ET.Element, name: str) -> Optional[str]:
        """Stripped text of the first `name` descendant; None if missing or empty."""
        child = XMLDocument.find(node, name)
        if child is None or child.text is None:
            return None
        text = child.text.strip()
        return text or None


def _parse_coordinate(value: Optional[str], low: float, high: float) -> Optional[float]:
    """Float in [low, high], or None if missing/invalid."""
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or not low <= number <= high:
        return None
    return number


def _parse_elevation(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class GPXParser:
    """
    Converts one GPX document into an ordered list of TrackPoint.

    Only trk/trkseg/trkpt data is extracted. Waypoints and routes are
    counted for the diagnostic log and otherwise ignored.
    """

    def __init__(self, log: StructuredLogger | None = None):
        self.log = log or logger

    def parse(self, xml_content: str, file_name: str) -> List[TrackPoint]:
        """
        Parse GPX content and extract its trackpoints.

        Args:
            xml_content: Raw GPX XML text
            file_name: Name of the originating file, stored on each point

        Returns:
            TrackPoints in document order (track -> segment -> point)

        Raises:
            GPXParseError: If the XML is malformed or the root is not <gpx>
        """
        try:
            doc = XMLDocument.from_string(xml_content, file_name)
            if doc.root_name != "gpx":
                raise GPXParseError(
                    "Invalid GPX file: root element is not <gpx>", file_name
                )
            points = self._extract(doc, file_name)
        except GPXParseError as e:
            self.log.log(logging.WARNING, f"  Error parsing {file_name}: {e}")
            raise

        self.log.log(logging.INFO, f"    Extracted {len(points)} valid track points")
        return points

    def _extract(self, doc: XMLDocument, file_name: str) -> List[TrackPoint]:
        gpx = doc.root
        tracks = list(doc.find_all(gpx, "trk"))
        has_waypoints = doc.find(gpx, "wpt") is not None
        has_routes = doc.find(gpx, "rte") is not None

        self.log.log(logging.INFO, f"  Analyzing {file_name}:")
        self.log.log(logging.DEBUG, f"    Has tracks: {bool(tracks)}")
        self.log.log(logging.DEBUG, f"    Has waypoints: {has_waypoints}")
        self.log.log(logging.DEBUG, f"    Has routes: {has_routes}")

        points: List[TrackPoint] = []
        if not tracks:
            return points

        self.log.log(logging.DEBUG, f"    Number of tracks: {len(tracks)}")

        for track in tracks:
            segments = list(doc.find_all(track, "trkseg"))
            self.log.log(logging.DEBUG, f"    Number of track segments: {len(segments)}")

            for segment in segments:
                for trkpt in doc.find_all(segment, "trkpt"):
                    point = self._to_point(doc, trkpt, file_name)
                    if point is not None:
                        points.append(point)

        return points

    def _to_point(
        self,
        doc: XMLDocument,
        trkpt: ET.Element,
        file_name: str
    ) -> Optional[TrackPoint]:
        lat_str = doc.attribute(trkpt, "lat")
        lon_str = doc.attribute(trkpt, "lon")

        if not lat_str or not lon_str:
            self.log.log(logging.DEBUG, "    Skipping point without coordinates")
            return None

        lat = _parse_coordinate(lat_str, -90.0, 90.0)
        lon = _parse_coordinate(lon_str, -180.0, 180.0)
        if lat is None or lon is None:
            self.log.log(
                logging.DEBUG,
                f"    Skipping invalid coordinates: lat={lat_str}, lon={lon_str}"
            )
            return None

        ele_str = doc.child_text(trkpt, "ele")
        elevation = _parse_elevation(ele_str)
        if ele_str is not None and elevation is None:
            self.log.log(logging.DEBUG, f"    Ignoring invalid elevation: {ele_str}")

        return TrackPoint(
            lat=lat,
            lon=lon,
            source_file=file_name,
            elevation=elevation,
            timestamp=doc.child_text(trkpt, "time"),
        )

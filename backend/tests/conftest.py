"""
Shared test helpers.

gpx_text() builds small GPX documents so tests do not depend on
fixture files.
"""

from datetime import datetime, timezone

import pytest

GPX_11 = "http://www.topografix.com/GPX/1/1"


def trkpt(lat, lon, ele=None, time=None) -> str:
    """One <trkpt> element as text."""
    children = ""
    if ele is not None:
        children += f"<ele>{ele}</ele>"
    if time is not None:
        children += f"<time>{time}</time>"
    return f'<trkpt lat="{lat}" lon="{lon}">{children}</trkpt>'


def gpx_text(*segments, namespace=GPX_11, extra="") -> str:
    """
    GPX document with one track per argument.

    Each argument is a list of segments, each segment a list of
    trkpt() strings. A plain list of trkpt strings is one segment.
    """
    ns = f' xmlns="{namespace}"' if namespace else ""
    tracks = []
    for track in segments:
        if track and isinstance(track[0], str):
            track = [track]
        segs = "".join(f"<trkseg>{''.join(seg)}</trkseg>" for seg in track)
        tracks.append(f"<trk><name>t</name>{segs}</trk>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<gpx version="1.1" creator="test"{ns}>{extra}{"".join(tracks)}</gpx>'
    )


FIXED_NOW = datetime(2024, 8, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant time for serializer output."""
    return lambda: FIXED_NOW

"""
File name helpers.

Day numbers ("Day_3.gpx", "Tour-Day2.gpx") are only used to group
outputs for display. They never affect point ordering.
"""

import re
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Set

from gpx_monster.config import settings

from .models import GeneratedOutput

DAY_PATTERN = re.compile(r"Day_?(\d+)")


def extract_day_number(file_name: str) -> Optional[int]:
    """
    Day number from a file name.

    >>> extract_day_number("Transdolomiti_Day_3.gpx")
    3
    >>> extract_day_number("morning_ride.gpx") is None
    True
    """
    match = DAY_PATTERN.search(file_name)
    if not match:
        return None
    return int(match.group(1))


def group_outputs_by_day(
    outputs: Sequence[GeneratedOutput]
) -> Dict[Optional[int], List[GeneratedOutput]]:
    """
    Group outputs by day number for display.

    Days come out ascending, outputs without a day number last under
    the None key. Order inside a group is preserved.
    """
    groups: Dict[Optional[int], List[GeneratedOutput]] = {}
    for output in outputs:
        groups.setdefault(extract_day_number(output.name), []).append(output)

    days = sorted(day for day in groups if day is not None)
    ordered: Dict[Optional[int], List[GeneratedOutput]] = OrderedDict(
        (day, groups[day]) for day in days
    )
    if None in groups:
        ordered[None] = groups[None]
    return ordered


def normalized_output_name(file_name: str) -> str:
    """'Day_1.gpx' -> 'Day_1_normalized.gpx'."""
    suffix = settings.normalized_suffix
    if file_name.lower().endswith(".gpx"):
        return f"{file_name[:-4]}{suffix}.gpx"
    return f"{file_name}{suffix}.gpx"


def matches_filter(file_name: str, specific_files: Sequence[str]) -> bool:
    """True if no filter is set or the name contains one of the patterns."""
    if not specific_files:
        return True
    return any(pattern in file_name for pattern in specific_files)


def unique_name(name: str, taken: Set[str]) -> str:
    """
    `name`, or `name` with a numeric suffix if already in `taken`.

    The returned name is added to `taken`.

    >>> taken = {"t_normalized.gpx"}
    >>> unique_name("t_normalized.gpx", taken)
    't_normalized_2.gpx'
    """
    candidate = name
    stem, dot, ext = name.rpartition(".")
    if not dot:
        stem, ext = name, ""

    counter = 2
    while candidate in taken:
        candidate = f"{stem}_{counter}{dot}{ext}"
        counter += 1

    taken.add(candidate)
    return candidate

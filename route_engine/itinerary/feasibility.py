from __future__ import annotations

import re
from typing import List, Optional, Sequence

from ..models import Activity
from .distance import DistanceModel

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock_minutes(value: Optional[str]) -> Optional[int]:
    """Minutes since midnight for a 24-hour ``HH:MM`` string, else ``None``."""
    if not isinstance(value, str) or not value:
        return None
    match = _TIME_PATTERN.match(value.strip())
    if match is None:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def validate(activities: Sequence[Activity], model: DistanceModel) -> List[str]:
    """Flag consecutive activities scheduled too close together to travel between.

    Only adjacent pairs where both sides have a location and a parseable time
    are checked; everything else is skipped silently.
    """
    warnings: List[str] = []
    for current, nxt in zip(activities[:-1], activities[1:]):
        if not (current.has_location and nxt.has_location):
            continue
        start = parse_clock_minutes(current.time)
        end = parse_clock_minutes(nxt.time)
        if start is None or end is None:
            continue

        required = model.travel_minutes_between(current.location, nxt.location)
        available = end - start
        if available < required:
            warnings.append(
                f'Not enough time to travel from "{current.title}" to "{nxt.title}": '
                f"{available} min scheduled, about {required} min needed "
                f"({required - available} min short)."
            )
    return warnings

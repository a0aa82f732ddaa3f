"""Location and calendar predicates selecting the Midtown -> JFK corridor."""

from __future__ import annotations

from bisect import bisect_left
from datetime import datetime
from typing import Tuple

# Kept sorted for bisect.
MIDTOWN_LOCATIONS: Tuple[int, ...] = (90, 100, 161, 162, 163, 164, 186, 230, 234)
JFK_AIRPORT_LOCATION = 132
LAST_WEEKDAY = 5  # Friday, ISO numbering


def is_midtown(loc: int) -> bool:
    idx = bisect_left(MIDTOWN_LOCATIONS, loc)
    return idx < len(MIDTOWN_LOCATIONS) and MIDTOWN_LOCATIONS[idx] == loc


def is_jfk_airport(loc: int) -> bool:
    return loc == JFK_AIRPORT_LOCATION


def is_weekday(dt: datetime) -> bool:
    """True for Monday through Friday."""
    return dt.isoweekday() <= LAST_WEEKDAY


def is_corridor(pickup_loc: int, dropoff_loc: int) -> bool:
    """Midtown pickup with a JFK dropoff; integer checks only."""
    return is_jfk_airport(dropoff_loc) and is_midtown(pickup_loc)

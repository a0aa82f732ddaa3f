"""Core dataclasses shared across the ingest and corridor packages."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

MAX_LOCATION_ID = 65535


@dataclass(frozen=True)
class Trip:
    """Single decoded row of the trip table.

    Timestamps stay textual here; they are only parsed once a row survives
    the cheap location checks.
    """

    pickup_datetime: str
    dropoff_datetime: str
    pickup_loc: int
    dropoff_loc: int


@dataclass
class RecordCounts:
    """Running counters for one analysis; ``skipped <= matched <= read``."""

    read: int = 0
    matched: int = 0
    skipped: int = 0

    @property
    def recorded(self) -> int:
        return self.matched - self.skipped

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

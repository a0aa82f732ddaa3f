"""Projection of the duration histograms into the JSON summary."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List

from tripstats.ingest.domain_types import RecordCounts

from .duration_histograms import DurationHistograms

SECONDS_PER_MINUTE = 60.0
MEDIAN_QUANTILE = 0.5
P95_QUANTILE = 0.95
P95_FIELD = "95th percentile"


@dataclass(frozen=True)
class StatsEntry:
    """Duration summary for one pickup hour, in minutes."""

    hour_of_day: int
    minimum: float
    median: float
    p95: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "hour_of_day": self.hour_of_day,
            "minimum": self.minimum,
            "median": self.median,
            P95_FIELD: self.p95,
        }


@dataclass
class DisplayStats:
    record_counts: RecordCounts
    stats: List[StatsEntry] = field(default_factory=list)

    @classmethod
    def from_histograms(
        cls, record_counts: RecordCounts, histograms: DurationHistograms
    ) -> "DisplayStats":
        """Build one entry per hour, 0..23, including hours with no trips."""
        stats = [
            StatsEntry(
                hour_of_day=hour,
                minimum=histograms.min_value(hour) / SECONDS_PER_MINUTE,
                median=histograms.value_at_quantile(hour, MEDIAN_QUANTILE) / SECONDS_PER_MINUTE,
                p95=histograms.value_at_quantile(hour, P95_QUANTILE) / SECONDS_PER_MINUTE,
            )
            for hour in range(len(histograms))
        ]
        return cls(record_counts=record_counts, stats=stats)

    def to_dict(self) -> Dict[str, object]:
        return {
            "record_counts": self.record_counts.to_dict(),
            "stats": [entry.to_dict() for entry in self.stats],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

"""Hour-of-day partitioned HDR histograms of trip durations."""

from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional

from hdrh.histogram import HdrHistogram

from tripstats.ingest.errors import DurationTooLong, DurationTooShort


HOURS_PER_DAY = 24
LOWEST_TRACKABLE_SECS = 1
MIN_DURATION_SECS = 20 * 60
MAX_DURATION_SECS = 3 * 60 * 60
SIGNIFICANT_FIGURES = 3


class DurationHistograms:
    """Twenty-four fixed-precision duration histograms, one per pickup hour.

    Each histogram tracks [1, 10800] seconds at three significant figures, so
    memory stays constant no matter how many trips are recorded. Only
    durations inside [1200, 10800] seconds are ever recorded.

    HDR quantile readings return a bucket representative, which for values
    above 2047 s can overshoot the recorded value by a few seconds. Readings
    are therefore clamped to the raw extremes recorded in that hour.
    """

    def __init__(self) -> None:
        self._histograms: List[HdrHistogram] = [
            HdrHistogram(LOWEST_TRACKABLE_SECS, MAX_DURATION_SECS, SIGNIFICANT_FIGURES)
            for _ in range(HOURS_PER_DAY)
        ]
        self._raw_min: List[Optional[int]] = [None] * HOURS_PER_DAY
        self._raw_max: List[Optional[int]] = [None] * HOURS_PER_DAY

    # ------------------------------------------------------------------ ingestion
    def record_duration(self, pickup: datetime, dropoff: datetime) -> None:
        """Record ``dropoff - pickup`` under the pickup hour.

        Raises:
            DurationTooShort: duration below 1200 s (negative included).
            DurationTooLong: duration above 10800 s.
        Nothing is recorded when either error is raised.
        """
        duration = int((dropoff - pickup).total_seconds())
        if duration < MIN_DURATION_SECS:
            raise DurationTooShort(duration)
        if duration > MAX_DURATION_SECS:
            raise DurationTooLong(duration)
        hour = pickup.hour
        self._histograms[hour].record_value(duration)
        low = self._raw_min[hour]
        high = self._raw_max[hour]
        self._raw_min[hour] = duration if low is None else min(low, duration)
        self._raw_max[hour] = duration if high is None else max(high, duration)

    # -------------------------------------------------------------------- reads
    def _clamp(self, hour: int, value: int) -> int:
        low = self._raw_min[hour]
        high = self._raw_max[hour]
        if low is None or high is None:
            return int(value)
        return min(max(int(value), low), high)

    def total_count(self, hour: Optional[int] = None) -> int:
        """Observations recorded for ``hour``, or across all hours."""
        if hour is None:
            return sum(hist.get_total_count() for hist in self._histograms)
        return self._histograms[hour].get_total_count()

    def min_value(self, hour: int) -> int:
        """Lowest recorded duration in seconds; 0 for an empty hour."""
        return self._clamp(hour, self._histograms[hour].get_min_value())

    def value_at_quantile(self, hour: int, quantile: float) -> int:
        """Duration in seconds at ``quantile`` (0..1); 0 for an empty hour.

        Uses the nearest-rank order statistic, ``ceil(quantile * count)``.
        """
        if not 0.0 <= quantile <= 1.0:
            raise ValueError(f"quantile must lie in [0, 1], got {quantile}")
        histogram = self._histograms[hour]
        total = histogram.get_total_count()
        if total == 0:
            return 0
        if quantile == 0.0:
            return self.min_value(hour)
        target = max(1, math.ceil(quantile * total))
        for item in histogram.get_recorded_iterator():
            if item.total_count_to_this_value >= target:
                return self._clamp(hour, item.value_iterated_to)
        return self._clamp(hour, histogram.get_max_value())

    def __len__(self) -> int:
        return HOURS_PER_DAY

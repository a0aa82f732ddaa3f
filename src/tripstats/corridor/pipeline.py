"""Filter-and-histogram pipeline driving one corridor analysis."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from tripstats.ingest.domain_types import RecordCounts, Trip
from tripstats.ingest.errors import DurationInvalid
from tripstats.ingest.timestamps import parse_datetime
from tripstats.ingest.trip_reader import DEFAULT_CHUNK_SIZE, iter_trips

from .duration_histograms import DurationHistograms
from .filters import is_corridor, is_weekday
from .stats_projector import DisplayStats


logger = logging.getLogger(__name__)

WarnCallback = Callable[[str], None]

FIRST_DATA_LINE = 2  # line 1 is the header


def write_warning(line: str) -> None:
    sys.stderr.write(f"{line}\n")


def format_skip_warning(line_number: int, error: DurationInvalid, trip: Trip) -> str:
    return f"WARN: {line_number} - {error}. Skipped: {trip!r}"


@dataclass
class AnalysisResult:
    record_counts: RecordCounts = field(default_factory=RecordCounts)
    histograms: DurationHistograms = field(default_factory=DurationHistograms)

    def display_stats(self) -> DisplayStats:
        return DisplayStats.from_histograms(self.record_counts, self.histograms)


def analyze_trips(
    trips: Iterable[Trip],
    *,
    warn: Optional[WarnCallback] = None,
) -> AnalysisResult:
    """Consume ``trips`` once and accumulate corridor durations per pickup hour.

    Rows are counted as read, then as matched when they are a Midtown -> JFK
    trip picked up on a weekday. Matched rows whose duration falls outside
    [20 min, 3 h] are reported through ``warn`` and counted as skipped.
    Decode and timestamp errors propagate and end the analysis.
    """
    emit = warn or write_warning
    result = AnalysisResult()
    counts = result.record_counts
    for line_number, trip in enumerate(trips, start=FIRST_DATA_LINE):
        counts.read += 1
        if not is_corridor(trip.pickup_loc, trip.dropoff_loc):
            continue
        pickup = parse_datetime(trip.pickup_datetime)
        if not is_weekday(pickup):
            continue
        counts.matched += 1
        dropoff = parse_datetime(trip.dropoff_datetime)
        try:
            result.histograms.record_duration(pickup, dropoff)
        except DurationInvalid as exc:
            counts.skipped += 1
            emit(format_skip_warning(line_number, exc, trip))
    logger.info(
        "Finished trip scan: read=%s matched=%s skipped=%s recorded=%s",
        counts.read,
        counts.matched,
        counts.skipped,
        counts.recorded,
    )
    return result


def analyze(
    infile: str | os.PathLike,
    *,
    chunksize: int = DEFAULT_CHUNK_SIZE,
    warn: Optional[WarnCallback] = None,
) -> AnalysisResult:
    """Run the corridor analysis over the CSV at ``infile``."""
    logger.info("Analyzing trips from %s", infile)
    return analyze_trips(iter_trips(infile, chunksize=chunksize), warn=warn)

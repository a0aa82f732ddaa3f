"""Ingest package exports."""

from .domain_types import MAX_LOCATION_ID, RecordCounts, Trip
from .errors import (
    DecodeError,
    DurationInvalid,
    DurationTooLong,
    DurationTooShort,
    ParseError,
    TripStatsError,
)
from .timestamps import TIMESTAMP_FORMAT, parse_datetime
from .trip_reader import DEFAULT_CHUNK_SIZE, TRIP_COLUMNS, iter_trips

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DecodeError",
    "DurationInvalid",
    "DurationTooLong",
    "DurationTooShort",
    "MAX_LOCATION_ID",
    "ParseError",
    "RecordCounts",
    "TIMESTAMP_FORMAT",
    "TRIP_COLUMNS",
    "Trip",
    "TripStatsError",
    "iter_trips",
    "parse_datetime",
]

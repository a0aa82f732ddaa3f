"""Error kinds raised while ingesting and summarizing trip records."""

from __future__ import annotations

from typing import Optional


class TripStatsError(Exception):
    """Base class for every failure the analyzer reports."""


class DecodeError(TripStatsError):
    """The input file is not a readable trip table."""

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ParseError(TripStatsError):
    """A timestamp field does not match ``YYYY-MM-DD HH:MM:SS``."""

    def __init__(self, text: object, reason: Optional[str] = None) -> None:
        self.text = text
        message = f"invalid timestamp {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DurationInvalid(TripStatsError):
    """A matched trip whose duration falls outside the accepted window."""

    kind = "invalid"

    def __init__(self, duration_secs: int) -> None:
        self.duration_secs = int(duration_secs)
        super().__init__(f"duration secs {self.duration_secs} is too {self.kind}")


class DurationTooShort(DurationInvalid):
    kind = "short"


class DurationTooLong(DurationInvalid):
    kind = "long"


__all__ = [
    "DecodeError",
    "DurationInvalid",
    "DurationTooLong",
    "DurationTooShort",
    "ParseError",
    "TripStatsError",
]

"""Corridor package exports."""

from .duration_histograms import (
    HOURS_PER_DAY,
    MAX_DURATION_SECS,
    MIN_DURATION_SECS,
    DurationHistograms,
)
from .filters import (
    JFK_AIRPORT_LOCATION,
    MIDTOWN_LOCATIONS,
    is_corridor,
    is_jfk_airport,
    is_midtown,
    is_weekday,
)
from .pipeline import AnalysisResult, analyze, analyze_trips
from .settings import AnalyzerSettings
from .stats_projector import DisplayStats, StatsEntry

__all__ = [
    "AnalysisResult",
    "AnalyzerSettings",
    "DisplayStats",
    "DurationHistograms",
    "HOURS_PER_DAY",
    "JFK_AIRPORT_LOCATION",
    "MAX_DURATION_SECS",
    "MIDTOWN_LOCATIONS",
    "MIN_DURATION_SECS",
    "StatsEntry",
    "analyze",
    "analyze_trips",
    "is_corridor",
    "is_jfk_airport",
    "is_midtown",
    "is_weekday",
]

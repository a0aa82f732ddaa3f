"""Summarize weekday Midtown -> JFK taxi trip durations by pickup hour."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Iterator, Sequence

import yaml
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from tripstats.corridor.pipeline import analyze_trips
from tripstats.corridor.settings import LOG_LEVELS, AnalyzerSettings
from tripstats.ingest.domain_types import Trip
from tripstats.ingest.errors import TripStatsError
from tripstats.ingest.trip_reader import iter_trips

PROG_NAME = "trip-analyzer"
VERSION = "1.0"

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=PROG_NAME, description=__doc__)
    parser.add_argument("infile", metavar="INFILE", help="Sets the input CSV file")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional YAML file with chunk_size, log_level and show_progress settings.",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help="Rows decoded per streaming chunk (overrides the config file).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=list(LOG_LEVELS),
        help="Verbosity for the CLI logger (overrides the config file).",
    )
    parser.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show a progress spinner on stderr when it is a terminal.",
    )
    parser.add_argument("--version", action="version", version=f"{PROG_NAME} {VERSION}")
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def load_settings(args: argparse.Namespace) -> AnalyzerSettings:
    settings = AnalyzerSettings.from_yaml(args.config) if args.config else AnalyzerSettings()
    return settings.with_overrides(
        chunk_size=args.chunk_size,
        log_level=args.log_level,
        show_progress=args.progress,
    )


def _iter_with_progress(trips: Iterable[Trip], progress: Progress) -> Iterator[Trip]:
    task_id = progress.add_task("Reading trips", total=None)
    for trip in trips:
        yield trip
        progress.advance(task_id)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
        raise SystemExit(f"Error: {exc}") from exc
    configure_logging(settings.log_level)

    progress_console = Console(stderr=True)
    progress = Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        TextColumn("{task.completed:,} rows", justify="right"),
        TimeElapsedColumn(),
        console=progress_console,
        transient=True,
        disable=not (settings.show_progress and progress_console.is_terminal),
    )

    try:
        with progress:
            trips = iter_trips(args.infile, chunksize=settings.chunk_size)
            result = analyze_trips(_iter_with_progress(trips, progress))
    except TripStatsError as exc:
        logger.debug("Analysis of %s failed", args.infile, exc_info=True)
        raise SystemExit(f"Error: {exc}") from exc

    print(result.record_counts, file=sys.stderr)
    print(result.display_stats().to_json())


if __name__ == "__main__":
    main()

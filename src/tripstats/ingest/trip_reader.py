"""Streaming decoder for taxi trip tables."""

from __future__ import annotations

import logging
import os
import re
from typing import Iterator, Sequence

import pandas as pd

from .domain_types import MAX_LOCATION_ID, Trip
from .errors import DecodeError


logger = logging.getLogger(__name__)

PICKUP_DATETIME_COLUMN = "tpep_pickup_datetime"
DROPOFF_DATETIME_COLUMN = "tpep_dropoff_datetime"
PICKUP_LOCATION_COLUMN = "PULocationID"
DROPOFF_LOCATION_COLUMN = "DOLocationID"

TRIP_COLUMNS: Sequence[str] = [
    PICKUP_DATETIME_COLUMN,
    DROPOFF_DATETIME_COLUMN,
    PICKUP_LOCATION_COLUMN,
    DROPOFF_LOCATION_COLUMN,
]

DEFAULT_CHUNK_SIZE = 100_000

_TOKENISER_LINE = re.compile(r"in line (\d+)")


def _read_header(csv_path: str) -> list[str]:
    """Return the header of ``csv_path`` without loading any data rows."""
    try:
        header_df = pd.read_csv(csv_path, nrows=0, encoding="utf-8")
    except pd.errors.EmptyDataError as exc:
        raise DecodeError(f"{csv_path} is empty; expected a header row") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise DecodeError(f"{csv_path} has an unreadable header: {exc}") from exc
    except OSError as exc:
        raise DecodeError(f"cannot open {csv_path}: {exc.strerror or exc}") from exc
    return [str(column) for column in header_df.columns]


def _check_header(csv_path: str) -> None:
    available = set(_read_header(csv_path))
    missing = [column for column in TRIP_COLUMNS if column not in available]
    if missing:
        missing_list = ", ".join(missing)
        raise DecodeError(f"{csv_path} is missing required columns: {missing_list}")


def _parse_location(text: str, column: str, line_number: int) -> int:
    if not text:
        raise DecodeError(f"missing {column}", line_number=line_number)
    if not (text.isascii() and text.isdigit()):
        raise DecodeError(f"{column} is not a location id: {text!r}", line_number=line_number)
    location = int(text)
    if location > MAX_LOCATION_ID:
        raise DecodeError(
            f"{column} {location} exceeds {MAX_LOCATION_ID}", line_number=line_number
        )
    return location


def _iter_chunks(csv_path: str, chunksize: int) -> Iterator[pd.DataFrame]:
    """Yield string-typed chunks of every column.

    All columns are tokenised so that rows longer than the header fail with
    a ParserError instead of being truncated.
    """
    try:
        with pd.read_csv(
            csv_path,
            dtype=str,
            keep_default_na=False,
            chunksize=chunksize,
            encoding="utf-8",
        ) as reader:
            for chunk in reader:
                yield chunk
    except pd.errors.ParserError as exc:
        match = _TOKENISER_LINE.search(str(exc))
        raise DecodeError(
            f"{csv_path} could not be tokenised: {str(exc).strip()}",
            line_number=int(match.group(1)) if match else None,
        ) from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{csv_path} could not be tokenised: {exc}") from exc
    except OSError as exc:
        raise DecodeError(f"cannot read {csv_path}: {exc.strerror or exc}") from exc


def _decode_rows(csv_path: str, chunksize: int) -> Iterator[Trip]:
    line_number = 1  # header
    for chunk_idx, chunk in enumerate(_iter_chunks(csv_path, chunksize), start=1):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "iter_trips file=%s chunk=%s rows=%s (first line=%s)",
                os.path.basename(csv_path),
                chunk_idx,
                len(chunk),
                line_number + 1,
            )
        # Empty fields stay "" with keep_default_na=False; NaN only marks
        # fields absent from a row shorter than the header.
        short_rows = chunk.isna().any(axis=1).tolist()
        rows = chunk[list(TRIP_COLUMNS)].itertuples(index=False, name=None)
        for is_short, (pickup_text, dropoff_text, pickup_loc, dropoff_loc) in zip(short_rows, rows):
            line_number += 1
            if is_short:
                raise DecodeError(
                    f"expected {len(chunk.columns)} fields, found fewer",
                    line_number=line_number,
                )
            yield Trip(
                pickup_datetime=pickup_text,
                dropoff_datetime=dropoff_text,
                pickup_loc=_parse_location(pickup_loc, PICKUP_LOCATION_COLUMN, line_number),
                dropoff_loc=_parse_location(dropoff_loc, DROPOFF_LOCATION_COLUMN, line_number),
            )


def iter_trips(path: str | os.PathLike, *, chunksize: int = DEFAULT_CHUNK_SIZE) -> Iterator[Trip]:
    """Return a lazy, single-pass iterator of trips stored in ``path``.

    The header is validated eagerly so that a missing file or column is
    reported before any row is consumed. Rows are then decoded ``chunksize``
    at a time, one chunk in memory at once. Timestamp fields
    are passed through untouched. Rows with more or fewer fields than the
    header are rejected.

    Raises:
        DecodeError: unreadable file, missing columns, untokenisable rows or
            malformed location ids (the latter two while iterating).
    """
    if chunksize <= 0:
        raise ValueError("chunksize must be positive.")
    csv_path = os.fspath(path)
    _check_header(csv_path)
    return _decode_rows(csv_path, int(chunksize))

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

from tripstats.ingest.domain_types import Trip
from tripstats.ingest.errors import DecodeError
from tripstats.ingest.trip_reader import TRIP_COLUMNS, iter_trips


FULL_HEADER = [
    "VendorID",
    "tpep_pickup_datetime",
    "tpep_dropoff_datetime",
    "passenger_count",
    "PULocationID",
    "DOLocationID",
    "store_and_fwd_flag",
]


def _row(pickup: str, dropoff: str, pu: object, do: object, **extra: object) -> Dict[str, object]:
    row: Dict[str, object] = {
        "VendorID": 1,
        "tpep_pickup_datetime": pickup,
        "tpep_dropoff_datetime": dropoff,
        "passenger_count": 1,
        "PULocationID": pu,
        "DOLocationID": do,
        "store_and_fwd_flag": "N",
    }
    row.update(extra)
    return row


def _write_csv(path: Path, rows: List[Dict[str, object]], fieldnames: Sequence[str] = FULL_HEADER) -> Path:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(fieldnames))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


def test_iter_trips_decodes_required_columns_and_ignores_others(tmp_path):
    path = _write_csv(
        tmp_path / "trips.csv",
        [
            _row("2020-01-06 08:00:00", "2020-01-06 08:30:00", 161, 132),
            _row("2020-01-06 09:00:00", "2020-01-06 09:45:00", 100, 200, store_and_fwd_flag="Y,quoted"),
        ],
    )

    trips = list(iter_trips(path))

    assert trips == [
        Trip("2020-01-06 08:00:00", "2020-01-06 08:30:00", 161, 132),
        Trip("2020-01-06 09:00:00", "2020-01-06 09:45:00", 100, 200),
    ]


def test_iter_trips_accepts_columns_in_any_order(tmp_path):
    path = tmp_path / "reordered.csv"
    path.write_text(
        "DOLocationID,tpep_dropoff_datetime,PULocationID,tpep_pickup_datetime\n"
        "132,2020-01-06 08:30:00,161,2020-01-06 08:00:00\n",
        encoding="utf-8",
    )

    (trip,) = list(iter_trips(path))

    assert trip.pickup_loc == 161
    assert trip.dropoff_loc == 132
    assert trip.pickup_datetime == "2020-01-06 08:00:00"
    assert trip.dropoff_datetime == "2020-01-06 08:30:00"


def test_iter_trips_is_lazy(tmp_path):
    path = _write_csv(
        tmp_path / "lazy.csv",
        [
            _row("2020-01-06 08:00:00", "2020-01-06 08:30:00", 161, 132),
            _row("2020-01-06 08:00:00", "2020-01-06 08:30:00", "not-a-number", 132),
        ],
    )

    trips = iter_trips(path)
    first = next(trips)
    assert first.pickup_loc == 161
    with pytest.raises(DecodeError) as excinfo:
        next(trips)
    assert excinfo.value.line_number == 3


def test_iter_trips_spans_chunks_and_keeps_line_numbers(tmp_path):
    rows = [_row("2020-01-06 08:00:00", "2020-01-06 08:30:00", 161, 132) for _ in range(4)]
    rows.append(_row("2020-01-06 08:00:00", "2020-01-06 08:30:00", 161, 70000))
    path = _write_csv(tmp_path / "chunks.csv", rows)

    trips = iter_trips(path, chunksize=2)
    decoded = [next(trips) for _ in range(4)]
    assert len(decoded) == 4
    with pytest.raises(DecodeError) as excinfo:
        next(trips)
    assert excinfo.value.line_number == 6
    assert "DOLocationID" in str(excinfo.value)


def test_iter_trips_passes_timestamps_through_untouched(tmp_path):
    path = _write_csv(tmp_path / "ts.csv", [_row("garbage", "", 1, 2)])

    (trip,) = list(iter_trips(path))

    assert trip.pickup_datetime == "garbage"
    assert trip.dropoff_datetime == ""


def test_iter_trips_rejects_rows_longer_than_header(tmp_path):
    path = tmp_path / "long_row.csv"
    path.write_text(
        "tpep_pickup_datetime,tpep_dropoff_datetime,PULocationID,DOLocationID\n"
        "2020-01-06 08:00:00,2020-01-06 08:30:00,161,132\n"
        "2020-01-06 08:00:00,2020-01-06 08:30:00,161,132,EXTRA\n",
        encoding="utf-8",
    )
    with pytest.raises(DecodeError) as excinfo:
        list(iter_trips(path))
    assert excinfo.value.line_number == 3


@pytest.mark.parametrize(
    "content",
    [
        # missing a required trailing column
        "tpep_pickup_datetime,tpep_dropoff_datetime,PULocationID,DOLocationID\n"
        "2020-01-06 08:00:00,2020-01-06 08:30:00,161,132\n"
        "2020-01-06 08:00:00,2020-01-06 08:30:00,161\n",
        # missing only an ignored trailing column
        "VendorID,tpep_pickup_datetime,tpep_dropoff_datetime,PULocationID,DOLocationID,store_and_fwd_flag\n"
        "1,2020-01-06 08:00:00,2020-01-06 08:30:00,161,132,N\n"
        "1,2020-01-06 08:00:00,2020-01-06 08:30:00,161,132\n",
    ],
)
def test_iter_trips_rejects_rows_shorter_than_header(tmp_path, content):
    path = tmp_path / "short_row.csv"
    path.write_text(content, encoding="utf-8")

    trips = iter_trips(path)
    first = next(trips)
    assert first.pickup_loc == 161
    with pytest.raises(DecodeError) as excinfo:
        next(trips)
    assert excinfo.value.line_number == 3
    assert "fewer" in str(excinfo.value)


def test_iter_trips_header_only_yields_nothing(tmp_path):
    path = _write_csv(tmp_path / "empty_rows.csv", [])
    assert list(iter_trips(path)) == []


def test_iter_trips_missing_file_raises_before_iteration(tmp_path):
    with pytest.raises(DecodeError, match="cannot open"):
        iter_trips(tmp_path / "does_not_exist.csv")


def test_iter_trips_empty_file_is_decode_error(tmp_path):
    path = tmp_path / "blank.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(DecodeError):
        iter_trips(path)


def test_iter_trips_reports_missing_columns(tmp_path):
    path = tmp_path / "partial.csv"
    path.write_text(
        "tpep_pickup_datetime,PULocationID\n2020-01-06 08:00:00,161\n",
        encoding="utf-8",
    )
    with pytest.raises(DecodeError) as excinfo:
        iter_trips(path)
    message = str(excinfo.value)
    assert "tpep_dropoff_datetime" in message
    assert "DOLocationID" in message
    assert "tpep_pickup_datetime" not in message.split("columns:")[1]


@pytest.mark.parametrize("bad_value", ["", "abc", "-5", "16.5", "65536"])
def test_iter_trips_rejects_bad_location_ids(tmp_path, bad_value):
    path = _write_csv(
        tmp_path / "bad_loc.csv",
        [_row("2020-01-06 08:00:00", "2020-01-06 08:30:00", bad_value, 132)],
    )
    with pytest.raises(DecodeError) as excinfo:
        list(iter_trips(path))
    assert excinfo.value.line_number == 2
    assert "PULocationID" in str(excinfo.value)


def test_iter_trips_accepts_location_bounds(tmp_path):
    path = _write_csv(
        tmp_path / "bounds.csv",
        [_row("2020-01-06 08:00:00", "2020-01-06 08:30:00", 0, 65535)],
    )
    (trip,) = list(iter_trips(path))
    assert (trip.pickup_loc, trip.dropoff_loc) == (0, 65535)


def test_iter_trips_rejects_non_positive_chunksize(tmp_path):
    path = _write_csv(tmp_path / "trips.csv", [])
    with pytest.raises(ValueError):
        iter_trips(path, chunksize=0)


def test_trip_columns_are_the_four_required_fields():
    assert list(TRIP_COLUMNS) == [
        "tpep_pickup_datetime",
        "tpep_dropoff_datetime",
        "PULocationID",
        "DOLocationID",
    ]

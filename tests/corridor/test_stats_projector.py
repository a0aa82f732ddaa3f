from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest

from tripstats.corridor.duration_histograms import DurationHistograms
from tripstats.corridor.stats_projector import DisplayStats, StatsEntry
from tripstats.ingest.domain_types import RecordCounts


def test_empty_histograms_still_emit_24_zero_entries():
    display = DisplayStats.from_histograms(RecordCounts(), DurationHistograms())

    assert [entry.hour_of_day for entry in display.stats] == list(range(24))
    for entry in display.stats:
        assert (entry.minimum, entry.median, entry.p95) == (0.0, 0.0, 0.0)


def test_entries_are_reported_in_minutes():
    hists = DurationHistograms()
    pickup = datetime(2020, 1, 6, 17, 5, 0)
    for minutes in (20, 25, 30):
        hists.record_duration(pickup, pickup + timedelta(minutes=minutes))

    display = DisplayStats.from_histograms(RecordCounts(read=3, matched=3), hists)
    entry = display.stats[17]

    assert entry == StatsEntry(hour_of_day=17, minimum=20.0, median=25.0, p95=30.0)


def test_to_json_uses_the_published_schema():
    counts = RecordCounts(read=5, matched=2, skipped=1)
    display = DisplayStats.from_histograms(counts, DurationHistograms())

    text = display.to_json()
    payload = json.loads(text)

    assert list(payload) == ["record_counts", "stats"]
    assert payload["record_counts"] == {"read": 5, "matched": 2, "skipped": 1}
    assert len(payload["stats"]) == 24
    assert list(payload["stats"][0]) == ["hour_of_day", "minimum", "median", "95th percentile"]
    assert '\n  "record_counts": {\n    "read": 5,' in text
    assert '"minimum": 0.0' in text


def test_record_counts_recorded_property():
    counts = RecordCounts(read=10, matched=4, skipped=1)
    assert counts.recorded == 3
    assert counts.to_dict() == {"read": 10, "matched": 4, "skipped": 1}
    assert repr(counts) == "RecordCounts(read=10, matched=4, skipped=1)"


def test_p95_reading_is_bounded_by_recorded_maximum():
    hists = DurationHistograms()
    pickup = datetime(2020, 1, 6, 8, 0, 0)
    hists.record_duration(pickup, pickup + timedelta(hours=3))

    entry = DisplayStats.from_histograms(RecordCounts(), hists).stats[8]

    assert entry.p95 == pytest.approx(180.0)
    assert entry.median == pytest.approx(180.0)
    assert entry.minimum == pytest.approx(180.0)

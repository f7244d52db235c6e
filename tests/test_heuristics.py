from __future__ import annotations

from datetime import datetime, timedelta

from models.records import Reading
from services.heuristics import (
    DivergenceRule,
    Interval,
    consecutive_pairs,
    divergent_intervals,
    falling,
    first_by_timestamp,
    rising,
)

T0 = datetime(2024, 5, 1, 12, 0)


def _at(minutes: float) -> datetime:
    return T0 + timedelta(minutes=minutes)


def test_first_by_timestamp_keeps_first_seen_reading_per_location() -> None:
    first = Reading(timestamp=T0, location="Indoor", temperature=20.0, humidity=40)
    duplicate = Reading(timestamp=T0, location="Indoor", temperature=99.0, humidity=99)
    outdoor = Reading(timestamp=T0, location="Outdoor", temperature=5.0, humidity=80)

    indexed = first_by_timestamp([first, outdoor, duplicate], "Indoor")

    assert indexed == {T0: first}


def test_consecutive_pairs_sorts_and_deduplicates() -> None:
    pairs = list(consecutive_pairs([_at(10), _at(0), _at(5), _at(5)]))

    assert pairs == [(_at(0), _at(5)), (_at(5), _at(10))]


def test_divergent_intervals_is_parameterized_by_direction() -> None:
    primary = {_at(0): 1.0, _at(5): 2.0, _at(10): 3.0}
    secondary = {_at(0): 10.0, _at(5): 9.0, _at(10): 9.0}
    both_rising = DivergenceRule(max_gap=timedelta(minutes=5), primary_moves=rising, secondary_moves=rising)
    opposite = DivergenceRule(max_gap=timedelta(minutes=5), primary_moves=rising, secondary_moves=falling)

    assert list(divergent_intervals(primary, secondary, both_rising)) == []
    assert list(divergent_intervals(primary, secondary, opposite)) == [Interval(start=_at(0), end=_at(5))]


def test_divergent_intervals_skips_wide_gaps_and_missing_secondary() -> None:
    rule = DivergenceRule(max_gap=timedelta(minutes=15), primary_moves=falling, secondary_moves=rising)
    primary = {_at(0): 22.0, _at(16): 21.0, _at(20): 20.0, _at(30): 19.0}
    secondary = {_at(0): 5.0, _at(16): 6.0, _at(30): 8.0}

    assert list(divergent_intervals(primary, secondary, rule)) == []


def test_interval_whole_minutes_truncates() -> None:
    interval = Interval(start=_at(0), end=_at(14.99))

    assert interval.whole_minutes == 14
    assert interval.elapsed == timedelta(minutes=14.99)

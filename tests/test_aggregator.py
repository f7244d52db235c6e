"""Unit tests for the daily aggregation logic."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from models.records import Location, Reading
from services.aggregator import Aggregator, DailyAggregate, group_by_day


def _reading(timestamp: datetime, temperature: float, humidity: int = 50, location: str = "Indoor") -> Reading:
    """Helper to build deterministic readings."""

    return Reading(timestamp=timestamp, location=location, temperature=temperature, humidity=humidity)


def test_daily_means_empty_iterable_returns_nothing() -> None:
    aggregator = Aggregator()

    assert aggregator.daily_means([], lambda reading: reading.temperature) == []


def test_daily_means_requires_a_metric() -> None:
    with pytest.raises(ValueError):
        Aggregator().daily_means([])


def test_daily_means_groups_by_calendar_day_oldest_first() -> None:
    aggregator = Aggregator()
    readings = [
        _reading(datetime(2024, 1, 2, 0, 0), 4.0, humidity=60),
        _reading(datetime(2024, 1, 1, 23, 59), 10.0, humidity=40),
        _reading(datetime(2024, 1, 1, 0, 0), 20.0, humidity=50),
        _reading(datetime(2024, 1, 2, 12, 0), 6.0, humidity=70),
    ]

    aggregates = aggregator.daily_means(
        readings,
        lambda reading: reading.temperature,
        lambda reading: reading.humidity,
    )

    assert aggregates == [
        DailyAggregate(day=date(2024, 1, 1), count=2, means=(15.0, 45.0)),
        DailyAggregate(day=date(2024, 1, 2), count=2, means=(5.0, 65.0)),
    ]


def test_daily_readings_filters_by_location() -> None:
    aggregator = Aggregator()
    readings = [
        _reading(datetime(2024, 1, 1, 8), 21.0, location=Location.indoor.value),
        _reading(datetime(2024, 1, 1, 8), -3.0, location=Location.outdoor.value),
        _reading(datetime(2024, 1, 2, 8), -5.0, location=Location.outdoor.value),
    ]

    aggregates = aggregator.daily_readings(readings, Location.outdoor, lambda reading: reading.temperature)

    assert [(item.day, item.means[0]) for item in aggregates] == [
        (date(2024, 1, 1), -3.0),
        (date(2024, 1, 2), -5.0),
    ]


def test_daily_means_is_exact_regardless_of_order() -> None:
    aggregator = Aggregator()
    values = [1e16, 1.0, -1e16, 1.0]
    forward = [_reading(datetime(2024, 1, 1, hour), value) for hour, value in enumerate(values)]
    backward = list(reversed(forward))

    temperature = lambda reading: reading.temperature  # noqa: E731

    assert aggregator.daily_means(forward, temperature) == aggregator.daily_means(backward, temperature)
    assert aggregator.daily_means(forward, temperature)[0].means == (0.5,)


def test_group_by_day_preserves_input_order_within_a_day() -> None:
    first = _reading(datetime(2024, 1, 1, 18), 1.0)
    second = _reading(datetime(2024, 1, 1, 6), 2.0)

    groups = group_by_day([first, second], lambda reading: reading.day)

    assert groups == {date(2024, 1, 1): [first, second]}

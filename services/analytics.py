"""Daily insights derived from paired indoor/outdoor readings.

Every function here is a pure function of the readings it receives: nothing
is cached between calls and the input collection is never modified. "No
result" is reported as ``None`` rather than raised.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Collection, Dict, List, Optional, Sequence

from models.records import DailyMinutes, DailyValue, Location, Reading
from services.aggregator import Aggregator, DailyAggregate
from services.heuristics import (
    DivergenceRule,
    divergent_intervals,
    falling,
    first_by_timestamp,
    rising,
)

MOLD_HUMIDITY_THRESHOLD = 78.0
MOLD_TEMPERATURE_DIVISOR = 15.0

SEASON_RUN_LENGTH = 5
AUTUMN_THRESHOLD = 10.0
WINTER_THRESHOLD = 0.0

BALCONY_DOOR_RULE = DivergenceRule(
    max_gap=timedelta(minutes=15),
    primary_moves=falling,
    secondary_moves=rising,
)

_aggregator = Aggregator()


def _temperature(reading: Reading) -> float:
    return reading.temperature


def _humidity(reading: Reading) -> float:
    return reading.humidity


class Season(str, Enum):
    autumn = "autumn"
    winter = "winter"

    def admits(self, daily_mean: float) -> bool:
        if self is Season.autumn:
            return daily_mean < AUTUMN_THRESHOLD
        return daily_mean <= WINTER_THRESHOLD


def _ranked(
    aggregates: Sequence[DailyAggregate],
    metric: Callable[[DailyAggregate], float],
    descending: bool,
) -> List[DailyValue]:
    # sorted() is stable with reverse=True too, so ties stay oldest-first.
    values = [DailyValue(day=aggregate.day, value=metric(aggregate)) for aggregate in aggregates]
    return sorted(values, key=lambda item: item.value, reverse=descending)


def average_temperature_for_date(
    readings: Collection[Reading],
    day: date,
    location: str,
) -> Optional[float]:
    """Mean temperature at ``location`` on ``day``, or ``None`` without data."""
    if isinstance(day, datetime):
        day = day.date()

    temperatures = [
        reading.temperature
        for reading in readings
        if reading.location == location and reading.day == day
    ]
    if not temperatures:
        return None
    return math.fsum(temperatures) / len(temperatures)


def sort_days_by_temperature(readings: Collection[Reading], location: str) -> List[DailyValue]:
    """Daily mean temperatures at ``location``, warmest first."""
    aggregates = _aggregator.daily_readings(readings, location, _temperature)
    return _ranked(aggregates, lambda aggregate: aggregate.means[0], descending=True)


def sort_days_by_humidity(readings: Collection[Reading], location: str) -> List[DailyValue]:
    """Daily mean humidity at ``location``, driest first."""
    aggregates = _aggregator.daily_readings(readings, location, _humidity)
    return _ranked(aggregates, lambda aggregate: aggregate.means[0], descending=False)


def mold_risk_index(average_temperature: float, average_humidity: float) -> float:
    """Simplified mold growth score; zero below freezing or under 78% humidity."""
    if average_temperature < 0 or average_humidity < MOLD_HUMIDITY_THRESHOLD:
        return 0.0
    risk = (average_humidity - MOLD_HUMIDITY_THRESHOLD) * (
        average_temperature / MOLD_TEMPERATURE_DIVISOR
    )
    return max(risk, 0.0)


def sort_days_by_mold_risk(readings: Collection[Reading], location: str) -> List[DailyValue]:
    """Daily mold risk at ``location``, lowest risk first."""
    aggregates = _aggregator.daily_readings(readings, location, _temperature, _humidity)
    return _ranked(
        aggregates,
        lambda aggregate: mold_risk_index(aggregate.means[0], aggregate.means[1]),
        descending=False,
    )


def find_season_onset(readings: Collection[Reading], season: Season) -> Optional[date]:
    """First day of the earliest run of five qualifying outdoor daily means.

    The run is counted over days that have outdoor data, so a day without any
    outdoor reading does not break it.
    """
    daily = _aggregator.daily_readings(readings, Location.outdoor, _temperature)
    for start in range(len(daily) - SEASON_RUN_LENGTH + 1):
        window = daily[start:start + SEASON_RUN_LENGTH]
        if all(season.admits(aggregate.means[0]) for aggregate in window):
            return window[0].day
    return None


def find_meteorological_autumn(readings: Collection[Reading]) -> Optional[date]:
    return find_season_onset(readings, Season.autumn)


def find_meteorological_winter(readings: Collection[Reading]) -> Optional[date]:
    return find_season_onset(readings, Season.winter)


def calculate_balcony_open_time(readings: Collection[Reading]) -> List[DailyMinutes]:
    """Estimated minutes per day the balcony door stood open, longest first.

    An interval counts as open when indoor temperature falls while outdoor
    temperature rises between consecutive indoor samples at most 15 minutes
    apart. Minutes are credited to the day the interval ends.
    """
    indoor = {
        timestamp: reading.temperature
        for timestamp, reading in first_by_timestamp(readings, Location.indoor).items()
    }
    outdoor = {
        timestamp: reading.temperature
        for timestamp, reading in first_by_timestamp(readings, Location.outdoor).items()
    }

    minutes_per_day: Dict[date, int] = {}
    for interval in divergent_intervals(indoor, outdoor, BALCONY_DOOR_RULE):
        day = interval.end.date()
        minutes_per_day[day] = minutes_per_day.get(day, 0) + interval.whole_minutes

    totals = [
        DailyMinutes(day=day, minutes=minutes)
        for day, minutes in sorted(minutes_per_day.items())
        if minutes > 0
    ]
    return sorted(totals, key=lambda item: item.minutes, reverse=True)


def sort_days_by_temperature_difference(readings: Collection[Reading]) -> List[DailyValue]:
    """Daily mean of |indoor - outdoor| over shared timestamps, largest first."""
    outdoor_by_timestamp: Dict[datetime, List[Reading]] = {}
    for reading in readings:
        if reading.location == Location.outdoor:
            outdoor_by_timestamp.setdefault(reading.timestamp, []).append(reading)

    differences = [
        (inside.timestamp, abs(inside.temperature - outside.temperature))
        for inside in readings
        if inside.location == Location.indoor
        for outside in outdoor_by_timestamp.get(inside.timestamp, ())
    ]
    aggregates = _aggregator.daily_means(
        differences,
        lambda pair: pair[1],
        day_of=lambda pair: pair[0].date(),
    )
    return _ranked(aggregates, lambda aggregate: aggregate.means[0], descending=True)

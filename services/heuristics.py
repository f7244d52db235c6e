"""Event detection from two signals sampled at shared instants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, Iterator, Mapping, Tuple

from models.records import Reading

Direction = Callable[[float], bool]


def falling(delta: float) -> bool:
    return delta < 0


def rising(delta: float) -> bool:
    return delta > 0


@dataclass(frozen=True)
class DivergenceRule:
    """An event where ``primary`` and ``secondary`` move in given directions.

    Consecutive primary samples further apart than ``max_gap`` are treated as
    a hole in the data rather than an event.
    """

    max_gap: timedelta
    primary_moves: Direction
    secondary_moves: Direction


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime

    @property
    def elapsed(self) -> timedelta:
        return self.end - self.start

    @property
    def whole_minutes(self) -> int:
        return int(self.elapsed.total_seconds() / 60)


def first_by_timestamp(readings: Iterable[Reading], location: str) -> Dict[datetime, Reading]:
    """Index readings at ``location`` by timestamp; the first one seen wins."""
    indexed: Dict[datetime, Reading] = {}
    for reading in readings:
        if reading.location == location and reading.timestamp not in indexed:
            indexed[reading.timestamp] = reading
    return indexed


def consecutive_pairs(timestamps: Iterable[datetime]) -> Iterator[Tuple[datetime, datetime]]:
    ordered = sorted(set(timestamps))
    return zip(ordered, ordered[1:])


def divergent_intervals(
    primary: Mapping[datetime, float],
    secondary: Mapping[datetime, float],
    rule: DivergenceRule,
) -> Iterator[Interval]:
    """Yield the intervals between consecutive primary samples that match ``rule``.

    Both endpoints must be present in both signals; pairs wider than
    ``rule.max_gap`` are skipped.
    """
    for previous, current in consecutive_pairs(primary):
        if current - previous > rule.max_gap:
            continue
        if previous not in secondary or current not in secondary:
            continue

        primary_delta = primary[current] - primary[previous]
        secondary_delta = secondary[current] - secondary[previous]
        if rule.primary_moves(primary_delta) and rule.secondary_moves(secondary_delta):
            yield Interval(start=previous, end=current)

"""Per-day grouping and averaging of readings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, List, Tuple, TypeVar

from models.records import Reading

T = TypeVar("T")

Metric = Callable[[T], float]


@dataclass(frozen=True)
class DailyAggregate:
    """Means of one or more metrics over the items of a single day."""

    day: date
    count: int
    means: Tuple[float, ...]


def group_by_day(items: Iterable[T], day_of: Callable[[T], date]) -> Dict[date, List[T]]:
    groups: Dict[date, List[T]] = {}
    for item in items:
        groups.setdefault(day_of(item), []).append(item)
    return groups


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def daily_means(
        self,
        items: Iterable[T],
        *metrics: Metric,
        day_of: Callable[[T], date] = lambda reading: reading.timestamp.date(),
    ) -> List[DailyAggregate]:
        """Average each metric per calendar day, oldest day first.

        Days without items are never emitted. ``math.fsum`` keeps each mean
        independent of the order in which a day's items arrive.
        """
        if not metrics:
            raise ValueError("At least one metric is required.")

        aggregates: List[DailyAggregate] = []
        for day, members in sorted(group_by_day(items, day_of).items()):
            count = len(members)
            means = tuple(
                math.fsum(metric(member) for member in members) / count
                for metric in metrics
            )
            aggregates.append(DailyAggregate(day=day, count=count, means=means))
        return aggregates

    def daily_readings(
        self,
        readings: Iterable[Reading],
        location: str,
        *metrics: Metric,
    ) -> List[DailyAggregate]:
        """Aggregate the readings taken at ``location``."""
        matching = (reading for reading in readings if reading.location == location)
        return self.daily_means(matching, *metrics)

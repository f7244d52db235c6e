"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class Location(str, Enum):
    """Sensor placements recognized by the location-filtered queries."""

    indoor = "Indoor"
    outdoor = "Outdoor"


@dataclass(frozen=True, slots=True)
class Reading:
    """A single temperature/humidity sample."""

    timestamp: datetime
    location: str
    temperature: float
    humidity: int

    @property
    def day(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True, slots=True)
class DailyValue:
    day: date
    value: float


@dataclass(frozen=True, slots=True)
class DailyMinutes:
    day: date
    minutes: int

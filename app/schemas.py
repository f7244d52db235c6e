"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from models.records import DailyMinutes, DailyValue, Location
from services.analytics import Season


class ImportStatus(str, Enum):
    """Outcome of loading one delimited file into the store."""

    processed = "processed"
    partial = "partial"
    failed = "failed"


class RowError(BaseModel):
    """Details about a row that failed validation or parsing."""

    row_number: int = Field(..., ge=1)
    reason: str


class ImportResult(BaseModel):
    """Summary of a completed import."""

    source: str
    status: ImportStatus
    row_count: int = Field(0, ge=0)
    imported_at: datetime
    processing_ms: Optional[int] = Field(
        default=None, description="Duration in milliseconds from start to finish."
    )
    errors: List[RowError] = Field(default_factory=list)


class ReadingCount(BaseModel):
    count: int = Field(..., ge=0)


class DayValue(BaseModel):
    day: date
    value: float

    @classmethod
    def from_daily(cls, item: DailyValue) -> "DayValue":
        return cls(day=item.day, value=item.value)


class DayMinutes(BaseModel):
    day: date
    minutes: int

    @classmethod
    def from_daily(cls, item: DailyMinutes) -> "DayMinutes":
        return cls(day=item.day, minutes=item.minutes)


class AverageTemperature(BaseModel):
    """Mean temperature for one day; ``None`` when the day has no readings."""

    day: date
    location: Location
    average_temperature: Optional[float] = None


class SeasonOnset(BaseModel):
    season: Season
    onset: Optional[date] = None


class AnalysisReport(BaseModel):
    """Every ranking and detection computed over one snapshot of readings."""

    location: Location
    reading_count: int = Field(..., ge=0)
    temperature: List[DayValue] = Field(
        default_factory=list, description="Daily mean temperature, warmest first."
    )
    humidity: List[DayValue] = Field(
        default_factory=list, description="Daily mean humidity, driest first."
    )
    mold_risk: List[DayValue] = Field(
        default_factory=list, description="Daily mold risk index, lowest first."
    )
    autumn_onset: Optional[date] = None
    winter_onset: Optional[date] = None
    balcony_door: List[DayMinutes] = Field(
        default_factory=list, description="Estimated open minutes, longest first."
    )
    temperature_difference: List[DayValue] = Field(
        default_factory=list, description="Mean indoor/outdoor gap, largest first."
    )

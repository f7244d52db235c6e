"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from app.schemas import (
    AnalysisReport,
    AverageTemperature,
    DayMinutes,
    DayValue,
    ImportResult,
    ReadingCount,
    SeasonOnset,
)
from models.records import Location
from services import analytics
from services.analytics import Season
from services.processor import ProcessorService, build_default_processor

router = APIRouter()


def get_processor() -> ProcessorService:
    return build_default_processor()


@router.post(
    "/readings",
    response_model=ImportResult,
    summary="Import a CSV file of indoor/outdoor readings.",
)
def import_readings(
    file: UploadFile = File(..., description="CSV file with timestamp, location, temperature, humidity."),
    processor: ProcessorService = Depends(get_processor),
) -> ImportResult:
    try:
        return processor.import_upload(file)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()


@router.get(
    "/readings/count",
    response_model=ReadingCount,
    summary="Number of readings currently stored.",
)
def count_readings(
    processor: ProcessorService = Depends(get_processor),
) -> ReadingCount:
    return ReadingCount(count=processor.store.count())


@router.get(
    "/analytics/average-temperature",
    response_model=AverageTemperature,
    summary="Mean temperature for a single day at a location.",
)
def average_temperature(
    day: date = Query(..., description="Calendar day, YYYY-MM-DD."),
    location: Location = Query(Location.outdoor),
    processor: ProcessorService = Depends(get_processor),
) -> AverageTemperature:
    value = analytics.average_temperature_for_date(processor.readings(), day, location)
    return AverageTemperature(day=day, location=location, average_temperature=value)


@router.get(
    "/analytics/temperature",
    response_model=List[DayValue],
    summary="Days ranked from warmest to coldest.",
)
def temperature_ranking(
    location: Location = Query(Location.outdoor),
    processor: ProcessorService = Depends(get_processor),
) -> List[DayValue]:
    ranking = analytics.sort_days_by_temperature(processor.readings(), location)
    return [DayValue.from_daily(item) for item in ranking]


@router.get(
    "/analytics/humidity",
    response_model=List[DayValue],
    summary="Days ranked from driest to most humid.",
)
def humidity_ranking(
    location: Location = Query(Location.outdoor),
    processor: ProcessorService = Depends(get_processor),
) -> List[DayValue]:
    ranking = analytics.sort_days_by_humidity(processor.readings(), location)
    return [DayValue.from_daily(item) for item in ranking]


@router.get(
    "/analytics/mold-risk",
    response_model=List[DayValue],
    summary="Days ranked from lowest to highest mold risk.",
)
def mold_risk_ranking(
    location: Location = Query(Location.outdoor),
    processor: ProcessorService = Depends(get_processor),
) -> List[DayValue]:
    ranking = analytics.sort_days_by_mold_risk(processor.readings(), location)
    return [DayValue.from_daily(item) for item in ranking]


@router.get(
    "/analytics/seasons/{season}",
    response_model=SeasonOnset,
    summary="Onset day of meteorological autumn or winter.",
)
def season_onset(
    season: Season,
    processor: ProcessorService = Depends(get_processor),
) -> SeasonOnset:
    onset = analytics.find_season_onset(processor.readings(), season)
    return SeasonOnset(season=season, onset=onset)


@router.get(
    "/analytics/balcony-door",
    response_model=List[DayMinutes],
    summary="Estimated minutes per day the balcony door was open.",
)
def balcony_door(
    processor: ProcessorService = Depends(get_processor),
) -> List[DayMinutes]:
    totals = analytics.calculate_balcony_open_time(processor.readings())
    return [DayMinutes.from_daily(item) for item in totals]


@router.get(
    "/analytics/temperature-difference",
    response_model=List[DayValue],
    summary="Days ranked by mean indoor/outdoor temperature difference.",
)
def temperature_difference(
    processor: ProcessorService = Depends(get_processor),
) -> List[DayValue]:
    ranking = analytics.sort_days_by_temperature_difference(processor.readings())
    return [DayValue.from_daily(item) for item in ranking]


@router.get(
    "/report",
    response_model=AnalysisReport,
    summary="All rankings and detections for one location.",
)
def report(
    location: Location = Query(Location.outdoor),
    processor: ProcessorService = Depends(get_processor),
) -> AnalysisReport:
    return processor.build_report(location)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}

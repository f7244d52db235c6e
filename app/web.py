from __future__ import annotations

from pathlib import Path
from typing import Sequence, TypeVar

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from models.records import Location
from services.processor import ProcessorService, build_default_processor


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

T = TypeVar("T")

DEFAULT_TOP = 5


def get_processor() -> ProcessorService:
    return build_default_processor()


def _tail(items: Sequence[T], count: int) -> list[T]:
    """Last ``count`` items, last one first."""
    return list(reversed(items[-count:])) if count > 0 else []


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
def ui_index(
    request: Request,
    location: Location = Query(Location.outdoor),
    top: int = Query(DEFAULT_TOP, ge=1, le=100),
    processor: ProcessorService = Depends(get_processor),
) -> HTMLResponse:
    report = processor.build_report(location)
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "report": report,
            "locations": list(Location),
            "hottest": report.temperature[:top],
            "coldest": _tail(report.temperature, top),
            "driest": report.humidity[:top],
            "most_humid": _tail(report.humidity, top),
            "highest_mold_risk": _tail(report.mold_risk, top),
            "balcony_door": report.balcony_door[:top],
            "temperature_difference": report.temperature_difference[:top],
        },
    )

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _format_value(value: Optional[float], unit: str = "") -> str:
    if value is None:
        return "no data"
    return f"{value:.1f}{unit}"


def echo_day_rows(
    title: str,
    rows: List[Dict[str, Any]],
    field: str = "value",
    unit: str = "",
) -> None:
    typer.echo()
    echo_heading(title)
    if not rows:
        typer.echo("No data available.")
        return
    for row in rows:
        value = row.get(field)
        text = str(value) if field == "minutes" else _format_value(value, unit)
        typer.echo(f"  - {row.get('day')}: {text}")


def render_import_result(payload: Dict[str, Any]) -> None:
    echo_heading("Import Result")
    echo_key_values(
        [
            ("source", payload.get("source")),
            ("status", payload.get("status")),
            ("row_count", payload.get("row_count")),
            ("imported_at", payload.get("imported_at")),
            ("processing_ms", payload.get("processing_ms")),
        ]
    )

    errors = payload.get("errors") or []
    typer.echo()
    echo_heading("Errors")
    if errors:
        for error in errors:
            typer.echo(
                f"  - row {error.get('row_number')}: {error.get('reason')}"
            )
    else:
        typer.echo("No errors recorded.")


def render_report(payload: Dict[str, Any], top: int) -> None:
    echo_heading(f"Climate Report ({payload.get('location')})")
    echo_key_values(
        [
            ("reading_count", payload.get("reading_count")),
            ("autumn_onset", payload.get("autumn_onset") or "not reached"),
            ("winter_onset", payload.get("winter_onset") or "not reached"),
        ]
    )

    temperature = payload.get("temperature") or []
    humidity = payload.get("humidity") or []
    mold_risk = payload.get("mold_risk") or []

    echo_day_rows("Warmest days", temperature[:top], unit=" C")
    echo_day_rows("Coldest days", temperature[::-1][:top], unit=" C")
    echo_day_rows("Driest days", humidity[:top], unit=" %")
    echo_day_rows("Most humid days", humidity[::-1][:top], unit=" %")
    echo_day_rows("Highest mold risk", mold_risk[::-1][:top])
    echo_day_rows(
        "Balcony door open (minutes)",
        (payload.get("balcony_door") or [])[:top],
        field="minutes",
    )
    echo_day_rows(
        "Largest indoor/outdoor difference",
        (payload.get("temperature_difference") or [])[:top],
        unit=" C",
    )


def render_average(payload: Dict[str, Any]) -> None:
    value = payload.get("average_temperature")
    typer.echo(
        f"{payload.get('day')} {payload.get('location')}: {_format_value(value, ' C')}"
    )


def render_season(payload: Dict[str, Any]) -> None:
    onset = payload.get("onset")
    typer.echo(f"{payload.get('season')}: {onset or 'not reached'}")

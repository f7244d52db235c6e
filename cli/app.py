from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_average, render_import_result, render_report, render_season
from models.records import Location
from services.analytics import Season


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the climate insights service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("import")
def import_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to CSV file."),
) -> None:
    """Import a CSV file of readings; bad rows are skipped and listed."""
    state = _get_state(ctx)
    typer.echo(f"Importing {file} into {state.config.base_url} ...")
    result = state.client.import_file(file)
    colour = typer.colors.GREEN if result.get("status") == "processed" else typer.colors.YELLOW
    typer.secho(f"Import {result.get('status')}. rows={result.get('row_count')}", fg=colour)
    typer.echo()
    render_import_result(result)
    if result.get("status") == "failed":
        raise typer.Exit(code=1)


@app.command("report")
def report_command(
    ctx: typer.Context,
    location: Location = typer.Option(Location.outdoor, "--location", "-l"),
    top: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Rows shown per ranking."),
) -> None:
    """Show rankings, season onsets and balcony door estimates."""
    state = _get_state(ctx)
    payload = state.client.get_report(location.value)
    render_report(payload, top=top if top is not None else state.config.top_n)


@app.command("average")
def average_command(
    ctx: typer.Context,
    day: datetime = typer.Argument(..., formats=["%Y-%m-%d"], help="Calendar day, YYYY-MM-DD."),
    location: Location = typer.Option(Location.outdoor, "--location", "-l"),
) -> None:
    """Mean temperature for one day at a location."""
    state = _get_state(ctx)
    payload = state.client.get_average_temperature(day.date().isoformat(), location.value)
    render_average(payload)


@app.command("season")
def season_command(
    ctx: typer.Context,
    season: Season = typer.Argument(..., help="autumn or winter."),
) -> None:
    """Onset day of meteorological autumn or winter."""
    state = _get_state(ctx)
    payload = state.client.get_season_onset(season.value)
    render_season(payload)

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the climate insights service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def import_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise typer.BadParameter(f"File {path} does not exist.")
        if not path.is_file():
            raise typer.BadParameter(f"Path {path} is not a file.")

        with path.open("rb") as handle:
            return self._request(
                "POST",
                "/readings",
                files={"file": (path.name, handle, "text/csv")},
            )

    def get_report(self, location: str) -> Dict[str, Any]:
        return self._request("GET", "/report", params={"location": location})

    def get_average_temperature(self, day: str, location: str) -> Dict[str, Any]:
        return self._request(
            "GET",
            "/analytics/average-temperature",
            params={"day": day, "location": location},
        )

    def get_season_onset(self, season: str) -> Dict[str, Any]:
        return self._request("GET", f"/analytics/seasons/{season}")

    def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.RequestError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Optional[Any] = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except (ValueError, AttributeError):
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

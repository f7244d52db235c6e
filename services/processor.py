"""Import orchestration and report assembly over the reading store."""

from __future__ import annotations

import csv
import io
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from fastapi import UploadFile

from app.schemas import (
    AnalysisReport,
    DayMinutes,
    DayValue,
    ImportResult,
    ImportStatus,
    RowError,
)
from datastore.reading_store import ReadingStore, build_default_store
from models.records import DailyValue, Location, Reading
from services import analytics
from settings import get_settings

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("timestamp", "location", "temperature", "humidity")

# Undecodable bytes are decoded to this character and rejected per row.
UNDECODABLE = "\ufffd"


class RowRejected(ValueError):
    """Raised for a single row that cannot become a reading."""


def _parse_timestamp(value: str) -> datetime:
    # Wall-clock value as written; an offset is dropped, never applied.
    try:
        return datetime.fromisoformat(value).replace(tzinfo=None)
    except ValueError as exc:
        raise RowRejected("invalid timestamp") from exc


def _parse_row(row: dict, columns: dict) -> Reading:
    timestamp_raw = (row.get(columns["timestamp"]) or "").strip()
    location_raw = (row.get(columns["location"]) or "").strip()
    temperature_raw = (row.get(columns["temperature"]) or "").strip()
    humidity_raw = (row.get(columns["humidity"]) or "").strip()

    if any(UNDECODABLE in raw for raw in (timestamp_raw, location_raw, temperature_raw, humidity_raw)):
        raise RowRejected("invalid encoding")

    if not timestamp_raw:
        raise RowRejected("missing timestamp")
    timestamp = _parse_timestamp(timestamp_raw)

    if not location_raw:
        raise RowRejected("missing location")

    if not temperature_raw:
        raise RowRejected("missing temperature")
    try:
        temperature = float(temperature_raw)
    except ValueError as exc:
        raise RowRejected("invalid temperature") from exc

    if not humidity_raw:
        raise RowRejected("missing humidity")
    try:
        humidity = int(humidity_raw)
    except ValueError as exc:
        raise RowRejected("invalid humidity") from exc

    return Reading(
        timestamp=timestamp,
        location=location_raw,
        temperature=temperature,
        humidity=humidity,
    )


def parse_readings(
    stream: TextIO,
    delimiter: str = ",",
    source: str = "<stream>",
) -> Tuple[List[Reading], List[RowError]]:
    """Parse delimited text into readings, skipping rows that fail to parse.

    Raises ``ValueError`` only when the header itself is unusable. A row's
    number is the physical line its record ends on, so a quoted field that
    spans lines does not shift the numbers of later rows.
    """
    reader = csv.DictReader(stream, delimiter=delimiter)
    try:
        fieldnames = reader.fieldnames
    except csv.Error as exc:
        raise ValueError(f"CSV header could not be parsed: {exc}") from exc
    if not fieldnames:
        raise ValueError("CSV file is missing a header row.")

    normalized = {name.lower().strip(): name for name in fieldnames if name}
    missing = [column for column in REQUIRED_COLUMNS if column not in normalized]
    if missing:
        raise ValueError(f"CSV missing required columns: {', '.join(missing)}")

    readings: List[Reading] = []
    errors: List[RowError] = []
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            _reject(errors, reader.reader.line_num, f"malformed row: {exc}", source)
            continue
        try:
            readings.append(_parse_row(row, normalized))
        except RowRejected as exc:
            _reject(errors, reader.reader.line_num, str(exc), source)
    return readings, errors


def _reject(errors: List[RowError], row_number: int, reason: str, source: str) -> None:
    errors.append(RowError(row_number=row_number, reason=reason))
    logger.warning(
        "Skipping row %d: %s",
        row_number,
        reason,
        extra={"source": source, "row_number": row_number, "reason": reason},
    )


class ProcessorService:
    """Coordinates imports into the store and analysis of its snapshot."""

    def __init__(
        self,
        store: ReadingStore,
        workers: int = 4,
        delimiter: str = ",",
    ) -> None:
        self.store = store
        self.delimiter = delimiter
        self.executor = ThreadPoolExecutor(max_workers=workers)

    def import_upload(self, file: UploadFile) -> ImportResult:
        """Import an uploaded delimited file."""
        source = Path(file.filename or "upload.csv").name
        file.file.seek(0)
        contents = file.file.read()
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        return self.import_bytes(contents, source=source)

    def import_bytes(self, contents: bytes, source: str) -> ImportResult:
        if not contents:
            raise ValueError("Uploaded file is empty.")
        text = contents.decode("utf-8-sig", errors="replace")
        return self.import_stream(io.StringIO(text, newline=""), source=source)

    def import_file(self, path: Path) -> ImportResult:
        try:
            with path.open("r", encoding="utf-8-sig", errors="replace", newline="") as handle:
                return self.import_stream(handle, source=path.name)
        except OSError as exc:
            logger.error(
                "Unable to read %s: %s", path, exc, extra={"source": str(path)}
            )
            return ImportResult(
                source=path.name,
                status=ImportStatus.failed,
                imported_at=datetime.now(timezone.utc),
                errors=[RowError(row_number=1, reason=str(exc))],
            )

    def import_stream(self, stream: TextIO, source: str) -> ImportResult:
        start_time = time.perf_counter()
        readings: List[Reading] = []
        try:
            readings, errors = parse_readings(stream, delimiter=self.delimiter, source=source)
        except ValueError as exc:
            errors = [RowError(row_number=1, reason=str(exc))]
            readings = []

        row_count = self.store.add_many(readings)
        if row_count == 0 and errors:
            status = ImportStatus.failed
        elif errors:
            status = ImportStatus.partial
        else:
            status = ImportStatus.processed

        processing_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Imported %d readings from %s",
            row_count,
            source,
            extra={
                "source": source,
                "status": status.value,
                "row_count": row_count,
                "error_count": len(errors),
                "processing_ms": processing_ms,
            },
        )
        return ImportResult(
            source=source,
            status=status,
            row_count=row_count,
            imported_at=datetime.now(timezone.utc),
            processing_ms=processing_ms,
            errors=errors,
        )

    def load_if_empty(self, path: Path) -> Optional[ImportResult]:
        """Seed the store from ``path`` unless it already holds readings."""
        if not self.store.is_empty():
            logger.info(
                "Store already populated; skipping seed import of %s",
                path,
                extra={"source": str(path), "row_count": self.store.count()},
            )
            return None
        return self.import_file(path)

    def readings(self) -> Tuple[Reading, ...]:
        return self.store.scan()

    def build_report(self, location: Location = Location.outdoor) -> AnalysisReport:
        """Run every analysis concurrently over one snapshot of the store."""
        snapshot = self.store.scan()
        submit = self.executor.submit
        temperature = submit(analytics.sort_days_by_temperature, snapshot, location)
        humidity = submit(analytics.sort_days_by_humidity, snapshot, location)
        mold_risk = submit(analytics.sort_days_by_mold_risk, snapshot, location)
        autumn = submit(analytics.find_meteorological_autumn, snapshot)
        winter = submit(analytics.find_meteorological_winter, snapshot)
        balcony = submit(analytics.calculate_balcony_open_time, snapshot)
        difference = submit(analytics.sort_days_by_temperature_difference, snapshot)

        return AnalysisReport(
            location=location,
            reading_count=len(snapshot),
            temperature=_day_values(temperature.result()),
            humidity=_day_values(humidity.result()),
            mold_risk=_day_values(mold_risk.result()),
            autumn_onset=autumn.result(),
            winter_onset=winter.result(),
            balcony_door=[DayMinutes.from_daily(item) for item in balcony.result()],
            temperature_difference=_day_values(difference.result()),
        )

    def shutdown(self) -> None:
        """Clean up executor resources during application shutdown."""
        self.executor.shutdown(wait=False, cancel_futures=True)


def _day_values(items: Iterable[DailyValue]) -> List[DayValue]:
    return [DayValue.from_daily(item) for item in items]


@lru_cache
def build_default_processor(
    workers: Optional[int] = None,
) -> ProcessorService:
    """Factory that wires the processor with the default store."""
    settings = get_settings()
    return ProcessorService(
        store=build_default_store(),
        workers=workers or settings.processor_workers,
        delimiter=settings.csv_delimiter,
    )

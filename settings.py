from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_STORE_PATH_ENV = "READINGS_STORE_PATH"
_SEED_CSV_ENV = "READINGS_SEED_CSV"
_DELIMITER_ENV = "CSV_DELIMITER"
_WORKER_COUNT_ENV = "PROCESSOR_WORKER_COUNT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    store_path: Optional[str]
    seed_csv_path: Optional[str]
    csv_delimiter: str
    processor_workers: int
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_delimiter(default: str) -> str:
    value = os.getenv(_DELIMITER_ENV)
    if value is None:
        return default
    if value == "\\t":
        return "\t"
    return value if len(value) == 1 else default


def _read_worker_count(default: int) -> int:
    value = os.getenv(_WORKER_COUNT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        store_path=_read_optional_env(_STORE_PATH_ENV, "./tmp/readings.json"),
        seed_csv_path=_read_optional_env(_SEED_CSV_ENV, None),
        csv_delimiter=_read_delimiter(","),
        processor_workers=_read_worker_count(4),
        log_level=_read_log_level("INFO"),
    )

"""Unit tests for the reading store."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from datastore.reading_store import ReadingStore
from models.records import Reading


def _sample_readings() -> list[Reading]:
    return [
        Reading(timestamp=datetime(2024, 1, 1, 12, 0), location="Indoor", temperature=21.5, humidity=40),
        Reading(timestamp=datetime(2024, 1, 1, 12, 0), location="Outdoor", temperature=-3.25, humidity=88),
    ]


def test_add_many_and_scan_returns_snapshot() -> None:
    store = ReadingStore(name="readings")

    added = store.add_many(_sample_readings())
    snapshot = store.scan()
    store.add_many(_sample_readings()[:1])

    assert added == 2
    assert isinstance(snapshot, tuple)
    assert list(snapshot) == _sample_readings()
    assert store.count() == 3


def test_empty_store_and_clear() -> None:
    store = ReadingStore(name="readings")

    assert store.is_empty()
    assert store.add_many([]) == 0

    store.add_many(_sample_readings())
    assert not store.is_empty()

    store.clear()
    assert store.is_empty()
    assert store.scan() == ()


def test_add_many_persists_to_disk_and_reloads(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "readings.json"
    store = ReadingStore(name="readings", persistence_path=path)

    store.add_many(_sample_readings())

    assert path.exists()
    payload = json.loads(path.read_text())
    assert payload[0]["location"] == "Indoor"
    assert payload[0]["timestamp"] == "2024-01-01T12:00:00"

    reloaded = ReadingStore(name="readings", persistence_path=path)
    assert list(reloaded.scan()) == _sample_readings()


def test_unreadable_file_loads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "readings.json"
    path.write_text("{not json")

    store = ReadingStore(name="readings", persistence_path=path)

    assert store.is_empty()

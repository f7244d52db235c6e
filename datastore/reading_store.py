from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Iterable, List, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from models.records import Reading
from settings import get_settings

logger = logging.getLogger(__name__)

_READINGS_ADAPTER = TypeAdapter(List[Reading])


class ReadingStore:
    """Holds every imported reading, optionally mirrored to a JSON file."""

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._items: List[Reading] = []
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def add_many(self, readings: Iterable[Reading]) -> int:
        batch = list(readings)
        if not batch:
            return 0
        with self._lock:
            self._items.extend(batch)
            self._persist()
        return len(batch)

    def scan(self) -> Tuple[Reading, ...]:
        """Return an immutable snapshot of all stored readings in insertion order."""

        with self._lock:
            return tuple(self._items)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def is_empty(self) -> bool:
        return self.count() == 0

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._persist()

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = _READINGS_ADAPTER.dump_python(self._items, mode="json")
        self.persistence_path.write_text(json.dumps(payload, indent=2))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            self._items = _READINGS_ADAPTER.validate_python(json.loads(raw))
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning(
                "Ignoring unreadable store file %s: %s",
                self.persistence_path,
                exc,
                extra={"source": str(self.persistence_path)},
            )
            self._items = []


@lru_cache
def build_default_store(path: Optional[str] = None) -> ReadingStore:
    settings = get_settings()
    store_path = settings.store_path if path is None else path
    persistence = Path(store_path) if store_path else None
    return ReadingStore(name="readings", persistence_path=persistence)

# lifeos_travel/api/store.py
"""Document store collaborator.

Records are plain dicts grouped into named collections (``itineraries``,
``publicItineraries``, ``journal``). The store hands out deep copies so a
caller can never mutate stored state in place. When a path is configured the
whole store is mirrored to a JSON file after every write.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import threading
import uuid
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

ITINERARIES = "itineraries"
PUBLIC_ITINERARIES = "publicItineraries"
JOURNAL = "journal"


class DocumentStore:
    """Thread-safe in-memory collections with optional JSON persistence."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.lock = threading.Lock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

        if path and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as fh:
                self._collections = json.load(fh)
            logger.info(f"Loaded document store from {path}")

    def load(self, collection: str) -> List[Dict[str, Any]]:
        """Return every record of ``collection``."""
        with self.lock:
            return [copy.deepcopy(r) for r in self._collections.get(collection, {}).values()]

    def get(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        with self.lock:
            record = self._collections.get(collection, {}).get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def add(self, collection: str, record: Dict[str, Any]) -> str:
        """Insert ``record`` under a new id and return the id."""
        record_id = uuid.uuid4().hex
        self.set(collection, record_id, record)
        return record_id

    def set(self, collection: str, record_id: str, record: Dict[str, Any]) -> None:
        """Create or replace the record stored under ``record_id``."""
        stored = copy.deepcopy(record)
        stored["id"] = record_id
        with self.lock:
            self._collections.setdefault(collection, {})[record_id] = stored
            self._flush()

    def update(self, collection: str, record_id: str, partial: Dict[str, Any]) -> None:
        """Merge ``partial`` into an existing record.

        Raises:
            KeyError: no such record
        """
        with self.lock:
            records = self._collections.get(collection, {})
            if record_id not in records:
                raise KeyError(f"{collection}/{record_id}")
            records[record_id].update(copy.deepcopy(partial))
            self._flush()

    def remove(self, collection: str, record_id: str) -> bool:
        """Delete a record; returns False when it did not exist."""
        with self.lock:
            removed = self._collections.get(collection, {}).pop(record_id, None) is not None
            if removed:
                self._flush()
            return removed

    def _flush(self) -> None:
        # Caller holds the lock
        if not self.path:
            return
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(self._collections, fh, indent=2)
        os.replace(tmp_path, self.path)
        logger.debug(f"Flushed document store to {self.path}")


__all__ = ["DocumentStore", "ITINERARIES", "PUBLIC_ITINERARIES", "JOURNAL"]

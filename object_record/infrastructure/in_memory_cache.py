"""In-Memory Cache — normalized record store keyed by (type name, record id).

Invariants:
    - write_entity is a per-field upsert applied atomically under the lock
      (no reader ever sees half of one write)
    - read_entity returns a deep copy, or None when the key is absent
    - Entries live until evicted or the store is cleared; no garbage collection

Design Decisions:
    - RLock around a plain dict: readers and the normalizer may run on different
      threads in embedding hosts, and single-threaded callers pay almost nothing
    - Deep copies on both sides: callers can mutate what they pass in or get back
      without touching stored state
"""

import copy
import logging
import threading
from typing import Any

from object_record.core.domain_types import CacheKey, RecordId, TypeName

logger = logging.getLogger(__name__)


class InMemoryCache:
    """Process-local implementation of the CacheStore protocol."""

    def __init__(self, entries: dict[CacheKey, dict[str, Any]] | None = None):
        self._lock = threading.RLock()
        self._entries: dict[CacheKey, dict[str, Any]] = {}
        if entries:
            self.restore(entries)

    def read_entity(
        self, type_name: TypeName, record_id: RecordId,
    ) -> dict[str, Any] | None:
        with self._lock:
            entity = self._entries.get((type_name, record_id))
            return copy.deepcopy(entity) if entity is not None else None

    def write_entity(
        self, type_name: TypeName, record_id: RecordId, fields: dict[str, Any],
    ) -> None:
        incoming = copy.deepcopy(fields)
        with self._lock:
            entity = self._entries.setdefault((type_name, record_id), {})
            entity.update(incoming)
        logger.debug(
            f"Cache write {type_name}:{record_id} ({len(incoming)} fields)",
            extra={"type_name": type_name, "record_id": record_id},
        )

    def evict(self, type_name: TypeName, record_id: RecordId) -> bool:
        """Drop one entry. Returns False when it was not cached."""
        with self._lock:
            return self._entries.pop((type_name, record_id), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def extract(self) -> dict[CacheKey, dict[str, Any]]:
        """Snapshot of the whole store."""
        with self._lock:
            return copy.deepcopy(self._entries)

    def restore(self, entries: dict[CacheKey, dict[str, Any]]) -> None:
        """Replace the whole store with `entries`."""
        snapshot = copy.deepcopy(entries)
        with self._lock:
            self._entries = snapshot

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

"""Boundary Protocols — contracts between core and the cache store.

Invariants:
    - Core NEVER imports a concrete store; dependency arrows point inward only
    - read_entity returns None for a missing entry, it never raises for absence
    - write_entity is an upsert of exactly the given fields (last write wins per field)
    - Values returned by read_entity are owned by the caller (copies, not store internals)

Design Decisions:
    - Protocol over ABC: structural subtyping, any store with these two methods works
      (ADR: ExMA anti-pattern)
    - Synchronous methods: every caller runs on one logical thread, nothing suspends
"""

from typing import Any, Protocol

from object_record.core.domain_types import RecordId, TypeName


class CacheStore(Protocol):
    """Contract for the normalized record store, implemented by infrastructure."""
    def read_entity(
        self, type_name: TypeName, record_id: RecordId,
    ) -> dict[str, Any] | None: ...
    def write_entity(
        self, type_name: TypeName, record_id: RecordId, fields: dict[str, Any],
    ) -> None: ...

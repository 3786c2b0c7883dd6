"""Compute Optimistic Record — entry point called just before a mutation is dispatched.

Invariants:
    - Read-only with respect to the cache
    - Core errors propagate unchanged after one log line; no partial result is returned
    - A relation id that misses the cache is logged at DEBUG, never raised

Design Decisions:
    - Logging output is configured by the host via
      infrastructure.observability.setup_logging(), which reads Settings
    - typename_key taken from Settings so embedding hosts can rename the marker
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from object_record.config import get_settings
from object_record.core.cache_protocols import CacheStore
from object_record.core.compute_optimistic_record import compute_optimistic_record
from object_record.core.errors import ObjectRecordError
from object_record.schemas.object_metadata import ObjectMetadataItem

logger = logging.getLogger(__name__)


def compute_optimistic_record_from_input(
    object_metadata_items: Sequence[ObjectMetadataItem],
    object_metadata_item: ObjectMetadataItem,
    record_input: Mapping[str, Any],
    cache: CacheStore,
) -> dict[str, Any]:
    settings = get_settings()
    try:
        record = compute_optimistic_record(
            object_metadata_items, object_metadata_item,
            record_input, cache, settings.typename_key,
        )
    except ObjectRecordError as e:
        logger.error(
            f"Optimistic record rejected: {e.message}",
            extra={
                "error_code": e.code,
                "object_name": object_metadata_item.name_singular,
                "unknown_fields": getattr(e, "unknown_fields", None),
            },
        )
        raise

    if settings.log_cache_misses:
        _log_cache_misses(object_metadata_item, record_input, record)
    return record


def _log_cache_misses(
    object_metadata_item: ObjectMetadataItem,
    record_input: Mapping[str, Any],
    record: dict[str, Any],
) -> None:
    for f in object_metadata_item.relation_fields:
        related_id = record_input.get(f.relation_id_key)
        if related_id is None or f.name in record:
            continue
        logger.debug(
            f"{f.relation_target_object_metadata_name_singular} '{related_id}' "
            f"not cached, {f.name} left unresolved",
            extra={
                "object_name": object_metadata_item.name_singular,
                "field_name": f.name,
                "record_id": related_id,
            },
        )

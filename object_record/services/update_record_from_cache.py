"""Update Record From Cache — entry point called when authoritative record data arrives.

Invariants:
    - Sole mutator of the cache store
    - Only fields declared on the given (possibly filtered) metadata are written
    - Normalizing the same record twice leaves the store as normalizing it once

Design Decisions:
    - Logging output is configured by the host via
      infrastructure.observability.setup_logging(), which reads Settings
    - Callers filter object_metadata_item.fields themselves to write a partial
      projection (e.g. only the id) without clobbering fields they did not fetch
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from object_record.config import get_settings
from object_record.core.cache_protocols import CacheStore
from object_record.core.errors import ObjectRecordError
from object_record.core.record_cache import normalize_record
from object_record.schemas.object_metadata import ObjectMetadataItem

logger = logging.getLogger(__name__)


def update_record_from_cache(
    object_metadata_items: Sequence[ObjectMetadataItem],
    object_metadata_item: ObjectMetadataItem,
    record: Mapping[str, Any],
    cache: CacheStore,
) -> None:
    settings = get_settings()
    try:
        reference = normalize_record(
            object_metadata_items, object_metadata_item,
            record, cache, settings.typename_key,
        )
    except ObjectRecordError as e:
        logger.error(
            f"Record normalization failed: {e.message}",
            extra={
                "error_code": e.code,
                "object_name": object_metadata_item.name_singular,
            },
        )
        raise
    logger.debug(
        f"Normalized {reference.type_name}:{reference.record_id}",
        extra={
            "object_name": object_metadata_item.name_singular,
            "record_id": reference.record_id,
        },
    )

"""Record Cache — read and normalize records against a CacheStore.

Invariants:
    - Entities are keyed by (ObjectMetadataItem.name_singular, record id)
    - read_record_from_cache never raises for a missing entity (absence returns None)
    - read_record_from_cache never writes to the store
    - normalize_record writes only fields declared on the metadata it is given,
      plus the record id and the typename marker; fields it does not write are
      left untouched in the store
    - normalize_record is all-or-nothing: nothing is written unless every
      nested record resolves
    - Nested relation objects carrying an id are stored as CacheReference, one
      entity per (type, id)

Design Decisions:
    - Denormalization on read: callers get plain nested dicts, references never leak
    - A reference back to an entity already being read yields {"id": ...} to cut cycles
    - A dangling reference reads as None, same as an explicit empty relation
"""

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from object_record.core.cache_protocols import CacheStore
from object_record.core.domain_types import (
    CacheKey, CacheReference, RecordId, TypeName,
    RECORD_ID_FIELD, TYPENAME_KEY,
)
from object_record.core.errors import (
    ErrorContext, MissingRecordIdError, ObjectMetadataItemNotFoundError,
)
from object_record.schemas.object_metadata import (
    FieldMetadata, ObjectMetadataItem, find_object_metadata_item,
)


# --- Read ---------------------------------------------------------------------

def read_record_from_cache(
    object_metadata_items: Iterable[ObjectMetadataItem],
    object_metadata_item: ObjectMetadataItem,
    record_id: str,
    cache: CacheStore,
    typename_key: str = TYPENAME_KEY,
) -> dict[str, Any] | None:
    """Denormalized record for (object type, id), or None when not cached."""
    key = (TypeName(object_metadata_item.name_singular), RecordId(record_id))
    return _read_entity(
        key, object_metadata_item, list(object_metadata_items),
        cache, typename_key, frozenset(),
    )


def _read_entity(
    key: CacheKey,
    object_metadata_item: ObjectMetadataItem | None,
    object_metadata_items: list[ObjectMetadataItem],
    cache: CacheStore,
    typename_key: str,
    visited: frozenset[CacheKey],
) -> dict[str, Any] | None:
    entity = cache.read_entity(*key)
    if entity is None:
        return None
    if object_metadata_item is not None:
        allowed = {RECORD_ID_FIELD, typename_key, *object_metadata_item.field_names}
        for f in object_metadata_item.relation_fields:
            allowed.add(f.relation_id_key)
        entity = {k: v for k, v in entity.items() if k in allowed}
    visited = visited | {key}
    return {
        k: _denormalize(v, object_metadata_items, cache, typename_key, visited)
        for k, v in entity.items()
    }


def _denormalize(
    value: Any,
    object_metadata_items: list[ObjectMetadataItem],
    cache: CacheStore,
    typename_key: str,
    visited: frozenset[CacheKey],
) -> Any:
    if isinstance(value, CacheReference):
        if value.key in visited:
            return {RECORD_ID_FIELD: value.record_id}
        target = find_object_metadata_item(object_metadata_items, value.type_name)
        return _read_entity(
            value.key, target, object_metadata_items, cache, typename_key, visited,
        )
    if isinstance(value, list):
        return [
            _denormalize(v, object_metadata_items, cache, typename_key, visited)
            for v in value
        ]
    return value


# --- Normalize ----------------------------------------------------------------

def normalize_record(
    object_metadata_items: Iterable[ObjectMetadataItem],
    object_metadata_item: ObjectMetadataItem,
    record: Mapping[str, Any],
    cache: CacheStore,
    typename_key: str = TYPENAME_KEY,
) -> CacheReference:
    """Upsert `record` (and nested relation objects) into the store.

    All writes are collected first and applied only once the whole record
    tree has normalized, so a failure leaves the store untouched.
    """
    writes: list[tuple[CacheKey, dict[str, Any]]] = []
    reference = _collect_writes(
        list(object_metadata_items), object_metadata_item, record, typename_key, writes,
    )
    for (type_name, record_id), fields in writes:
        cache.write_entity(type_name, record_id, fields)
    return reference


def _collect_writes(
    object_metadata_items: list[ObjectMetadataItem],
    object_metadata_item: ObjectMetadataItem,
    record: Mapping[str, Any],
    typename_key: str,
    writes: list[tuple[CacheKey, dict[str, Any]]],
) -> CacheReference:
    record_id = record.get(RECORD_ID_FIELD)
    if record_id is None:
        raise MissingRecordIdError(
            object_metadata_item.name_singular, record_keys=list(record),
        )

    fields: dict[str, Any] = {RECORD_ID_FIELD: record_id}
    for f in object_metadata_item.fields:
        if f.is_relation and f.relation_id_key in record:
            fields[f.relation_id_key] = record[f.relation_id_key]
        if f.name not in record:
            continue
        if f.is_relation:
            fields[f.name] = _collect_relation_value(
                object_metadata_items, f, record[f.name], str(record_id),
                typename_key, writes,
            )
        else:
            fields[f.name] = copy.deepcopy(record[f.name])
    if typename_key in record:
        fields[typename_key] = record[typename_key]

    reference = CacheReference(
        TypeName(object_metadata_item.name_singular), RecordId(str(record_id)),
    )
    writes.append((reference.key, fields))
    return reference


def _collect_relation_value(
    object_metadata_items: list[ObjectMetadataItem],
    relation_field: FieldMetadata,
    value: Any,
    parent_id: str,
    typename_key: str,
    writes: list[tuple[CacheKey, dict[str, Any]]],
) -> Any:
    if value is None:
        return None
    if isinstance(value, list):
        return [
            _collect_relation_value(
                object_metadata_items, relation_field, v, parent_id,
                typename_key, writes,
            )
            for v in value
        ]
    if not isinstance(value, Mapping) or value.get(RECORD_ID_FIELD) is None:
        # No identity to key by: kept embedded in the parent entity
        return copy.deepcopy(value)

    target_name = relation_field.relation_target_object_metadata_name_singular
    target = find_object_metadata_item(object_metadata_items, target_name)
    if target is None:
        raise ObjectMetadataItemNotFoundError(
            target_name, context=ErrorContext(record_id=parent_id),
        )
    return _collect_writes(object_metadata_items, target, value, typename_key, writes)

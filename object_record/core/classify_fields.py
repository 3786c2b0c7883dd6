"""Field Classification — maps RecordInput keys onto object field metadata.

Invariants:
    - All functions are PURE: no IO, no side effects
    - A key is RELATION_ID only if metadata declares a relation field whose
      id-key is exactly that key. A scalar literally named `...Id` stays SCALAR
    - The passthrough key is never UNKNOWN and never SCALAR
    - classify_record_input preserves input key order in every bucket

Design Decisions:
    - One classification per build call, consulted by both validation and resolution
      (avoids re-scanning metadata per step)
    - Relation-id wins over a same-named declared scalar: the id column is the
      relation's storage
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from object_record.core.domain_types import FieldKind, TYPENAME_KEY
from object_record.schemas.object_metadata import ObjectMetadataItem


@dataclass(frozen=True)
class FieldClassification:
    """What one key means for a given object type."""
    key: str
    kind: FieldKind
    relation_field_name: str | None = None
    target_name_singular: str | None = None


@dataclass
class RecordInputClassification:
    """Every RecordInput key bucketed by kind, input order preserved."""
    scalar_keys: list[str] = field(default_factory=list)
    relation_id_fields: list[FieldClassification] = field(default_factory=list)
    relation_object_fields: list[FieldClassification] = field(default_factory=list)
    unknown_keys: list[str] = field(default_factory=list)

    @property
    def touched_relations(self) -> list[str]:
        """Relation base names reached by either their id-key or object-key."""
        names: list[str] = []
        for c in (*self.relation_id_fields, *self.relation_object_fields):
            if c.relation_field_name not in names:
                names.append(c.relation_field_name)
        return names


def build_field_index(
    object_metadata_item: ObjectMetadataItem,
) -> dict[str, FieldClassification]:
    """Key -> classification for every key the object type accepts."""
    index: dict[str, FieldClassification] = {}
    for f in object_metadata_item.fields:
        if not f.is_relation:
            index.setdefault(f.name, FieldClassification(f.name, FieldKind.SCALAR))
            continue
        target = f.relation_target_object_metadata_name_singular
        index[f.name] = FieldClassification(
            f.name, FieldKind.RELATION_OBJECT, f.name, target,
        )
        index[f.relation_id_key] = FieldClassification(
            f.relation_id_key, FieldKind.RELATION_ID, f.name, target,
        )
    return index


def classify_field(
    field_name: str,
    object_metadata_item: ObjectMetadataItem,
    typename_key: str = TYPENAME_KEY,
) -> FieldClassification:
    """Classify a single key against the object's metadata."""
    if field_name == typename_key:
        return FieldClassification(field_name, FieldKind.PASSTHROUGH)
    for f in object_metadata_item.relation_fields:
        if f.relation_id_key == field_name:
            return FieldClassification(
                field_name, FieldKind.RELATION_ID, f.name,
                f.relation_target_object_metadata_name_singular,
            )
    declared = object_metadata_item.get_field(field_name)
    if declared is None:
        return FieldClassification(field_name, FieldKind.UNKNOWN)
    if declared.is_relation:
        return FieldClassification(
            field_name, FieldKind.RELATION_OBJECT, declared.name,
            declared.relation_target_object_metadata_name_singular,
        )
    return FieldClassification(field_name, FieldKind.SCALAR)


def classify_record_input(
    record_input: Mapping[str, Any],
    object_metadata_item: ObjectMetadataItem,
    typename_key: str = TYPENAME_KEY,
) -> RecordInputClassification:
    """Partition all keys of `record_input` in a single metadata scan."""
    index = build_field_index(object_metadata_item)
    result = RecordInputClassification()
    for key in record_input:
        if key == typename_key:
            continue
        classification = index.get(key)
        if classification is None:
            result.unknown_keys.append(key)
        elif classification.kind == FieldKind.SCALAR:
            result.scalar_keys.append(key)
        elif classification.kind == FieldKind.RELATION_ID:
            result.relation_id_fields.append(classification)
        else:
            result.relation_object_fields.append(classification)
    return result

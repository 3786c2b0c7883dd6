"""Optimistic Record — synthesizes the expected post-mutation record from input.

Invariants:
    - All functions are PURE with respect to the cache: lookups only, never writes
    - Unknown keys are rejected all at once, in input order, never silently dropped
    - Unknown-field check runs before the relation exclusivity check
    - The passthrough key is neither validated nor copied to the output
    - A relation-object key is only added when its id-key was in the input

Design Decisions:
    - Classification computed once and shared by validation and resolution
    - Output order: scalars as given, then relation-id keys, then resolved object keys.
      Callers compare structurally, not by key order
"""

import copy
from collections.abc import Mapping, Sequence
from typing import Any

from object_record.core.cache_protocols import CacheStore
from object_record.core.classify_fields import classify_record_input
from object_record.core.domain_types import TYPENAME_KEY, relation_id_key
from object_record.core.errors import ObjectMetadataItemNotFoundError, UnknownFieldError
from object_record.core.reconcile_relations import (
    RelationContribution, check_relation_exclusivity, resolve_relation,
)
from object_record.schemas.object_metadata import (
    ObjectMetadataItem, find_object_metadata_item,
)


def compute_optimistic_record(
    object_metadata_items: Sequence[ObjectMetadataItem],
    object_metadata_item: ObjectMetadataItem,
    record_input: Mapping[str, Any],
    cache: CacheStore,
    typename_key: str = TYPENAME_KEY,
) -> dict[str, Any]:
    """Build the optimistic record for `record_input` on `object_metadata_item`.

    Raises UnknownFieldError, AmbiguousRelationInputError, or
    ObjectMetadataItemNotFoundError when a relation target is not in
    `object_metadata_items`.
    """
    classification = classify_record_input(
        record_input, object_metadata_item, typename_key,
    )

    if classification.unknown_keys:
        raise UnknownFieldError(
            object_metadata_item.name_singular, classification.unknown_keys,
        )

    for relation_field_name in classification.touched_relations:
        check_relation_exclusivity(
            record_input, relation_field_name, relation_id_key(relation_field_name),
        )

    record: dict[str, Any] = {
        key: copy.deepcopy(record_input[key]) for key in classification.scalar_keys
    }

    contributions: list[RelationContribution] = []
    for relation_id in classification.relation_id_fields:
        record[relation_id.key] = record_input[relation_id.key]
        target = find_object_metadata_item(
            object_metadata_items, relation_id.target_name_singular,
        )
        if target is None:
            raise ObjectMetadataItemNotFoundError(relation_id.target_name_singular)
        contributions.append(resolve_relation(
            record_input, relation_id.key, relation_id.relation_field_name,
            object_metadata_items, target, cache, typename_key,
        ))

    for contribution in contributions:
        contribution.merge_into(record)

    return record

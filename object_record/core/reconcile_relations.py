"""Relation Reconciliation — exclusivity check and id-to-object resolution.

Invariants:
    - Both the id-form and object-form key present is an error, whatever the values
      (an explicit None counts as present)
    - resolve_relation is read-only with respect to the cache
    - Three outcomes, never collapsed: NONE (add nothing), NULL (add None), VALUE (add entity)
    - A cache miss is NONE, not NULL: "foreign key known, object not yet fetched"
      must stay distinguishable from "explicitly no relation"

Design Decisions:
    - RelationContribution as explicit tri-state over Optional: an absent key and a
      key holding None are observably different to consumers
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from object_record.core.cache_protocols import CacheStore
from object_record.core.domain_types import ContributionKind, TYPENAME_KEY
from object_record.core.errors import AmbiguousRelationInputError
from object_record.core.record_cache import read_record_from_cache
from object_record.schemas.object_metadata import ObjectMetadataItem


@dataclass(frozen=True)
class RelationContribution:
    """What one relation adds to the optimistic record."""
    kind: ContributionKind
    relation_field_name: str
    value: dict[str, Any] | None = None

    def merge_into(self, record: dict[str, Any]) -> None:
        if self.kind == ContributionKind.NULL:
            record[self.relation_field_name] = None
        elif self.kind == ContributionKind.VALUE:
            record[self.relation_field_name] = self.value


def check_relation_exclusivity(
    record_input: Mapping[str, Any],
    relation_field_name: str,
    relation_id_field_name: str,
) -> None:
    """Raise when `record_input` carries both forms of one relation."""
    if relation_field_name in record_input and relation_id_field_name in record_input:
        raise AmbiguousRelationInputError(relation_field_name, relation_id_field_name)


def resolve_relation(
    record_input: Mapping[str, Any],
    relation_id_field_name: str,
    relation_field_name: str,
    object_metadata_items: Iterable[ObjectMetadataItem],
    target_object_metadata_item: ObjectMetadataItem,
    cache: CacheStore,
    typename_key: str = TYPENAME_KEY,
) -> RelationContribution:
    """Turn the id-form value into its tri-state contribution."""
    if relation_id_field_name not in record_input:
        return RelationContribution(ContributionKind.NONE, relation_field_name)

    related_id = record_input[relation_id_field_name]
    if related_id is None:
        return RelationContribution(ContributionKind.NULL, relation_field_name)

    entity = read_record_from_cache(
        object_metadata_items, target_object_metadata_item,
        str(related_id), cache, typename_key,
    )
    if entity is None:
        return RelationContribution(ContributionKind.NONE, relation_field_name)
    return RelationContribution(ContributionKind.VALUE, relation_field_name, entity)

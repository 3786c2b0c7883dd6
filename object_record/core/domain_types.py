"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - A cache entry is addressed by the (TypeName, RecordId) pair, never by either alone
    - The relation-id key of relation field `r` is always exactly `r + RELATION_ID_SUFFIX`
    - All classification outcomes encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (ADR: error payloads are JSON)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TypeName = NewType("TypeName", str)     # ObjectMetadataItem.name_singular
RecordId = NewType("RecordId", str)

CacheKey = tuple[TypeName, RecordId]


# ─── Constants ───────────────────────────────────────────────────

TYPENAME_KEY = "__typename"
RELATION_ID_SUFFIX = "Id"
RECORD_ID_FIELD = "id"


# ─── Enums ───────────────────────────────────────────────────────

class FieldKind(str, Enum):
    """How a RecordInput key relates to the object's field metadata."""
    SCALAR = "scalar"
    RELATION_ID = "relation_id"
    RELATION_OBJECT = "relation_object"
    PASSTHROUGH = "passthrough"
    UNKNOWN = "unknown"


class ContributionKind(str, Enum):
    """Tri-state outcome of resolving one relation into the optimistic record."""
    NONE = "none"       # add nothing
    NULL = "null"       # add {relation: None}
    VALUE = "value"     # add {relation: entity}


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CacheReference:
    """Pointer stored in place of a nested relation object after normalization."""
    type_name: TypeName
    record_id: RecordId

    @property
    def key(self) -> CacheKey:
        return (self.type_name, self.record_id)


def relation_id_key(relation_field_name: str) -> str:
    """`company` -> `companyId`."""
    return f"{relation_field_name}{RELATION_ID_SUFFIX}"

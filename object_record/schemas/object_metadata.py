"""Object Metadata Schemas — runtime description of dynamic object types.

Invariants:
    - FieldMetadata with a relation target is a relation-object field;
      its id-form key is `name + "Id"`
    - Field names are unique within one ObjectMetadataItem
    - Both camelCase (registry wire names) and snake_case are accepted on input

Design Decisions:
    - Frozen models: a projection (with_fields) is a new item, never an in-place edit
    - Lookups by name are properties computed on demand, metadata lists are short
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from object_record.core.domain_types import relation_id_key


class FieldMetadata(BaseModel):
    """One field of an object type, optionally targeting another object type."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    relation_target_object_metadata_name_singular: str | None = Field(
        None, alias="relationTargetObjectMetadataNameSingular",
    )

    @property
    def is_relation(self) -> bool:
        return self.relation_target_object_metadata_name_singular is not None

    @property
    def relation_id_key(self) -> str | None:
        if not self.is_relation:
            return None
        return relation_id_key(self.name)


class ObjectMetadataItem(BaseModel):
    """An object type: its singular name and declared fields."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name_singular: str = Field(min_length=1, alias="nameSingular")
    fields: tuple[FieldMetadata, ...] = ()

    @field_validator("name_singular")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("nameSingular cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def validate_unique_field_names(self):
        seen: set[str] = set()
        duplicates = []
        for f in self.fields:
            if f.name in seen:
                duplicates.append(f.name)
            seen.add(f.name)
        if duplicates:
            raise ValueError(f"duplicate field names: {', '.join(duplicates)}")
        return self

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def relation_fields(self) -> list[FieldMetadata]:
        return [f for f in self.fields if f.is_relation]

    def get_field(self, name: str) -> FieldMetadata | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def with_fields(self, names: Iterable[str]) -> "ObjectMetadataItem":
        """Projection restricted to `names`, e.g. to normalize only a record's id."""
        wanted = set(names)
        return self.model_copy(
            update={"fields": tuple(f for f in self.fields if f.name in wanted)},
        )


def find_object_metadata_item(
    object_metadata_items: Iterable[ObjectMetadataItem], name_singular: str,
) -> ObjectMetadataItem | None:
    """Locate an object type by singular name; None when absent."""
    for item in object_metadata_items:
        if item.name_singular == name_singular:
            return item
    return None

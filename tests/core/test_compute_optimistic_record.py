"""Optimistic record tests — validation order, scalar pass-through, relation merge.

Tests cover:
    - Scalars copied unchanged, no keys added
    - Relation id: None -> object None, miss -> omitted, hit -> cached entity
    - Passthrough key ignored and never copied
    - Unknown keys rejected together, in input order
    - Both relation forms rejected even when the object form is None
    - Unknown-field check takes precedence over exclusivity
    - Cache is never written while building
"""

import pytest

from object_record.core.compute_optimistic_record import compute_optimistic_record
from object_record.core.errors import (
    AmbiguousRelationInputError,
    ObjectMetadataItemNotFoundError,
    UnknownFieldError,
)
from object_record.core.record_cache import normalize_record
from object_record.schemas.object_metadata import ObjectMetadataItem


# --- Scalars ------------------------------------------------------------------

def test_scalars_pass_through(object_metadata_items, person_metadata, cache):
    record_input = {"city": "Paris", "name": "Ada", "externalId": "ext-1"}
    result = compute_optimistic_record(
        object_metadata_items, person_metadata, record_input, cache,
    )
    assert result == record_input


def test_scalar_values_are_copied(object_metadata_items, person_metadata, cache):
    record_input = {"name": {"firstName": "Ada", "lastName": "Lovelace"}}
    result = compute_optimistic_record(
        object_metadata_items, person_metadata, record_input, cache,
    )
    result["name"]["firstName"] = "Grace"
    assert record_input["name"]["firstName"] == "Ada"


def test_empty_input_gives_empty_record(object_metadata_items, person_metadata, cache):
    assert compute_optimistic_record(object_metadata_items, person_metadata, {}, cache) == {}


def test_typename_not_copied(object_metadata_items, person_metadata, cache):
    result = compute_optimistic_record(
        object_metadata_items, person_metadata,
        {"city": "Paris", "__typename": "Person"}, cache,
    )
    assert result == {"city": "Paris"}


# --- Relations ----------------------------------------------------------------

def test_null_relation_id_adds_null_object(object_metadata_items, person_metadata, cache):
    result = compute_optimistic_record(
        object_metadata_items, person_metadata, {"companyId": None}, cache,
    )
    assert result == {"companyId": None, "company": None}


def test_relation_id_miss_omits_object(object_metadata_items, person_metadata, cache):
    result = compute_optimistic_record(
        object_metadata_items, person_metadata, {"companyId": "123"}, cache,
    )
    assert result == {"companyId": "123"}
    assert "company" not in result


def test_relation_id_hit_adds_entity(
    object_metadata_items, person_metadata, company_metadata, cache,
):
    normalize_record(
        object_metadata_items, company_metadata,
        {"id": "123", "name": "Acme", "__typename": "Company"}, cache,
    )
    result = compute_optimistic_record(
        object_metadata_items, person_metadata,
        {"companyId": "123", "city": "Paris"}, cache,
    )
    assert result == {
        "city": "Paris",
        "companyId": "123",
        "company": {"id": "123", "name": "Acme", "__typename": "Company"},
    }


def test_object_form_alone_is_not_copied(object_metadata_items, person_metadata, cache):
    result = compute_optimistic_record(
        object_metadata_items, person_metadata, {"company": None}, cache,
    )
    assert result == {}


def test_build_does_not_write_cache(
    object_metadata_items, person_metadata, company_metadata, cache,
):
    normalize_record(object_metadata_items, company_metadata, {"id": "123"}, cache)
    before = cache.extract()
    compute_optimistic_record(
        object_metadata_items, person_metadata, {"companyId": "123"}, cache,
    )
    compute_optimistic_record(
        object_metadata_items, person_metadata, {"companyId": "999"}, cache,
    )
    assert cache.extract() == before


def test_returned_entity_is_a_copy(
    object_metadata_items, person_metadata, company_metadata, cache,
):
    normalize_record(
        object_metadata_items, company_metadata, {"id": "123", "name": "Acme"}, cache,
    )
    result = compute_optimistic_record(
        object_metadata_items, person_metadata, {"companyId": "123"}, cache,
    )
    result["company"]["name"] = "Changed"
    assert cache.read_entity("company", "123")["name"] == "Acme"


def test_missing_target_metadata_raises(person_metadata, cache):
    with pytest.raises(ObjectMetadataItemNotFoundError) as exc_info:
        compute_optimistic_record([person_metadata], person_metadata, {"companyId": "1"}, cache)
    assert exc_info.value.name_singular == "company"


# --- Validation ---------------------------------------------------------------

def test_unknown_fields_all_listed(object_metadata_items, person_metadata, cache):
    with pytest.raises(UnknownFieldError) as exc_info:
        compute_optimistic_record(
            object_metadata_items, person_metadata,
            {"unknownField": "x", "other": "y", "city": "Paris"}, cache,
        )
    assert exc_info.value.unknown_fields == ["unknownField", "other"]
    assert exc_info.value.object_name == "person"
    assert str(exc_info.value) == (
        "Should never occur, encountered unknown fields unknownField, other "
        "in objectMetadaItem person"
    )


@pytest.mark.parametrize("company_value", [None, {}, {"id": "123"}])
def test_both_relation_forms_rejected(
    object_metadata_items, person_metadata, cache, company_value,
):
    with pytest.raises(AmbiguousRelationInputError) as exc_info:
        compute_optimistic_record(
            object_metadata_items, person_metadata,
            {"companyId": "123", "company": company_value}, cache,
        )
    assert str(exc_info.value) == (
        "Should never provide relation mutation through anything else than "
        "the fieldId e.g companyId and not company, encountered: company"
    )


def test_unknown_field_checked_before_exclusivity(
    object_metadata_items, person_metadata, cache,
):
    with pytest.raises(UnknownFieldError):
        compute_optimistic_record(
            object_metadata_items, person_metadata,
            {"companyId": "123", "company": None, "bogus": 1}, cache,
        )


def test_exclusivity_applies_to_every_relation(cache):
    opportunity = ObjectMetadataItem.model_validate({
        "nameSingular": "opportunity",
        "fields": [
            {"name": "company", "relationTargetObjectMetadataNameSingular": "company"},
            {"name": "pointOfContact", "relationTargetObjectMetadataNameSingular": "person"},
        ],
    })
    with pytest.raises(AmbiguousRelationInputError) as exc_info:
        compute_optimistic_record(
            [opportunity], opportunity,
            {"companyId": None, "pointOfContactId": "1", "pointOfContact": None}, cache,
        )
    assert exc_info.value.relation_field_name == "pointOfContact"

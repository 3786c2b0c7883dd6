"""Root conftest — shared metadata and cache fixtures."""

import os

import pytest

# Ensure a developer's .env never changes the marker tests rely on
os.environ.setdefault("OBJECT_RECORD_TYPENAME_KEY", "__typename")

from object_record.config import get_settings
from object_record.infrastructure.in_memory_cache import InMemoryCache
from object_record.schemas.object_metadata import ObjectMetadataItem


def _make_object_metadata_items() -> list[ObjectMetadataItem]:
    """Mock registry: person -> company, company -> (accountOwner) workspaceMember."""
    return [
        ObjectMetadataItem.model_validate({
            "nameSingular": "person",
            "fields": [
                {"name": "id"},
                {"name": "name"},
                {"name": "city"},
                {"name": "email"},
                {"name": "externalId"},
                {"name": "company", "relationTargetObjectMetadataNameSingular": "company"},
            ],
        }),
        ObjectMetadataItem.model_validate({
            "nameSingular": "company",
            "fields": [
                {"name": "id"},
                {"name": "name"},
                {"name": "domainName"},
                {
                    "name": "accountOwner",
                    "relationTargetObjectMetadataNameSingular": "workspaceMember",
                },
            ],
        }),
        ObjectMetadataItem.model_validate({
            "nameSingular": "workspaceMember",
            "fields": [
                {"name": "id"},
                {"name": "userEmail"},
            ],
        }),
    ]


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def object_metadata_items():
    return _make_object_metadata_items()


@pytest.fixture
def person_metadata(object_metadata_items):
    return next(i for i in object_metadata_items if i.name_singular == "person")


@pytest.fixture
def company_metadata(object_metadata_items):
    return next(i for i in object_metadata_items if i.name_singular == "company")


@pytest.fixture
def cache():
    return InMemoryCache()

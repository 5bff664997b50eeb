import pytest

from rostersync.contracts.config import CustomAttribute
from rostersync.contracts.exceptions import SchemaRegistrationError
from rostersync.enrichment.connector_schema import build_connector_schema
from rostersync.schema.registry import SchemaRegistry, build_registry


def _by_name(properties: list[dict[str, object]]) -> dict[str, dict[str, object]]:
    return {str(prop["name"]): prop for prop in properties}


def test_account_property_comes_first(registry: SchemaRegistry) -> None:
    properties = build_connector_schema(registry)

    assert properties[0] == {"name": "accountInformation", "type": "string", "labels": ["personAccount"]}


def test_labeled_properties_use_label_and_collection_types(registry: SchemaRegistry) -> None:
    properties = _by_name(build_connector_schema(registry))

    assert properties["skills"] == {"name": "skills", "type": "stringCollection", "labels": ["personSkills"]}
    assert properties["aboutMe"]["type"] == "string"
    assert properties["birthday"]["type"] == "stringCollection"
    assert properties["interests"]["type"] == "string"
    assert "labels" not in properties["interests"]
    assert "jobTitle" not in properties


def test_unlabeled_custom_property_is_searchable_string() -> None:
    properties = _by_name(build_connector_schema(build_registry([CustomAttribute(name="costCenter")])))

    assert properties["costCenter"] == {
        "name": "costCenter",
        "type": "string",
        "isSearchable": True,
        "isQueryable": True,
        "isRetrievable": True,
    }


def test_enabled_labels_restrict_labeled_properties(registry: SchemaRegistry) -> None:
    properties = _by_name(build_connector_schema(registry, enabled_labels=["personSkills"]))

    assert set(properties) == {"accountInformation", "skills", "interests", "schools", "responsibilities", "languages"}


@pytest.mark.parametrize("name", ["cost_center", "a" * 33])
def test_invalid_property_names_rejected(name: str) -> None:
    registry = build_registry([CustomAttribute(name=name)])

    with pytest.raises(SchemaRegistrationError):
        build_connector_schema(registry)

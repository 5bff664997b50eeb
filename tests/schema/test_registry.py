import pytest

from rostersync.contracts.config import CustomAttribute
from rostersync.contracts.exceptions import SchemaRegistrationError
from rostersync.contracts.schema import AttributeDescriptor, Channel, ValueType
from rostersync.schema.attributes import BUILTIN_ATTRIBUTES
from rostersync.schema.registry import SchemaRegistry, build_registry


def test_builtin_names_are_unique() -> None:
    names = [descriptor.name for descriptor in BUILTIN_ATTRIBUTES]

    assert len(names) == len(set(names))


def test_classify_known_primary_attribute(registry: SchemaRegistry) -> None:
    descriptor = registry.classify("jobTitle")

    assert descriptor.channel is Channel.PRIMARY
    assert descriptor.max_length == 128


def test_classify_labeled_enrichment_attribute(registry: SchemaRegistry) -> None:
    descriptor = registry.classify("skills")

    assert descriptor.channel is Channel.ENRICHMENT
    assert descriptor.value_type is ValueType.ARRAY
    assert descriptor.external_label == "personSkills"


def test_classify_unknown_name_is_unrecognized(registry: SchemaRegistry) -> None:
    descriptor = registry.classify("favouriteColour")

    assert descriptor.channel is Channel.UNRECOGNIZED
    assert "favouriteColour" not in registry


def test_unlabeled_enrichment_array_rejected_at_registration() -> None:
    bad = AttributeDescriptor(name="hobbies", value_type=ValueType.ARRAY, channel=Channel.ENRICHMENT)

    with pytest.raises(SchemaRegistrationError) as exc_info:
        SchemaRegistry([bad])

    assert exc_info.value.attribute == "hobbies"


def test_custom_unlabeled_array_rejected_when_building_registry() -> None:
    with pytest.raises(SchemaRegistrationError):
        build_registry([CustomAttribute(name="hobbies", value_type=ValueType.ARRAY)])


def test_labeled_enrichment_array_is_accepted() -> None:
    registry = SchemaRegistry(
        [AttributeDescriptor(name="tags", value_type=ValueType.ARRAY, channel=Channel.ENRICHMENT, external_label="x")]
    )

    assert "tags" in registry


def test_duplicate_registration_rejected() -> None:
    descriptor = AttributeDescriptor(name="jobTitle", channel=Channel.PRIMARY)

    with pytest.raises(SchemaRegistrationError):
        SchemaRegistry([descriptor, descriptor])


def test_custom_attribute_conflicting_with_builtin_rejected() -> None:
    with pytest.raises(SchemaRegistrationError):
        build_registry([CustomAttribute(name="jobTitle")])


def test_custom_scalar_attribute_registered_on_enrichment_channel() -> None:
    registry = build_registry([CustomAttribute(name="costCenter")])

    descriptor = registry.classify("costCenter")
    assert descriptor.channel is Channel.ENRICHMENT
    assert descriptor.is_labeled is False


def test_unrecognized_columns_skip_internal_and_known(registry: SchemaRegistry) -> None:
    columns = ["name", "email", "jobTitle", "shoeSize", "skills", "petName"]

    assert registry.unrecognized_columns(columns) == ["shoeSize", "petName"]


def test_unlabeled_profile_attributes_are_scalar_enrichment(registry: SchemaRegistry) -> None:
    for name in ("interests", "schools", "responsibilities", "languages"):
        descriptor = registry.classify(name)
        assert descriptor.channel is Channel.ENRICHMENT
        assert descriptor.value_type is ValueType.STRING
        assert not descriptor.is_labeled

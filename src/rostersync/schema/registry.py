"""Schema registry: attribute name -> descriptor lookup."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from rostersync.contracts.config import CustomAttribute
from rostersync.contracts.exceptions import SchemaRegistrationError
from rostersync.contracts.schema import AttributeDescriptor, Channel, ValueType, unrecognized
from rostersync.schema.attributes import BUILTIN_ATTRIBUTES, INTERNAL_COLUMNS


def validate_descriptor(descriptor: AttributeDescriptor) -> None:
    """Reject descriptors the enrichment index cannot accept."""
    if not descriptor.name.strip():
        raise SchemaRegistrationError("attribute name must be non-empty", attribute=descriptor.name)
    if (
        descriptor.channel is Channel.ENRICHMENT
        and not descriptor.is_labeled
        and descriptor.value_type is ValueType.ARRAY
    ):
        # An unlabeled collection corrupts every item sent on the connection.
        raise SchemaRegistrationError(
            f"unlabeled enrichment attribute '{descriptor.name}' cannot be array-typed",
            attribute=descriptor.name,
        )


class SchemaRegistry:
    """Immutable set of attribute descriptors, built once per process.

    Safe for unsynchronized concurrent reads.
    """

    def __init__(self, descriptors: Iterable[AttributeDescriptor]) -> None:
        by_name: dict[str, AttributeDescriptor] = {}
        for descriptor in descriptors:
            validate_descriptor(descriptor)
            if descriptor.name in by_name:
                raise SchemaRegistrationError(
                    f"duplicate attribute registration: {descriptor.name}",
                    attribute=descriptor.name,
                )
            by_name[descriptor.name] = descriptor
        self._by_name: Mapping[str, AttributeDescriptor] = by_name

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def get(self, name: str) -> AttributeDescriptor | None:
        return self._by_name.get(name)

    def classify(self, name: str) -> AttributeDescriptor:
        descriptor = self._by_name.get(name)
        if descriptor is None:
            return unrecognized(name)
        return descriptor

    def by_channel(self, channel: Channel) -> list[AttributeDescriptor]:
        return [d for d in self._by_name.values() if d.channel is channel]

    def primary(self) -> list[AttributeDescriptor]:
        return self.by_channel(Channel.PRIMARY)

    def enrichment(self) -> list[AttributeDescriptor]:
        return self.by_channel(Channel.ENRICHMENT)

    def required(self) -> list[AttributeDescriptor]:
        return [d for d in self._by_name.values() if d.required]

    def unrecognized_columns(
        self,
        columns: Iterable[str],
        *,
        internal: Iterable[str] = INTERNAL_COLUMNS,
    ) -> list[str]:
        """Columns neither registered nor used internally, in input order."""
        skip = set(internal)
        return [column for column in columns if column not in self._by_name and column not in skip]

    def with_descriptors(self, extra: Iterable[AttributeDescriptor]) -> SchemaRegistry:
        return SchemaRegistry([*self._by_name.values(), *extra])


def custom_descriptor(attribute: CustomAttribute) -> AttributeDescriptor:
    return AttributeDescriptor(
        name=attribute.name,
        value_type=attribute.value_type,
        channel=Channel.ENRICHMENT,
        external_label=attribute.external_label,
        description="Organization-specific enrichment attribute",
    )


def build_registry(custom_attributes: Iterable[CustomAttribute] = ()) -> SchemaRegistry:
    """Built-in attribute table plus configured custom enrichment attributes."""
    return SchemaRegistry([*BUILTIN_ATTRIBUTES, *(custom_descriptor(attr) for attr in custom_attributes)])

"""Connection schema definition for the external people index."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from rostersync.contracts.enrichment import ACCOUNT_LABEL, ACCOUNT_PROPERTY
from rostersync.contracts.exceptions import SchemaRegistrationError
from rostersync.schema.attributes import is_collection_property
from rostersync.schema.registry import SchemaRegistry

_PROPERTY_NAME_RE = re.compile(r"^[A-Za-z0-9]+$")
MAX_PROPERTY_NAME_LENGTH = 32


def assert_valid_property_name(name: str) -> None:
    if not _PROPERTY_NAME_RE.match(name):
        raise SchemaRegistrationError(
            f"Invalid property name '{name}': index properties must be alphanumeric",
            attribute=name,
        )
    if len(name) > MAX_PROPERTY_NAME_LENGTH:
        raise SchemaRegistrationError(
            f"Invalid property name '{name}': index properties must be <= {MAX_PROPERTY_NAME_LENGTH} characters",
            attribute=name,
        )


def build_connector_schema(
    registry: SchemaRegistry,
    *,
    enabled_labels: Iterable[str] | None = None,
) -> list[dict[str, Any]]:
    """Property definitions for every enrichment attribute in *registry*.

    ``enabled_labels`` restricts which labeled attributes are published;
    ``None`` publishes all of them.
    """
    allowed = set(enabled_labels) if enabled_labels is not None else None

    assert_valid_property_name(ACCOUNT_PROPERTY)
    properties: list[dict[str, Any]] = [{"name": ACCOUNT_PROPERTY, "type": "string", "labels": [ACCOUNT_LABEL]}]

    for descriptor in registry.enrichment():
        assert_valid_property_name(descriptor.name)
        label = descriptor.external_label
        if label:
            if allowed is not None and label not in allowed:
                continue
            properties.append(
                {
                    "name": descriptor.name,
                    "type": "stringCollection" if is_collection_property(descriptor) else "string",
                    "labels": [label],
                }
            )
            continue

        properties.append(
            {
                "name": descriptor.name,
                "type": "string",
                "isSearchable": True,
                "isQueryable": True,
                "isRetrievable": True,
            }
        )

    return properties

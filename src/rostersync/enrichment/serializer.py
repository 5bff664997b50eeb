"""Enrichment-channel attributes -> external index items."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from rostersync.contracts.enrichment import ExternalItem
from rostersync.contracts.records import DesiredRecord
from rostersync.contracts.schema import AttributeDescriptor, Channel
from rostersync.schema.attributes import NOTE_LABEL, is_collection_property
from rostersync.schema.normalizer import ValueNormalizer
from rostersync.schema.registry import SchemaRegistry

_LOG = logging.getLogger(__name__)

COLLECTION_ANNOTATION = "Collection(String)"


def item_id_for(principal_key: str) -> str:
    return "person-" + principal_key.replace("@", "-").replace(".", "-")


def account_linkage_for(principal_key: str) -> str:
    return json.dumps({"userPrincipalName": principal_key})


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def encode_labeled_collection(values: list[Any]) -> list[str]:
    return [json.dumps({"displayName": value}) for value in values]


def encode_note(value: Any) -> str:
    return json.dumps({"detail": {"contentType": "text", "content": _scalar_text(value)}})


def encode_labeled_scalar(value: Any) -> str:
    return json.dumps({"displayName": value})


class EnrichmentSerializer:
    """Builds one ``ExternalItem`` per identity with enrichment data.

    Encoding depends on the descriptor's external label:

    - labeled collection (array-typed, or a label the index types as a
      collection): JSON ``{"displayName": ...}`` per element, annotated as a
      string collection
    - labeled note: ``{"detail": {"contentType": "text", "content": ...}}``
    - other labeled values: ``{"displayName": ...}``
    - unlabeled: plain scalar string, never a collection

    Labeled attributes whose label is not in ``enabled_labels`` are left out,
    matching the published connection schema; ``None`` keeps every label.
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        normalizer: ValueNormalizer | None = None,
        *,
        enabled_labels: Iterable[str] | None = None,
    ) -> None:
        self._registry = registry
        self._normalizer = normalizer or ValueNormalizer(registry)
        self._enabled_labels = frozenset(enabled_labels) if enabled_labels is not None else None

    def serialize(self, record: DesiredRecord) -> ExternalItem | None:
        properties: dict[str, str | list[str]] = {}
        content_parts: list[str] = []

        for name, raw in record.values.items():
            descriptor = self._registry.classify(name)
            if descriptor.channel is not Channel.ENRICHMENT or not self._label_enabled(descriptor):
                continue
            value = self._normalizer.normalize_with(descriptor, raw)
            if value is None:
                continue
            self._encode(descriptor, value, properties)
            content_parts.append(self._content_fragment(descriptor, value))

        if not properties:
            return None

        return ExternalItem(
            item_id=item_id_for(record.principal_key),
            account_linkage=account_linkage_for(record.principal_key),
            properties=properties,
            content=". ".join(content_parts),
        )

    def serialize_all(self, records: Iterable[DesiredRecord]) -> list[ExternalItem]:
        items: list[ExternalItem] = []
        for record in records:
            item = self.serialize(record)
            if item is None:
                _LOG.debug("No enrichment data for %s", record.principal_key)
                continue
            items.append(item)
        return items

    def _label_enabled(self, descriptor: AttributeDescriptor) -> bool:
        if self._enabled_labels is None or not descriptor.is_labeled:
            return True
        return descriptor.external_label in self._enabled_labels

    @staticmethod
    def _encode(
        descriptor: AttributeDescriptor,
        value: Any,
        properties: dict[str, str | list[str]],
    ) -> None:
        name = descriptor.name
        if not descriptor.is_labeled:
            properties[name] = _scalar_text(value)
            return

        if is_collection_property(descriptor):
            values = value if isinstance(value, list) else [value]
            properties[f"{name}@odata.type"] = COLLECTION_ANNOTATION
            properties[name] = encode_labeled_collection(values)
        elif descriptor.external_label == NOTE_LABEL:
            properties[name] = encode_note(value)
        else:
            properties[name] = encode_labeled_scalar(value)

    @staticmethod
    def _content_fragment(descriptor: AttributeDescriptor, value: Any) -> str:
        if isinstance(value, list):
            text = ", ".join(_scalar_text(v) for v in value)
        else:
            text = _scalar_text(value)
        if descriptor.external_label == NOTE_LABEL:
            return text
        return f"{descriptor.name}: {text}"

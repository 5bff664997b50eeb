"""Attribute schema registry and value normalization."""

from rostersync.schema.attributes import (
    BUILTIN_ATTRIBUTES,
    COLLECTION_LABELS,
    INTERNAL_COLUMNS,
    NOTE_LABEL,
    is_collection_property,
)
from rostersync.schema.normalizer import ValueNormalizer, parse_array
from rostersync.schema.registry import SchemaRegistry, build_registry, validate_descriptor

__all__ = [
    "BUILTIN_ATTRIBUTES",
    "COLLECTION_LABELS",
    "INTERNAL_COLUMNS",
    "NOTE_LABEL",
    "SchemaRegistry",
    "ValueNormalizer",
    "build_registry",
    "is_collection_property",
    "parse_array",
    "validate_descriptor",
]

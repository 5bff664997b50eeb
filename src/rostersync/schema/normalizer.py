"""Raw roster strings -> typed values, per the schema registry."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from rostersync.contracts.schema import AttributeDescriptor, ValueType
from rostersync.schema.registry import SchemaRegistry

_LOG = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "1"})


def parse_json_array(raw: str) -> list[Any] | None:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, list) else None


def parse_single_quoted_array(raw: str) -> list[Any] | None:
    return parse_json_array(raw.replace("'", '"'))


def split_comma_separated(raw: str) -> list[Any] | None:
    if "," not in raw:
        return None
    # Empty segments are dropped: "A,,B" -> ["A", "B"].
    return [segment.strip() for segment in raw.split(",") if segment.strip()]


ARRAY_PARSERS: tuple[Callable[[str], list[Any] | None], ...] = (
    parse_json_array,
    parse_single_quoted_array,
    split_comma_separated,
)


def parse_array(raw: str) -> list[Any]:
    """Parse an array cell; first parser to succeed wins.

    Never raises: a value no parser accepts becomes a one-element list.
    """
    for parser in ARRAY_PARSERS:
        parsed = parser(raw)
        if parsed is not None:
            return parsed
    _LOG.warning("Malformed array value %r, treating as a single element", raw)
    return [raw.strip()]


def parse_bool(raw: str) -> bool:
    return raw.strip().lower() in _TRUE_VALUES


def parse_number(raw: str) -> int | float | None:
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        _LOG.warning("Invalid number value %r, ignoring", raw)
        return None


def parse_object(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


class ValueNormalizer:
    """Converts raw string cells to typed values.

    ``None`` means "not set": empty cells never clear a remote value.
    """

    def __init__(self, registry: SchemaRegistry) -> None:
        self._registry = registry

    def normalize(self, name: str, raw: str | None) -> Any:
        return self.normalize_with(self._registry.classify(name), raw)

    @staticmethod
    def normalize_with(descriptor: AttributeDescriptor, raw: str | None) -> Any:
        if raw is None or not raw.strip():
            return None

        value_type = descriptor.value_type
        if value_type is ValueType.BOOL:
            return parse_bool(raw)
        if value_type is ValueType.NUMBER:
            return parse_number(raw)
        if value_type is ValueType.ARRAY:
            # "[]" or "," carry no elements and mean "not set", like an empty cell.
            return parse_array(raw) or None
        if value_type is ValueType.OBJECT:
            return parse_object(raw)
        # Dates stay ISO strings; the directory expects them as text.
        return raw

    def validate_lengths(self, values: dict[str, str]) -> list[str]:
        """Warnings for values exceeding a descriptor's ``max_length``."""
        warnings: list[str] = []
        for name, raw in values.items():
            descriptor = self._registry.get(name)
            if descriptor is None or descriptor.max_length is None or raw is None:
                continue
            if len(raw) > descriptor.max_length:
                warnings.append(f"{name} exceeds maximum length of {descriptor.max_length}")
        return warnings

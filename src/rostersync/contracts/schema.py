"""Attribute schema contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class ValueType(StrEnum):
    STRING = "string"
    BOOL = "bool"
    NUMBER = "number"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"


class Channel(StrEnum):
    """Where an attribute is routed."""

    PRIMARY = "primary"
    ENRICHMENT = "enrichment"
    UNRECOGNIZED = "unrecognized"


class AttributeDescriptor(BaseModel):
    """Static description of one known attribute."""

    name: str
    value_type: ValueType = ValueType.STRING
    channel: Channel = Channel.UNRECOGNIZED
    max_length: int | None = None
    external_label: str | None = None
    remote_name: str | None = None
    """Attribute name on the remote record when it differs from ``name``."""
    required: bool = False
    description: str | None = None

    model_config = {"frozen": True}

    @property
    def remote_key(self) -> str:
        return self.remote_name or self.name

    @property
    def is_labeled(self) -> bool:
        return bool(self.external_label)


def unrecognized(name: str) -> AttributeDescriptor:
    return AttributeDescriptor(name=name, channel=Channel.UNRECOGNIZED)

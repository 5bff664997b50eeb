"""Desired and remote record contracts."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DesiredRecord(BaseModel):
    """One roster row: raw string values keyed by column name.

    ``values`` keeps the column order of the source row. Attribute access goes
    through the schema registry, never through model attributes.
    """

    principal_key: str
    values: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def raw(self, name: str) -> str | None:
        return self.values.get(name)

    @property
    def columns(self) -> list[str]:
        return list(self.values)


class RemoteRecord(BaseModel):
    """One identity as reported by the directory."""

    principal_key: str
    remote_id: str
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def get(self, name: str) -> Any:
        return self.attributes.get(name)

    @property
    def display_name(self) -> str:
        value = self.attributes.get("displayName")
        return str(value) if value else self.principal_key

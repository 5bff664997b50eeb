"""Enrichment item contracts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

ACCOUNT_PROPERTY = "accountInformation"
ACCOUNT_LABEL = "personAccount"


class ExternalItem(BaseModel):
    """One external index item. Always replaces any prior item with the same id."""

    item_id: str
    account_linkage: str
    properties: dict[str, str | list[str]] = Field(default_factory=dict)
    content: str = ""

    model_config = {"frozen": True}

    def to_payload(self) -> dict[str, Any]:
        properties: dict[str, Any] = {ACCOUNT_PROPERTY: self.account_linkage}
        properties.update(self.properties)
        return {
            "id": self.item_id,
            "content": {"value": self.content, "type": "text"},
            "properties": properties,
            "acl": [{"type": "everyone", "value": "everyone", "accessType": "grant"}],
        }


class ItemState(BaseModel):
    """Identifiers of items emitted by the last completed run."""

    items: list[str] = Field(default_factory=list)
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")

    model_config = {"populate_by_name": True}


class EnrichmentResult(BaseModel):
    items: list[ExternalItem] = Field(default_factory=list)
    orphaned_item_ids: list[str] = Field(default_factory=list)
    dry_run: bool = False

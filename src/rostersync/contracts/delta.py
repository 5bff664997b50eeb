"""Reconciliation result contracts."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from rostersync.contracts.protection import ProtectedEntry, ProtectionDecision
from rostersync.contracts.records import DesiredRecord, RemoteRecord


class ActionKind(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    NO_CHANGE = "NO_CHANGE"


class FieldChange(BaseModel):
    field: str
    old_value: Any = None
    new_value: Any = None


class Action(BaseModel):
    """The decision for one key present in the desired or remote set."""

    kind: ActionKind
    principal_key: str
    desired: DesiredRecord | None = None
    remote: RemoteRecord | None = None
    changes: list[FieldChange] = Field(default_factory=list)
    protection: ProtectionDecision | None = None
    """Set when a protected UPDATE/DELETE was demoted to NO_CHANGE."""

    @property
    def remote_id(self) -> str | None:
        return self.remote.remote_id if self.remote is not None else None

    @property
    def display_name(self) -> str:
        if self.desired is not None:
            for column in ("displayName", "name"):
                value = self.desired.raw(column)
                if value:
                    return value
        if self.remote is not None:
            return self.remote.display_name
        return self.principal_key


class DeltaSummary(BaseModel):
    total_desired: int = 0
    total_remote: int = 0
    to_create: int = 0
    to_update: int = 0
    to_delete: int = 0
    unchanged: int = 0
    protected: int = 0
    unrecognized_attributes: list[str] = Field(default_factory=list)


class StateDelta(BaseModel):
    create: list[Action] = Field(default_factory=list)
    update: list[Action] = Field(default_factory=list)
    delete: list[Action] = Field(default_factory=list)
    no_change: list[Action] = Field(default_factory=list)
    protected: list[ProtectedEntry] = Field(default_factory=list)
    summary: DeltaSummary = Field(default_factory=DeltaSummary)

    def all_actions(self) -> list[Action]:
        return [*self.create, *self.update, *self.delete, *self.no_change]

    def refresh_summary(self) -> None:
        self.summary = self.summary.model_copy(
            update={
                "to_create": len(self.create),
                "to_update": len(self.update),
                "to_delete": len(self.delete),
                "unchanged": len(self.no_change),
                "protected": len(self.protected),
            }
        )

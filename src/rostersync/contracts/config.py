"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from rostersync.contracts.schema import ValueType

DEFAULT_PROTECTED_PATTERNS = (
    "admin@*",
    "administrator@*",
    "root@*",
    "systemadmin@*",
)

DEFAULT_PROTECTED_ROLES = (
    "Global Administrator",
    "Privileged Role Administrator",
    "Security Administrator",
    "User Administrator",
    "Directory Synchronization Accounts",
)


class ProtectionConfig(BaseModel):
    patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_PROTECTED_PATTERNS))
    denylist: list[str] = Field(default_factory=list)
    check_roles: bool = True
    protected_roles: list[str] = Field(default_factory=lambda: list(DEFAULT_PROTECTED_ROLES))

    model_config = {"frozen": True}


class CustomAttribute(BaseModel):
    """An organization-specific enrichment attribute added to the registry."""

    name: str
    value_type: ValueType = ValueType.STRING
    external_label: str | None = None


class RosterSyncConfig(BaseModel):
    roster_path: Path
    identity_column: str = "email"
    provider: str = "snapshot"
    snapshot_path: Path | None = None
    auth: str = "env"
    token: str | None = None
    graph_base_url: str = "https://graph.microsoft.com/v1.0"
    state_path: Path = Path("state/external-items-state.json")
    validation_mode: str = "strict"
    max_concurrent: int = Field(default=1, ge=1, le=10)
    protection: ProtectionConfig = Field(default_factory=ProtectionConfig)
    custom_attributes: list[CustomAttribute] = Field(default_factory=list)
    enabled_labels: list[str] | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_provider(self) -> RosterSyncConfig:
        if self.provider not in {"snapshot", "graph"}:
            raise ValueError("provider must be one of: snapshot, graph")
        if self.provider == "snapshot" and self.snapshot_path is None:
            raise ValueError("snapshot provider requires snapshot_path")
        if self.validation_mode not in {"strict", "partial"}:
            raise ValueError("validation_mode must be one of: strict, partial")
        return self

    @model_validator(mode="after")
    def validate_auth_token(self) -> RosterSyncConfig:
        token = (self.token or "").strip()
        if self.auth not in {"env", "token"}:
            raise ValueError("auth must be one of: env, token")
        if self.auth == "token" and not token:
            raise ValueError("token auth requires a non-empty token")
        if self.auth != "token" and token:
            raise ValueError("token must be unset when auth is not 'token'")
        return self

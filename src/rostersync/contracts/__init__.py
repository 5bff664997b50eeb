"""Public contracts for rostersync."""

from rostersync.contracts.config import CustomAttribute, ProtectionConfig, RosterSyncConfig
from rostersync.contracts.delta import Action, ActionKind, DeltaSummary, FieldChange, StateDelta
from rostersync.contracts.enrichment import (
    ACCOUNT_LABEL,
    ACCOUNT_PROPERTY,
    EnrichmentResult,
    ExternalItem,
    ItemState,
)
from rostersync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    ProviderError,
    RosterLoadError,
    RosterSyncError,
    RosterValidationError,
    SchemaRegistrationError,
    StateError,
)
from rostersync.contracts.protection import (
    ProtectedEntry,
    ProtectionCandidate,
    ProtectionDecision,
    ProtectionResult,
    RoleLookup,
)
from rostersync.contracts.provider import DirectoryProvider
from rostersync.contracts.records import DesiredRecord, RemoteRecord
from rostersync.contracts.schema import AttributeDescriptor, Channel, ValueType

__all__ = [
    "ACCOUNT_LABEL",
    "ACCOUNT_PROPERTY",
    "Action",
    "ActionKind",
    "AttributeDescriptor",
    "AuthenticationError",
    "Channel",
    "ConfigError",
    "CustomAttribute",
    "DeltaSummary",
    "DesiredRecord",
    "DirectoryProvider",
    "EnrichmentResult",
    "ExternalItem",
    "FieldChange",
    "ItemState",
    "ProtectedEntry",
    "ProtectionCandidate",
    "ProtectionConfig",
    "ProtectionDecision",
    "ProtectionResult",
    "ProviderError",
    "RemoteRecord",
    "RoleLookup",
    "RosterLoadError",
    "RosterSyncConfig",
    "RosterSyncError",
    "RosterValidationError",
    "SchemaRegistrationError",
    "StateDelta",
    "StateError",
    "ValueType",
]

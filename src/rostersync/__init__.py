"""Public API surface for rostersync."""

__version__ = "0.1.0"

from rostersync.auth import TokenResolver, create_token_resolver
from rostersync.config import apply_protection_env, load_config
from rostersync.contracts import (
    Action,
    ActionKind,
    AttributeDescriptor,
    AuthenticationError,
    Channel,
    ConfigError,
    CustomAttribute,
    DeltaSummary,
    DesiredRecord,
    DirectoryProvider,
    EnrichmentResult,
    ExternalItem,
    FieldChange,
    ItemState,
    ProtectedEntry,
    ProtectionConfig,
    ProtectionDecision,
    ProviderError,
    RemoteRecord,
    RosterLoadError,
    RosterSyncConfig,
    RosterSyncError,
    RosterValidationError,
    SchemaRegistrationError,
    StateDelta,
    StateError,
    ValueType,
)
from rostersync.engine import NullSyncProgress, Reconciler, SyncProgress
from rostersync.enrichment import EnrichmentSerializer, build_connector_schema
from rostersync.persistence import ItemStateStore, find_orphans
from rostersync.protection import ProtectionFilter
from rostersync.providers import GraphDirectoryProvider, SnapshotDirectoryProvider, create_provider
from rostersync.roster import RosterLoader
from rostersync.schema import SchemaRegistry, ValueNormalizer, build_registry
from rostersync.sdk import RosterSync

__all__ = [
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
    "EnrichmentSerializer",
    "ExternalItem",
    "FieldChange",
    "GraphDirectoryProvider",
    "ItemState",
    "ItemStateStore",
    "NullSyncProgress",
    "ProtectedEntry",
    "ProtectionConfig",
    "ProtectionDecision",
    "ProtectionFilter",
    "ProviderError",
    "Reconciler",
    "RemoteRecord",
    "RosterLoadError",
    "RosterLoader",
    "RosterSync",
    "RosterSyncConfig",
    "RosterSyncError",
    "RosterValidationError",
    "SchemaRegistrationError",
    "SchemaRegistry",
    "SnapshotDirectoryProvider",
    "StateDelta",
    "StateError",
    "SyncProgress",
    "TokenResolver",
    "ValueNormalizer",
    "ValueType",
    "apply_protection_env",
    "build_connector_schema",
    "build_registry",
    "create_provider",
    "create_token_resolver",
    "find_orphans",
    "load_config",
]

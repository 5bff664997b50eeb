"""Exception hierarchy for rostersync.

All rostersync exceptions inherit from :class:`RosterSyncError`, so callers
can catch any library error with a single ``except`` clause while still
handling specific failure modes.
"""

from __future__ import annotations


class RosterSyncError(Exception):
    """Base exception for all rostersync errors."""


class ConfigError(RosterSyncError):
    """Configuration loading or validation failure."""


class RosterLoadError(RosterSyncError):
    """Roster file loading/parsing failure."""


class RosterValidationError(RosterSyncError):
    """Roster rows failed semantic validation.

    Attributes:
        errors: Individual validation error messages.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        joined = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Roster validation failed:\n{joined}")


class SchemaRegistrationError(RosterSyncError):
    """An attribute descriptor conflicts with the registry rules.

    Raised while the registry is being built, never during reconciliation.
    """

    def __init__(self, message: str, *, attribute: str) -> None:
        super().__init__(message)
        self.attribute = attribute


class ProviderError(RosterSyncError):
    """Directory provider operation failure."""


class AuthenticationError(ProviderError):
    """Authentication/authorization failure."""


class StateError(RosterSyncError):
    """Persisted item-state could not be read or written."""

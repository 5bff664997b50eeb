"""Config loading and environment overrides."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rostersync.contracts.config import RosterSyncConfig
from rostersync.contracts.exceptions import ConfigError, SchemaRegistrationError
from rostersync.schema.registry import build_registry

_LOG = logging.getLogger(__name__)

ENV_PROTECTED_PATTERNS = "PROTECTED_EMAIL_PATTERNS"
ENV_PROTECTED_EMAILS = "PROTECTED_EMAILS"
ENV_CHECK_ROLES = "CHECK_ADMIN_ROLES"


def _resolve_path(value: Path | None, *, base_dir: Path) -> Path | None:
    if value is None:
        return None
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def _split_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def apply_protection_env(config: RosterSyncConfig, environ: Mapping[str, str]) -> RosterSyncConfig:
    """Override protection settings from environment variables.

    Patterns and emails are comma-separated and replace the configured lists.
    ``CHECK_ADMIN_ROLES=false`` disables role lookups; any other value leaves
    them enabled.
    """
    updates: dict[str, Any] = {}
    patterns = environ.get(ENV_PROTECTED_PATTERNS)
    if patterns is not None and patterns.strip():
        updates["patterns"] = _split_list(patterns)
    emails = environ.get(ENV_PROTECTED_EMAILS)
    if emails is not None and emails.strip():
        updates["denylist"] = _split_list(emails)
    check_roles = environ.get(ENV_CHECK_ROLES)
    if check_roles is not None and check_roles.strip():
        updates["check_roles"] = check_roles.strip().lower() != "false"

    if not updates:
        return config
    _LOG.debug("Protection overrides from environment: %s", sorted(updates))
    return config.model_copy(update={"protection": config.protection.model_copy(update=updates)})


def load_config(path: str | Path) -> RosterSyncConfig:
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = RosterSyncConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    try:
        build_registry(parsed.custom_attributes)
    except SchemaRegistrationError as exc:
        raise ConfigError(f"invalid custom_attributes: {exc}") from exc

    return parsed.model_copy(
        update={
            "roster_path": _resolve_path(parsed.roster_path, base_dir=config_dir),
            "snapshot_path": _resolve_path(parsed.snapshot_path, base_dir=config_dir),
            "state_path": _resolve_path(parsed.state_path, base_dir=config_dir),
        }
    )

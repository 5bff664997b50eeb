"""Token resolver factory."""

from __future__ import annotations

from rostersync.auth.base import TokenResolver
from rostersync.auth.resolvers.env import EnvTokenResolver
from rostersync.auth.resolvers.static import StaticTokenResolver
from rostersync.contracts.config import RosterSyncConfig
from rostersync.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def create_token_resolver(config: RosterSyncConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "env":
        return EnvTokenResolver()
    return StaticTokenResolver(token=config.token or "")

"""Concrete token resolvers."""

from rostersync.auth.resolvers.env import TOKEN_ENV_VAR, EnvTokenResolver
from rostersync.auth.resolvers.static import StaticTokenResolver

__all__ = ["TOKEN_ENV_VAR", "EnvTokenResolver", "StaticTokenResolver"]

"""Auth module public exports."""

from rostersync.auth.base import TokenResolver
from rostersync.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]

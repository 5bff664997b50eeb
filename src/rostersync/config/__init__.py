"""Configuration loading exports."""

from rostersync.config.loader import apply_protection_env, load_config

__all__ = ["apply_protection_env", "load_config"]

"""Identity protection exports."""

from rostersync.protection.filter import ProtectionFilter, RoleCheck, compile_glob

__all__ = ["ProtectionFilter", "RoleCheck", "compile_glob"]

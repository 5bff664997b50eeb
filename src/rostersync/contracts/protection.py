"""Protection filter contracts."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from pydantic import BaseModel, Field

RoleLookup = Callable[[str], Awaitable[list[str]]]
"""Async callable returning role display names for a remote identity id."""


class ProtectionCandidate(BaseModel):
    key: str
    remote_id: str | None = None


class ProtectionDecision(BaseModel):
    key: str
    is_protected: bool
    reason: str = ""
    matched_role: str | None = None


class ProtectedEntry(BaseModel):
    """Reporting view of a vetoed action."""

    key: str
    reason: str
    matched_role: str | None = None
    operation: str = ""


class ProtectionResult(BaseModel):
    allowed: list[ProtectionCandidate] = Field(default_factory=list)
    protected: list[ProtectedEntry] = Field(default_factory=list)

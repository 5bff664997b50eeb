"""Protection filter: vetoes UPDATE/DELETE against designated identities."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from rostersync.contracts.config import ProtectionConfig
from rostersync.contracts.delta import Action, ActionKind, StateDelta
from rostersync.contracts.protection import (
    ProtectedEntry,
    ProtectionCandidate,
    ProtectionDecision,
    ProtectionResult,
    RoleLookup,
)

T = TypeVar("T")
_LOG = logging.getLogger(__name__)

REASON_PATTERN = "Identifier matches protected pattern"
REASON_DENYLIST = "Identifier in protected denylist"
REASON_ROLE = "Identity holds a protected role"
REASON_LOOKUP_FAILED = "Role lookup failed; treated as unprotected"


def compile_glob(pattern: str) -> re.Pattern[str]:
    """``*`` matches any run of characters, ``?`` exactly one; all else is literal."""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class RoleCheck:
    """Outcome of a remote role lookup; ``error`` set when the lookup failed."""

    roles: tuple[str, ...] = ()
    matched: tuple[str, ...] = ()
    error: Exception | None = field(default=None, compare=False)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def is_protected(self) -> bool:
        return not self.failed and bool(self.matched)


class ProtectionFilter:
    """Evaluates identities against pattern, denylist and role rules.

    Decisions are computed fresh on every call; remote roles can change
    between runs.
    """

    def __init__(
        self,
        config: ProtectionConfig,
        role_lookup: RoleLookup | None = None,
        *,
        max_concurrent: int = 1,
    ) -> None:
        self._config = config
        self._role_lookup = role_lookup
        self._patterns = [(pattern, compile_glob(pattern)) for pattern in config.patterns]
        self._denylist = {entry.strip().lower() for entry in config.denylist if entry.strip()}
        self._protected_roles = [role.lower() for role in config.protected_roles if role.strip()]
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def role_check_enabled(self) -> bool:
        return self._config.check_roles and self._role_lookup is not None

    def matching_pattern(self, identifier: str) -> str | None:
        for pattern, regex in self._patterns:
            if regex.fullmatch(identifier):
                return pattern
        return None

    def in_denylist(self, identifier: str) -> bool:
        return identifier.strip().lower() in self._denylist

    async def check_roles(self, remote_id: str) -> RoleCheck:
        if self._role_lookup is None:
            return RoleCheck()
        try:
            roles = await self._guarded(self._role_lookup(remote_id))
        except Exception as exc:
            return RoleCheck(error=exc)
        matched = tuple(
            role for role in roles if any(protected in role.lower() for protected in self._protected_roles)
        )
        return RoleCheck(roles=tuple(roles), matched=matched)

    async def evaluate(self, key: str, remote_id: str | None = None) -> ProtectionDecision:
        if self.matching_pattern(key) is not None:
            return ProtectionDecision(key=key, is_protected=True, reason=REASON_PATTERN)
        if self.in_denylist(key):
            return ProtectionDecision(key=key, is_protected=True, reason=REASON_DENYLIST)
        if remote_id is None or not self.role_check_enabled:
            return ProtectionDecision(key=key, is_protected=False)

        check = await self.check_roles(remote_id)
        if check.failed:
            _LOG.warning("Could not fetch roles for %s (%s): %s", key, remote_id, check.error)
            return ProtectionDecision(key=key, is_protected=False, reason=REASON_LOOKUP_FAILED)
        if check.is_protected:
            return ProtectionDecision(
                key=key,
                is_protected=True,
                reason=REASON_ROLE,
                matched_role=", ".join(check.matched),
            )
        return ProtectionDecision(key=key, is_protected=False)

    async def filter(self, candidates: Sequence[ProtectionCandidate], *, operation: str = "") -> ProtectionResult:
        decisions = await asyncio.gather(
            *(self.evaluate(candidate.key, candidate.remote_id) for candidate in candidates)
        )
        result = ProtectionResult()
        for candidate, decision in zip(candidates, decisions, strict=True):
            if decision.is_protected:
                result.protected.append(
                    ProtectedEntry(
                        key=candidate.key,
                        reason=decision.reason,
                        matched_role=decision.matched_role,
                        operation=operation,
                    )
                )
            else:
                result.allowed.append(candidate)
        return result

    async def apply(self, delta: StateDelta) -> StateDelta:
        """Demote protected UPDATE/DELETE actions to NO_CHANGE.

        Demoted actions stay visible in ``no_change`` and ``protected``.
        CREATE actions are never checked.
        """
        update, demoted_updates, protected_updates = await self._split(delta.update, ActionKind.UPDATE)
        delete, demoted_deletes, protected_deletes = await self._split(delta.delete, ActionKind.DELETE)

        filtered = delta.model_copy(
            update={
                "update": update,
                "delete": delete,
                "no_change": [*delta.no_change, *demoted_updates, *demoted_deletes],
                "protected": [*delta.protected, *protected_updates, *protected_deletes],
            }
        )
        filtered.refresh_summary()
        for entry in filtered.protected:
            _LOG.warning("Protected identity %s: %s blocked (%s)", entry.key, entry.operation, entry.reason)
        return filtered

    def describe(self) -> str:
        lines = [
            "Protection configuration:",
            f"  Patterns:       {', '.join(self._config.patterns) or 'none'}",
            f"  Denylist:       {len(self._denylist)} identifiers",
            f"  Protected roles: {len(self._protected_roles)} roles",
            f"  Role check:     {'enabled' if self.role_check_enabled else 'disabled'}",
        ]
        return "\n".join(lines)

    async def _split(
        self,
        actions: list[Action],
        operation: ActionKind,
    ) -> tuple[list[Action], list[Action], list[ProtectedEntry]]:
        if not actions:
            return [], [], []
        decisions = await asyncio.gather(*(self.evaluate(a.principal_key, a.remote_id) for a in actions))
        kept: list[Action] = []
        demoted: list[Action] = []
        entries: list[ProtectedEntry] = []
        for action, decision in zip(actions, decisions, strict=True):
            if not decision.is_protected:
                kept.append(action)
                continue
            demoted.append(action.model_copy(update={"kind": ActionKind.NO_CHANGE, "protection": decision}))
            entries.append(
                ProtectedEntry(
                    key=action.principal_key,
                    reason=decision.reason,
                    matched_role=decision.matched_role,
                    operation=operation.value,
                )
            )
        return kept, demoted, entries

    async def _guarded(self, op: Awaitable[T]) -> T:
        async with self._semaphore:
            return await op

"""Persisted set of external item ids, used for orphan detection."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from rostersync.contracts.enrichment import ItemState
from rostersync.contracts.exceptions import StateError

_LOG = logging.getLogger(__name__)


class ItemStateStore:
    """Reads and rewrites the item-state file.

    Every save replaces the whole file; the previous run's set is never
    merged with the current one.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ItemState:
        if not self._path.exists():
            _LOG.debug("No item state at %s; starting empty", self._path)
            return ItemState()
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
            return ItemState.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise StateError(f"invalid item state file: {self._path}") from exc

    def save(self, item_ids: Iterable[str]) -> ItemState:
        state = ItemState(items=list(dict.fromkeys(item_ids)), last_updated=datetime.now(UTC))
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(state.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StateError(f"failed to persist item state: {self._path}") from exc
        _LOG.debug("Saved %d item ids to %s", len(state.items), self._path)
        return state


def find_orphans(previous: ItemState, current_ids: Iterable[str]) -> list[str]:
    """Ids present in *previous* but absent from *current_ids*, in previous order."""
    current = set(current_ids)
    return [item_id for item_id in previous.items if item_id not in current]

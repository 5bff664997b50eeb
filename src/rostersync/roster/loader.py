"""Roster loading from CSV files."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from pathlib import Path

from rostersync.contracts.exceptions import RosterLoadError, RosterValidationError
from rostersync.contracts.records import DesiredRecord

_LOG = logging.getLogger(__name__)


class RosterLoader:
    """Load a roster CSV into ``DesiredRecord`` rows.

    Cell values are kept verbatim; typing happens later in the normalizer.
    In ``strict`` mode rows without an identity value and duplicate identities
    fail the load. In ``partial`` mode they are logged, identity-less rows are
    dropped and duplicates are left for the reconciler (last row wins).
    """

    def __init__(self, *, identity_column: str = "email", mode: str = "strict") -> None:
        if mode not in {"strict", "partial"}:
            raise RosterValidationError([f"invalid validation mode: {mode}"])
        self._identity_column = identity_column
        self._mode = mode

    def load(self, path: Path) -> list[DesiredRecord]:
        if not path.exists():
            raise RosterLoadError(f"roster file not found: {path}")
        if not path.is_file():
            raise RosterLoadError(f"roster path is not a file: {path}")
        try:
            with path.open(encoding="utf-8-sig", newline="") as handle:
                reader = csv.DictReader(handle)
                header = reader.fieldnames or []
                if self._identity_column not in header:
                    raise RosterLoadError(f"roster is missing identity column '{self._identity_column}': {path}")
                rows = [self._clean_row(row) for row in reader]
        except OSError as exc:
            raise RosterLoadError(f"failed reading roster file: {path}") from exc
        except csv.Error as exc:
            raise RosterLoadError(f"invalid CSV in roster file: {path}: {exc}") from exc

        return self._to_records(rows)

    def _to_records(self, rows: list[dict[str, str]]) -> list[DesiredRecord]:
        errors: list[str] = []
        records: list[DesiredRecord] = []
        for line, row in enumerate(rows, start=2):
            key = row.get(self._identity_column, "").strip()
            if not key:
                errors.append(f"row {line}: missing {self._identity_column}")
                continue
            records.append(DesiredRecord(principal_key=key, values=row))

        counts = Counter(record.principal_key for record in records)
        errors.extend(f"duplicate {self._identity_column}: {key}" for key, count in counts.items() if count > 1)

        if errors:
            if self._mode == "strict":
                raise RosterValidationError(errors)
            for error in errors:
                _LOG.warning("Roster: %s", error)
        return records

    @staticmethod
    def _clean_row(row: dict[str | None, str | list[str] | None]) -> dict[str, str]:
        # Surplus cells land under the None key; short rows yield None values.
        return {name: value for name, value in row.items() if name is not None and isinstance(value, str)}

"""Desired-vs-remote reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from rostersync.contracts.delta import Action, ActionKind, DeltaSummary, FieldChange, StateDelta
from rostersync.contracts.records import DesiredRecord, RemoteRecord
from rostersync.contracts.schema import Channel
from rostersync.engine.comparison import values_equal
from rostersync.schema.normalizer import ValueNormalizer
from rostersync.schema.registry import SchemaRegistry

_LOG = logging.getLogger(__name__)


class Reconciler:
    """Partition keys into CREATE / UPDATE / DELETE / NO_CHANGE.

    Pure computation over already-fetched data. The remote mapping must hold
    the full snapshot: any key missing from it is treated as absent.
    """

    def __init__(self, registry: SchemaRegistry, normalizer: ValueNormalizer | None = None) -> None:
        self._registry = registry
        self._normalizer = normalizer or ValueNormalizer(registry)

    def reconcile(
        self,
        desired: Sequence[DesiredRecord],
        remote: Mapping[str, RemoteRecord],
    ) -> StateDelta:
        delta = StateDelta()
        desired_by_key = self._index_desired(desired)

        for key, record in desired_by_key.items():
            remote_record = remote.get(key)
            if remote_record is None:
                delta.create.append(Action(kind=ActionKind.CREATE, principal_key=key, desired=record))
                continue

            changes = self.detect_changes(record, remote_record)
            kind = ActionKind.UPDATE if changes else ActionKind.NO_CHANGE
            action = Action(kind=kind, principal_key=key, desired=record, remote=remote_record, changes=changes)
            if changes:
                delta.update.append(action)
            else:
                delta.no_change.append(action)

        for key, remote_record in remote.items():
            if key not in desired_by_key:
                delta.delete.append(Action(kind=ActionKind.DELETE, principal_key=key, remote=remote_record))

        delta.summary = DeltaSummary(
            total_desired=len(desired_by_key),
            total_remote=len(remote),
            unrecognized_attributes=self._unrecognized_columns(desired_by_key.values()),
        )
        delta.refresh_summary()
        _LOG.debug(
            "Reconciled %d desired / %d remote: create=%d update=%d delete=%d unchanged=%d",
            len(desired_by_key),
            len(remote),
            len(delta.create),
            len(delta.update),
            len(delta.delete),
            len(delta.no_change),
        )
        return delta

    def detect_changes(self, record: DesiredRecord, remote: RemoteRecord) -> list[FieldChange]:
        """Changed primary-channel fields. Omitted or empty cells never count."""
        changes: list[FieldChange] = []
        for name, raw in record.values.items():
            descriptor = self._registry.classify(name)
            if descriptor.channel is not Channel.PRIMARY:
                continue
            new_value = self._normalizer.normalize_with(descriptor, raw)
            if new_value is None:
                continue
            old_value = remote.get(descriptor.remote_key)
            if not values_equal(new_value, old_value, descriptor.value_type):
                changes.append(FieldChange(field=name, old_value=old_value, new_value=new_value))
        return changes

    @staticmethod
    def _index_desired(desired: Sequence[DesiredRecord]) -> dict[str, DesiredRecord]:
        by_key: dict[str, DesiredRecord] = {}
        for record in desired:
            if record.principal_key in by_key:
                _LOG.warning("Duplicate desired key %s, last row wins", record.principal_key)
            by_key[record.principal_key] = record
        return by_key

    def _unrecognized_columns(self, records: Iterable[DesiredRecord]) -> list[str]:
        seen: dict[str, None] = {}
        for record in records:
            for column in record.columns:
                seen.setdefault(column, None)
        return self._registry.unrecognized_columns(seen)

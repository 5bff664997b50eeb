"""SDK composition root for rostersync."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rostersync.config.loader import load_config
from rostersync.contracts.config import RosterSyncConfig
from rostersync.contracts.delta import StateDelta
from rostersync.contracts.enrichment import EnrichmentResult
from rostersync.contracts.exceptions import ProviderError
from rostersync.contracts.provider import DirectoryProvider
from rostersync.contracts.records import DesiredRecord
from rostersync.engine.progress import NullSyncProgress, SyncProgress
from rostersync.engine.reconciler import Reconciler
from rostersync.enrichment.connector_schema import build_connector_schema
from rostersync.enrichment.serializer import EnrichmentSerializer, item_id_for
from rostersync.persistence.item_state import ItemStateStore, find_orphans
from rostersync.protection.filter import ProtectionFilter
from rostersync.providers.factory import create_provider
from rostersync.roster.loader import RosterLoader
from rostersync.schema.normalizer import ValueNormalizer
from rostersync.schema.registry import SchemaRegistry, build_registry

_LOG = logging.getLogger(__name__)

PHASE_FETCH = "Fetch"
PHASE_RECONCILE = "Reconcile"
PHASE_PROTECT = "Protect"
PHASE_SERIALIZE = "Serialize"


class RosterSync:
    """rostersync SDK public API.

    ``plan`` reads the roster and the directory and returns the protected
    delta; it never writes anywhere. ``enrich`` builds external index items
    for every roster row and tracks roster item ids for orphan detection.
    """

    def __init__(
        self,
        config: RosterSyncConfig,
        *,
        provider: DirectoryProvider | None = None,
        registry: SchemaRegistry | None = None,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._registry = registry or build_registry(config.custom_attributes)
        self._normalizer = ValueNormalizer(self._registry)
        self._provider = provider
        self._progress = progress or NullSyncProgress()

    @classmethod
    def from_config_file(cls, path: str | Path, *, progress: SyncProgress | None = None) -> RosterSync:
        return cls(load_config(path), progress=progress)

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def load_roster(self) -> list[DesiredRecord]:
        loader = RosterLoader(identity_column=self._config.identity_column, mode=self._config.validation_mode)
        records = loader.load(self._config.roster_path)
        for record in records:
            for warning in self._normalizer.validate_lengths(record.values):
                _LOG.warning("%s: %s", record.principal_key, warning)
        return records

    async def plan(self, desired: list[DesiredRecord] | None = None) -> StateDelta:
        records = desired if desired is not None else self.load_roster()
        provider = self._provider or create_provider(self._config, self._registry)

        phase = PHASE_FETCH
        try:
            async with provider:
                self._progress.phase_start(PHASE_FETCH)
                remote = await provider.fetch_snapshot()
                self._progress.phase_done(PHASE_FETCH)

                phase = PHASE_RECONCILE
                self._progress.phase_start(PHASE_RECONCILE)
                delta = Reconciler(self._registry, self._normalizer).reconcile(records, remote)
                self._progress.phase_done(PHASE_RECONCILE)

                phase = PHASE_PROTECT
                self._progress.phase_start(PHASE_PROTECT)
                protection = ProtectionFilter(
                    self._config.protection,
                    role_lookup=provider.get_role_names,
                    max_concurrent=self._config.max_concurrent,
                )
                delta = await protection.apply(delta)
                self._progress.phase_done(PHASE_PROTECT)
        except ProviderError as exc:
            self._progress.phase_error(phase, exc)
            raise

        _LOG.debug(
            "Plan: create=%d update=%d delete=%d unchanged=%d protected=%d",
            delta.summary.to_create,
            delta.summary.to_update,
            delta.summary.to_delete,
            delta.summary.unchanged,
            delta.summary.protected,
        )
        return delta

    async def enrich(self, *, dry_run: bool = False, desired: list[DesiredRecord] | None = None) -> EnrichmentResult:
        records = desired if desired is not None else self.load_roster()
        serializer = EnrichmentSerializer(
            self._registry,
            self._normalizer,
            enabled_labels=self._config.enabled_labels,
        )

        self._progress.phase_start(PHASE_SERIALIZE, total=len(records))
        items = []
        for record in records:
            item = serializer.serialize(record)
            if item is not None:
                items.append(item)
            self._progress.item_done(PHASE_SERIALIZE)
        self._progress.phase_done(PHASE_SERIALIZE)

        store = ItemStateStore(self._config.state_path)
        # Every roster identity owns its item id, with or without enrichment data.
        current_ids = list(dict.fromkeys(item_id_for(record.principal_key) for record in records))
        orphaned = find_orphans(store.load(), current_ids)
        if orphaned:
            _LOG.info("%d external items no longer present in the roster", len(orphaned))
        if not dry_run:
            store.save(current_ids)

        return EnrichmentResult(items=items, orphaned_item_ids=orphaned, dry_run=dry_run)

    def connector_schema(self) -> list[dict[str, Any]]:
        return build_connector_schema(self._registry, enabled_labels=self._config.enabled_labels)

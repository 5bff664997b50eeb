"""External index enrichment exports."""

from rostersync.enrichment.connector_schema import build_connector_schema
from rostersync.enrichment.serializer import EnrichmentSerializer, account_linkage_for, item_id_for

__all__ = ["EnrichmentSerializer", "account_linkage_for", "build_connector_schema", "item_id_for"]

"""Enrich command formatting and item export."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rostersync import EnrichmentResult, RosterSyncConfig, StateError
from rostersync.cli.progress.rich import RichSyncProgress


def format_enrich_summary(result: EnrichmentResult, config: RosterSyncConfig) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"rostersync - enrich complete ({mode})",
        "",
        f"  Items:        {len(result.items)}",
        f"  Orphaned:     {len(result.orphaned_item_ids)}",
    ]
    for item_id in result.orphaned_item_ids:
        lines.append(f"    - {item_id}")
    lines.append("")
    lines.append(f"  Item state:   {config.state_path}")
    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] Item state was not written")
    lines.append("")
    return "\n".join(lines)


def write_items(result: EnrichmentResult, output: Path) -> None:
    payload = [item.to_payload() for item in result.items]
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise StateError(f"failed to write items file: {output}") from exc


async def run_enrich(args: argparse.Namespace) -> EnrichmentResult:
    import rostersync.cli as cli

    config = cli.load_config(args.config)

    if not args.verbose:
        with RichSyncProgress() as progress:
            result = await cli.RosterSync(config, progress=progress).enrich(dry_run=args.dry_run)
    else:
        result = await cli.RosterSync(config).enrich(dry_run=args.dry_run)

    if args.output:
        write_items(result, Path(args.output))

    print(cli._format_enrich_summary(result, config))
    return result


__all__ = ["format_enrich_summary", "run_enrich", "write_items"]

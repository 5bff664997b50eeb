"""Diff command formatting."""

from __future__ import annotations

import argparse

from rostersync import StateDelta
from rostersync.cli.common import format_comma_or_none, format_value
from rostersync.cli.progress.rich import RichSyncProgress


def format_summary(delta: StateDelta) -> str:
    summary = delta.summary
    lines = [
        "",
        "rostersync - diff complete",
        "",
        f"  Roster:       {summary.total_desired} identities",
        f"  Directory:    {summary.total_remote} identities",
        "",
        f"  Create:       {summary.to_create}",
        f"  Update:       {summary.to_update}",
        f"  Delete:       {summary.to_delete}",
        f"  Unchanged:    {summary.unchanged}",
        f"  Protected:    {summary.protected}",
    ]
    if summary.unrecognized_attributes:
        lines.append(f"  Ignored:      {format_comma_or_none(summary.unrecognized_attributes)}")
    if not (summary.to_create or summary.to_update or summary.to_delete):
        lines.append("")
        lines.append("  Status:       directory matches roster")
    lines.append("")
    return "\n".join(lines)


def format_diff_report(delta: StateDelta) -> str:
    """Per-identity listing of every pending and blocked action."""
    lines = ["Roster diff report", ""]

    lines.append(f"CREATE ({len(delta.create)})")
    for action in delta.create:
        lines.append(f"  + {action.principal_key} ({action.display_name})")

    lines.append(f"UPDATE ({len(delta.update)})")
    for action in delta.update:
        lines.append(f"  ~ {action.principal_key}")
        for change in action.changes:
            lines.append(f"      {change.field}: {format_value(change.old_value)} -> {format_value(change.new_value)}")

    lines.append(f"DELETE ({len(delta.delete)})")
    for action in delta.delete:
        lines.append(f"  - {action.principal_key} ({action.display_name})")

    if delta.protected:
        lines.append(f"PROTECTED ({len(delta.protected)})")
        for entry in delta.protected:
            role = f" [{entry.matched_role}]" if entry.matched_role else ""
            lines.append(f"  ! {entry.key}: {entry.operation} blocked, {entry.reason}{role}")

    return "\n".join(lines)


async def run_diff(args: argparse.Namespace) -> StateDelta:
    import rostersync.cli as cli

    config = cli.apply_protection_env(cli.load_config(args.config), cli.os.environ)

    if not args.verbose:
        with RichSyncProgress() as progress:
            delta = await cli.RosterSync(config, progress=progress).plan()
    else:
        delta = await cli.RosterSync(config).plan()

    if args.report:
        print(format_diff_report(delta))
    print(cli._format_summary(delta))
    return delta


__all__ = ["format_diff_report", "format_summary", "run_diff"]

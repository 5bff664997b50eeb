"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("rostersync")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rostersync")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparsers.add_parser("diff", help="Compare the roster against the directory")
    diff_parser.add_argument("--config", default="./rostersync.json", help="Path to rostersync.json")
    diff_parser.add_argument("--report", action="store_true", help="Print per-identity changes")
    diff_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    enrich_parser = subparsers.add_parser("enrich", help="Build external index items from the roster")
    enrich_parser.add_argument("--config", default="./rostersync.json", help="Path to rostersync.json")
    mode = enrich_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--dry-run", action="store_true", help="Preview mode; item state is not written")
    mode.add_argument("--apply", action="store_true", help="Apply mode; item state is rewritten")
    enrich_parser.add_argument("--output", "-o", default=None, help="Write item payloads to this JSON file")
    enrich_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]

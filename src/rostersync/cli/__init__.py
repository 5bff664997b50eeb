"""Command-line interface for rostersync."""

from __future__ import annotations

import asyncio
import logging as logging
import os as os

from rostersync import RosterSync as RosterSync
from rostersync import apply_protection_env as apply_protection_env
from rostersync import load_config as load_config
from rostersync.cli.app import main as main
from rostersync.cli.commands import diff as diff_command
from rostersync.cli.commands import enrich as enrich_command
from rostersync.cli.parser import build_parser as build_parser

_format_summary = diff_command.format_summary
_format_diff_report = diff_command.format_diff_report
_format_enrich_summary = enrich_command.format_enrich_summary

_run_diff = diff_command.run_diff
_run_enrich = enrich_command.run_enrich

__all__ = ["asyncio", "build_parser", "main"]

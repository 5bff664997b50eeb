"""Shared test fixtures for rostersync tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rostersync.contracts.config import ProtectionConfig, RosterSyncConfig
from rostersync.schema.registry import SchemaRegistry, build_registry


@pytest.fixture
def registry() -> SchemaRegistry:
    return build_registry()


@pytest.fixture
def roster_path(tmp_path: Path) -> Path:
    path = tmp_path / "roster.csv"
    path.write_text(
        "name,email,jobTitle,department,skills,aboutMe\n"
        "Ada Lovelace,ada@contoso.com,CTO,Engineering,\"['Python','Math']\",Analyst\n"
        "Grace Hopper,grace@contoso.com,Rear Admiral,Navy,,\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    path = tmp_path / "directory.json"
    path.write_text(
        json.dumps(
            {
                "users": [
                    {"id": "1", "userPrincipalName": "ada@contoso.com", "jobTitle": "CEO", "department": "Engineering"},
                    {"id": "2", "userPrincipalName": "admin@contoso.com", "jobTitle": "Admin"},
                    {"id": "3", "userPrincipalName": "old@contoso.com", "jobTitle": "Intern"},
                ],
                "roles": {"2": ["Global Administrator"]},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_config(tmp_path: Path, roster_path: Path, snapshot_path: Path) -> RosterSyncConfig:
    return RosterSyncConfig(
        roster_path=roster_path,
        snapshot_path=snapshot_path,
        state_path=tmp_path / "state" / "items.json",
        protection=ProtectionConfig(),
    )

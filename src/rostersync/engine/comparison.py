"""Type-aware value equality used by field-change detection."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

from rostersync.contracts.schema import ValueType
from rostersync.schema.normalizer import parse_bool


def canonical_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


def parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return parse_bool(value)
    return bool(value)


def _arrays_equal(left: Any, right: Any) -> bool:
    if not isinstance(left, list) or not isinstance(right, list):
        return False
    if len(left) != len(right):
        return False
    return sorted(canonical_json(v) for v in left) == sorted(canonical_json(v) for v in right)


def _dates_equal(left: Any, right: Any) -> bool:
    left_ts = parse_timestamp(left)
    right_ts = parse_timestamp(right)
    if left_ts is None or right_ts is None:
        return str(left) == str(right)
    return left_ts == right_ts


def _numbers_equal(left: Any, right: Any) -> bool:
    try:
        return float(left) == float(right)
    except (TypeError, ValueError):
        return False


def values_equal(desired: Any, remote: Any, value_type: ValueType) -> bool:
    if desired is None and remote is None:
        return True
    if desired is None or remote is None:
        return False

    if value_type is ValueType.ARRAY:
        return _arrays_equal(desired, remote)
    if value_type is ValueType.DATE:
        return _dates_equal(desired, remote)
    if value_type is ValueType.OBJECT:
        return canonical_json(desired) == canonical_json(remote)
    if value_type is ValueType.BOOL:
        return _as_bool(desired) == _as_bool(remote)
    if value_type is ValueType.NUMBER:
        return _numbers_equal(desired, remote)
    return str(desired) == str(remote)

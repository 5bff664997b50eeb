import itertools
import logging

import pytest

from rostersync.contracts.delta import ActionKind, FieldChange
from rostersync.contracts.records import DesiredRecord, RemoteRecord
from rostersync.engine.reconciler import Reconciler
from rostersync.schema.registry import SchemaRegistry


def _desired(key: str, **values: str) -> DesiredRecord:
    return DesiredRecord(principal_key=key, values=values)


def _remote(key: str, **attributes: object) -> RemoteRecord:
    return RemoteRecord(principal_key=key, remote_id=f"id-{key}", attributes=attributes)


@pytest.fixture
def reconciler(registry: SchemaRegistry) -> Reconciler:
    return Reconciler(registry)


def test_absent_remote_creates(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile([_desired("u1", jobTitle="CEO")], {})

    assert [action.principal_key for action in delta.create] == ["u1"]
    assert delta.create[0].kind is ActionKind.CREATE
    assert delta.update == []
    assert delta.delete == []


def test_changed_field_updates(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile([_desired("u1", jobTitle="CTO")], {"u1": _remote("u1", jobTitle="CEO")})

    assert [action.principal_key for action in delta.update] == ["u1"]
    assert delta.update[0].changes == [FieldChange(field="jobTitle", old_value="CEO", new_value="CTO")]
    assert delta.create == []
    assert delta.delete == []


def test_missing_desired_deletes(reconciler: Reconciler) -> None:
    remote = {"u1": _remote("u1"), "u2": _remote("u2")}

    delta = reconciler.reconcile([], remote)

    assert [action.principal_key for action in delta.delete] == ["u1", "u2"]
    assert delta.delete[0].remote_id == "id-u1"


def test_identical_snapshots_are_idempotent(reconciler: Reconciler) -> None:
    desired = [_desired("u1", jobTitle="CTO", businessPhones='["1", "2"]'), _desired("u2", department="Ops")]
    remote = {
        "u1": _remote("u1", jobTitle="CTO", businessPhones=["2", "1"]),
        "u2": _remote("u2", department="Ops"),
    }

    for _ in range(2):
        delta = reconciler.reconcile(desired, remote)
        assert delta.create == []
        assert delta.update == []
        assert delta.delete == []
        assert len(delta.no_change) == 2


def test_array_order_does_not_trigger_update(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile(
        [_desired("u1", otherMails="a@x.com,b@x.com")],
        {"u1": _remote("u1", otherMails=["b@x.com", "a@x.com"])},
    )

    assert delta.update == []
    assert [action.principal_key for action in delta.no_change] == ["u1"]


def test_empty_cell_never_clears_remote_value(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile([_desired("u1", jobTitle="")], {"u1": _remote("u1", jobTitle="CEO")})

    assert delta.update == []


@pytest.mark.parametrize("cell", [",", "[]", " , ,"])
def test_array_cell_without_elements_never_clears_remote_value(reconciler: Reconciler, cell: str) -> None:
    delta = reconciler.reconcile([_desired("u1", businessPhones=cell)], {"u1": _remote("u1", businessPhones=["555"])})

    assert delta.update == []
    assert [action.principal_key for action in delta.no_change] == ["u1"]


def test_enrichment_and_unrecognized_columns_are_not_diffed(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile(
        [_desired("u1", skills="Python", aboutMe="hello", shoeSize="44")],
        {"u1": _remote("u1", skills=["Go"], aboutMe="bye", shoeSize="40")},
    )

    assert delta.update == []
    assert delta.summary.unrecognized_attributes == ["shoeSize"]


def test_typed_comparison_for_bool_column(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile([_desired("u1", accountEnabled="TRUE")], {"u1": _remote("u1", accountEnabled=True)})

    assert delta.update == []


def test_partition_is_complete_and_disjoint(reconciler: Reconciler) -> None:
    desired_keys = ["a", "b", "c", "d"]
    remote_keys = ["c", "d", "e", "f"]
    for desired_subset in itertools.combinations(desired_keys, 2):
        for remote_subset in itertools.combinations(remote_keys, 2):
            desired = [_desired(key, jobTitle="T") for key in desired_subset]
            remote = {key: _remote(key, jobTitle="T" if key == "c" else "X") for key in remote_subset}

            delta = reconciler.reconcile(desired, remote)

            keys = [action.principal_key for action in delta.all_actions()]
            assert sorted(keys) == sorted(set(desired_subset) | set(remote_subset))
            assert len(keys) == len(set(keys))


def test_summary_counts(reconciler: Reconciler) -> None:
    delta = reconciler.reconcile(
        [_desired("new", jobTitle="A"), _desired("same", jobTitle="B"), _desired("changed", jobTitle="C")],
        {"same": _remote("same", jobTitle="B"), "changed": _remote("changed", jobTitle="Z"), "gone": _remote("gone")},
    )

    summary = delta.summary
    assert (summary.total_desired, summary.total_remote) == (3, 3)
    assert (summary.to_create, summary.to_update, summary.to_delete, summary.unchanged) == (1, 1, 1, 1)


def test_duplicate_desired_key_last_row_wins(reconciler: Reconciler, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="rostersync.engine.reconciler"):
        delta = reconciler.reconcile(
            [_desired("u1", jobTitle="First"), _desired("u1", jobTitle="Second")],
            {"u1": _remote("u1", jobTitle="First")},
        )

    assert delta.update[0].changes[0].new_value == "Second"
    assert "Duplicate desired key u1" in caplog.text


def test_remote_name_mapping_used_for_comparison(registry: SchemaRegistry) -> None:
    descriptor = registry.classify("projects")

    assert descriptor.remote_key == "pastProjects"

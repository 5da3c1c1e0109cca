"""Tests for the bundled method table and its schema validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from qtumscan_rpc.errors import InvalidArgumentError
from qtumscan_rpc.rpc.methods import MethodTable
from qtumscan_rpc.schema.table import MethodTableError, TableProblem, check_method_table


def test_default_table_loads_and_validates() -> None:
    table = MethodTable.default()
    assert len(table) > 80
    assert "getBlockHash" in table
    assert "getblockhash" in table
    assert "GETBLOCKHASH" in table


def test_lookup_is_case_insensitive() -> None:
    table = MethodTable.default()
    spec = table.lookup("GetBlock")
    assert spec.name == "getBlock"
    assert spec.wire_name == "getblock"
    assert spec.tags == ("string", "boolean")


def test_untyped_method_has_no_tags() -> None:
    assert MethodTable.default().lookup("getInfo").tags == ()


def test_unknown_method_raises() -> None:
    with pytest.raises(InvalidArgumentError, match="Unknown RPC method: getNothing"):
        MethodTable.default().lookup("getNothing")
    assert MethodTable.default().get("getNothing") is None


def test_iteration_is_sorted_by_wire_name() -> None:
    names = [spec.wire_name for spec in MethodTable.default()]
    assert names == sorted(names)


def test_custom_table_from_dict() -> None:
    table = MethodTable.from_dict({"version": 1, "methods": {"fooBar": ["integer", "object"]}})
    assert table.lookup("foobar").tags == ("integer", "object")
    assert len(table) == 1


def test_unknown_tag_is_rejected_at_load() -> None:
    with pytest.raises(MethodTableError) as exc_info:
        MethodTable.from_dict({"version": 1, "methods": {"fooBar": ["integer", "int"]}})
    assert exc_info.value.problems == [
        TableProblem("fooBar", 1, exc_info.value.problems[0].message),
    ]
    assert "fooBar argument 1: 'int' is not one of" in str(exc_info.value)


def test_missing_methods_key_is_rejected() -> None:
    with pytest.raises(MethodTableError) as exc_info:
        MethodTable.from_dict({"version": 1})
    [problem] = exc_info.value.problems
    assert problem.method is None
    assert str(problem).startswith("<table>: 'methods' is a required property")


def test_problems_are_reported_per_method() -> None:
    payload = {
        "version": 1,
        "methods": {"zeta": ["object", "bool"], "alpha": "string", "ok": ["float"]},
    }
    with pytest.raises(MethodTableError) as exc_info:
        check_method_table(payload, source="custom.json")
    problems = exc_info.value.problems
    assert [(p.method, p.position) for p in problems] == [("alpha", None), ("zeta", 1)]
    assert str(exc_info.value).startswith("Invalid method table custom.json: alpha: ")


def test_bad_method_name_is_reported() -> None:
    with pytest.raises(MethodTableError) as exc_info:
        check_method_table({"version": 1, "methods": {"get-info": []}})
    [problem] = exc_info.value.problems
    assert (problem.method, problem.message) == ("get-info", "invalid method name")


def test_wire_name_collision_is_rejected() -> None:
    with pytest.raises(MethodTableError, match="same wire name as 'getBlock'") as exc_info:
        check_method_table({"version": 1, "methods": {"getBlock": ["string"], "GetBlock": []}})
    assert exc_info.value.problems[0].method == "GetBlock"


def test_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        MethodTable.from_dict({"version": 0, "methods": {"ping": []}})


def test_from_path(tmp_path: Path) -> None:
    path = tmp_path / "methods.json"
    path.write_text(json.dumps({"version": 1, "methods": {"ping": []}}), encoding="utf-8")
    table = MethodTable.from_path(path)
    assert "ping" in table

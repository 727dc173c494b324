from __future__ import annotations

from src.squad_attendance.squad_attendance.audit.diff import changed_fields


def test_only_differing_fields_are_reported():
    before = {"notes": "a", "total_hours": 7.5, "verified": False}
    after = {"notes": "b", "total_hours": 7.5, "verified": True}

    assert changed_fields(before, after) == ["notes", "verified"]


def test_nested_objects_compare_regardless_of_key_order():
    before = {"rules": {"late": 15, "early": 30}}
    after = {"rules": {"early": 30, "late": 15}}

    assert changed_fields(before, after) == []


def test_added_and_removed_keys_count_as_changed():
    assert changed_fields({"a": 1}, {"a": 1, "b": 2}) == ["b"]
    assert changed_fields({"a": 1, "b": 2}, {"a": 1}) == ["b"]


def test_create_and_delete_report_every_field():
    assert changed_fields(None, {"a": 1, "b": 2}) == ["a", "b"]
    assert changed_fields({"a": 1}, None) == ["a"]
    assert changed_fields(None, None) == []

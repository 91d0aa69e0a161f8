"""Tests for finch.routing.conventions — naming conventions to routes."""

import pytest

from finch.routing.conventions import (
    ACTION_VERBS,
    ID_PATTERN,
    ConventionEntry,
    classify,
    compile_member,
    expand_standard_action,
)


def _handler(*args):
    return args


class TestActionVerbs:
    def test_table(self) -> None:
        assert dict(ACTION_VERBS) == {
            "read": "GET",
            "write": "PUT",
            "create": "POST",
            "delete": "DELETE",
            "remove": "DELETE",
        }


class TestClassify:
    def test_route_hook(self) -> None:
        assert classify("route") is None

    @pytest.mark.parametrize("name", ["read", "write", "create", "delete", "remove"])
    def test_standard(self, name: str) -> None:
        entry = classify(name)
        assert entry == ConventionEntry(name, ACTION_VERBS[name], "standard", None)

    def test_camel_prefixed(self) -> None:
        assert classify("writeFoo") == ConventionEntry("writeFoo", "PUT", "prefixed", "foo")

    def test_camel_keeps_rest_of_name(self) -> None:
        assert classify("createUserAccount").path == "userAccount"

    def test_camel_single_letter_suffix(self) -> None:
        assert classify("readX").path == "x"

    def test_remove_prefix_maps_to_delete(self) -> None:
        entry = classify("removeFoo")
        assert entry.verb == "DELETE"
        assert entry.path == "foo"

    def test_snake_case_is_named(self) -> None:
        assert classify("create_account") == ConventionEntry(
            "create_account", "GET", "named", "create_account"
        )

    def test_snake_case_delete_is_get_by_name(self) -> None:
        (record,) = compile_member("items", "delete_item", _handler)
        assert (record.verb, record.full_path) == ("GET", "items/delete_item")

    def test_trailing_newline_is_not_prefixed(self) -> None:
        assert classify("readFoo\n").path_kind == "named"

    @pytest.mark.parametrize("name", ["stats", "reader", "readfoo", "created", "write_", "list"])
    def test_named_fallback(self, name: str) -> None:
        assert classify(name) == ConventionEntry(name, "GET", "named", name)

    def test_non_ascii_is_not_prefixed(self) -> None:
        assert classify("readÉtat").path_kind == "named"


class TestCompileMember:
    def test_prefixed_record(self) -> None:
        (record,) = compile_member("user", "writeFoo", _handler)
        assert record.base == "user"
        assert record.path == "foo"
        assert record.verb == "PUT"
        assert record.handler is _handler
        assert record.name == "writeFoo"

    def test_named_record(self) -> None:
        (record,) = compile_member("user", "stats", _handler)
        assert (record.path, record.verb) == ("stats", "GET")

    def test_standard_is_deferred(self) -> None:
        assert compile_member("user", "read", _handler) == []

    def test_hook_compiles_to_nothing(self) -> None:
        assert compile_member("user", "route", _handler) == []


class TestExpandStandardAction:
    def test_read_yields_two_routes(self) -> None:
        records = expand_standard_action("user", "read", _handler)
        assert len(records) == 2
        assert records[0].path is ID_PATTERN
        assert records[0].handler is _handler
        assert records[1].path is None
        assert all(r.verb == "GET" for r in records)

    def test_empty_read_passes_none_id(self) -> None:
        _, empty = expand_standard_action("user", "read", _handler)
        assert empty.handler("req", "res") == (None, "req", "res")

    def test_no_empty_read(self) -> None:
        records = expand_standard_action("user", "read", _handler, no_empty_read=True)
        assert len(records) == 1
        assert records[0].path is ID_PATTERN

    @pytest.mark.parametrize(
        ("action", "verb"),
        [("write", "PUT"), ("create", "POST"), ("delete", "DELETE"), ("remove", "DELETE")],
    )
    def test_other_actions(self, action: str, verb: str) -> None:
        (record,) = expand_standard_action("user", action, _handler)
        assert record.path is None
        assert record.verb == verb
        assert record.handler is _handler

    def test_id_pattern_matches_whole_digits(self) -> None:
        assert ID_PATTERN.search("42").groups() == ("42",)
        assert ID_PATTERN.search("42a") is None
        assert ID_PATTERN.search("") is None
        assert ID_PATTERN.search("42\n") is None

"""Tests for the dotted path resolver."""

from __future__ import annotations

from plumb._helpers import MISSING
from plumb.path import lookup, resolve, split_path, walk

USER = {
    "name": "John",
    "roles": [{"name": "Editor"}, {"name": "Admin"}],
    "meta": {1: "one", "2": "two"},
}


class TestResolve:
    def test_nested(self):
        assert resolve("roles.0.name", USER) == "Editor"
        assert resolve("roles.1.name", USER) == "Admin"

    def test_missing_is_none(self):
        assert resolve("roles.9.name", USER) is None
        assert resolve("address.city", USER) is None
        assert resolve("name.first", USER) is None

    def test_default(self):
        assert resolve("address", USER, "n/a") == "n/a"

    def test_wildcard(self):
        assert resolve("roles.*.name", USER) == ["Editor", "Admin"]
        assert resolve("roles.*", USER) == [{"name": "Editor"}, {"name": "Admin"}]

    def test_wildcard_over_scalar(self):
        assert resolve("name.*", USER) is None

    def test_integer_and_text_keys(self):
        assert resolve("meta.1", USER) == "one"
        assert resolve("meta.2", USER) == "two"

    def test_sequence_root(self):
        assert resolve(1, ["a", "b"]) == "b"
        assert resolve("0.name", [{"name": "x"}]) == "x"

    def test_never_creates_intermediates(self):
        data = {"a": {}}
        resolve("a.b.c", data)
        assert data == {"a": {}}


class TestLookup:
    def test_absent_vs_none(self):
        assert lookup("x", {"x": None}) is None
        assert lookup("y", {"x": None}) is MISSING

    def test_empty_path_is_the_container(self):
        assert lookup("", USER) is USER


class TestHelpers:
    def test_split_path(self):
        assert split_path("a.*.b") == ["a", "*", "b"]
        assert split_path(3) == ["3"]

    def test_walk(self):
        assert list(walk({"a": [1, {"b": 2}]})) == [
            ("a", [1, {"b": 2}]),
            ("a.0", 1),
            ("a.1", {"b": 2}),
            ("a.1.b", 2),
        ]

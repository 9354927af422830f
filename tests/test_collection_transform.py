"""Tests for map, filter, reduce, each and the shape-changing operations."""

from __future__ import annotations

import asyncio
import math

import pytest

from plumb import Deferred, EmptyCollectionError, Partial, TypeKindError, pipe
from plumb.collection import apply, chunk, diff, each, filter, flat, map, merge, reduce, reverse, split


def add(a, b):
    return a + b


# ============================================================
# map
# ============================================================


class TestMap:
    def test_sequence(self):
        data = [1, 2, 3, 4]
        assert map(lambda item: item + 10, data) == [11, 12, 13, 14]
        assert data == [1, 2, 3, 4]

    def test_mapping_keeps_keys(self):
        data = {"apple": 5, "pear": 10}
        assert map(lambda item: item + 10, data) == {"apple": 15, "pear": 20}
        assert data == {"apple": 5, "pear": 10}

    def test_index_and_key_are_passed(self):
        assert map(lambda item, index: (item, index), ["a", "b"]) == [("a", 0), ("b", 1)]
        assert map(lambda value, key: key, {"x": 1}) == {"x": "x"}

    def test_tuple_gives_list(self):
        assert map(lambda item: item * 2, (1, 2)) == [2, 4]

    def test_deferred(self, run, later):
        assert run(map(lambda item: item + 10, later([1, 2, 3, 4]))) == [11, 12, 13, 14]

    def test_partial(self):
        add10 = map(lambda item: item + 10)
        assert isinstance(add10, Partial)
        assert add10([1, 2, 3, 4]) == [11, 12, 13, 14]
        assert add10([5, 6, 7, 8]) == [15, 16, 17, 18]

    def test_pipe(self):
        assert pipe([1, 2, 3, 4], map(lambda item: item + 10)) == [11, 12, 13, 14]

    def test_unsupported_container(self):
        with pytest.raises(TypeKindError) as info:
            map(str, 42)
        assert info.value.operation == "map"
        assert info.value.kind == "int"


# ============================================================
# filter
# ============================================================


class TestFilter:
    def test_sequence(self):
        data = [1, 2, 3, 4]
        assert filter(lambda value: value > 2, data) == [3, 4]
        assert data == [1, 2, 3, 4]

    def test_mapping(self):
        data = {"books": 194, "users": 1458, "collections": 500}
        assert filter(lambda value: value < 1000, data) == {"books": 194, "collections": 500}

    def test_default_keeps_useful_values(self):
        data = [0, 1, 2, None, True, 3, 4, "", False, 5, 6, "", 7, [], 8, 9, {}, 10]
        assert filter(data) == [0, 1, 2, True, 3, 4, False, 5, 6, 7, 8, 9, 10]

    def test_default_on_mapping(self):
        data = {"books": 194, "users": 1458, "collections": 500, "kits": None}
        assert filter(data) == {"books": 194, "users": 1458, "collections": 500}

    def test_deferred(self, run, later):
        assert run(filter(lambda value: value > 2, later([1, 2, 3, 4]))) == [3, 4]

    def test_partial_is_reusable(self):
        greater_than_two = filter(lambda value: value > 2)
        assert greater_than_two([1, 2, 3, 4]) == [3, 4]
        assert greater_than_two([1, 2, 3, 4, 5]) == [3, 4, 5]

    def test_pipe_with_bare_operation(self):
        assert pipe([0, None, "", 1], filter) == [0, 1]


# ============================================================
# reduce
# ============================================================


class TestReduce:
    def test_sequence(self):
        assert reduce(add, [1, 2, 3, 4]) == 10

    def test_mapping(self):
        assert reduce(add, {"wood": 150, "stone": 50, "gold": 10}) == 210

    def test_seed(self):
        assert reduce(add, 10, [1, 2, 3, 4]) == 20

    def test_key_is_passed(self):
        collected = reduce(lambda acc, value, key: [*acc, key], [], {"a": 1, "b": 2})
        assert collected == ["a", "b"]

    def test_empty_without_seed(self):
        with pytest.raises(EmptyCollectionError):
            reduce(add, [])
        assert issubclass(EmptyCollectionError, TypeKindError)

    def test_empty_with_seed(self):
        assert reduce(add, 5, []) == 5

    def test_partial_and_pipe(self):
        total = reduce(add)
        assert total([1, 2, 3, 4]) == 10
        assert pipe([1, 2, 3, 4], reduce(add)) == 10


# ============================================================
# each
# ============================================================


class TestEach:
    def test_sequence_order(self):
        seen = []
        data = [1, 2, 3]
        assert each(lambda item, index: seen.append((index, item)), data) is data
        assert seen == [(0, 1), (1, 2), (2, 3)]

    def test_mapping_receives_key_then_value(self):
        seen = []
        each(lambda key, value: seen.append((key, value)), {"name": "İbn", "lastname": "Sînâ"})
        assert seen == [("name", "İbn"), ("lastname", "Sînâ")]

    def test_partial_accumulates(self):
        total = []
        add_total = each(total.append)
        add_total([1, 2])
        add_total([3, 4])
        assert sum(total) == 10

    def test_async_callback_is_sequential(self, run):
        seen = []

        async def visit(item):
            seen.append(("start", item))
            await asyncio.sleep(0)
            seen.append(("end", item))

        data = [1, 2]
        result = each(visit, data)
        assert isinstance(result, Deferred)
        assert run(result) is data
        assert seen == [("start", 1), ("end", 1), ("start", 2), ("end", 2)]

    def test_async_failure_propagates(self, run):
        async def explode(item):
            raise ValueError(item)

        with pytest.raises(ValueError):
            run(each(explode, [1, 2]))

    def test_deferred_container(self, run, later):
        seen = []
        run(each(seen.append, later([1, 2])))
        assert seen == [1, 2]


# ============================================================
# flat / chunk / split
# ============================================================


class TestFlat:
    def test_default_depth(self):
        assert flat([0, 1, 2, [3, 4]]) == [0, 1, 2, 3, 4]
        assert flat([[1, 2, 3], [4, 5, 6], [7, 8, 9]]) == [1, 2, 3, 4, 5, 6, 7, 8, 9]
        assert flat([0, 1, [2, [3, [4, 5]]]]) == [0, 1, 2, [3, [4, 5]]]

    def test_depth(self):
        data = [0, 1, [2, [3, [4, 5]]]]
        assert flat(2, data) == [0, 1, 2, 3, [4, 5]]
        assert flat(math.inf, data) == [0, 1, 2, 3, 4, 5]
        assert data == [0, 1, [2, [3, [4, 5]]]]

    def test_mapping_values(self):
        data = {"day": "monday", "appointments": ["09:00", "10:00", "11:00"]}
        assert flat(data) == ["monday", "09:00", "10:00", "11:00"]

    def test_mapping_keeps_nested_mappings(self):
        data = {
            "monday": [{"name": "Adriana Ellis", "start": "09:00"}],
            "tuesday": [{"name": "Wilma Barrett", "start": "10:00"}],
        }
        assert flat(data) == [
            {"name": "Adriana Ellis", "start": "09:00"},
            {"name": "Wilma Barrett", "start": "10:00"},
        ]

    def test_partial_with_deferred(self, run, later):
        flatten = flat(math.inf)
        assert run(flatten(later([0, 1, [2, [3, [4, 5]]]]))) == [0, 1, 2, 3, 4, 5]

    def test_negative_depth(self):
        with pytest.raises(ValueError):
            flat(-1, [[1]])


class TestChunk:
    def test_sequence(self):
        assert chunk(4, [1, 2, 3, 4, 5, 6, 7]) == [[1, 2, 3, 4], [5, 6, 7]]

    def test_mapping(self):
        data = {"name": "Albert", "last": "Einstein", "age": "∞"}
        assert chunk(2, data) == [{"name": "Albert", "last": "Einstein"}, {"age": "∞"}]

    def test_partial_on_both_variants(self):
        pairs = chunk(2)
        assert pairs([1, 2, 3, 4, 5, 6, 7]) == [[1, 2], [3, 4], [5, 6], [7]]
        assert pairs({"a": 1, "b": 2, "c": 3}) == [{"a": 1, "b": 2}, {"c": 3}]

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunk(0, [1, 2])


class TestSplit:
    def test_text(self):
        assert split("&", "id=1&book=5") == ["id=1", "book=5"]

    def test_sequence_parts(self):
        assert split(3, [1, 2, 3, 4, 5]) == [[1, 2], [3, 4], [5]]


# ============================================================
# merge / diff / apply / reverse
# ============================================================


class TestMerge:
    def test_sequence_appends_seed(self):
        assert merge(["apple", "pear"], ["orange"]) == ["orange", "apple", "pear"]

    def test_mapping_union(self):
        merged = merge({"name": "Nikola", "last": "Tesla"}, {"age": 32})
        assert merged == {"name": "Nikola", "last": "Tesla", "age": 32}

    def test_seed_wins_on_conflict(self):
        assert merge({"a": 2}, {"a": 1, "b": 1}) == {"a": 2, "b": 1}

    def test_deferred_in_either_position(self, run, later):
        assert run(merge(["strawberry"], later(["blackberry"]))) == ["blackberry", "strawberry"]
        assert run(merge(later(["strawberry"]), ["blackberry"])) == ["blackberry", "strawberry"]
        assert run(merge(Deferred.of(["s"]), Deferred.of(["b"]))) == ["b", "s"]

    def test_partial_and_pipe(self):
        assert merge(["orange"])(["apple", "pear"]) == ["apple", "pear", "orange"]
        assert pipe(["apple", "pear"], merge(["orange"])) == ["apple", "pear", "orange"]

    def test_mismatched_variants(self):
        with pytest.raises(TypeKindError):
            merge({"a": 1}, [1])


class TestDiff:
    def test_sequence(self):
        base = [1, 2, 3, 4, 7]
        data = [1, 2, 3, 4, 5, 6, 7]
        assert diff(base, data) == [5, 6]
        assert base == [1, 2, 3, 4, 7]

    def test_mapping_new_and_changed(self):
        base = {"name": "Of Mice and Men", "page": 325}
        data = {"name": "Of Mice and Men", "writer": "John Steinbeck", "page": 612}
        assert diff(base, data) == {"writer": "John Steinbeck", "page": 612}

    def test_deep_equality(self):
        assert diff([{"a": 1}], [{"a": 1}, {"a": 2}]) == [{"a": 2}]

    def test_booleans_differ_from_numbers(self):
        assert diff([1], [True]) == [True]
        assert diff([0, 1.0], [False, 1]) == [False]
        assert diff({"a": 0}, {"a": False}) == {"a": False}
        assert diff([{"on": 1}], [{"on": True}]) == [{"on": True}]

    def test_both_deferred(self, run, later):
        assert run(diff(later([1, 2, 3, 4, 7]), later([1, 2, 3, 4, 5, 6, 7]))) == [5, 6]

    def test_partial(self):
        compare = diff([1, 2, 3, 4, 7])
        assert compare([1, 2, 3, 4, 5, 6, 7]) == [5, 6]
        assert compare([1, 2, 3, 4, 12, 15]) == [12, 15]


class TestApply:
    def test_sequence(self):
        data = [5, 3]
        assert apply(add, data) == 8
        assert data == [5, 3]

    def test_argument_order(self):
        def greet(name, greeting):
            return f"{greeting} {name}!"

        assert apply(greet, ["John", "Hello"]) == "Hello John!"

    def test_mapping_values(self):
        assert apply(add, {"grape": 3, "apple": 5}) == 8

    def test_partial_with_deferred(self, run, later):
        applied = apply(add)
        assert applied([5, 3]) == 8
        assert run(applied(later([2, 2]))) == 4

    def test_deferred_pipe(self, run, later):
        assert run(pipe(later([5, 3]), apply(add))) == 8


class TestReverse:
    def test_variants(self):
        assert reverse([1, 2, 3, 4, 5]) == [5, 4, 3, 2, 1]
        assert list(reverse({"a": 1, "b": 2})) == ["b", "a"]
        assert reverse("abc") == "cba"

"""Tests for pipe and pipe_traced."""

from __future__ import annotations

import pytest

from plumb import Deferred, Stage, Trace, pipe, pipe_traced
from plumb.collection import filter, map
from plumb.math import add, sum


class TestPipe:
    def test_threads_left_to_right(self):
        assert pipe([1, 2, 3], map(add(1)), filter(lambda x: x > 2), sum) == 7

    def test_no_stages(self):
        assert pipe(5) == 5

    def test_switches_to_deferred(self, run, later):
        result = pipe(1, lambda x: later(x + 1), lambda x: x * 10)
        assert isinstance(result, Deferred)
        assert run(result) == 20

    def test_deferred_input(self, run, later):
        assert run(pipe(later([1, 2]), map(add(1)))) == [2, 3]

    def test_failure_propagates(self, run, later):
        def explode(value):
            raise LookupError(value)

        with pytest.raises(LookupError):
            run(pipe(later(1), explode))

    def test_sync_failure_raises(self):
        with pytest.raises(ZeroDivisionError):
            pipe(1, lambda x: x / 0)


class TestPipeTraced:
    def test_records_every_stage(self):
        result, trace = pipe_traced(" a ", str.strip, str.upper)
        assert result == "A"
        assert trace == Trace.of(Stage("strip", "a"), Stage("upper", "A"))
        assert trace.names == ["strip", "upper"]

    def test_partials_are_named_by_repr(self):
        _, trace = pipe_traced([1], map(add(1)))
        assert trace[0].name.startswith("map(")
        assert trace[0].result == [2]

    def test_deferred_stages_record_settled_values(self, run, later):
        traced = pipe_traced(1, lambda x: later(x + 1), add(3))
        assert isinstance(traced, Deferred)
        result, trace = run(traced)
        assert result == 5
        assert [stage.result for stage in trace] == [2, 5]


class TestTrace:
    def test_monoid_laws(self):
        x = Trace.of(Stage("a", 1))
        y = Trace.of(Stage("b", 2))
        z = Trace.of(Stage("c", 3))
        assert Trace().combine(x) == x
        assert x.combine(Trace()) == x
        assert x.combine(y).combine(z) == x.combine(y.combine(z))

    def test_tell_returns_new_trace(self):
        empty = Trace()
        told = empty.tell(Stage("a", 1))
        assert empty == []
        assert told == [Stage("a", 1)]

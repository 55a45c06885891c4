"""Tests for RenderContext and TraceLog."""

import pytest

from facetrace.context import RenderContext, TraceLog
from facetrace.errors import InvariantError


class TestRenderContext:

    def test_cells_start_at_zero(self):
        ctx = RenderContext(3)
        assert len(ctx) == 3
        assert [ctx[i] for i in range(3)] == [0, 0, 0]

    def test_set_and_get(self):
        ctx = RenderContext(2)
        ctx[1] = 7
        assert ctx[1] == 7
        assert ctx[0] == 0

    @pytest.mark.parametrize("object_id", [-1, 2, 100])
    def test_out_of_bounds(self, object_id):
        ctx = RenderContext(2)
        with pytest.raises(InvariantError):
            ctx[object_id]
        with pytest.raises(InvariantError):
            ctx[object_id] = 1

    def test_descend_restores_counter(self):
        ctx = RenderContext(1)
        with ctx.descend(0):
            assert ctx[0] == 1
            with ctx.descend(0):
                assert ctx[0] == 2
        assert ctx[0] == 0

    def test_descend_restores_on_error(self):
        ctx = RenderContext(1)
        with pytest.raises(RuntimeError):
            with ctx.descend(0):
                raise RuntimeError("boom")
        assert ctx[0] == 0

    def test_no_trace_by_default(self):
        ctx = RenderContext(1)
        assert ctx.trace_log is None
        ctx.trace("ignored")

    def test_trace_nesting(self):
        ctx = RenderContext(1, trace=True)
        ctx.trace("outer")
        with ctx.descend(0):
            ctx.trace("inner")
        assert ctx.trace_log.drain() == ["outer", TraceLog.INDENT + "inner"]


class TestTraceLog:

    def test_drain_empties(self):
        log = TraceLog()
        log.record("a")
        log.record("b")
        assert len(log) == 2
        assert log.drain() == ["a", "b"]
        assert len(log) == 0

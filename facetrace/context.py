"""
Per render-thread, per-object state.

Every rendering thread owns one RenderContext. Surfaces keep anything
that changes during a render (recursion depth) in the context cell for
their object id, so the scene itself stays read-only while rendering.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional
import numpy as np

from .errors import InvariantError


class TraceLog:
    """Indented, human-readable trace of incidence tests.

    Collected per thread and drained once the thread has finished.
    """

    INDENT = "  "

    def __init__(self):
        self._lines: list[str] = []
        self._depth = 0

    def record(self, message: str) -> None:
        self._lines.append(self.INDENT * self._depth + message)

    @contextmanager
    def nested(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def drain(self) -> list[str]:
        """Return every recorded line and forget them."""
        lines, self._lines = self._lines, []
        return lines

    def __len__(self) -> int:
        return len(self._lines)


class RenderContext:
    """Dense scratch storage indexed by object id, plus an optional trace."""

    def __init__(self, object_count: int, trace: bool = False):
        """Create a context.

        Args:
            object_count: Number of objects in the scene
            trace: Whether to collect a TraceLog for this thread
        """
        self._cells = np.zeros(object_count, dtype=np.intp)
        self.trace_log: Optional[TraceLog] = TraceLog() if trace else None

    def __len__(self) -> int:
        return len(self._cells)

    def _check(self, object_id: int) -> None:
        if not 0 <= object_id < len(self._cells):
            raise InvariantError(
                f"Object id {object_id} out of bounds for {len(self._cells)} objects")

    def __getitem__(self, object_id: int) -> int:
        self._check(object_id)
        return int(self._cells[object_id])

    def __setitem__(self, object_id: int, value: int) -> None:
        self._check(object_id)
        self._cells[object_id] = value

    @contextmanager
    def descend(self, object_id: int) -> Iterator[None]:
        """Count one more level of recursion through the given object."""
        self[object_id] += 1
        try:
            if self.trace_log is not None:
                with self.trace_log.nested():
                    yield
            else:
                yield
        finally:
            self[object_id] -= 1

    def trace(self, message: str) -> None:
        if self.trace_log is not None:
            self.trace_log.record(message)

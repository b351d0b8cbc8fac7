"""Breadth- and depth-first walks over a Graph.

One double-ended work queue drives both orders. Newly discovered neighbours
always go on the front; depth mode takes the next item from the front (a
stack), breadth mode from the back (a queue). A label is marked visited when
it is queued, so every reachable node is produced exactly once even when
edges run both ways between two nodes.

A ``Walk`` is a one-shot iterator borrowing its graph: mutating the graph
while a walk is in flight is the caller's problem. Call ``Graph.walk`` (or
``bfs``/``dfs``/``search``) again to start over.
"""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graph_ascii.graph import Graph


class Mode(enum.Enum):
    BREADTH = "breadth"
    DEPTH = "depth"


class Direction(enum.Enum):
    """Which edges a walk follows from each node."""

    OUT = "out"
    BOTH = "both"


class Walk:
    """Lazy, finite, non-restartable sequence of labels reachable from the roots."""

    def __init__(
        self,
        graph: Graph,
        roots: Iterable[Any],
        mode: Mode = Mode.DEPTH,
        direction: Direction = Direction.OUT,
    ) -> None:
        self.graph = graph
        self.mode = mode
        self.direction = direction
        self._buffer: deque[Any] = deque()
        self._visited: set[int] = set()
        for root in roots:
            k = graph.key_of(root)
            if k not in self._visited:
                self._visited.add(k)
                self._buffer.appendleft(root)

    @classmethod
    def from_start(
        cls,
        graph: Graph,
        start: Any,
        mode: Mode = Mode.DEPTH,
        direction: Direction = Direction.OUT,
    ) -> Walk | None:
        """Walk from a single *start* label; None if *start* is not in *graph*."""
        if start not in graph:
            return None
        return cls(graph, [start], mode, direction)

    @classmethod
    def from_sources(cls, graph: Graph, mode: Mode = Mode.DEPTH) -> Walk:
        """Walk from every node with no incoming edges."""
        return cls(graph, graph.sources(), mode)

    def _next_hops(self, label: Any) -> list[Any]:
        hops = self.graph.neighbors(label) or []
        if self.direction is Direction.BOTH:
            hops = hops + (self.graph.predecessors(label) or [])
        return hops

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if not self._buffer:
            raise StopIteration
        if self.mode is Mode.DEPTH:
            current = self._buffer.popleft()
        else:
            current = self._buffer.pop()

        for hop in self._next_hops(current):
            k = self.graph.key_of(hop)
            if k not in self._visited:
                self._visited.add(k)
                self._buffer.appendleft(hop)
        return current

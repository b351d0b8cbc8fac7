"""Topological ordering by in-degree reduction (Kahn's algorithm).

The frontier is a stack: seeded with the sources, the first-inserted source
on top, and refilled so that the first ready neighbour of the node just
emitted comes out next. That keeps chains together, which is what the row
layout wants, and makes the order deterministic for a given graph.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from graph_ascii.graph import Graph


def topological_order(graph: Graph) -> Iterator[Any]:
    """Yield every label of *graph* so that each edge points forward."""
    degrees: dict[int, int] = {graph.key_of(label): deg for label, deg in graph.indegrees().items()}
    frontier: list[Any] = list(reversed(graph.sources()))

    while frontier:
        label = frontier.pop()
        yield label

        ready: list[Any] = []
        for neighbor in graph.neighbors(label) or []:
            k = graph.key_of(neighbor)
            degrees[k] -= 1
            if degrees[k] == 0:
                ready.append(neighbor)
        frontier.extend(reversed(ready))


class Ordering:
    """Re-iterable view of a graph's topological order.

    Each ``iter()`` recomputes the order from the graph's current state.
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def __iter__(self) -> Iterator[Any]:
        return topological_order(self.graph)

    def position(self) -> dict[int, int]:
        """Map identity key → index in the order."""
        return {self.graph.key_of(label): i for i, label in enumerate(self)}

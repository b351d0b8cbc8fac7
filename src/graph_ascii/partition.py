"""Component partition — split a graph into its weakly connected pieces.

``Partition`` takes ownership of the graph it is given. On construction it
tags every node with the root of the component it belongs to, using a depth
walk that follows edges in both directions over the untouched graph. Each
``next()`` then moves one tagged group (nodes and their edges) out of the
source graph into a fresh ``Graph``. The source is empty once the partition
is exhausted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from graph_ascii.traversal import Direction, Mode, Walk

if TYPE_CHECKING:
    from graph_ascii.graph import Graph

logger = logging.getLogger(__name__)


class Partition:
    """Lazy, draining iterator of the components of a graph."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._component: dict[int, int] = {}

        for label in graph.labels():
            k = graph.key_of(label)
            if k in self._component:
                continue
            walk = Walk(graph, [label], Mode.DEPTH, Direction.BOTH)
            for reached in walk:
                self._component[graph.key_of(reached)] = k

    def __iter__(self) -> Iterator[Graph]:
        return self

    def __next__(self) -> Graph:
        label = self.graph.pick()
        if label is None:
            raise StopIteration
        root = self._component[self.graph.key_of(label)]
        members = [k for k, r in self._component.items() if r == root]
        for k in members:
            del self._component[k]

        part = self.graph.detach(members)
        logger.debug("partition yielded component of %d node(s)", len(members))
        return part

"""Graph store — identity-keyed directed acyclic graph.

Nodes are keyed by ``key(label)`` (the identity function, ``hash`` by
default) and live in a networkx ``DiGraph`` whose node ids are those keys.
Each node carries its label under the ``"label"`` attribute; each edge
carries ``"weight"`` (always 1).

The store only ever holds a DAG: ``connect`` rejects self-loops and any edge
whose target can already reach its source. Every consumer (ordering, layout,
rendering) relies on that and carries no cycle handling of its own.

Failure is signalled through return values, never exceptions:
  - ``None``  — the label is not in the graph ("absent")
  - ``False`` — a connection was rejected
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import networkx as nx

if TYPE_CHECKING:
    from graph_ascii.config import DiagramOptions
    from graph_ascii.ordering import Ordering
    from graph_ascii.partition import Partition
    from graph_ascii.traversal import Mode, Walk

logger = logging.getLogger(__name__)

Identity = Callable[[Any], int]

EDGE_WEIGHT: int = 1


class ConnectRejection(enum.Enum):
    """Why ``connect`` refused an edge (see ``Graph.check_connect``)."""

    MISSING_ENDPOINT = "missing_endpoint"
    SELF_LOOP = "self_loop"
    CYCLE = "cycle"


@dataclass
class Node:
    """A node detached from (or snapshotted out of) a graph.

    ``edges`` maps target identity key → weight.
    """

    label: Any
    edges: dict[int, int] = field(default_factory=dict)


class Graph:
    """Directed acyclic graph over caller-supplied labels.

    Labels must be hashable and displayable; two labels are the same node
    when ``key`` maps them to the same integer. ``key`` must be collision-free
    over the labels in use: adding a label whose key collides with an existing
    node replaces that node.
    """

    def __init__(self, labels: Iterable[Any] = (), *, key: Identity = hash) -> None:
        self._key: Identity = key
        self._digraph: nx.DiGraph = nx.DiGraph()
        self.extend(labels)

    @classmethod
    def init(cls, labels: Iterable[Any], *, key: Identity = hash) -> Graph:
        """Build a graph holding each of *labels* (no edges)."""
        return cls(labels, key=key)

    def key_of(self, label: Any) -> int:
        """Identity key of *label* under this graph's identity function."""
        return self._key(label)

    # ─── Internal lookups ─────────────────────────────────────────────────

    def _label_of(self, k: int) -> Any:
        return self._digraph.nodes[k]["label"]

    def _has(self, label: Any) -> bool:
        return self._key(label) in self._digraph

    # ─── Node operations ──────────────────────────────────────────────────

    def add(self, label: Any) -> None:
        """Insert *label* as a node with no edges.

        A node already stored under the same key is replaced, and edges
        pointing at that key from other nodes are kept.
        """
        k = self._key(label)
        if k in self._digraph:
            logger.debug("replacing node %r with %r (same key)", self._label_of(k), label)
            self._digraph.remove_edges_from(list(self._digraph.out_edges(k)))
            self._digraph.nodes[k]["label"] = label
            return
        self._digraph.add_node(k, label=label)

    def extend(self, labels: Iterable[Any]) -> None:
        for label in labels:
            self.add(label)

    def remove(self, label: Any) -> Node | None:
        """Delete *label* and every edge into or out of it.

        Returns the removed node (with its outgoing edges), or None if absent.
        """
        k = self._key(label)
        if k not in self._digraph:
            return None
        node = self._snapshot(k)
        self._digraph.remove_node(k)
        return node

    def get(self, label: Any) -> Node | None:
        """Snapshot of the node stored for *label*, or None if absent."""
        k = self._key(label)
        if k not in self._digraph:
            return None
        return self._snapshot(k)

    def _snapshot(self, k: int) -> Node:
        edges = {tgt: attrs["weight"] for _, tgt, attrs in self._digraph.out_edges(k, data=True)}
        return Node(label=self._label_of(k), edges=edges)

    # ─── Edge operations ──────────────────────────────────────────────────

    def check_connect(self, frm: Any, to: Any) -> ConnectRejection | None:
        """Return the reason ``connect(frm, to)`` would be rejected, or None.

        The cycle check walks everything reachable from *to*; if *frm* is
        among it, the new edge would close a cycle.
        """
        a = self._key(frm)
        b = self._key(to)
        if a not in self._digraph or b not in self._digraph:
            return ConnectRejection.MISSING_ENDPOINT
        if a == b:
            return ConnectRejection.SELF_LOOP
        if a in nx.descendants(self._digraph, b):
            return ConnectRejection.CYCLE
        return None

    def connect(self, frm: Any, to: Any) -> bool:
        """Add the edge *frm* → *to* (weight 1). Returns False if rejected."""
        rejection = self.check_connect(frm, to)
        if rejection is not None:
            logger.debug("rejected edge %r -> %r: %s", frm, to, rejection.value)
            return False
        self._digraph.add_edge(self._key(frm), self._key(to), weight=EDGE_WEIGHT)
        return True

    def extend_edges(self, pairs: Iterable[tuple[Any, Any]]) -> int:
        """Attempt ``connect`` on each pair in order; return how many were accepted."""
        accepted = 0
        for frm, to in pairs:
            if self.connect(frm, to):
                accepted += 1
        return accepted

    def disconnect(self, frm: Any, to: Any) -> bool:
        """Remove the edge *frm* → *to*. Returns True if an edge was removed."""
        a = self._key(frm)
        b = self._key(to)
        if not self._digraph.has_edge(a, b):
            return False
        self._digraph.remove_edge(a, b)
        return True

    def is_adjacent(self, frm: Any, to: Any) -> bool:
        return self._digraph.has_edge(self._key(frm), self._key(to))

    def weight(self, frm: Any, to: Any) -> int | None:
        """Weight of the edge *frm* → *to*, or None if there is no such edge."""
        data = self._digraph.get_edge_data(self._key(frm), self._key(to))
        return None if data is None else data["weight"]

    def neighbors(self, label: Any) -> list[Any] | None:
        """Outgoing neighbours of *label* in edge insertion order, or None if absent."""
        k = self._key(label)
        if k not in self._digraph:
            return None
        return [self._label_of(t) for t in self._digraph.successors(k)]

    def predecessors(self, label: Any) -> list[Any] | None:
        """Incoming neighbours of *label*, or None if absent."""
        k = self._key(label)
        if k not in self._digraph:
            return None
        return [self._label_of(p) for p in self._digraph.predecessors(k)]

    def adjacent(self, label: Any) -> set[Any] | None:
        """Set of outgoing neighbours of *label*, or None if absent."""
        neighbors = self.neighbors(label)
        return None if neighbors is None else set(neighbors)

    def edges(self) -> Iterator[tuple[Any, Any]]:
        """Yield every edge as a ``(from_label, to_label)`` pair."""
        for src, tgt in self._digraph.edges():
            yield self._label_of(src), self._label_of(tgt)

    # ─── Size & degree queries ────────────────────────────────────────────

    def size(self) -> int:
        return self._digraph.number_of_nodes()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, label: object) -> bool:
        return self._has(label)

    def labels(self) -> Iterator[Any]:
        """Yield every label in insertion order."""
        for k in self._digraph.nodes:
            yield self._label_of(k)

    def __iter__(self) -> Iterator[Any]:
        return self.labels()

    def pick(self) -> Any | None:
        """Any one label of the graph (the oldest), or None if empty."""
        return next(self.labels(), None)

    def outdegree(self, label: Any) -> int | None:
        k = self._key(label)
        if k not in self._digraph:
            return None
        return self._digraph.out_degree(k)

    def indegree(self, label: Any) -> int | None:
        k = self._key(label)
        if k not in self._digraph:
            return None
        return self._digraph.in_degree(k)

    def indegrees(self) -> dict[Any, int]:
        """Map every label to its in-degree (0 included)."""
        return {self._label_of(k): deg for k, deg in self._digraph.in_degree()}

    def sources(self) -> list[Any]:
        """Labels with no incoming edges, in insertion order."""
        return [self._label_of(k) for k, deg in self._digraph.in_degree() if deg == 0]

    def sinks(self) -> list[Any]:
        """Labels with no outgoing edges, in insertion order."""
        return [self._label_of(k) for k, deg in self._digraph.out_degree() if deg == 0]

    # ─── Whole-graph helpers ──────────────────────────────────────────────

    def copy(self) -> Graph:
        clone = Graph(key=self._key)
        clone._digraph = self._digraph.copy()
        return clone

    def to_networkx(self) -> nx.DiGraph:
        """Copy of the store as a DiGraph whose node ids are the labels."""
        g: nx.DiGraph = nx.DiGraph()
        for label in self.labels():
            g.add_node(label)
        for src, tgt, attrs in self._digraph.edges(data=True):
            g.add_edge(self._label_of(src), self._label_of(tgt), **attrs)
        return g

    def detach(self, keys: Iterable[int]) -> Graph:
        """Move the nodes under identity *keys* (with their edges) into a new graph.

        Edges leaving the moved set are dropped along with the source nodes.
        """
        keys = list(keys)
        part = Graph(key=self._key)
        part._digraph = self._digraph.subgraph(keys).copy()
        self._digraph.remove_nodes_from(keys)
        return part

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return nx.utils.graphs_equal(self._digraph, other._digraph)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Graph(nodes={self.size()}, edges={self._digraph.number_of_edges()})"

    # ─── Delegates ────────────────────────────────────────────────────────

    def walk(self, start: Any, mode: Mode | None = None) -> Walk | None:
        from graph_ascii.traversal import Mode, Walk

        return Walk.from_start(self, start, mode or Mode.DEPTH)

    def search(self, mode: Mode | None = None) -> Walk:
        from graph_ascii.traversal import Mode, Walk

        return Walk.from_sources(self, mode or Mode.DEPTH)

    def bfs(self) -> Walk:
        from graph_ascii.traversal import Mode

        return self.search(Mode.BREADTH)

    def dfs(self) -> Walk:
        from graph_ascii.traversal import Mode

        return self.search(Mode.DEPTH)

    def ordering(self) -> Ordering:
        from graph_ascii.ordering import Ordering

        return Ordering(self)

    def partition(self) -> Partition:
        """Split this graph into its components. Drains this graph."""
        from graph_ascii.partition import Partition

        return Partition(self)

    def diagram(self, options: DiagramOptions | None = None) -> str:
        from graph_ascii.renderers.ascii import AsciiRenderer

        return AsciiRenderer(options).render_graph(self)

    def __str__(self) -> str:
        return self.diagram()

"""Tests for partition.py — draining split into weakly connected components."""

from __future__ import annotations

import random

import networkx as nx
import pytest

from graph_ascii import Graph, Partition

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_graph(labels: str, *edges: tuple[str, str]) -> Graph:
    g = Graph(labels)
    for src, tgt in edges:
        assert g.connect(src, tgt)
    return g


def assert_valid_partition(original: Graph, parts: list[Graph]) -> None:
    """Parts are disjoint, cover the original, and keep exactly its edges."""
    seen: set = set()
    for part in parts:
        labels = set(part.labels())
        assert labels, "components are never empty"
        assert not labels & seen, "components must be disjoint"
        seen |= labels
    assert seen == set(original.labels())

    edges = {edge for part in parts for edge in part.edges()}
    assert edges == set(original.edges())


# ─── Partition ────────────────────────────────────────────────────────────────


class TestPartition:
    def test_empty(self):
        """An empty graph has no components."""
        assert list(Graph().partition()) == []

    def test_trivially_disconnected(self):
        """26 isolated nodes → 26 single-node components."""
        g = Graph("abcdefghijklmnopqrstuvwxyz")
        parts = list(g.partition())
        assert len(parts) == 26
        assert all(part.size() == 1 for part in parts)

    def test_single_component_equals_graph(self):
        """A connected graph comes back whole, edges intact."""
        g = make_graph("abc", ("a", "b"), ("a", "c"), ("b", "c"))
        orig = g.copy()
        parts = g.partition()
        assert next(parts) == orig
        assert next(parts, None) is None

    def test_two_components(self):
        """a/b/c and d/e split into sizes 3 and 2."""
        g = make_graph("abcde", ("a", "b"), ("a", "c"), ("b", "c"), ("d", "e"))
        orig = g.copy()
        parts = list(g.partition())
        assert len(parts) == 2
        for part in parts:
            if "a" in part:
                assert part.size() == 3
            else:
                assert "d" in part
                assert part.size() == 2
        assert_valid_partition(orig, parts)

    def test_shared_sink_joins_sources(self):
        """a → c ← b is one component even though a and b are both sources."""
        g = make_graph("abc", ("a", "c"), ("b", "c"))
        parts = list(g.partition())
        assert len(parts) == 1
        assert parts[0].size() == 3

    def test_drains_source(self):
        """The partitioned graph is empty once the partition is exhausted."""
        g = make_graph("abcd", ("a", "b"), ("c", "d"))
        parts = g.partition()
        next(parts)
        assert g.size() == 2
        next(parts)
        assert g.size() == 0
        assert list(parts) == []

    def test_not_restartable(self):
        """A second pass over the same partition yields nothing."""
        g = make_graph("ab", ("a", "b"))
        parts = Partition(g)
        assert len(list(parts)) == 1
        assert list(parts) == []

    @pytest.mark.parametrize("seed", range(10))
    def test_random_graphs(self, seed):
        """Random DAGs partition into disjoint, covering, edge-preserving parts."""
        rng = random.Random(seed)
        g = Graph(range(20))
        for _ in range(15):
            g.connect(rng.randrange(20), rng.randrange(20))
        orig = g.copy()
        parts = list(g.partition())
        assert_valid_partition(orig, parts)
        assert len(parts) == nx.number_weakly_connected_components(orig.to_networkx())

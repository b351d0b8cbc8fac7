"""Tests for ordering.py — topological order by in-degree reduction."""

from __future__ import annotations

import random

import pytest

from graph_ascii import Graph, Ordering, topological_order

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_graph(labels: str, *edges: tuple[str, str]) -> Graph:
    g = Graph(labels)
    for src, tgt in edges:
        assert g.connect(src, tgt)
    return g


def assert_topological(g: Graph, order: list) -> None:
    """Every node appears once and every edge points forward."""
    assert len(order) == g.size()
    assert set(order) == set(g.labels())
    position = {label: i for i, label in enumerate(order)}
    for src, tgt in g.edges():
        assert position[src] < position[tgt], f"{src} should precede {tgt} in {order}"


# ─── Ordering ─────────────────────────────────────────────────────────────────


class TestOrdering:
    def test_empty(self):
        """Empty graph → empty order."""
        assert list(Graph().ordering()) == []

    def test_single(self):
        """One node → that node."""
        assert list(Graph(["x"]).ordering()) == ["x"]

    def test_triangle(self):
        """a → b, a → c, b → c: a first, c last."""
        g = make_graph("abc", ("a", "b"), ("a", "c"), ("b", "c"))
        assert list(g.ordering()) == ["a", "b", "c"]

    def test_diamond_with_tail(self):
        """Order respects every edge; a first, e last."""
        g = make_graph(
            "abcdef",
            ("a", "b"),
            ("b", "c"),
            ("a", "d"),
            ("c", "e"),
            ("d", "c"),
            ("d", "e"),
            ("d", "f"),
            ("f", "e"),
        )
        order = list(g.ordering())
        assert_topological(g, order)
        assert order[0] == "a"
        assert order[-1] == "e"
        assert order == ["a", "b", "d", "c", "f", "e"]

    def test_disconnected_keeps_insertion_order(self):
        """Without edges the order is the insertion order."""
        assert list(Graph("cab").ordering()) == ["c", "a", "b"]

    def test_first_neighbor_follows_parent(self):
        """The first ready neighbour of a node is emitted next."""
        g = make_graph("abcd", ("a", "b"), ("a", "c"), ("b", "d"))
        assert list(g.ordering()) == ["a", "b", "d", "c"]

    def test_restartable(self):
        """Each iteration recomputes the order from the current graph."""
        g = make_graph("ab", ("a", "b"))
        ordering = g.ordering()
        assert list(ordering) == ["a", "b"]
        assert list(ordering) == ["a", "b"]
        g.disconnect("a", "b")
        g.connect("b", "a")
        assert list(ordering) == ["b", "a"]

    def test_position(self):
        """position maps identity keys to indices."""
        g = make_graph("ab", ("b", "a"))
        assert Ordering(g).position() == {hash("b"): 0, hash("a"): 1}

    def test_generator_form(self):
        """topological_order is the same sequence as Graph.ordering."""
        g = make_graph("abc", ("c", "a"), ("a", "b"))
        assert list(topological_order(g)) == list(g.ordering()) == ["c", "a", "b"]

    @pytest.mark.parametrize("seed", range(10))
    def test_random_dags(self, seed):
        """Random DAGs always yield a complete, edge-respecting order."""
        rng = random.Random(seed)
        labels = list(range(15))
        rng.shuffle(labels)
        g = Graph(labels)
        for _ in range(40):
            g.connect(rng.randrange(15), rng.randrange(15))
        assert_topological(g, list(g.ordering()))

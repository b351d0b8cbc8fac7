"""Public API — build a graph and render it in one call."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from graph_ascii.config import DiagramOptions
from graph_ascii.graph import Graph, Identity
from graph_ascii.renderers.ascii import AsciiRenderer


def build_graph(
    labels: Iterable[Any],
    edges: Iterable[tuple[Any, Any]] = (),
    *,
    key: Identity = hash,
) -> Graph:
    """Create a graph from *labels*, then add *edges*, skipping any that are rejected."""
    graph = Graph(labels, key=key)
    graph.extend_edges(edges)
    return graph


def render_diagram(
    labels: Iterable[Any],
    edges: Iterable[tuple[Any, Any]] = (),
    options: DiagramOptions | None = None,
) -> str:
    """Render the graph over *labels* and *edges* as an ASCII diagram."""
    return AsciiRenderer(options).render_graph(build_graph(labels, edges))

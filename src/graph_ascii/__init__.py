"""graph-ascii: an acyclic directed graph container that draws itself as ASCII art."""

from graph_ascii.api import build_graph, render_diagram
from graph_ascii.config import DiagramOptions
from graph_ascii.graph import ConnectRejection, Graph, Node
from graph_ascii.layout import LayoutResult, Row, layout_graph
from graph_ascii.ordering import Ordering, topological_order
from graph_ascii.partition import Partition
from graph_ascii.traversal import Direction, Mode, Walk

__all__ = [
    "ConnectRejection",
    "DiagramOptions",
    "Direction",
    "Graph",
    "LayoutResult",
    "Mode",
    "Node",
    "Ordering",
    "Partition",
    "Row",
    "Walk",
    "build_graph",
    "layout_graph",
    "render_diagram",
    "topological_order",
]

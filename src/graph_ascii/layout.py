"""Row layout — one positional row per node, in topological order.

Each row is a list of slots. A slot is empty, holds the row's own node, or
holds a connector: an edge that left an earlier row and has not reached its
target yet. Connectors keep their column from row to row until the row of
their target, where the first one turns into the node and any repeat turns
empty.

Row(i) is built from Row(i-1) (label P) for the next label L:

  1. Obligations = P's outgoing neighbours, minus L, minus any target
     already carried by a connector in Row(i-1).
  2. Scan Row(i-1) left to right:
       - P's node column → L's node if P → L and L is not placed yet,
         else a connector for the next obligation, else empty.
       - connector(L)    → L's node the first time, empty after that.
       - connector(T)    → carried unchanged.
       - empty           → empty.
  3. If L is still unplaced it takes the leftmost empty column, else a new
     column at the right.
  4. Remaining obligations fill empty columns left to right, then new
     columns at the right.
  5. Trailing empty columns are dropped.

Every row ends up with exactly one node slot, and every connector names a
label that comes later in the order and has not been drawn yet.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from graph_ascii.graph import Graph

logger = logging.getLogger(__name__)

# ─── Slots ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EmptySlot:
    """Nothing passes through this column."""


@dataclass(frozen=True)
class NodeSlot:
    """The row's own node is drawn in this column."""


@dataclass(frozen=True)
class Connector:
    """A pending edge heading for ``target``, drawn as a vertical bar."""

    target: Any


Slot = Union[EmptySlot, NodeSlot, Connector]

EMPTY = EmptySlot()
NODE = NodeSlot()


# ─── Rows ─────────────────────────────────────────────────────────────────────


@dataclass
class Row:
    """One horizontal layer of the diagram.

    Attributes:
        label: The node drawn on this row.
        slots: Column contents, left to right.
        targets: Outgoing neighbours of ``label``, in the graph's order. Not
            part of equality: two rows are equal when they draw the same thing.
    """

    label: Any
    slots: list[Slot] = field(default_factory=list)
    targets: tuple[Any, ...] = field(default=(), compare=False)

    @property
    def width(self) -> int:
        return len(self.slots)

    def node_index(self) -> int:
        return self.slots.index(NODE)

    def index_of(self, label: Any) -> int | None:
        """Column where *label* is found: its node slot or a connector naming it."""
        for i, slot in enumerate(self.slots):
            if isinstance(slot, NodeSlot) and label == self.label:
                return i
            if isinstance(slot, Connector) and slot.target == label:
                return i
        return None

    def connectors(self) -> list[Any]:
        return [slot.target for slot in self.slots if isinstance(slot, Connector)]


@dataclass
class LayoutResult:
    """All rows of a graph, ready for a renderer."""

    rows: list[Row] = field(default_factory=list)

    @property
    def max_width(self) -> int:
        return max((row.width for row in self.rows), default=0)

    def labels(self) -> list[Any]:
        return [row.label for row in self.rows]


# ─── Row construction ─────────────────────────────────────────────────────────


def _place(slots: list[Slot], slot: Slot) -> None:
    """Put *slot* in the leftmost empty column, or a new column at the right."""
    for i, existing in enumerate(slots):
        if isinstance(existing, EmptySlot):
            slots[i] = slot
            return
    slots.append(slot)


def first_row(label: Any, targets: Iterable[Any]) -> Row:
    return Row(label=label, slots=[NODE], targets=tuple(targets))


def next_row(prev: Row, label: Any, targets: Iterable[Any]) -> Row:
    """Build the row for *label* from the row above it."""
    carried = prev.connectors()
    joins_prev = label in prev.targets
    obligations: deque[Any] = deque(t for t in prev.targets if t != label and t not in carried)

    placed = False
    slots: list[Slot] = []
    for slot in prev.slots:
        if isinstance(slot, NodeSlot):
            if joins_prev and not placed:
                slots.append(NODE)
                placed = True
            elif obligations:
                slots.append(Connector(obligations.popleft()))
            else:
                slots.append(EMPTY)
        elif isinstance(slot, Connector):
            if slot.target == label:
                slots.append(EMPTY if placed else NODE)
                placed = True
            else:
                slots.append(slot)
        else:
            slots.append(EMPTY)

    if not placed:
        _place(slots, NODE)
    while obligations:
        _place(slots, Connector(obligations.popleft()))

    while slots and isinstance(slots[-1], EmptySlot):
        slots.pop()

    return Row(label=label, slots=slots, targets=tuple(targets))


def build_rows(graph: Graph) -> list[Row]:
    """Lay out every node of *graph*, one row each, in topological order."""
    rows: list[Row] = []
    for label in graph.ordering():
        targets = graph.neighbors(label) or []
        if rows:
            rows.append(next_row(rows[-1], label, targets))
        else:
            rows.append(first_row(label, targets))
    return rows


def layout_graph(graph: Graph) -> LayoutResult:
    result = LayoutResult(rows=build_rows(graph))
    logger.debug("laid out %d row(s), widest row %d column(s)", len(result.rows), result.max_width)
    return result

"""ASCII renderer — draws rows and the connector lines between them.

Slot ``k`` of every row starts at character column ``k * pitch`` where
``pitch = cell_width + column_gap`` and ``cell_width`` is the widest label.

Between two rows, every edge becomes a path from its column in the upper row
to its column in the lower row:

    same column      │  greater column     │  smaller column
    |                │  \                  │     /
    |                │   \                 │    /
                     │    |                │   |

A path may wait (vertical bars in its start column) before its diagonal,
and finishes with vertical bars in its end column. Paths are placed longest
first, each at the smallest wait that overwrites nothing already drawn. When
some path cannot avoid a clash, the block grows by a line and placement is
retried, up to one extra line per path. Unavoidable clashes (a diagonal that
must cross a straight line) keep the diagonal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import pairwise
from typing import TYPE_CHECKING, Any

from graph_ascii.config import DiagramOptions
from graph_ascii.layout import Connector, LayoutResult, NodeSlot, Row, layout_graph

if TYPE_CHECKING:
    from graph_ascii.graph import Graph

logger = logging.getLogger(__name__)

Cell = tuple[int, int]  # (line, column)

# ─── Paths ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Path:
    """An edge between two character columns of adjacent rows."""

    start: int
    end: int

    @property
    def diagonal_length(self) -> int:
        """Number of diagonal glyphs needed to get from start to end."""
        return max(0, abs(self.end - self.start) - 1)

    def cells(self, delay: int, height: int, opts: DiagramOptions) -> dict[Cell, str]:
        """Glyphs this path draws in a block of *height* lines, waiting *delay* lines."""
        if self.start == self.end:
            return {(line, self.start): opts.vertical for line in range(height)}

        step = 1 if self.end > self.start else -1
        glyph = opts.lean_right if step > 0 else opts.lean_left
        n = self.diagonal_length

        cells: dict[Cell, str] = {}
        for line in range(delay):
            cells[(line, self.start)] = opts.vertical
        for i in range(n):
            cells[(delay + i, self.start + step * (i + 1))] = glyph
        for line in range(delay + n, height):
            cells[(line, self.end)] = opts.vertical
        return cells


def _clashes(cells: dict[Cell, str], grid: dict[Cell, str]) -> int:
    return sum(1 for pos, glyph in cells.items() if grid.get(pos, glyph) != glyph)


def place_paths(paths: list[Path], height: int, opts: DiagramOptions) -> tuple[dict[Cell, str], int]:
    """Place every path in a block of *height* lines.

    Returns the drawn grid and the number of clashing cells.
    """
    grid: dict[Cell, str] = {}
    total = 0

    for path in sorted(paths, key=lambda p: -p.diagonal_length):
        delays = range(1) if path.start == path.end else range(height - path.diagonal_length + 1)
        best_cost = -1
        best_cells: dict[Cell, str] = {}
        for delay in delays:
            cells = path.cells(delay, height, opts)
            cost = _clashes(cells, grid)
            if best_cost < 0 or cost < best_cost:
                best_cost, best_cells = cost, cells
            if cost == 0:
                break

        total += best_cost
        for pos, glyph in best_cells.items():
            if grid.get(pos, opts.vertical) == opts.vertical:
                grid[pos] = glyph

    return grid, total


def _grid_lines(grid: dict[Cell, str], height: int, opts: DiagramOptions) -> list[str]:
    lines: list[str] = []
    for line in range(height):
        columns = {col: glyph for (ln, col), glyph in grid.items() if ln == line}
        width = max(columns, default=-1) + 1
        lines.append("".join(columns.get(col, opts.empty) for col in range(width)).rstrip())
    return lines


# ─── Renderer ─────────────────────────────────────────────────────────────────


class AsciiRenderer:
    """Renders a ``LayoutResult`` as plain text."""

    def __init__(self, options: DiagramOptions | None = None) -> None:
        self.options = options or DiagramOptions()

    @staticmethod
    def cell_width(result: LayoutResult) -> int:
        return max((len(str(label)) for label in result.labels()), default=1) or 1

    def row_text(self, row: Row, cell_width: int) -> str:
        opts = self.options
        cells: list[str] = []
        for slot in row.slots:
            if isinstance(slot, NodeSlot):
                text = str(row.label)
            elif isinstance(slot, Connector):
                text = opts.vertical
            else:
                text = opts.empty
            cells.append(text.ljust(cell_width, opts.empty))
        return (opts.empty * opts.column_gap).join(cells).rstrip()

    def paths(self, prev: Row, nxt: Row, cell_width: int) -> list[Path]:
        """Every edge leaving *prev*, as character-column paths into *nxt*."""
        pitch = cell_width + self.options.column_gap
        paths: list[Path] = []
        for col, slot in enumerate(prev.slots):
            targets: tuple[Any, ...]
            if isinstance(slot, Connector):
                targets = (slot.target,)
            elif isinstance(slot, NodeSlot):
                targets = prev.targets
            else:
                continue
            for target in targets:
                to = nxt.index_of(target)
                paths.append(Path(start=col * pitch, end=to * pitch))
        return paths

    def connector_lines(self, prev: Row, nxt: Row, cell_width: int) -> list[str]:
        """Lines drawn between *prev* and *nxt*; a single blank line if none."""
        opts = self.options
        paths = self.paths(prev, nxt, cell_width)
        base = max([1] + [p.diagonal_length for p in paths])

        best: tuple[int, int, dict[Cell, str]] | None = None
        for height in range(base, base + len(paths) + 1):
            grid, clashes = place_paths(paths, height, opts)
            if best is None or clashes < best[1]:
                best = (height, clashes, grid)
            if clashes == 0:
                break

        assert best is not None
        height, clashes, grid = best
        if height > base:
            logger.debug("%r -> %r: %d extra connector line(s)", prev.label, nxt.label, height - base)
        if clashes:
            logger.debug("%r -> %r: %d crossing(s) drawn over", prev.label, nxt.label, clashes)
        return _grid_lines(grid, height, opts)

    def render(self, result: LayoutResult) -> str:
        if not result.rows:
            return ""
        cell_width = self.cell_width(result)
        lines = [self.row_text(result.rows[0], cell_width)]
        for prev, nxt in pairwise(result.rows):
            lines.extend(self.connector_lines(prev, nxt, cell_width))
            lines.append(self.row_text(nxt, cell_width))
        return "\n".join(lines)

    def render_graph(self, graph: Graph) -> str:
        return self.render(layout_graph(graph))

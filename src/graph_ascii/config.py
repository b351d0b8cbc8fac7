"""Diagram rendering options."""

from __future__ import annotations

from dataclasses import dataclass

# Defaults for the canonical ASCII rendering.
COLUMN_GAP: int = 1  # blank columns between adjacent slots
VERTICAL: str = "|"
LEAN_RIGHT: str = "\\"
LEAN_LEFT: str = "/"
EMPTY: str = " "


@dataclass(frozen=True)
class DiagramOptions:
    """Glyphs and spacing used by the ASCII renderer.

    Every glyph must be exactly one character so that columns line up.
    """

    column_gap: int = COLUMN_GAP
    vertical: str = VERTICAL
    lean_right: str = LEAN_RIGHT
    lean_left: str = LEAN_LEFT
    empty: str = EMPTY

    def __post_init__(self) -> None:
        if self.column_gap < 1:
            raise ValueError(f"column_gap must be at least 1, got {self.column_gap}")
        for name in ("vertical", "lean_right", "lean_left", "empty"):
            glyph = getattr(self, name)
            if len(glyph) != 1:
                raise ValueError(f"{name} must be a single character, got {glyph!r}")
        if len({self.vertical, self.lean_right, self.lean_left, self.empty}) != 4:
            raise ValueError("glyphs must be distinct")

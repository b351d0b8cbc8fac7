"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from graph_ascii.layout import LayoutResult


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, result: LayoutResult) -> str:
        """Render laid-out rows to an output string."""
        ...

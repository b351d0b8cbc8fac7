"""Renderers that turn a LayoutResult into text."""

from graph_ascii.renderers.ascii import AsciiRenderer
from graph_ascii.renderers.base import Renderer

__all__ = ["AsciiRenderer", "Renderer"]

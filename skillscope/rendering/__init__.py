"""Rendering module for query results."""

from skillscope.rendering.json_renderer import JSONRenderer

__all__ = ["JSONRenderer"]

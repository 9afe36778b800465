"""Rendering components for the 2D boids viewer."""

from .agents import AgentRenderer
from .grid import Grid
from .text import TextRenderer

__all__ = ["AgentRenderer", "Grid", "TextRenderer"]

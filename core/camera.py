"""Orthographic camera for viewing the 2D world."""

from OpenGL.GL import *
from config import boids as config


class Camera:
    """Pan/zoom camera over a width x height world, with smooth zoom."""

    def __init__(self, world_width: float, world_height: float, aspect: float):
        self.world_width = world_width
        self.world_height = world_height
        self.aspect = aspect
        self.zoom = 1.0
        self.target_zoom = 1.0
        self.center = [world_width / 2.0, world_height / 2.0]
        self.zoom_smoothing = config.CAMERA["zoom_smoothing"]

    def visible_extent(self) -> tuple:
        """(width, height) of the world region on screen, fitting the whole world at zoom 1."""
        base_h = max(self.world_height, self.world_width / self.aspect)
        h = base_h / self.zoom
        return h * self.aspect, h

    def pan(self, dx_fraction: float, dy_fraction: float):
        """Move the view by fractions of the visible extent; wraps with the world."""
        w, h = self.visible_extent()
        self.center[0] = (self.center[0] + dx_fraction * w) % self.world_width
        self.center[1] = (self.center[1] + dy_fraction * h) % self.world_height

    def _clamp(self, zoom: float) -> float:
        return max(config.CAMERA["min_zoom"], min(config.CAMERA["max_zoom"], zoom))

    def zoom_by(self, factor: float):
        """Immediately zoom by a factor."""
        self.zoom = self._clamp(self.zoom * factor)
        self.target_zoom = self.zoom

    def zoom_smooth(self, factor: float):
        """Smoothly zoom by a factor."""
        self.target_zoom = self._clamp(self.target_zoom * factor)

    def reset(self):
        self.zoom = self.target_zoom = 1.0
        self.center = [self.world_width / 2.0, self.world_height / 2.0]

    def update(self, dt: float):
        """Update camera state (called each frame)."""
        self.zoom += (self.target_zoom - self.zoom) * min(1.0, self.zoom_smoothing * dt)
        self.zoom = self._clamp(self.zoom)

    def apply(self):
        """Load the orthographic projection for the current view."""
        w, h = self.visible_extent()
        cx, cy = self.center

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(cx - w / 2, cx + w / 2, cy - h / 2, cy + h / 2, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

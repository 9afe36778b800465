"""Input handling for keyboard and mouse events."""

import pygame
from pygame.locals import *
from config import boids as config

from .camera import Camera


class InputHandler:
    """Handles camera input and reports simulation control keys."""

    def __init__(self, camera: Camera):
        self.camera = camera
        self.pending = []

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        Control keys are queued in `pending` as "pause", "randomize", "grid", "help" or "view".
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key == K_SPACE:
                self.pending.append("pause")
            elif event.key == K_r:
                self.pending.append("randomize")
            elif event.key == K_g:
                self.pending.append("grid")
            elif event.key == K_h:
                self.pending.append("help")
            elif event.key == K_0:
                self.camera.reset()
        elif event.type == MOUSEWHEEL:
            step = config.CAMERA["wheel_zoom_step"]
            self.camera.zoom_smooth(step if event.y > 0 else 1.0 / step)

        return True

    def drain(self) -> list:
        actions, self.pending = self.pending, []
        return actions

    def handle_continuous_input(self, dt: float):
        """Handle held keys (called each frame)."""
        keys = pygame.key.get_pressed()
        pan = config.CAMERA["keyboard_pan_speed"] * dt
        zoom = config.CAMERA["keyboard_zoom_speed"] ** dt

        if keys[K_a]:
            self.camera.pan(-pan, 0)
        if keys[K_d]:
            self.camera.pan(pan, 0)
        if keys[K_w]:
            self.camera.pan(0, pan)
        if keys[K_s]:
            self.camera.pan(0, -pan)

        if keys[K_q]:
            self.camera.zoom_by(1.0 / zoom)
        if keys[K_e]:
            self.camera.zoom_by(zoom)

"""Heading-oriented triangle rendering of the flock using VBOs."""

import math
import numpy as np
from numba import njit, prange
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import boids as config


@njit(parallel=True, fastmath=True, cache=True)
def build_vertices_numba(
    positions: np.ndarray,
    velocities: np.ndarray,
    vertices: np.ndarray,
    length: float,
    half_width: float,
    num_agents: int
):
    """One triangle per agent, tip pointing along its velocity."""
    for i in prange(num_agents):
        px, py = positions[i, 0], positions[i, 1]
        vx, vy = velocities[i, 0], velocities[i, 1]

        speed = math.sqrt(vx * vx + vy * vy)
        if speed < 0.0001:
            fx, fy = 1.0, 0.0
        else:
            fx, fy = vx / speed, vy / speed

        # Perpendicular
        rx, ry = -fy, fx

        base = i * 3
        vertices[base, 0] = px + fx * length * 0.5
        vertices[base, 1] = py + fy * length * 0.5
        vertices[base + 1, 0] = px - fx * length * 0.5 + rx * half_width
        vertices[base + 1, 1] = py - fy * length * 0.5 + ry * half_width
        vertices[base + 2, 0] = px - fx * length * 0.5 - rx * half_width
        vertices[base + 2, 1] = py - fy * length * 0.5 - ry * half_width


class AgentRenderer:
    """Draws read-only position/velocity snapshots of the simulation."""

    def __init__(self, num_agents: int):
        self.num_agents = num_agents
        self.length = float(config.RENDER["size"])
        self.half_width = float(config.RENDER["size"] * config.RENDER["width_ratio"] * 0.5)
        self.color = config.RENDER["color"]

        self.verts_per_agent = 3
        self._vertices = np.zeros((num_agents * self.verts_per_agent, 2), dtype=np.float32)

        self._vbo_vertices = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Render] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def draw(self, positions: np.ndarray, velocities: np.ndarray):
        """Render the flock from (N, 2) snapshots."""
        if self.num_agents == 0:
            return

        if not self._vbos_initialized:
            self._init_vbos()

        build_vertices_numba(
            positions, velocities, self._vertices,
            self.length, self.half_width, self.num_agents
        )
        total_verts = self.num_agents * self.verts_per_agent

        glColor3f(*self.color)

        if self._vbos_initialized and self._vbo_vertices is not None:
            self._vbo_vertices.set_array(self._vertices)
            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(2, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            glDisableClientState(GL_VERTEX_ARRAY)
        else:
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(2, GL_FLOAT, 0, self._vertices)
            glDrawArrays(GL_TRIANGLES, 0, total_verts)
            glDisableClientState(GL_VERTEX_ARRAY)

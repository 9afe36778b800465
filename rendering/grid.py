"""World border and spatial-grid overlay."""

from OpenGL.GL import *
from config import boids as config


class Grid:
    """Draws the torus boundary and, optionally, the cells of the spatial index."""

    def __init__(self, width: float, height: float, grid_x: int, grid_y: int):
        self.width = width
        self.height = height
        self.grid_x = grid_x
        self.grid_y = grid_y
        self.border_color = config.GRID["border_color"]
        self.cell_color = config.GRID["cell_color"]
        self.show_cells = config.GRID["show_cells"]

    def draw(self):
        w, h = self.width, self.height

        if self.show_cells and (self.grid_x > 1 or self.grid_y > 1):
            glBegin(GL_LINES)
            glColor3f(*self.cell_color)
            for cx in range(1, self.grid_x):
                x = w * cx / self.grid_x
                glVertex2f(x, 0.0); glVertex2f(x, h)
            for cy in range(1, self.grid_y):
                y = h * cy / self.grid_y
                glVertex2f(0.0, y); glVertex2f(w, y)
            glEnd()

        glBegin(GL_LINE_LOOP)
        glColor3f(*self.border_color)
        glVertex2f(0.0, 0.0)
        glVertex2f(w, 0.0)
        glVertex2f(w, h)
        glVertex2f(0.0, h)
        glEnd()

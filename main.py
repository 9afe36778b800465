"""
2D Toroidal Boids
=================

A real-time flocking simulation on a wrap-around world.

Controls:
    - W/A/S/D: Pan
    - Q/E, mouse wheel: Zoom
    - 0: Reset view
    - SPACE: Pause/Resume simulation
    - R: Randomize flock
    - G: Toggle spatial grid overlay
    - H: Toggle help text
    - ESC: Quit
"""

from core import Application


def main():
    app = Application()
    app.run()


if __name__ == "__main__":
    main()

"""Main application class that ties everything together."""

import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import boids as config
from .camera import Camera
from .input_handler import InputHandler
from rendering import AgentRenderer, Grid, TextRenderer
from boids import FixedStepClock, SimConfig, Simulation, warmup


class Application:
    """Main application managing the window, the tick cadence and rendering."""

    def __init__(self, sim_config: SimConfig = None):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])
        self.screen_size = (config.WINDOW["width"], config.WINDOW["height"])

        # Simulation
        if sim_config is None:
            sim_config = SimConfig.from_mapping(config.SIMULATION)
        print("[App] Compiling kernels...")
        warmup()
        self.simulation = Simulation(
            sim_config,
            seed=config.RUN["seed"],
            num_workers=config.RUN["workers"]
        )
        self.tick_clock = FixedStepClock(sim_config.dt, config.RUN["max_ticks_per_frame"])

        # Core components
        aspect = self.screen_size[0] / self.screen_size[1]
        self.camera = Camera(sim_config.width, sim_config.height, aspect)
        self.input_handler = InputHandler(self.camera)

        # Rendering components
        grid = self.simulation.grid
        self.grid = Grid(sim_config.width, sim_config.height, grid.grid_x, grid.grid_y)
        self.agent_renderer = AgentRenderer(self.simulation.num_agents)
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.paused = False
        self.show_help = True
        self.fps = 0

        glClearColor(*config.COLORS["background"])
        print("[App] Ready!")

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

        for action in self.input_handler.drain():
            if action == "pause":
                self.paused = not self.paused
                self.tick_clock.reset()
                print(f"[App] {'Paused' if self.paused else 'Running'}")
            elif action == "randomize":
                print("[App] Randomizing flock...")
                self.simulation.randomize()
                self.tick_clock.reset()
            elif action == "grid":
                self.grid.show_cells = not self.grid.show_cells
            elif action == "help":
                self.show_help = not self.show_help

    def _update(self, dt: float):
        """Run as many whole ticks as the elapsed time covers."""
        self.input_handler.handle_continuous_input(dt)
        self.camera.update(dt)

        if self.paused:
            return

        for _ in range(self.tick_clock.advance(dt)):
            self.simulation.step()

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)
        self.camera.apply()

        self.grid.draw()
        self.agent_renderer.draw(self.simulation.positions(), self.simulation.velocities())

        sim = self.simulation
        status = "PAUSED" if self.paused else "RUNNING"
        lines = [
            f"Boids: {sim.num_agents:,}  |  FPS: {self.fps:.0f}  |  {status}",
            f"Tick: {sim.tick:,}  |  Pairs: {sim.num_pairs:,}  |  Zoom: {self.camera.zoom:.2f}x",
        ]
        if self.show_help:
            lines.append("WASD: Pan | QE/Wheel: Zoom | 0: Reset view | SPACE: Pause | R: Randomize | G: Grid | H: Help")
        self.text_renderer.draw_lines(lines, 10, 10, self.screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")

        while self.running:
            dt = self.clock.tick() / 1000.0  # Uncapped FPS
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
        print("[App] Shutdown complete")

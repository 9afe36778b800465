"""Simulation handle tying the per-tick pipeline together."""

import numba
import numpy as np

from .accumulators import Accumulators, PartialAccumulators
from .agents import AgentStore
from .config import SimConfig
from .grid import SpatialGrid
from .integrator import Integrator
from .kernel import interact


class Simulation:
    """
    A flock on a torus, advanced one fixed tick per `step`.

    Per tick: rebuild the spatial grid, reset the accumulators, run the
    interaction kernel over all neighbor pairs, then integrate every agent.
    """

    def __init__(self, config: SimConfig, seed=None, num_workers: int = None):
        if not isinstance(config, SimConfig):
            config = SimConfig.from_mapping(config)
        self.config = config
        self.num_agents = int(config.n_agents)
        self.num_workers = max(1, int(num_workers if num_workers is not None else numba.get_num_threads()))
        self.rng = np.random.default_rng(seed)
        self.tick = 0

        self.store = AgentStore(self.num_agents)
        self.grid = SpatialGrid(config.width, config.height, config.perception, self.num_agents)
        self.accumulators = Accumulators(self.num_agents)
        self._partials = PartialAccumulators(self.num_workers, self.num_agents)
        self._integrator = Integrator(self.num_agents)

        self.randomize()

        print(
            f"[Boids] Initialized {self.num_agents:,} agents on a "
            f"{self.grid.grid_x}x{self.grid.grid_y} grid ({self.num_workers} workers)"
        )

    @property
    def num_pairs(self) -> int:
        """Neighbor pairs found by the most recent tick."""
        return self.grid.num_pairs

    def randomize(self):
        """Redraw every agent's position and heading."""
        cfg = self.config
        self.store.randomize(self.rng, cfg.width, cfg.height, cfg.speed)
        self.tick = 0

    def set_state(self, positions, velocities):
        """Seed the flock with explicit (n_agents, 2) arrays."""
        cfg = self.config
        self.store.load(positions, velocities, cfg.width, cfg.height)

    def step(self):
        """Advance exactly one tick of length config.dt."""
        store = self.store

        self.grid.update(store.positions)
        self.accumulators.reset()
        interact(
            store.positions, store.velocities,
            self.grid, self.config,
            self._partials, self.accumulators
        )
        self._integrator.advance(store, self.accumulators, self.config)

        self.tick += 1

    def positions(self) -> np.ndarray:
        """Read-only view of the (N, 2) positions; valid until the next step."""
        return self.store.snapshot()[0]

    def velocities(self) -> np.ndarray:
        """Read-only view of the (N, 2) velocities; valid until the next step."""
        return self.store.snapshot()[1]


def construct(config: SimConfig, seed=None, num_workers: int = None) -> Simulation:
    return Simulation(config, seed=seed, num_workers=num_workers)


def randomize(sim: Simulation):
    sim.randomize()


def step(sim: Simulation):
    sim.step()


def positions(sim: Simulation) -> np.ndarray:
    return sim.positions()


def velocities(sim: Simulation) -> np.ndarray:
    return sim.velocities()


def warmup():
    """Pre-compile the JIT kernels on a tiny flock."""
    cfg = SimConfig(
        width=100.0, height=100.0, n_agents=64,
        speed=2.0, perception=10.0, separation_dist=3.0,
        fov_deg=270.0, max_force=1.0, dt=1.0
    )
    sim = Simulation(cfg, seed=0, num_workers=2)
    sim.step()

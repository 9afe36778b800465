import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from boids import Accumulators, PartialAccumulators, SimConfig, Simulation, SpatialGrid  # noqa: E402
from boids.kernel import interact  # noqa: E402


@pytest.fixture
def still_config() -> SimConfig:
    """Small world with every rule weight at zero."""
    return SimConfig(
        width=100.0,
        height=100.0,
        n_agents=2,
        speed=1.0,
        perception=50.0,
        separation_dist=1.0,
        w_sep=0.0,
        w_align=0.0,
        w_coh=0.0,
        fov_deg=360.0,
        max_force=1000.0,
        dt=1.0,
    )


@pytest.fixture
def flocking_config() -> SimConfig:
    return SimConfig(
        width=400.0,
        height=300.0,
        n_agents=500,
        speed=5.0,
        perception=20.0,
        separation_dist=5.0,
        fov_deg=270.0,
        max_force=2.0,
        dt=0.5,
    )


@pytest.fixture
def make_sim():
    """Build a single-worker simulation seeded with explicit agents."""

    def _make(config: SimConfig, positions, velocities, num_workers: int = 1) -> Simulation:
        config = config.replace(n_agents=len(positions))
        sim = Simulation(config, seed=0, num_workers=num_workers)
        sim.set_state(positions, velocities)
        return sim

    return _make


@pytest.fixture
def kernel_pass():
    """Run grid construction plus the interaction kernel once and return the accumulators."""

    def _run(config: SimConfig, positions, velocities, num_workers: int = 1) -> Accumulators:
        positions = np.asarray(positions, dtype=np.float64)
        velocities = np.asarray(velocities, dtype=np.float64)
        grid = SpatialGrid.build(positions, config.width, config.height, config.perception)
        acc = Accumulators(len(positions))
        partials = PartialAccumulators(num_workers, len(positions))
        interact(positions, velocities, grid, config, partials, acc)
        return acc

    return _run

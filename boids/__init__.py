"""Toroidal 2D boids: spatial grid, pairwise kernel and bounded-force integrator."""

from .config import ConfigError, SimConfig
from .agents import AgentStore
from .grid import SpatialGrid
from .accumulators import Accumulators, PartialAccumulators
from .clock import FixedStepClock
from .integrator import Integrator
from .simulation import Simulation, construct, positions, randomize, step, velocities, warmup

__all__ = [
    "ConfigError",
    "SimConfig",
    "AgentStore",
    "SpatialGrid",
    "Accumulators",
    "PartialAccumulators",
    "FixedStepClock",
    "Integrator",
    "Simulation",
    "construct",
    "randomize",
    "step",
    "positions",
    "velocities",
    "warmup",
]

"""Structure-of-arrays storage for agent positions and velocities."""

import numpy as np

from .vector import wrap_positions


class AgentStore:
    """
    Positions and velocities of every boid, indexed by agent id.

    Attributes:
        positions: (N, 2) float64 array, each row inside [0, width) x [0, height)
        velocities: (N, 2) float64 array, magnitude <= speed at the end of a tick
    """

    def __init__(self, num_agents: int):
        self.num_agents = int(num_agents)
        self.positions = np.zeros((self.num_agents, 2), dtype=np.float64)
        self.velocities = np.zeros((self.num_agents, 2), dtype=np.float64)

    def __len__(self):
        return self.num_agents

    def randomize(self, rng: np.random.Generator, width: float, height: float, speed: float):
        """Uniform positions over the world, random headings scaled to `speed`."""
        n = self.num_agents
        self.positions[:] = rng.random((n, 2)) * np.array([width, height])
        wrap_positions(self.positions, width, height)

        angles = rng.random(n) * 2.0 * np.pi
        self.velocities[:, 0] = np.cos(angles) * speed
        self.velocities[:, 1] = np.sin(angles) * speed

    def load(self, positions, velocities, width: float, height: float):
        """Replace the state with explicit arrays; positions are wrapped into the world."""
        positions = np.asarray(positions, dtype=np.float64)
        velocities = np.asarray(velocities, dtype=np.float64)
        expected = (self.num_agents, 2)
        if positions.shape != expected:
            raise ValueError(f"positions must have shape {expected}, got {positions.shape}")
        if velocities.shape != expected:
            raise ValueError(f"velocities must have shape {expected}, got {velocities.shape}")
        if not (np.all(np.isfinite(positions)) and np.all(np.isfinite(velocities))):
            raise ValueError("positions and velocities must be finite")

        self.positions[:] = positions
        self.velocities[:] = velocities
        wrap_positions(self.positions, width, height)

    def commit(self, new_positions: np.ndarray, new_velocities: np.ndarray):
        """Copy a completed tick's results into the store."""
        np.copyto(self.positions, new_positions)
        np.copyto(self.velocities, new_velocities)

    def snapshot(self):
        """Read-only views of (positions, velocities)."""
        positions = self.positions.view()
        velocities = self.velocities.view()
        positions.flags.writeable = False
        velocities.flags.writeable = False
        return positions, velocities

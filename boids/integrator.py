"""Bounded-force integration of one tick's accumulated rule contributions."""

import numpy as np
from numba import njit, prange

from .accumulators import Accumulators
from .agents import AgentStore
from .vector import clip, wrap


@njit(parallel=True, cache=True)
def integrate_agents(
    positions: np.ndarray,
    velocities: np.ndarray,
    align_sum: np.ndarray,
    cohesion_sum: np.ndarray,
    separation_sum: np.ndarray,
    ac_count: np.ndarray,
    sep_count: np.ndarray,
    new_positions: np.ndarray,
    new_velocities: np.ndarray,
    speed: float,
    max_force: float,
    w_sep: float,
    w_align: float,
    w_coh: float,
    width: float,
    height: float,
    dt: float,
    eps: float,
    num_agents: int
):
    """Steer, clip, integrate and wrap every agent; each agent only reads and writes its own slot."""
    for i in prange(num_agents):
        px = positions[i, 0]
        py = positions[i, 1]
        vx = velocities[i, 0]
        vy = velocities[i, 1]

        coh_x, coh_y = 0.0, 0.0
        align_x, align_y = 0.0, 0.0
        sep_x, sep_y = 0.0, 0.0

        n = ac_count[i]
        if n > 0:
            to_center_x = cohesion_sum[i, 0] / n - px
            to_center_y = cohesion_sum[i, 1] / n - py
            desired_x, desired_y = clip(to_center_x * speed, to_center_y * speed, speed, eps)
            coh_x = (desired_x - vx) * w_coh
            coh_y = (desired_y - vy) * w_coh

            desired_x, desired_y = clip(align_sum[i, 0] / n, align_sum[i, 1] / n, speed, eps)
            align_x = (desired_x - vx) * w_align
            align_y = (desired_y - vy) * w_align

        m = sep_count[i]
        if m > 0:
            desired_x, desired_y = clip(separation_sum[i, 0] / m, separation_sum[i, 1] / m, speed, eps)
            sep_x = (desired_x - vx) * w_sep
            sep_y = (desired_y - vy) * w_sep

        acc_x, acc_y = clip(sep_x + align_x + coh_x, sep_y + align_y + coh_y, max_force, eps)

        nvx, nvy = clip(vx + acc_x * dt, vy + acc_y * dt, speed, eps)
        new_velocities[i, 0] = nvx
        new_velocities[i, 1] = nvy
        new_positions[i, 0] = wrap(px + nvx * dt, width)
        new_positions[i, 1] = wrap(py + nvy * dt, height)


class Integrator:
    """Owns the scratch buffers a tick is computed into before it is committed."""

    def __init__(self, num_agents: int):
        self.num_agents = int(num_agents)
        self._new_positions = np.zeros((self.num_agents, 2), dtype=np.float64)
        self._new_velocities = np.zeros((self.num_agents, 2), dtype=np.float64)

    def advance(self, store: AgentStore, acc: Accumulators, config):
        """Integrate every agent, then commit the new state to the store in one go."""
        integrate_agents(
            store.positions,
            store.velocities,
            acc.align_velocity_sum,
            acc.cohesion_position_sum,
            acc.separation_vector_sum,
            acc.align_cohesion_count,
            acc.separation_count,
            self._new_positions,
            self._new_velocities,
            float(config.speed),
            float(config.max_force),
            float(config.w_sep),
            float(config.w_align),
            float(config.w_coh),
            float(config.width),
            float(config.height),
            float(config.dt),
            float(config.eps),
            self.num_agents
        )
        store.commit(self._new_positions, self._new_velocities)

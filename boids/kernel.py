"""Pairwise interaction kernel: field-of-view tests and rule accumulation."""

import math
import numpy as np
from numba import njit, prange

from .accumulators import Accumulators, PartialAccumulators
from .grid import SpatialGrid


# Pairs each partial buffer must have before another one is used
MIN_PAIRS_PER_PART = 4096


def active_parts(num_pairs: int, num_parts: int) -> int:
    """Number of partial buffers worth spreading `num_pairs` over."""
    return max(1, min(num_parts, num_pairs // MIN_PAIRS_PER_PART))


@njit(cache=True)
def observe(
    k: int,
    i: int,
    j: int,
    ox: float,
    oy: float,
    dist: float,
    dist_sq: float,
    positions: np.ndarray,
    velocities: np.ndarray,
    cos_half_fov: float,
    separation_sq: float,
    eps: float,
    align_sum: np.ndarray,
    cohesion_sum: np.ndarray,
    separation_sum: np.ndarray,
    ac_count: np.ndarray,
    sep_count: np.ndarray
):
    """Agent i looks at agent j, offset (ox, oy) away; fold the result into buffer k."""
    vx = velocities[i, 0]
    vy = velocities[i, 1]
    speed = math.sqrt(vx * vx + vy * vy)

    # No heading, nothing in view
    if speed <= eps:
        return

    cos_theta = (vx * ox + vy * oy) / (speed * dist + eps)
    if cos_theta < cos_half_fov:
        return

    align_sum[k, i, 0] += velocities[j, 0]
    align_sum[k, i, 1] += velocities[j, 1]
    cohesion_sum[k, i, 0] += positions[i, 0] + ox
    cohesion_sum[k, i, 1] += positions[i, 1] + oy
    ac_count[k, i] += 1

    if dist_sq < separation_sq:
        denom = dist_sq + eps
        separation_sum[k, i, 0] -= ox / denom
        separation_sum[k, i, 1] -= oy / denom
        sep_count[k, i] += 1


@njit(parallel=True, cache=True)
def accumulate_pairs(
    positions: np.ndarray,
    velocities: np.ndarray,
    pair_i: np.ndarray,
    pair_j: np.ndarray,
    pair_dist_sq: np.ndarray,
    pair_offsets: np.ndarray,
    cos_half_fov: float,
    separation_sq: float,
    eps: float,
    align_sum: np.ndarray,
    cohesion_sum: np.ndarray,
    separation_sum: np.ndarray,
    ac_count: np.ndarray,
    sep_count: np.ndarray,
    num_parts: int
):
    """
    Evaluate both viewing directions of every pair.

    Pairs are split into `num_parts` contiguous chunks; chunk k only writes
    slice k of the partial buffers, so no two workers touch the same memory.
    """
    num_pairs = pair_i.shape[0]
    chunk = (num_pairs + num_parts - 1) // num_parts

    for k in prange(num_parts):
        lo = k * chunk
        hi = min(num_pairs, lo + chunk)

        for p in range(lo, hi):
            i = pair_i[p]
            j = pair_j[p]
            dist_sq = pair_dist_sq[p]
            dist = math.sqrt(dist_sq)
            ox = pair_offsets[p, 0]
            oy = pair_offsets[p, 1]

            observe(
                k, i, j, ox, oy, dist, dist_sq,
                positions, velocities, cos_half_fov, separation_sq, eps,
                align_sum, cohesion_sum, separation_sum, ac_count, sep_count
            )
            observe(
                k, j, i, -ox, -oy, dist, dist_sq,
                positions, velocities, cos_half_fov, separation_sq, eps,
                align_sum, cohesion_sum, separation_sum, ac_count, sep_count
            )


def interact(
    positions: np.ndarray,
    velocities: np.ndarray,
    grid: SpatialGrid,
    config,
    partials: PartialAccumulators,
    out: Accumulators
):
    """Run the kernel over the grid's current pairs and reduce into `out`."""
    active = active_parts(grid.num_pairs, partials.num_parts)
    partials.reset(active)
    accumulate_pairs(
        positions,
        velocities,
        grid.pair_i,
        grid.pair_j,
        grid.pair_dist_sq,
        grid.pair_offsets,
        float(config.cos_half_fov),
        float(config.separation_dist * config.separation_dist),
        float(config.eps),
        partials.align_velocity_sum,
        partials.cohesion_position_sum,
        partials.separation_vector_sum,
        partials.align_cohesion_count,
        partials.separation_count,
        active
    )
    partials.reduce_into(out, active)

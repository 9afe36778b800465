"""Scalar 2D helpers shared by the JIT kernels."""

import math
import numpy as np
from numba import njit, prange


@njit(cache=True)
def clip(x: float, y: float, limit: float, eps: float):
    """Shrink (x, y) to magnitude `limit` if longer; never flips direction."""
    mag = math.sqrt(x * x + y * y)
    if mag > limit:
        scale = limit / (mag + eps)
        return x * scale, y * scale
    return x, y


@njit(cache=True)
def wrap(value: float, extent: float) -> float:
    """Fold a coordinate into [0, extent)."""
    wrapped = value % extent
    # Tiny negatives round up to exactly `extent`
    if wrapped >= extent:
        wrapped -= extent
    return wrapped


@njit(cache=True)
def min_image(delta: float, extent: float) -> float:
    """Shortest periodic representative of an offset along one axis."""
    half = 0.5 * extent
    if delta > half:
        return delta - extent
    if delta < -half:
        return delta + extent
    return delta


@njit(parallel=True, cache=True)
def wrap_positions(positions: np.ndarray, width: float, height: float):
    """Wrap every row of an (N, 2) array into the world, in place."""
    for i in prange(positions.shape[0]):
        positions[i, 0] = wrap(positions[i, 0], width)
        positions[i, 1] = wrap(positions[i, 1], height)

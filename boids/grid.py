"""Uniform toroidal cell grid for near-linear neighbor pair discovery."""

import math
import numpy as np
from numba import njit, prange

from .vector import min_image


# ============================================================================
# NUMBA JIT-COMPILED GRID FUNCTIONS
# ============================================================================

@njit(cache=True)
def get_cell_index(x: float, y: float, cell_w: float, cell_h: float, grid_x: int, grid_y: int) -> int:
    """Convert a 2D position to a linear cell index."""
    cx = int(x / cell_w)
    cy = int(y / cell_h)

    cx = max(0, min(cx, grid_x - 1))
    cy = max(0, min(cy, grid_y - 1))

    return cx + cy * grid_x


@njit(parallel=True, cache=True)
def assign_cells(
    positions: np.ndarray,
    cell_indices: np.ndarray,
    cell_w: float,
    cell_h: float,
    grid_x: int,
    grid_y: int,
    num_agents: int
):
    """Assign each agent to a cell."""
    for i in prange(num_agents):
        cell_indices[i] = get_cell_index(
            positions[i, 0], positions[i, 1],
            cell_w, cell_h, grid_x, grid_y
        )


@njit(cache=True)
def build_cell_lists(
    cell_indices: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    num_agents: int,
    num_cells: int
):
    """Count agents per cell and turn the counts into start offsets into the sorted order."""
    for c in range(num_cells):
        cell_counts[c] = 0

    for i in range(num_agents):
        cell_counts[cell_indices[i]] += 1

    start = 0
    for c in range(num_cells):
        cell_starts[c] = start
        start += cell_counts[c]


@njit(cache=True)
def unique_wrapped(c: int, dim: int, out: np.ndarray) -> int:
    """Write the distinct wrapped neighbors {c-1, c, c+1} mod dim into `out`."""
    n = 0
    for d in range(-1, 2):
        v = (c + d + dim) % dim
        seen = False
        for k in range(n):
            if out[k] == v:
                seen = True
        if not seen:
            out[n] = v
            n += 1
    return n


@njit(cache=True)
def scan_cell(
    c: int,
    positions: np.ndarray,
    order: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    grid_x: int,
    grid_y: int,
    width: float,
    height: float,
    radius_sq: float,
    pair_i: np.ndarray,
    pair_j: np.ndarray,
    pair_dist_sq: np.ndarray,
    pair_offsets: np.ndarray,
    out_start: int,
    write: bool
) -> int:
    """
    Find every qualifying pair owned by cell `c`.

    A cell owns its pairs with itself and with neighborhood cells of a higher
    linear index, so each unordered pair of cells is scanned once. When `write`
    is set, pairs are stored from `out_start` on; the count is returned either way.
    """
    count_c = cell_counts[c]
    if count_c == 0:
        return 0

    xs = np.empty(3, dtype=np.int64)
    ys = np.empty(3, dtype=np.int64)
    nx = unique_wrapped(c % grid_x, grid_x, xs)
    ny = unique_wrapped(c // grid_x, grid_y, ys)

    base_c = cell_starts[c]
    found = 0

    for a in range(nx):
        for b in range(ny):
            n = xs[a] + ys[b] * grid_x
            if n < c:
                continue

            count_n = cell_counts[n]
            base_n = cell_starts[n]

            for p in range(count_c):
                i = order[base_c + p]
                first = p + 1 if n == c else 0

                for q in range(first, count_n):
                    j = order[base_n + q]

                    dx = min_image(positions[j, 0] - positions[i, 0], width)
                    dy = min_image(positions[j, 1] - positions[i, 1], height)
                    dist_sq = dx * dx + dy * dy

                    if dist_sq < radius_sq:
                        if write:
                            k = out_start + found
                            pair_i[k] = i
                            pair_j[k] = j
                            pair_dist_sq[k] = dist_sq
                            pair_offsets[k, 0] = dx
                            pair_offsets[k, 1] = dy
                        found += 1

    return found


@njit(parallel=True, cache=True)
def count_pairs(
    positions: np.ndarray,
    order: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    pair_counts: np.ndarray,
    grid_x: int,
    grid_y: int,
    width: float,
    height: float,
    radius_sq: float,
    num_cells: int
):
    """First pass: number of qualifying pairs owned by each cell."""
    no_i = np.empty(0, dtype=np.int64)
    no_d = np.empty(0, dtype=np.float64)
    no_off = np.empty((0, 2), dtype=np.float64)
    for c in prange(num_cells):
        pair_counts[c] = scan_cell(
            c, positions, order, cell_starts, cell_counts,
            grid_x, grid_y, width, height, radius_sq,
            no_i, no_i, no_d, no_off, 0, False
        )


@njit(parallel=True, cache=True)
def fill_pairs(
    positions: np.ndarray,
    order: np.ndarray,
    cell_starts: np.ndarray,
    cell_counts: np.ndarray,
    pair_starts: np.ndarray,
    pair_i: np.ndarray,
    pair_j: np.ndarray,
    pair_dist_sq: np.ndarray,
    pair_offsets: np.ndarray,
    grid_x: int,
    grid_y: int,
    width: float,
    height: float,
    radius_sq: float,
    num_cells: int
):
    """Second pass: write each cell's pairs into its reserved slice."""
    for c in prange(num_cells):
        scan_cell(
            c, positions, order, cell_starts, cell_counts,
            grid_x, grid_y, width, height, radius_sq,
            pair_i, pair_j, pair_dist_sq, pair_offsets, pair_starts[c], True
        )


def grid_shape(width: float, height: float, radius: float, num_agents: int = 0):
    """
    Cells per axis such that every cell side is >= radius.

    The cell count is capped relative to the agent count; coarsening only makes
    cells larger, so no pair within `radius` can be missed.
    """
    if radius <= 0.0:
        return 1, 1

    max_cells = max(16, 4 * num_agents)

    # Clamp in float space; width / radius overflows to inf for tiny radii
    grid_x = max(1, int(min(width // radius, max_cells)))
    grid_y = max(1, int(min(height // radius, max_cells)))
    while grid_x > 1 and width / grid_x < radius:
        grid_x -= 1
    while grid_y > 1 and height / grid_y < radius:
        grid_y -= 1

    if grid_x * grid_y > max_cells:
        factor = math.sqrt(grid_x * grid_y / max_cells)
        grid_x = max(1, int(grid_x / factor))
        grid_y = max(1, int(grid_y / factor))

    return grid_x, grid_y


# ============================================================================
# SPATIAL GRID CLASS
# ============================================================================

class SpatialGrid:
    """
    Cell list over a W x H torus, rebuilt from scratch every tick.

    After `update`, the qualifying pairs are held in flat arrays
    (`pair_i`, `pair_j`, `pair_dist_sq`, `pair_offsets`), ordered by owning cell.
    `pair_offsets[k]` is the shortest wrapped vector from `pair_i[k]` to `pair_j[k]`.
    """

    def __init__(self, width: float, height: float, radius: float, num_agents: int = 0):
        self.width = float(width)
        self.height = float(height)
        self.radius = float(radius)
        self.radius_sq = self.radius * self.radius

        self.grid_x, self.grid_y = grid_shape(self.width, self.height, self.radius, num_agents)
        self.num_cells = self.grid_x * self.grid_y
        self.cell_w = self.width / self.grid_x
        self.cell_h = self.height / self.grid_y

        self._cell_starts = np.zeros(self.num_cells, dtype=np.int64)
        self._cell_counts = np.zeros(self.num_cells, dtype=np.int64)
        self._pair_counts = np.zeros(self.num_cells, dtype=np.int64)
        self._pair_starts = np.zeros(self.num_cells, dtype=np.int64)
        self._resize_agents(num_agents)
        self._resize_pairs(0)

    @classmethod
    def build(cls, positions: np.ndarray, width: float, height: float, radius: float) -> "SpatialGrid":
        grid = cls(width, height, radius, len(positions))
        grid.update(positions)
        return grid

    def _resize_agents(self, num_agents: int):
        self.num_agents = num_agents
        self._cell_indices = np.zeros(num_agents, dtype=np.int64)
        self._order = np.arange(num_agents, dtype=np.int64)

    def _resize_pairs(self, num_pairs: int):
        self.pair_i = np.zeros(num_pairs, dtype=np.int64)
        self.pair_j = np.zeros(num_pairs, dtype=np.int64)
        self.pair_dist_sq = np.zeros(num_pairs, dtype=np.float64)
        self.pair_offsets = np.zeros((num_pairs, 2), dtype=np.float64)

    @property
    def num_pairs(self) -> int:
        return len(self.pair_i)

    def update(self, positions: np.ndarray):
        """Rebucket agents from their current positions and collect all pairs within radius."""
        positions = np.ascontiguousarray(positions, dtype=np.float64)
        n = len(positions)
        if n != self.num_agents:
            self._resize_agents(n)

        if n < 2:
            self._resize_pairs(0)
            return

        assign_cells(
            positions, self._cell_indices,
            self.cell_w, self.cell_h, self.grid_x, self.grid_y,
            n
        )

        self._order[:] = np.argsort(self._cell_indices, kind="stable")

        build_cell_lists(
            self._cell_indices,
            self._cell_starts, self._cell_counts,
            n, self.num_cells
        )

        count_pairs(
            positions, self._order,
            self._cell_starts, self._cell_counts, self._pair_counts,
            self.grid_x, self.grid_y, self.width, self.height,
            self.radius_sq, self.num_cells
        )

        total = int(self._pair_counts.sum())
        self._pair_starts[0] = 0
        np.cumsum(self._pair_counts[:-1], out=self._pair_starts[1:])
        if total != self.num_pairs:
            self._resize_pairs(total)

        fill_pairs(
            positions, self._order,
            self._cell_starts, self._cell_counts, self._pair_starts,
            self.pair_i, self.pair_j, self.pair_dist_sq, self.pair_offsets,
            self.grid_x, self.grid_y, self.width, self.height,
            self.radius_sq, self.num_cells
        )

    def for_each_pair(self, visit):
        """Call visit(i, j, squared_dist, (offset_x, offset_y)) once per pair found by the last update."""
        for k in range(self.num_pairs):
            visit(
                int(self.pair_i[k]),
                int(self.pair_j[k]),
                float(self.pair_dist_sq[k]),
                (float(self.pair_offsets[k, 0]), float(self.pair_offsets[k, 1])),
            )

    def cell_of(self, x: float, y: float):
        """(column, row) of the cell holding a position."""
        c = get_cell_index(x, y, self.cell_w, self.cell_h, self.grid_x, self.grid_y)
        return c % self.grid_x, c // self.grid_x

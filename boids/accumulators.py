"""Per-agent rule accumulators and their commutative merge."""

import numpy as np
from numba import njit, prange


@njit(parallel=True, cache=True)
def reduce_partials(
    part_align: np.ndarray,
    part_cohesion: np.ndarray,
    part_separation: np.ndarray,
    part_ac_count: np.ndarray,
    part_sep_count: np.ndarray,
    align_out: np.ndarray,
    cohesion_out: np.ndarray,
    separation_out: np.ndarray,
    ac_count_out: np.ndarray,
    sep_count_out: np.ndarray,
    num_parts: int,
    num_agents: int
):
    """Fold every worker's partial buffer into the output, agent by agent, in worker order."""
    for i in prange(num_agents):
        ax, ay = 0.0, 0.0
        cx, cy = 0.0, 0.0
        sx, sy = 0.0, 0.0
        ac = 0
        sc = 0

        for k in range(num_parts):
            ax += part_align[k, i, 0]
            ay += part_align[k, i, 1]
            cx += part_cohesion[k, i, 0]
            cy += part_cohesion[k, i, 1]
            sx += part_separation[k, i, 0]
            sy += part_separation[k, i, 1]
            ac += part_ac_count[k, i]
            sc += part_sep_count[k, i]

        align_out[i, 0] = ax
        align_out[i, 1] = ay
        cohesion_out[i, 0] = cx
        cohesion_out[i, 1] = cy
        separation_out[i, 0] = sx
        separation_out[i, 1] = sy
        ac_count_out[i] = ac
        sep_count_out[i] = sc


class Accumulators:
    """
    One tick's aggregated neighbor contributions, one slot per agent.

    The all-zero value is the identity; `merge` is element-wise addition, so it
    is commutative and associative (exactly for the counts, up to float rounding
    for the sums).
    """

    def __init__(self, num_agents: int):
        self.num_agents = int(num_agents)
        self.align_velocity_sum = np.zeros((self.num_agents, 2), dtype=np.float64)
        self.cohesion_position_sum = np.zeros((self.num_agents, 2), dtype=np.float64)
        self.separation_vector_sum = np.zeros((self.num_agents, 2), dtype=np.float64)
        self.align_cohesion_count = np.zeros(self.num_agents, dtype=np.int64)
        self.separation_count = np.zeros(self.num_agents, dtype=np.int64)

    @classmethod
    def identity(cls, num_agents: int) -> "Accumulators":
        return cls(num_agents)

    def reset(self):
        """Return every slot to the identity."""
        self.align_velocity_sum.fill(0)
        self.cohesion_position_sum.fill(0)
        self.separation_vector_sum.fill(0)
        self.align_cohesion_count.fill(0)
        self.separation_count.fill(0)

    def merge(self, other: "Accumulators") -> "Accumulators":
        if other.num_agents != self.num_agents:
            raise ValueError(
                f"Cannot merge accumulators for {self.num_agents} and {other.num_agents} agents"
            )
        merged = Accumulators(self.num_agents)
        merged.align_velocity_sum[:] = self.align_velocity_sum + other.align_velocity_sum
        merged.cohesion_position_sum[:] = self.cohesion_position_sum + other.cohesion_position_sum
        merged.separation_vector_sum[:] = self.separation_vector_sum + other.separation_vector_sum
        merged.align_cohesion_count[:] = self.align_cohesion_count + other.align_cohesion_count
        merged.separation_count[:] = self.separation_count + other.separation_count
        return merged

    def __add__(self, other: "Accumulators") -> "Accumulators":
        return self.merge(other)

    def is_identity(self) -> bool:
        return not (
            self.align_velocity_sum.any()
            or self.cohesion_position_sum.any()
            or self.separation_vector_sum.any()
            or self.align_cohesion_count.any()
            or self.separation_count.any()
        )


class PartialAccumulators:
    """
    Worker-local accumulator buffers for the parallel kernel phase.

    Buffer k is written only by worker k; `reduce_into` merges the buffers in
    use at the end of the phase. A tick may use fewer than `num_parts` buffers,
    in which case only the first `active` ones are reset and reduced.
    """

    def __init__(self, num_parts: int, num_agents: int):
        self.num_parts = max(1, int(num_parts))
        self.num_agents = int(num_agents)
        shape = (self.num_parts, self.num_agents)
        self.align_velocity_sum = np.zeros(shape + (2,), dtype=np.float64)
        self.cohesion_position_sum = np.zeros(shape + (2,), dtype=np.float64)
        self.separation_vector_sum = np.zeros(shape + (2,), dtype=np.float64)
        self.align_cohesion_count = np.zeros(shape, dtype=np.int64)
        self.separation_count = np.zeros(shape, dtype=np.int64)

    def _active(self, active) -> int:
        if active is None:
            return self.num_parts
        return max(1, min(int(active), self.num_parts))

    def reset(self, active: int = None):
        k = self._active(active)
        self.align_velocity_sum[:k].fill(0)
        self.cohesion_position_sum[:k].fill(0)
        self.separation_vector_sum[:k].fill(0)
        self.align_cohesion_count[:k].fill(0)
        self.separation_count[:k].fill(0)

    def reduce_into(self, out: Accumulators, active: int = None):
        """
        Overwrite `out` with the merge of the first `active` worker buffers.

        Equivalent to folding `Accumulators.merge` over the buffers in worker
        order, without allocating an intermediate per merge.
        """
        if out.num_agents != self.num_agents:
            raise ValueError(
                f"Cannot reduce {self.num_agents} agents into accumulators for {out.num_agents}"
            )
        reduce_partials(
            self.align_velocity_sum,
            self.cohesion_position_sum,
            self.separation_vector_sum,
            self.align_cohesion_count,
            self.separation_count,
            out.align_velocity_sum,
            out.cohesion_position_sum,
            out.separation_vector_sum,
            out.align_cohesion_count,
            out.separation_count,
            self._active(active),
            self.num_agents
        )

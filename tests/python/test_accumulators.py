from functools import reduce

import numpy as np
import pytest

from boids import Accumulators, PartialAccumulators


FIELDS = (
    "align_velocity_sum",
    "cohesion_position_sum",
    "separation_vector_sum",
    "align_cohesion_count",
    "separation_count",
)


def random_accumulators(rng, num_agents: int) -> Accumulators:
    # Integer-valued sums keep float addition exact, so associativity is checked bit for bit
    acc = Accumulators(num_agents)
    acc.align_velocity_sum[:] = rng.integers(-50, 50, size=(num_agents, 2))
    acc.cohesion_position_sum[:] = rng.integers(-50, 50, size=(num_agents, 2))
    acc.separation_vector_sum[:] = rng.integers(-50, 50, size=(num_agents, 2))
    acc.align_cohesion_count[:] = rng.integers(0, 10, size=num_agents)
    acc.separation_count[:] = rng.integers(0, 10, size=num_agents)
    return acc


def assert_same(a: Accumulators, b: Accumulators):
    for name in FIELDS:
        np.testing.assert_array_equal(getattr(a, name), getattr(b, name))


@pytest.fixture
def rng():
    return np.random.default_rng(7)


def test_identity_is_all_zero():
    acc = Accumulators.identity(4)
    assert acc.is_identity()
    assert acc.align_cohesion_count.dtype.kind == "i"


def test_merge_with_identity(rng):
    a = random_accumulators(rng, 6)
    assert_same(a.merge(Accumulators.identity(6)), a)
    assert_same(Accumulators.identity(6).merge(a), a)


def test_merge_is_commutative(rng):
    a = random_accumulators(rng, 6)
    b = random_accumulators(rng, 6)
    assert_same(a.merge(b), b.merge(a))


def test_merge_is_associative(rng):
    a, b, c = (random_accumulators(rng, 6) for _ in range(3))
    assert_same((a + b) + c, a + (b + c))


def test_merge_does_not_modify_operands(rng):
    a = random_accumulators(rng, 3)
    before = a.align_velocity_sum.copy()
    a.merge(random_accumulators(rng, 3))
    np.testing.assert_array_equal(a.align_velocity_sum, before)


def test_merge_rejects_size_mismatch():
    with pytest.raises(ValueError):
        Accumulators(2).merge(Accumulators(3))


def test_reset_returns_to_identity(rng):
    acc = random_accumulators(rng, 5)
    acc.reset()
    assert acc.is_identity()


def test_reduce_matches_folding_merge(rng):
    partials = PartialAccumulators(4, 5)
    parts = [random_accumulators(rng, 5) for _ in range(4)]
    for k, src in enumerate(parts):
        for name in FIELDS:
            getattr(partials, name)[k] = getattr(src, name)

    out = Accumulators(5)
    partials.reduce_into(out)

    assert_same(out, reduce(Accumulators.merge, parts))


def test_reduce_only_folds_active_buffers(rng):
    partials = PartialAccumulators(3, 4)
    parts = [random_accumulators(rng, 4) for _ in range(3)]
    for k, src in enumerate(parts):
        for name in FIELDS:
            getattr(partials, name)[k] = getattr(src, name)

    out = Accumulators(4)
    partials.reduce_into(out, active=2)

    assert_same(out, parts[0] + parts[1])


def test_reset_only_clears_active_buffers():
    partials = PartialAccumulators(2, 3)
    partials.separation_count[:] = 4
    partials.reset(active=1)
    assert partials.separation_count[0].sum() == 0
    assert partials.separation_count[1].tolist() == [4, 4, 4]
    partials.reset()
    assert partials.separation_count.sum() == 0


def test_reduce_rejects_size_mismatch():
    with pytest.raises(ValueError):
        PartialAccumulators(2, 3).reduce_into(Accumulators(4))


def test_at_least_one_partial_buffer():
    assert PartialAccumulators(0, 3).num_parts == 1

import pytest

from boids import FixedStepClock


def test_releases_whole_ticks_and_keeps_the_remainder():
    clock = FixedStepClock(0.25)
    assert clock.advance(0.625) == 2
    assert clock.pending == pytest.approx(0.125)
    assert clock.advance(0.125) == 1
    assert clock.pending == pytest.approx(0.0)


def test_short_frames_accumulate():
    clock = FixedStepClock(0.5)
    assert clock.advance(0.25) == 0
    assert clock.advance(0.25) == 1


def test_catch_up_is_capped():
    clock = FixedStepClock(0.25, max_ticks=4)
    assert clock.advance(2.0) == 4
    assert clock.dropped_ticks == 4
    assert clock.pending == 0.0
    assert clock.advance(0.25) == 1


def test_negative_elapsed_is_ignored():
    clock = FixedStepClock(1.0)
    assert clock.advance(-5.0) == 0
    assert clock.pending == 0.0


def test_reset_discards_pending_time():
    clock = FixedStepClock(1.0)
    clock.advance(0.9)
    clock.reset()
    assert clock.advance(0.2) == 0


@pytest.mark.parametrize("dt, max_ticks", [(0.0, 4), (-1.0, 4), (0.1, 0)])
def test_invalid_arguments(dt, max_ticks):
    with pytest.raises(ValueError):
        FixedStepClock(dt, max_ticks)

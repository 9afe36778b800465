"""Converts real elapsed time into whole fixed-size ticks."""


class FixedStepClock:
    """
    Accumulates wall-clock time and hands out whole ticks of length `dt`.

    At most `max_ticks` are released per call; the remainder beyond that is
    dropped so a slow frame cannot snowball into ever longer catch-up frames.
    """

    def __init__(self, dt: float, max_ticks: int = 4):
        if dt <= 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        if max_ticks < 1:
            raise ValueError(f"max_ticks must be >= 1, got {max_ticks}")
        self.dt = dt
        self.max_ticks = max_ticks
        self.pending = 0.0
        self.dropped_ticks = 0

    def advance(self, elapsed: float) -> int:
        """Add `elapsed` seconds and return how many ticks to run now."""
        if elapsed > 0:
            self.pending += elapsed

        ticks = int(self.pending // self.dt)
        if ticks > self.max_ticks:
            self.dropped_ticks += ticks - self.max_ticks
            ticks = self.max_ticks
            self.pending = 0.0
        else:
            self.pending -= ticks * self.dt
        return ticks

    def reset(self):
        self.pending = 0.0

"""
Headless Runner
===============

Advances the flock without a window and prints periodic statistics.

Usage:
    python headless.py                              # Defaults from config/boids.py
    python headless.py --ticks 2000 --every 100     # Longer run, sparser output
    python headless.py --seed 7 --workers 1         # Reproducible, single worker
    python headless.py --set n_agents=2000 --set fov_deg=270
"""

import argparse
import time
from dataclasses import fields

import numpy as np

from boids import SimConfig, Simulation
from config import boids as config


def order_parameter(velocities: np.ndarray) -> float:
    """
    Global polarization: | sum(v_i / |v_i|) | / N.
    1 means perfectly aligned, 0 means disordered. Stationary agents count in N only.
    """
    n = len(velocities)
    if n == 0:
        return 0.0

    speeds = np.linalg.norm(velocities, axis=1)
    moving = speeds > 1e-9
    if not np.any(moving):
        return 0.0

    headings = velocities[moving] / speeds[moving, None]
    return float(np.linalg.norm(headings.sum(axis=0)) / n)


def parse_overrides(pairs) -> dict:
    """Turn ["key=value", ...] into SimConfig keyword overrides."""
    known = {f.name for f in fields(SimConfig)}
    overrides = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep:
            raise ValueError(f"Expected key=value, got {pair!r}")
        if key not in known:
            raise ValueError(f"Unknown config field {key!r}")
        overrides[key] = int(value) if key == "n_agents" else float(value)
    return overrides


def run_headless(sim: Simulation, ticks: int, every: int = 0) -> dict:
    """Step `sim` for `ticks` ticks; print a status line every `every` ticks (0 = only at the end)."""
    start = time.perf_counter()
    pairs_total = 0

    for n in range(1, ticks + 1):
        sim.step()
        pairs_total += sim.num_pairs

        if every and n % every == 0:
            vel = sim.velocities()
            mean_speed = float(np.linalg.norm(vel, axis=1).mean()) if len(vel) else 0.0
            print(
                f"[Headless] tick {sim.tick:>6,}  |  pairs {sim.num_pairs:>8,}  |  "
                f"mean speed {mean_speed:8.3f}  |  polarization {order_parameter(vel):.3f}"
            )

    elapsed = time.perf_counter() - start
    vel = sim.velocities()
    stats = {
        "ticks": ticks,
        "elapsed": elapsed,
        "ticks_per_second": ticks / elapsed if elapsed > 0 else float("inf"),
        "mean_pairs": pairs_total / ticks if ticks else 0.0,
        "mean_speed": float(np.linalg.norm(vel, axis=1).mean()) if len(vel) else 0.0,
        "polarization": order_parameter(vel),
    }
    print(
        f"[Headless] {ticks:,} ticks in {elapsed:.2f}s ({stats['ticks_per_second']:.1f} ticks/s), "
        f"polarization {stats['polarization']:.3f}"
    )
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run the boids simulation without graphics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--ticks", type=int, default=500, help="Number of ticks to run")
    parser.add_argument("--every", type=int, default=50, help="Print statistics every N ticks (0 = only at the end)")
    parser.add_argument("--seed", type=int, default=config.RUN["seed"], help="Random seed")
    parser.add_argument("--workers", type=int, default=config.RUN["workers"], help="Kernel workers (default: all threads)")
    parser.add_argument("--set", dest="overrides", action="append", metavar="KEY=VALUE",
                        help="Override a simulation parameter (repeatable)")
    args = parser.parse_args(argv)

    try:
        values = dict(config.SIMULATION)
        values.update(parse_overrides(args.overrides))
        sim_config = SimConfig.from_mapping(values)
    except ValueError as e:
        parser.error(str(e))

    sim = Simulation(sim_config, seed=args.seed, num_workers=args.workers)
    return run_headless(sim, args.ticks, args.every)


if __name__ == "__main__":
    main()

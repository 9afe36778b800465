"""
Step Benchmark
==============

Times `Simulation.step` at constant density: the square world is scaled with
the agent count so each agent expects about 8 neighbors, which keeps the cost
per agent flat if neighbor search is near-linear.

Usage:
    python benchmark.py                             # 1k, 10k, 100k agents
    python benchmark.py --agents 2000 20000         # Custom counts
    python benchmark.py --steps 50 --workers 1      # Single worker
"""

import argparse
import math
import time

import numpy as np

from boids import SimConfig, Simulation, warmup


TARGET_NEIGHBORS = 8.0


def scaled_config(num_agents: int, base: SimConfig = None) -> SimConfig:
    """Config whose square world gives ~TARGET_NEIGHBORS agents per perception disc."""
    base = base or SimConfig()
    vision_area = math.pi * base.perception ** 2
    side = math.sqrt(max(num_agents, 1) * vision_area / TARGET_NEIGHBORS)
    return base.replace(n_agents=num_agents, width=side, height=side)


def time_steps(sim: Simulation, steps: int) -> np.ndarray:
    """Wall time of each of `steps` consecutive steps, in seconds."""
    times = np.zeros(steps)
    for k in range(steps):
        start = time.perf_counter()
        sim.step()
        times[k] = time.perf_counter() - start
    return times


def run_benchmark(num_agents: int, steps: int = 20, workers: int = None, seed: int = 0) -> dict:
    cfg = scaled_config(num_agents)
    print(f"[Bench] {num_agents:,} agents, world {cfg.width:.0f}x{cfg.height:.0f}")
    sim = Simulation(cfg, seed=seed, num_workers=workers)

    # First step pays for buffer growth
    sim.step()

    times = time_steps(sim, steps)
    result = {
        "agents": num_agents,
        "mean_ms": float(times.mean() * 1000.0),
        "best_ms": float(times.min() * 1000.0),
        "pairs": sim.num_pairs,
    }
    print(
        f"[Bench] {num_agents:>9,} agents  |  mean {result['mean_ms']:8.2f} ms  |  "
        f"best {result['best_ms']:8.2f} ms  |  pairs {result['pairs']:,}"
    )
    return result


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Benchmark the boids step at constant density",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--agents", type=int, nargs="+", default=[1_000, 10_000, 100_000])
    parser.add_argument("--steps", type=int, default=20)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args(argv)

    print("[Bench] Compiling kernels...")
    warmup()

    return [run_benchmark(n, args.steps, args.workers, args.seed) for n in args.agents]


if __name__ == "__main__":
    main()

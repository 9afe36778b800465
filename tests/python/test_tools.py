import math

import numpy as np
import pytest
from pytest import approx

from boids import SimConfig, Simulation
from tools.benchmark import TARGET_NEIGHBORS, run_benchmark, scaled_config
from tools.headless import main, order_parameter, parse_overrides, run_headless


class TestOrderParameter:
    def test_aligned_flock_is_fully_polarized(self):
        vel = np.array([[2.0, 0.0], [5.0, 0.0], [0.1, 0.0]])
        assert order_parameter(vel) == approx(1.0)

    def test_opposite_headings_cancel(self):
        vel = np.array([[1.0, 0.0], [-3.0, 0.0], [0.0, 2.0], [0.0, -2.0]])
        assert order_parameter(vel) == approx(0.0)

    def test_empty_and_stationary(self):
        assert order_parameter(np.zeros((0, 2))) == 0.0
        assert order_parameter(np.zeros((3, 2))) == 0.0

    def test_stationary_agents_dilute_polarization(self):
        vel = np.array([[1.0, 0.0], [0.0, 0.0]])
        assert order_parameter(vel) == approx(0.5)


class TestParseOverrides:
    def test_values_are_typed(self):
        overrides = parse_overrides(["n_agents=50", "fov_deg = 270", "width=1e3"])
        assert overrides == {"n_agents": 50, "fov_deg": 270.0, "width": 1000.0}
        assert isinstance(overrides["n_agents"], int)

    def test_nothing_to_override(self):
        assert parse_overrides(None) == {}

    @pytest.mark.parametrize("pair", ["n_agents", "gravity=1", "speed=fast", "n_agents=2.5"])
    def test_bad_pairs(self, pair):
        with pytest.raises(ValueError):
            parse_overrides([pair])


def test_run_headless_reports_statistics(flocking_config):
    sim = Simulation(flocking_config, seed=2, num_workers=1)
    stats = run_headless(sim, ticks=5, every=2)

    assert stats["ticks"] == 5
    assert sim.tick == 5
    assert stats["mean_pairs"] > 0
    assert 0.0 < stats["mean_speed"] <= flocking_config.speed + 1e-9
    assert 0.0 <= stats["polarization"] <= 1.0


def test_headless_main_with_overrides():
    stats = main([
        "--ticks", "3", "--every", "0", "--seed", "1", "--workers", "1",
        "--set", "n_agents=50", "--set", "width=400", "--set", "height=400",
    ])
    assert stats["ticks"] == 3


def test_headless_main_rejects_bad_config():
    with pytest.raises(SystemExit):
        main(["--ticks", "1", "--set", "width=-1"])
    with pytest.raises(SystemExit):
        main(["--ticks", "1", "--set", "bogus=1"])


@pytest.mark.parametrize("count", [1, 100, 5000])
def test_scaled_config_keeps_density(count):
    cfg = scaled_config(count)
    assert cfg.n_agents == count
    assert cfg.width == cfg.height
    expected = count * math.pi * cfg.perception ** 2 / (cfg.width * cfg.height)
    assert expected == approx(TARGET_NEIGHBORS)


def test_scaled_config_respects_base():
    base = SimConfig(perception=10.0, separation_dist=2.0)
    cfg = scaled_config(400, base)
    assert cfg.perception == 10.0
    assert cfg.width == approx(math.sqrt(400 * math.pi * 100.0 / TARGET_NEIGHBORS))


def test_run_benchmark_result():
    result = run_benchmark(200, steps=2, workers=1)
    assert set(result) == {"agents", "mean_ms", "best_ms", "pairs"}
    assert result["agents"] == 200
    assert result["best_ms"] <= result["mean_ms"]
    assert result["pairs"] >= 0

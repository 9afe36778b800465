import dataclasses
import math

import numpy as np
import pytest
from pytest import approx

from boids import ConfigError, SimConfig


def test_defaults_are_valid():
    cfg = SimConfig()
    assert cfg.width == 5000.0
    assert cfg.n_agents == 10000
    assert cfg.separation_dist <= cfg.perception
    assert cfg.eps > 0


def test_config_is_immutable():
    cfg = SimConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.width = 10.0


def test_every_field_can_be_overridden():
    cfg = SimConfig(
        width=10.0, height=20.0, n_agents=3, speed=2.0, perception=4.0,
        separation_dist=1.0, w_sep=0.1, w_align=0.2, w_coh=0.3, fov_deg=120.0,
        max_force=5.0, eps=1e-9, dt=0.5,
    )
    assert cfg.to_dict() == {
        "width": 10.0, "height": 20.0, "n_agents": 3, "speed": 2.0, "perception": 4.0,
        "separation_dist": 1.0, "w_sep": 0.1, "w_align": 0.2, "w_coh": 0.3, "fov_deg": 120.0,
        "max_force": 5.0, "eps": 1e-9, "dt": 0.5,
    }


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 0.0},
        {"width": -1.0},
        {"height": 0.0},
        {"n_agents": -1},
        {"n_agents": 2.5},
        {"perception": -1.0, "separation_dist": 0.0},
        {"separation_dist": -0.5},
        {"perception": 10.0, "separation_dist": 11.0},
        {"fov_deg": 0.0},
        {"fov_deg": -30.0},
        {"fov_deg": 360.5},
        {"speed": -1.0},
        {"dt": 0.0},
        {"dt": -0.02},
        {"max_force": -1.0},
        {"eps": 0.0},
        {"width": float("nan")},
        {"speed": float("inf")},
        {"speed": "fast"},
        {"n_agents": True},
        {"fov_deg": np.bool_(True)},
    ],
)
def test_invalid_config_fails_fast(overrides):
    with pytest.raises(ConfigError):
        SimConfig(**overrides)


def test_numpy_scalars_are_accepted():
    cfg = SimConfig(
        width=np.float64(50.0), n_agents=np.int64(5),
        perception=np.float32(10.0), separation_dist=np.int32(2),
    )
    assert cfg.n_agents == 5
    assert cfg.perception == 10.0


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        SimConfig(dt=0.0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"fov_deg": 360.0},
        {"n_agents": 0},
        {"perception": 0.0, "separation_dist": 0.0},
        {"perception": 15.0, "separation_dist": 15.0},
        {"speed": 0.0},
        {"max_force": 0.0},
    ],
)
def test_boundary_values_are_accepted(overrides):
    SimConfig(**overrides)


def test_replace_revalidates():
    cfg = SimConfig()
    assert cfg.replace(n_agents=5).n_agents == 5
    with pytest.raises(ConfigError):
        cfg.replace(width=-5.0)


def test_from_mapping_rejects_unknown_keys():
    assert SimConfig.from_mapping({"width": 10.0, "height": 10.0}).width == 10.0
    with pytest.raises(ConfigError, match="n_boids"):
        SimConfig.from_mapping({"n_boids": 10})


@pytest.mark.parametrize(
    "fov, expected",
    [(360.0, -1.0), (180.0, 0.0), (80.0, math.cos(math.radians(40.0)))],
)
def test_cos_half_fov(fov, expected):
    assert SimConfig(fov_deg=fov).cos_half_fov == approx(expected, abs=1e-12)

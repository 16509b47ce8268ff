from __future__ import annotations

import pytest

from resultant_trainer.config import HANDLE_RADIUS_ENV, TICK_INTERVAL_ENV, SimulatorConfig


def test_defaults_match_canvas_presets() -> None:
    cfg = SimulatorConfig()
    assert (cfg.canvas_width, cfg.canvas_height) == (700, 400)
    assert cfg.center == (350.0, 200.0)
    assert cfg.tick_interval_s == 1.0


def test_from_env_overrides() -> None:
    cfg = SimulatorConfig.from_env({TICK_INTERVAL_ENV: "0.5", HANDLE_RADIUS_ENV: " 20 "})
    assert cfg.tick_interval_s == 0.5
    assert cfg.handle_radius == 20.0


def test_from_env_ignores_blank_values() -> None:
    assert SimulatorConfig.from_env({TICK_INTERVAL_ENV: ""}) == SimulatorConfig()


@pytest.mark.parametrize("env", [{TICK_INTERVAL_ENV: "fast"}, {TICK_INTERVAL_ENV: "0"}, {HANDLE_RADIUS_ENV: "-1"}])
def test_invalid_values_are_rejected(env: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        SimulatorConfig.from_env(env)


def test_constructor_validation() -> None:
    with pytest.raises(ValueError):
        SimulatorConfig(canvas_width=0)

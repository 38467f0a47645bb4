"""
Tests for parameter loading and export.
"""

import json
import math

import pytest

from ball_swing_tuning.config import SweepParams, TuningParameters

ENV_KEYS = [
    "SWING_LENGTH",
    "SWING_MAX_ANGLE",
    "BALL_INITIAL_POSITION",
    "KP",
    "KD",
    "MAX_TICKS",
    "SETTLE_SIGMA",
    "SWEEP_KP_START",
    "SWEEP_KD_MIN_BRACKET",
    "SWEEP_CENTERED_MIDPOINT",
    "SWEEP_NON_SETTLING_SLOWEST",
    "SWEEP_WORKERS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestDefaults:
    def test_defaults_match_reference_setup(self, clean_env):
        params = TuningParameters.from_env()

        assert params.swing.length == 200
        assert params.swing.max_angle == pytest.approx(math.pi / 4)
        assert params.swing.max_delta == pytest.approx(math.pi / 36)
        assert params.ball.initial_position == 70
        assert params.control.dt == 1
        assert params.control.integral_limit == pytest.approx(math.pi / 4)
        assert params.control.target_position == 0
        assert params.runner.max_ticks == 10000
        assert params.runner.settle_sigma == 1e-5

        sweep = params.sweep
        assert (sweep.kp_start, sweep.kp_stop, sweep.kp_step) == (0.001, 0.035, 1e-7)
        assert sweep.ki == 0.01
        assert sweep.kd_min_bracket == (0.0, 0.2)
        assert sweep.kd_max_bracket == (0.1, 0.5)
        assert sweep.bisection_iterations == 10
        assert sweep.refine_iterations == 10
        assert sweep.centered_midpoint is False
        assert sweep.non_settling_slowest is False
        assert sweep.workers == 1


class TestFromEnv:
    def test_overrides(self, clean_env):
        clean_env.setenv("SWING_LENGTH", "300")
        clean_env.setenv("BALL_INITIAL_POSITION", "-40")
        clean_env.setenv("KP", "0.02")
        clean_env.setenv("MAX_TICKS", "500")
        clean_env.setenv("SWEEP_KD_MIN_BRACKET", "[0.05, 0.25]")
        clean_env.setenv("SWEEP_CENTERED_MIDPOINT", "true")
        clean_env.setenv("SWEEP_NON_SETTLING_SLOWEST", "true")
        clean_env.setenv("SWEEP_WORKERS", "4")

        params = TuningParameters.from_env()
        assert params.swing.length == 300
        assert params.ball.initial_position == -40
        assert params.control.kp == 0.02
        assert params.runner.max_ticks == 500
        assert params.sweep.kd_min_bracket == (0.05, 0.25)
        assert params.sweep.centered_midpoint is True
        assert params.sweep.non_settling_slowest is True
        assert params.sweep.workers == 4

    def test_none_string_keeps_default(self, clean_env):
        clean_env.setenv("KD", "None")
        assert TuningParameters.from_env().control.kd == 0.12500250000000002

    def test_bad_number_raises(self, clean_env):
        clean_env.setenv("SETTLE_SIGMA", "tiny")
        with pytest.raises(ValueError):
            TuningParameters.from_env()

    def test_bad_bracket_raises(self, clean_env):
        clean_env.setenv("SWEEP_KD_MIN_BRACKET", "[0.1]")
        with pytest.raises(ValueError):
            TuningParameters.from_env()


class TestSweepValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"kp_step": 0},
            {"kp_step": -1e-7},
            {"bisection_iterations": -1},
            {"refine_iterations": -1},
            {"workers": 0},
        ],
    )
    def test_rejects_unrunnable_settings(self, overrides):
        with pytest.raises(ValueError):
            SweepParams(**overrides).validate()

    def test_default_sweep_is_valid(self):
        SweepParams().validate()

    def test_step_count_estimate(self):
        assert SweepParams(kp_start=0.0, kp_stop=1.0, kp_step=0.25).kp_step_count == 4
        assert SweepParams(kp_start=1.0, kp_stop=0.0).kp_step_count == 0


class TestExport:
    def test_save_to_json(self, tmp_path):
        params = TuningParameters()
        path = params.save_to_json(tmp_path, "Trace")

        assert path == tmp_path / "simulation_config.json"
        with open(path) as f:
            data = json.load(f)
        assert data["ball"]["initial_position"] == 70
        assert data["sweep"]["kd_max_bracket"] == [0.1, 0.5]
        assert data["sweep"]["non_settling_slowest"] is False
        assert data["metadata"]["description"].startswith("Trace")

"""
Unified parameter management for ball-on-swing tuning scenarios.

This module provides a centralized way to load and manage simulation and
search parameters from environment variables (and an optional .env file)
and default values.
"""

import json
import math
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv


def get_env_float(key: str, default: Optional[float]) -> Optional[float]:
    """
    Get float value from environment variable.

    Args:
        key: Environment variable name
        default: Default value if not found (can be None)

    Returns:
        Float value from environment or default
    """
    value = os.getenv(key)
    if value is None or value == "None":
        return default
    return float(value)


def get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    value = os.getenv(key)
    if value is None or value == "None":
        return default
    return int(value)


def get_env_bool(key: str, default: bool) -> bool:
    """
    Get boolean value from environment variable.

    Args:
        key: Environment variable name
        default: Default value if not found

    Returns:
        Boolean value from environment or default
    """
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() == "true"


def get_env_range(key: str, default: Tuple[float, float]) -> Tuple[float, float]:
    """
    Get a (low, high) pair from a JSON list environment variable.

    Example: SWEEP_KD_MIN_BRACKET="[0, 0.2]"
    """
    value = os.getenv(key)
    if value is None:
        return default
    bounds = json.loads(value)
    if not isinstance(bounds, list) or len(bounds) != 2:
        raise ValueError(f"{key} must be a JSON list of two numbers, got {value!r}")
    return float(bounds[0]), float(bounds[1])


@dataclass
class SwingParams:
    """Swing geometry and actuation limits."""

    length: float = 200.0  # Left and right side combined [length units]
    max_angle: float = math.pi / 4  # Mechanical tilt limit [rad]
    max_delta: float = math.pi / 36  # Full tilt-rate window per tick [rad] (±max_delta/2)
    initial_angle: float = 0.0  # [rad]

    @classmethod
    def from_env(cls) -> "SwingParams":
        """Load swing parameters from environment variables."""
        return cls(
            length=get_env_float("SWING_LENGTH", 200.0),
            max_angle=get_env_float("SWING_MAX_ANGLE", math.pi / 4),
            max_delta=get_env_float("SWING_MAX_DELTA", math.pi / 36),
            initial_angle=get_env_float("SWING_INITIAL_ANGLE", 0.0),
        )


@dataclass
class BallParams:
    """Ball physical parameters."""

    initial_position: float = 70.0  # Offset from swing center [length units]
    size: float = 10.0  # Diameter [length units]
    mass: float = 10.0  # Mass (cancels out of the net force)
    gravity: float = 9.81  # Gravity acceleration

    @classmethod
    def from_env(cls) -> "BallParams":
        """Load ball parameters from environment variables."""
        return cls(
            initial_position=get_env_float("BALL_INITIAL_POSITION", 70.0),
            size=get_env_float("BALL_SIZE", 10.0),
            mass=get_env_float("BALL_MASS", 10.0),
            gravity=get_env_float("GRAVITY", 9.81),
        )


@dataclass
class ControlParams:
    """Control system parameters."""

    # Gains used by the single-run trace scenario (best recorded 48-tick triple)
    kp: float = 0.0124414999999855  # Proportional gain
    ki: float = 0.0  # Integral gain
    kd: float = 0.12500250000000002  # Derivative gain
    dt: float = 1.0  # Controller time step [ticks]
    integral_limit: float = math.pi / 4  # Integral term limit (anti-windup)
    target_position: float = 0.0  # Swing center

    @classmethod
    def from_env(cls) -> "ControlParams":
        """Load control parameters from environment variables."""
        return cls(
            kp=get_env_float("KP", 0.0124414999999855),
            ki=get_env_float("KI", 0.0),
            kd=get_env_float("KD", 0.12500250000000002),
            dt=get_env_float("CONTROL_DT", 1.0),
            integral_limit=get_env_float("INTEGRAL_LIMIT", math.pi / 4),
            target_position=get_env_float("TARGET_POSITION", 0.0),
        )


@dataclass
class RunnerParams:
    """Simulation runner budget and settle detection."""

    max_ticks: int = 10000  # Tick budget per run
    settle_sigma: float = 1e-5  # Tolerance for |position| and |speed|

    @classmethod
    def from_env(cls) -> "RunnerParams":
        """Load runner parameters from environment variables."""
        return cls(
            max_ticks=get_env_int("MAX_TICKS", 10000),
            settle_sigma=get_env_float("SETTLE_SIGMA", 1e-5),
        )


@dataclass
class SweepParams:
    """Gain sweep and derivative-gain search parameters."""

    kp_start: float = 0.001  # First proportional gain
    kp_stop: float = 0.035  # Exclusive upper bound
    kp_step: float = 1e-7  # Accumulated increment
    ki: float = 0.01  # Integral gain held fixed during the sweep
    kd_min_bracket: Tuple[float, float] = (0.0, 0.2)  # Bounds for find_d_min
    kd_max_bracket: Tuple[float, float] = (0.1, 0.5)  # Bounds for find_d_max
    bisection_iterations: int = 10  # Fixed bisection depth
    refine_iterations: int = 10  # Refinement passes per k_p
    centered_midpoint: bool = False  # Use (max + min) / 2 instead of (max - min) / 2
    non_settling_slowest: bool = False  # Non-settling bracket end loses instead of comparing as 0 ticks
    workers: int = 1  # Worker processes (1 = sequential)

    @classmethod
    def from_env(cls) -> "SweepParams":
        """Load sweep parameters from environment variables."""
        return cls(
            kp_start=get_env_float("SWEEP_KP_START", 0.001),
            kp_stop=get_env_float("SWEEP_KP_STOP", 0.035),
            kp_step=get_env_float("SWEEP_KP_STEP", 1e-7),
            ki=get_env_float("SWEEP_KI", 0.01),
            kd_min_bracket=get_env_range("SWEEP_KD_MIN_BRACKET", (0.0, 0.2)),
            kd_max_bracket=get_env_range("SWEEP_KD_MAX_BRACKET", (0.1, 0.5)),
            bisection_iterations=get_env_int("BISECTION_ITERATIONS", 10),
            refine_iterations=get_env_int("REFINE_ITERATIONS", 10),
            centered_midpoint=get_env_bool("SWEEP_CENTERED_MIDPOINT", False),
            non_settling_slowest=get_env_bool("SWEEP_NON_SETTLING_SLOWEST", False),
            workers=get_env_int("SWEEP_WORKERS", 1),
        )

    def validate(self):
        """
        Reject settings the sweep loop cannot run with.

        Raises:
            ValueError: On a non-positive step, negative iteration count or
                fewer than one worker
        """
        if self.kp_step <= 0:
            raise ValueError(f"kp_step must be positive, got {self.kp_step}")
        if self.bisection_iterations < 0 or self.refine_iterations < 0:
            raise ValueError("Iteration counts must not be negative")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @property
    def kp_step_count(self) -> int:
        """Approximate number of k_p values visited by the sweep."""
        return max(0, math.ceil((self.kp_stop - self.kp_start) / self.kp_step))


@dataclass
class TuningParameters:
    """
    Complete set of simulation and search parameters.

    This class aggregates all parameter groups and provides methods for
    loading from environment variables and saving to JSON.
    """

    swing: SwingParams = field(default_factory=SwingParams)
    ball: BallParams = field(default_factory=BallParams)
    control: ControlParams = field(default_factory=ControlParams)
    runner: RunnerParams = field(default_factory=RunnerParams)
    sweep: SweepParams = field(default_factory=SweepParams)

    @classmethod
    def from_env(cls) -> "TuningParameters":
        """
        Load all parameters from environment variables.

        Returns:
            TuningParameters instance with values from environment
        """
        load_dotenv()  # Load .env file

        return cls(
            swing=SwingParams.from_env(),
            ball=BallParams.from_env(),
            control=ControlParams.from_env(),
            runner=RunnerParams.from_env(),
            sweep=SweepParams.from_env(),
        )

    def to_dict(self, scenario_type: str = "Sweep") -> dict:
        """
        Convert parameters to dictionary format for JSON export.

        Args:
            scenario_type: Type of scenario (for metadata)

        Returns:
            Dictionary representation of all parameters
        """
        return {
            "swing": {
                "length": self.swing.length,
                "max_angle_rad": self.swing.max_angle,
                "max_delta_rad": self.swing.max_delta,
                "initial_angle_rad": self.swing.initial_angle,
            },
            "ball": {
                "initial_position": self.ball.initial_position,
                "size": self.ball.size,
                "mass": self.ball.mass,
                "gravity": self.ball.gravity,
            },
            "control": {
                "kp": self.control.kp,
                "ki": self.control.ki,
                "kd": self.control.kd,
                "dt_ticks": self.control.dt,
                "integral_limit": self.control.integral_limit,
                "target_position": self.control.target_position,
            },
            "runner": {
                "max_ticks": self.runner.max_ticks,
                "settle_sigma": self.runner.settle_sigma,
            },
            "sweep": {
                "kp_start": self.sweep.kp_start,
                "kp_stop": self.sweep.kp_stop,
                "kp_step": self.sweep.kp_step,
                "ki": self.sweep.ki,
                "kd_min_bracket": list(self.sweep.kd_min_bracket),
                "kd_max_bracket": list(self.sweep.kd_max_bracket),
                "bisection_iterations": self.sweep.bisection_iterations,
                "refine_iterations": self.sweep.refine_iterations,
                "centered_midpoint": self.sweep.centered_midpoint,
                "non_settling_slowest": self.sweep.non_settling_slowest,
                "workers": self.sweep.workers,
            },
            "metadata": {
                "timestamp": datetime.now().isoformat(),
                "description": f"{scenario_type} Ball-on-Swing PID Tuning",
                "note": "Time is measured in simulation ticks",
            },
        }

    def save_to_json(self, output_dir: Path, scenario_type: str = "Sweep") -> Path:
        """
        Save parameters to JSON file.

        Args:
            output_dir: Directory to save configuration
            scenario_type: Type of scenario (for metadata)

        Returns:
            Path to saved configuration file
        """
        config_path = Path(output_dir) / "simulation_config.json"
        with open(config_path, "w") as f:
            json.dump(self.to_dict(scenario_type), f, indent=2)
        return config_path

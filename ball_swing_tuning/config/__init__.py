"""
Configuration module for ball-on-swing PID tuning.

This module provides unified parameter loading and configuration management
for all scenarios.
"""

from .parameters import (
    BallParams,
    ControlParams,
    RunnerParams,
    SweepParams,
    SwingParams,
    TuningParameters,
)

__all__ = [
    "BallParams",
    "ControlParams",
    "RunnerParams",
    "SweepParams",
    "SwingParams",
    "TuningParameters",
]

"""
Scenario module for ball-on-swing PID tuning.

This module provides different scenarios:
- Sweep: full proportional-gain sweep with derivative-gain search
- Trace: single simulation run with per-tick trace and plots
"""

from .base_scenario import BaseScenario
from .sweep_scenario import SweepScenario
from .trace_scenario import TraceScenario

__all__ = [
    "BaseScenario",
    "SweepScenario",
    "TraceScenario",
]

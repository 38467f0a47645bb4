"""
Tuning module - derivative-gain bracketing and the proportional-gain sweep.
"""

from .best_result import BestResult, GainResult, format_result
from .bracketing import BISECTION_ITERATIONS, find_d_max, find_d_min
from .gain_sweep import GainSweep, evaluate_kp, kd_candidates, kp_values, refine_k_d

__all__ = [
    "BISECTION_ITERATIONS",
    "BestResult",
    "GainResult",
    "GainSweep",
    "evaluate_kp",
    "find_d_max",
    "find_d_min",
    "format_result",
    "kd_candidates",
    "kp_values",
    "refine_k_d",
]

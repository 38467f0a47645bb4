"""
Gain sweep scenario.

Runs the full proportional-gain sweep and prints every improving gain triple
as soon as it is found. By default those are the only lines printed, so the
last line is the overall best; verbose adds the scenario header, progress
and summary lines. Nothing is written to disk.
"""

from ..tuning.best_result import BestResult, GainResult, format_result
from ..tuning.gain_sweep import GainSweep
from .base_scenario import BaseScenario


def print_improvement(result: GainResult):
    print(format_result(result), flush=True)


class SweepScenario(BaseScenario):
    """
    Brute-force k_p sweep with k_d bracketing and refinement.

    The last improvement line printed is the overall best.
    """

    def __init__(self, params=None, verbose: bool = False, **kwargs):
        super().__init__(params, **kwargs)
        self.verbose = verbose
        self.best = BestResult(on_improvement=print_improvement)

    @property
    def show_banner(self) -> bool:
        return self.verbose

    @property
    def scenario_name(self) -> str:
        return "Sweep"

    @property
    def scenario_description(self) -> str:
        return "Proportional-gain sweep with derivative-gain bisection"

    def print_simulation_info(self):
        super().print_simulation_info()
        sweep = self.params.sweep
        midpoint = "(max + min) / 2" if sweep.centered_midpoint else "(max - min) / 2"
        print(f"   k_p: [{sweep.kp_start}, {sweep.kp_stop}) step {sweep.kp_step} (~{sweep.kp_step_count} steps)")
        print(f"   k_i: {sweep.ki}")
        print(f"   k_d brackets: min {sweep.kd_min_bracket}, max {sweep.kd_max_bracket}")
        print(f"   Bisection: {sweep.bisection_iterations}, refinement: {sweep.refine_iterations} ({midpoint})")
        print(f"   Non-settling bracket end: {'slowest' if sweep.non_settling_slowest else '0 ticks'}")
        print(f"   Workers: {sweep.workers}")

    def execute(self):
        if self.verbose:
            print(f"\n▶️  Running gain sweep...")
            print("=" * 70)

        sweep = GainSweep(self.params.sweep, runner=self.runner, best=self.best, verbose=self.verbose)
        sweep.run()

        if not self.verbose:
            return

        print("=" * 70)
        if self.best.best is None:
            print("⚠️  No gain triple settled within the tick budget")
        else:
            print(f"✅ Best: {format_result(self.best.best)}")
            print(f"   Improvements found: {len(self.best.history)}")

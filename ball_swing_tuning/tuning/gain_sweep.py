"""
Gain sweep - brute-force search for the fastest-settling PID gains.

For every proportional gain in the configured range (k_i held fixed):

1. Bracket the derivative gain with find_d_min / find_d_max.
2. Refine the bracket a fixed number of times, comparing the settle tick
   counts at both ends and moving the slower end to the refinement point.
3. Offer the settle count at each refinement point to the BestResult.

The refinement point is (k_d_max - k_d_min) / 2 unless
SweepParams.centered_midpoint selects (k_d_max + k_d_min) / 2.
A run that does not settle compares as 0 ticks when the two bracket ends
are compared, unless SweepParams.non_settling_slowest is set.

With workers > 1 the k_p steps are evaluated in worker processes and the
candidates are folded into the BestResult in k_p order, so the reported
history is the same as in a sequential run.
"""

from concurrent.futures import ProcessPoolExecutor
from functools import partial
from itertools import islice
from typing import Iterator, List, Optional, Tuple

from ..config.parameters import SweepParams
from ..simulators.simulation_runner import SimulationRunner
from .best_result import BestResult
from .bracketing import find_d_max, find_d_min

Candidate = Tuple[Optional[int], float]  # (settle ticks, k_d)


def kp_values(start: float, stop: float, step: float) -> Iterator[float]:
    """
    Yield start, start + step, ... while below stop.

    The value is accumulated, not computed as start + n * step, so it carries
    the same floating-point drift as an incrementing loop counter.
    """
    k_p = start
    while k_p < stop:
        yield k_p
        k_p += step


def _faster(ticks_a: Optional[int], ticks_b: Optional[int], non_settling_slowest: bool = False) -> bool:
    """
    True if a settles strictly faster than b.

    By default a run that did not settle compares as 0 ticks, so it beats any
    settling run. With non_settling_slowest it loses to every settling run.
    """
    if non_settling_slowest:
        if ticks_a is None:
            return False
        return ticks_b is None or ticks_a < ticks_b
    return (ticks_a or 0) < (ticks_b or 0)


def refine_k_d(
    k_p: float,
    k_i: float,
    k_d_min: float,
    k_d_max: float,
    runner,
    iterations: int = 10,
    centered_midpoint: bool = False,
    non_settling_slowest: bool = False,
) -> Iterator[Candidate]:
    """
    Narrow a derivative-gain bracket, yielding each evaluated refinement point.

    Args:
        k_p, k_i: Fixed gains
        k_d_min, k_d_max: Bracket from find_d_min / find_d_max
        runner: Fitness oracle with run(k_p, k_i, k_d) -> Optional[int]
        iterations: Number of refinement passes
        centered_midpoint: Use (max + min) / 2 instead of (max - min) / 2
        non_settling_slowest: Compare a non-settling end as slower than any
            settling end instead of as 0 ticks

    Yields:
        (settle ticks or None, k_d) for each refinement point
    """
    for _ in range(iterations):
        if centered_midpoint:
            k_d = (k_d_max + k_d_min) / 2
        else:
            k_d = (k_d_max - k_d_min) / 2

        count_k_d_min = runner.run(k_p, k_i, k_d_min)
        count_k_d_max = runner.run(k_p, k_i, k_d_max)

        if _faster(count_k_d_min, count_k_d_max, non_settling_slowest):
            k_d_max = k_d
        else:
            k_d_min = k_d

        yield runner.run(k_p, k_i, k_d), k_d


def kd_candidates(k_p: float, runner, sweep: SweepParams) -> Iterator[Candidate]:
    """Bracket and refine the derivative gain for one proportional gain."""
    k_d_min = find_d_min(k_p, sweep.ki, *sweep.kd_min_bracket, runner=runner, iterations=sweep.bisection_iterations)
    k_d_max = find_d_max(k_p, sweep.ki, *sweep.kd_max_bracket, runner=runner, iterations=sweep.bisection_iterations)

    return refine_k_d(
        k_p,
        sweep.ki,
        k_d_min,
        k_d_max,
        runner,
        iterations=sweep.refine_iterations,
        centered_midpoint=sweep.centered_midpoint,
        non_settling_slowest=sweep.non_settling_slowest,
    )


def evaluate_kp(k_p: float, runner, sweep: SweepParams) -> List[Candidate]:
    """Worker entry point: all settling refinement points for one k_p, in order."""
    return [(ticks, k_d) for ticks, k_d in kd_candidates(k_p, runner, sweep) if ticks is not None]


class GainSweep:
    """
    Proportional-gain sweep with derivative-gain refinement.

    Attributes:
        sweep: Sweep parameters
        runner: Fitness oracle (SimulationRunner or a stand-in with run())
        best: Accumulator receiving every candidate
        verbose: Print periodic progress lines
        progress_interval: k_p steps between progress lines
    """

    def __init__(
        self,
        sweep: Optional[SweepParams] = None,
        runner=None,
        best: Optional[BestResult] = None,
        verbose: bool = False,
        progress_interval: int = 10000,
    ):
        self.sweep = sweep if sweep is not None else SweepParams()
        self.sweep.validate()
        self.runner = runner if runner is not None else SimulationRunner()
        self.best = best if best is not None else BestResult()
        self.verbose = verbose
        self.progress_interval = progress_interval
        self.steps_done = 0

    def kp_values(self) -> Iterator[float]:
        return kp_values(self.sweep.kp_start, self.sweep.kp_stop, self.sweep.kp_step)

    def run(self) -> BestResult:
        """
        Run the full sweep. There is no early termination.

        Returns:
            The BestResult accumulator
        """
        if self.sweep.workers > 1:
            self._run_parallel()
        else:
            self._run_sequential()
        return self.best

    def _run_sequential(self):
        for k_p in self.kp_values():
            for ticks, k_d in kd_candidates(k_p, self.runner, self.sweep):
                self.best.offer(ticks, k_p, self.sweep.ki, k_d)
            self._step_done(k_p)

    def _run_parallel(self):
        task = partial(evaluate_kp, runner=self.runner, sweep=self.sweep)
        batch_size = self.sweep.workers * 64
        kp_iter = self.kp_values()

        with ProcessPoolExecutor(max_workers=self.sweep.workers) as executor:
            while True:
                batch = list(islice(kp_iter, batch_size))
                if not batch:
                    break
                for k_p, candidates in zip(batch, executor.map(task, batch, chunksize=16)):
                    for ticks, k_d in candidates:
                        self.best.offer(ticks, k_p, self.sweep.ki, k_d)
                    self._step_done(k_p)

    def _step_done(self, k_p: float):
        self.steps_done += 1
        if self.verbose and self.steps_done % self.progress_interval == 0:
            print(
                f"[GainSweep] {self.steps_done}/{self.sweep.kp_step_count} steps, "
                f"k_p={k_p:.7f}, best={self.best.ticks}"
            )

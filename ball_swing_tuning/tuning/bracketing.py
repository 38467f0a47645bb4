"""
Derivative-gain bracketing.

For fixed proportional and integral gains, locate the boundary of the
derivative-gain region in which the ball settles. Both procedures run a
fixed number of bisection steps on the predicate "does the simulation
settle"; the depth is an explicit loop bound, never a tolerance, because
the final bracket width depends on it.

Settling is assumed to be monotonic in k_d over [min_k_d, max_k_d]. A
non-monotonic region yields an arbitrary bracket, not an error.
"""

from ..simulators.simulation_runner import SimulationRunner

BISECTION_ITERATIONS = 10


def _settles(runner, k_p: float, k_i: float, k_d: float) -> bool:
    return runner.run(k_p, k_i, k_d) is not None


def find_d_min(
    k_p: float,
    k_i: float,
    min_k_d: float,
    max_k_d: float,
    runner=None,
    iterations: int = BISECTION_ITERATIONS,
) -> float:
    """
    Find the smallest settling derivative gain, approached from the settling side.

    Args:
        k_p: Proportional gain
        k_i: Integral gain
        min_k_d: Lower bound; returned unchanged if it already settles
        max_k_d: Upper bound, assumed to settle
        runner: Fitness oracle with run(k_p, k_i, k_d) -> Optional[int]
        iterations: Number of bisection steps

    Returns:
        Final upper end of the bracket
    """
    if runner is None:
        runner = SimulationRunner()

    if _settles(runner, k_p, k_i, min_k_d):
        return min_k_d

    for _ in range(iterations):
        k_d = (max_k_d + min_k_d) / 2
        if _settles(runner, k_p, k_i, k_d):
            max_k_d = k_d
        else:
            min_k_d = k_d

    return max_k_d


def find_d_max(
    k_p: float,
    k_i: float,
    min_k_d: float,
    max_k_d: float,
    runner=None,
    iterations: int = BISECTION_ITERATIONS,
) -> float:
    """
    Find the largest settling derivative gain, approached from the settling side.

    Args:
        k_p: Proportional gain
        k_i: Integral gain
        min_k_d: Lower bound, assumed to settle
        max_k_d: Upper bound; returned unchanged if it already settles
        runner: Fitness oracle with run(k_p, k_i, k_d) -> Optional[int]
        iterations: Number of bisection steps

    Returns:
        Final lower end of the bracket
    """
    if runner is None:
        runner = SimulationRunner()

    if _settles(runner, k_p, k_i, max_k_d):
        return max_k_d

    for _ in range(iterations):
        k_d = (max_k_d + min_k_d) / 2
        if _settles(runner, k_p, k_i, k_d):
            min_k_d = k_d
        else:
            max_k_d = k_d

    return min_k_d

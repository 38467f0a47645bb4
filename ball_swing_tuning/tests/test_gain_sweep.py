"""
Tests for the gain sweep and the best-result accumulator.
"""

import pytest

from ball_swing_tuning.config import RunnerParams, SweepParams
from ball_swing_tuning.simulators import SimulationRunner
from ball_swing_tuning.tuning import (
    BestResult,
    GainResult,
    GainSweep,
    evaluate_kp,
    format_result,
    kd_candidates,
    kp_values,
    refine_k_d,
)


class TableOracle:
    """Settle ticks looked up by k_d (rounded), None elsewhere."""

    def __init__(self, table):
        self.table = table
        self.calls = []

    def run(self, k_p, k_i=0.0, k_d=0.0):
        self.calls.append(k_d)
        return self.table.get(round(k_d, 6))


class KpOracle:
    """Settle ticks fall as k_p grows and depend weakly on k_d."""

    def run(self, k_p, k_i=0.0, k_d=0.0):
        if k_d <= 0:
            return None
        return int(1000 - k_p * 10000) + int(k_d * 10)


class ThresholdOracle:
    """Settles in 10 ticks for k_d at or above a threshold."""

    def __init__(self, threshold):
        self.threshold = threshold

    def run(self, k_p, k_i=0.0, k_d=0.0):
        return 10 if k_d >= self.threshold else None


class TestBestResult:
    def test_starts_empty(self):
        best = BestResult()
        assert best.best is None
        assert best.ticks is None
        assert best.history == []

    def test_ignores_non_settling_runs(self):
        best = BestResult()
        assert not best.offer(None, 0.01, 0.01, 0.1)
        assert best.best is None

    def test_only_strict_improvements_are_recorded(self):
        reported = []
        best = BestResult(on_improvement=reported.append)

        assert best.offer(100, 0.01, 0.01, 0.1)
        assert not best.offer(100, 0.02, 0.01, 0.2)
        assert not best.offer(150, 0.03, 0.01, 0.3)
        assert best.offer(60, 0.04, 0.01, 0.4)

        assert [r.ticks for r in best.history] == [100, 60]
        assert reported == best.history
        assert best.best == GainResult(ticks=60, k_p=0.04, k_i=0.01, k_d=0.4)

    def test_tick_zero_settle_is_ignored(self):
        best = BestResult()
        assert not best.offer(0, 0.01, 0.01, 0.1)
        assert best.best is None

        best.offer(30, 0.01, 0.01, 0.1)
        assert not best.offer(0, 0.02, 0.01, 0.2)
        assert best.ticks == 30

    def test_format_result(self):
        line = format_result(GainResult(ticks=48, k_p=0.0124414999999855, k_i=0.0, k_d=0.12500250000000002))
        assert line == "i: 48 p: 0.0124414999999855 i: 0.0 d: 0.12500250000000002"


class TestKpValues:
    def test_accumulates_like_a_loop_counter(self):
        expected = []
        k_p = 0.001
        while k_p < 0.0011:
            expected.append(k_p)
            k_p += 1e-7

        assert list(kp_values(0.001, 0.0011, 1e-7)) == expected

    def test_stop_is_exclusive(self):
        values = list(kp_values(0.0, 0.5, 0.25))
        assert values == [0.0, 0.25]

    def test_empty_range(self):
        assert list(kp_values(0.035, 0.001, 1e-7)) == []


class TestRefineKd:
    def test_half_width_step_is_preserved(self):
        """The refinement point is (max - min) / 2, not the bracket midpoint."""
        oracle = TableOracle({})
        points = [k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.3, oracle, iterations=1)]
        assert points == [pytest.approx(0.1)]

    def test_centered_midpoint_option(self):
        oracle = TableOracle({})
        points = [k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.3, oracle, iterations=1, centered_midpoint=True)]
        assert points == [pytest.approx(0.2)]

    def test_faster_min_end_pulls_max_down(self):
        # min end settles faster than max end: max moves to the refinement point
        oracle = TableOracle({0.1: 20, 0.4: 40})
        points = [k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=2)]
        # First point (0.4 - 0.1) / 2 = 0.15 becomes max; second is (0.15 - 0.1) / 2
        assert points == [pytest.approx(0.15), pytest.approx(0.025)]

    def test_otherwise_min_moves(self):
        oracle = TableOracle({0.1: 40, 0.4: 20})
        points = [k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=2)]
        # 0.15 becomes min; second point is (0.4 - 0.15) / 2
        assert points == [pytest.approx(0.15), pytest.approx(0.125)]

    def test_non_settling_min_end_compares_as_zero_ticks(self):
        # 0.1 does not settle, so it beats 0.4 and the max end moves first
        oracle = TableOracle({0.4: 30})
        points = [k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=2)]
        assert oracle.calls[:2] == [0.1, 0.4]
        assert points == [pytest.approx(0.15), pytest.approx(0.025)]

    def test_non_settling_max_end_moves_min(self):
        # 0.4 does not settle, so it beats 0.1 and the min end moves
        oracle = TableOracle({0.1: 500})
        points = [k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=2)]
        assert points == [pytest.approx(0.15), pytest.approx(0.125)]

    def test_non_settling_slowest_option(self):
        oracle = TableOracle({0.4: 30})
        points = [
            k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=2, non_settling_slowest=True)
        ]
        assert points == [pytest.approx(0.15), pytest.approx(0.125)]

        oracle = TableOracle({0.1: 500})
        points = [
            k_d for _, k_d in refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=2, non_settling_slowest=True)
        ]
        assert points == [pytest.approx(0.15), pytest.approx(0.025)]

    def test_yields_settle_count_of_each_point(self):
        oracle = TableOracle({0.15: 33})
        results = list(refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=1))
        assert results == [(33, pytest.approx(0.15))]

    def test_three_runs_per_pass(self):
        oracle = TableOracle({})
        list(refine_k_d(0.01, 0.01, 0.1, 0.4, oracle, iterations=10))
        assert len(oracle.calls) == 30


class TestGainSweep:
    def small_sweep(self, **overrides):
        params = dict(kp_start=0.001, kp_stop=0.0015, kp_step=1e-4, bisection_iterations=3, refine_iterations=3)
        params.update(overrides)
        return SweepParams(**params)

    def test_history_strictly_improves(self):
        sweep = GainSweep(self.small_sweep(), runner=KpOracle())
        best = sweep.run()

        ticks = [r.ticks for r in best.history]
        assert ticks, "Stub oracle always settles for positive k_d"
        assert all(b < a for a, b in zip(ticks, ticks[1:]))
        assert best.best == best.history[-1]

    def test_visits_every_kp(self):
        sweep = GainSweep(self.small_sweep(), runner=KpOracle())
        sweep.run()
        assert sweep.steps_done == len(list(kp_values(0.001, 0.0015, 1e-4)))

    def test_ki_is_held_fixed(self):
        sweep = GainSweep(self.small_sweep(ki=0.02), runner=KpOracle())
        best = sweep.run()
        assert all(r.k_i == 0.02 for r in best.history)

    def test_improvements_reported_as_found(self):
        reported = []
        sweep = GainSweep(self.small_sweep(), runner=KpOracle(), best=BestResult(on_improvement=reported.append))
        sweep.run()
        assert reported == sweep.best.history

    def test_invalid_sweep_is_rejected(self):
        with pytest.raises(ValueError):
            GainSweep(self.small_sweep(kp_step=0), runner=KpOracle())

    def test_progress_lines(self, capsys):
        sweep = GainSweep(self.small_sweep(), runner=KpOracle(), verbose=True, progress_interval=2)
        sweep.run()
        assert "[GainSweep]" in capsys.readouterr().out

    def test_comparison_switch_reaches_refinement(self):
        # Settles only for k_d >= 0.3: brackets come out as (0.2, 0.5)
        oracle = ThresholdOracle(0.3)

        default = [k_d for _, k_d in kd_candidates(0.01, oracle, self.small_sweep(refine_iterations=2))]
        slowest = [
            k_d
            for _, k_d in kd_candidates(
                0.01, oracle, self.small_sweep(refine_iterations=2, non_settling_slowest=True)
            )
        ]

        assert default == [pytest.approx(0.15), pytest.approx(-0.025)]
        assert slowest == [pytest.approx(0.15), pytest.approx(0.175)]

    def test_evaluate_kp_keeps_only_settling_points(self):
        candidates = evaluate_kp(0.001, KpOracle(), self.small_sweep())
        assert candidates
        assert all(ticks is not None for ticks, _ in candidates)


class TestGainSweepWithSimulation:
    """Sequential and process-parallel sweeps over real simulations."""

    def sweep_params(self, workers):
        return SweepParams(
            kp_start=0.0124,
            kp_stop=0.01243,
            kp_step=1e-5,
            ki=0.0,
            kd_min_bracket=(0.0, 0.2),
            kd_max_bracket=(0.1, 0.5),
            bisection_iterations=4,
            refine_iterations=4,
            workers=workers,
        )

    def test_parallel_matches_sequential(self):
        runner = SimulationRunner(runner=RunnerParams(max_ticks=400))

        sequential = GainSweep(self.sweep_params(1), runner=runner).run()
        parallel = GainSweep(self.sweep_params(2), runner=runner).run()

        assert parallel.history == sequential.history

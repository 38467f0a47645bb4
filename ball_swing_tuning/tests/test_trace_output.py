"""
Tests for trace collection, HDF5 export and trajectory plotting.
"""

import numpy as np

from ball_swing_tuning.config import RunnerParams
from ball_swing_tuning.simulators import SimulationRunner, TraceCollector, load_trace
from ball_swing_tuning.utils import plot_trace


def traced_run(max_ticks=50):
    collector = TraceCollector()
    runner = SimulationRunner(runner=RunnerParams(max_ticks=max_ticks))
    result = runner.run(0.0124414999999855, 0.0, 0.12500250000000002, collector=collector)
    return collector, result


class TestTraceCollector:
    def test_records_one_row_per_tick(self):
        collector = TraceCollector()
        SimulationRunner(runner=RunnerParams(max_ticks=20)).run(0.01, 0.0, 0.1, collector=collector)

        arrays = collector.to_arrays()
        assert len(collector) == 20
        assert arrays["tick"].tolist() == list(range(20))
        assert all(len(values) == 20 for values in arrays.values())
        assert collector.settled_tick is None

    def test_hdf5_export(self, tmp_path):
        collector, result = traced_run(max_ticks=30)
        path = collector.save_to_hdf5(tmp_path)

        trace = load_trace(path)
        assert trace["settled_tick"] == result
        np.testing.assert_array_equal(trace["position"], np.array(collector.data["position"]))
        np.testing.assert_array_equal(trace["angle"], np.array(collector.data["angle"]))


class TestPlotTrace:
    def test_saves_figure(self, tmp_path):
        collector, result = traced_run()
        path = plot_trace(collector.to_arrays(), folder=str(tmp_path), settled_tick=result)
        assert path == tmp_path / "trajectory.png"
        assert path.exists()

    def test_empty_trace_is_skipped(self, tmp_path):
        path = plot_trace(TraceCollector().to_arrays(), folder=str(tmp_path))
        assert path is None
        assert not (tmp_path / "trajectory.png").exists()

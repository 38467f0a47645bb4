"""
Single-run trace scenario.

Runs one simulation with the gains from ControlParams (KP/KI/KD), prints the
per-tick state and stores the trace, the configuration and a trajectory plot
in a timestamped results directory.
"""

from ..simulators.data_collector import TraceCollector
from ..utils.plot_utils import plot_trace
from .base_scenario import BaseScenario


class TraceScenario(BaseScenario):
    """
    Trace a single closed-loop run.

    Features:
    - Per-tick console output
    - HDF5 trace export
    - Trajectory plot (position, speed, angle, correction)
    """

    def __init__(self, params=None, verbose: bool = True, show_plot: bool = False, **kwargs):
        super().__init__(params, **kwargs)
        self.verbose = verbose
        self.show_plot = show_plot
        self.collector = TraceCollector()
        self.result = None

    @property
    def scenario_name(self) -> str:
        return "Trace"

    @property
    def scenario_description(self) -> str:
        return "Single simulation run with per-tick trace"

    @property
    def results_base_dir(self) -> str:
        return "results_trace"

    def print_simulation_info(self):
        super().print_simulation_info()
        control = self.params.control
        print(f"   Controller: Kp={control.kp}, Ki={control.ki}, Kd={control.kd}")
        print(f"   dt={control.dt}, integral_limit={control.integral_limit:.4f}")

    def execute(self):
        self.setup_output_directory()
        print(f"📁 Log directory: {self.run_dir}")
        self.save_configuration()

        control = self.params.control
        print(f"\n▶️  Running simulation ({self.params.runner.max_ticks} ticks max)...")
        print("=" * 70)

        self.result = self.runner.run(
            control.kp,
            control.ki,
            control.kd,
            collector=self.collector,
            verbose=self.verbose,
        )

        print("=" * 70)
        if self.result is None:
            print(f"⚠️  Ball did not settle within {self.params.runner.max_ticks} ticks")
        else:
            print(f"✅ Ball settled at tick {self.result}")

        print("\n💾 Saving data...")
        self.collector.save_to_hdf5(self.run_dir)

        print("\n📊 Generating trajectory plot...")
        plot_trace(
            self.collector.to_arrays(),
            folder=str(self.run_dir),
            title=f"Kp={control.kp}, Ki={control.ki}, Kd={control.kd}",
            settled_tick=self.result,
            show_plot=self.show_plot,
        )

        data = self.collector.data
        if data["tick"]:
            print("\n📊 Final state:")
            print(f"   Position: {data['position'][-1]:.6f} (target: {control.target_position})")
            print(f"   Speed: {data['speed'][-1]:.6f}")
            print(f"   Angle: {data['angle'][-1]:.6f} rad")

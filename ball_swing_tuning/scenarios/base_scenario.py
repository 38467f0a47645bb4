"""
Base scenario class for all tuning scenarios.

This module provides the abstract base class that defines the common interface
and shared functionality for all scenarios.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.parameters import TuningParameters
from ..simulators.pid_controller import ControllerFactory, create_pid_controller
from ..simulators.simulation_runner import SimulationRunner


class BaseScenario(ABC):
    """
    Abstract base class for all scenarios.

    This class defines the common interface and provides shared functionality
    for scenario setup, execution, and output handling.
    """

    def __init__(
        self,
        params: Optional[TuningParameters] = None,
        controller_factory: ControllerFactory = create_pid_controller,
    ):
        """
        Initialize scenario with parameters.

        Args:
            params: Tuning parameters. If None, loads from environment.
            controller_factory: Factory for the per-run controller
        """
        self.params = params if params is not None else TuningParameters.from_env()
        self.runner = SimulationRunner.from_parameters(self.params, controller_factory)
        self.run_dir: Optional[Path] = None

    @property
    @abstractmethod
    def scenario_name(self) -> str:
        """Return the name of this scenario (e.g., 'Sweep', 'Trace')."""
        pass

    @property
    @abstractmethod
    def scenario_description(self) -> str:
        """Return a brief description of this scenario."""
        pass

    @property
    def show_banner(self) -> bool:
        """Whether run() prints the header, info and footer lines."""
        return True

    @property
    def results_base_dir(self) -> str:
        """Return the base directory name for results."""
        return "results"

    def setup_output_directory(self, suffix: str = "") -> Path:
        """
        Create output directory for this run.

        Args:
            suffix: Optional suffix to append to timestamp

        Returns:
            Path to created output directory
        """
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        dir_name = f"{timestamp}{suffix}" if suffix else timestamp
        self.run_dir = Path(self.results_base_dir) / dir_name
        self.run_dir.mkdir(parents=True, exist_ok=True)
        return self.run_dir

    def save_configuration(self):
        """Save configuration to JSON file."""
        if self.run_dir is None:
            raise RuntimeError("Output directory not set. Call setup_output_directory() first.")

        config_path = self.params.save_to_json(self.run_dir, self.scenario_name)
        print(f"💾 Configuration saved: {config_path}")

    def print_header(self):
        """Print scenario header information."""
        print("=" * 70)
        print(f"{self.scenario_name} - Ball-on-Swing PID Tuning")
        print(f"{self.scenario_description}")
        print("=" * 70)

    def print_simulation_info(self):
        """Print simulation configuration information."""
        swing = self.params.swing
        ball = self.params.ball
        print(f"\n🌍 Simulation Info:")
        print(f"   Swing: length={swing.length}, max_angle={swing.max_angle:.4f}rad, max_delta={swing.max_delta:.4f}rad")
        print(f"   Ball: x0={ball.initial_position}, size={ball.size}, mass={ball.mass}")
        print(f"   Budget: {self.params.runner.max_ticks} ticks, sigma={self.params.runner.settle_sigma}")

    @abstractmethod
    def execute(self):
        """Run the scenario body."""
        pass

    def run(self):
        """
        Execute the complete scenario.

        This is the main entry point that orchestrates all steps.
        """
        if self.show_banner:
            self.print_header()
            self.print_simulation_info()

        self.execute()

        if self.show_banner:
            print("\n" + "=" * 70)
            print(f"{self.scenario_name} Finished")
            print("=" * 70)

"""
Simulators module - 制御器・実行器・データ収集器
"""

from .data_collector import TraceCollector, load_trace
from .pid_controller import BaseController, PIDController, create_pid_controller
from .simulation_runner import SimulationRunner, run_simulation

__all__ = [
    "BaseController",
    "PIDController",
    "SimulationRunner",
    "TraceCollector",
    "create_pid_controller",
    "load_trace",
    "run_simulation",
]

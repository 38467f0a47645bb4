"""
Ball-on-Swing PID Tuning - Unified Entry Point

Available Scenarios:
    sweep  - Full proportional-gain sweep with derivative-gain bisection.
             Prints every improving gain triple as it is found.

    trace  - Single simulation run with the gains from KP/KI/KD.
             Prints the per-tick state and saves HDF5 data and a plot.

Usage:
    python -m ball_swing_tuning.main [scenario]

Examples:
    python -m ball_swing_tuning.main          # Default (sweep)
    python -m ball_swing_tuning.main s        # Sweep (shortcut)
    python -m ball_swing_tuning.main t        # Trace (shortcut)

Configuration:
    Parameters are read from environment variables and an optional .env
    file (see .env.example).
"""

import argparse
import sys
from typing import Optional

from .config.parameters import TuningParameters
from .scenarios import SweepScenario, TraceScenario


def create_parser():
    """Create argument parser with scenario choices."""
    parser = argparse.ArgumentParser(
        prog="ball-swing-tuning",
        description="Ball-on-Swing PID Tuning - gain search and single-run tracing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ball-swing-tuning            # Default (sweep)
  ball-swing-tuning s          # Sweep (shortcut)
  ball-swing-tuning t          # Trace (shortcut)

Scenario Descriptions:
  sweep  - k_p sweep with k_d bracketing and refinement
  trace  - single run with KP/KI/KD from the environment
        """,
    )

    parser.add_argument(
        "scenario",
        nargs="?",
        default="s",
        choices=["s", "sweep", "t", "trace"],
        help="Scenario to run (default: s=sweep). Shortcuts: s=sweep, t=trace",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print sweep progress lines",
    )

    return parser


def get_scenario(scenario_name: str, params: Optional[TuningParameters] = None, verbose: bool = False):
    """
    Get scenario instance by name.

    Args:
        scenario_name: Name of the scenario (accepts shortcuts: s, t)
        params: Tuning parameters (if None, loads from environment)
        verbose: Extra console output for the sweep

    Returns:
        Scenario instance

    Raises:
        ValueError: If scenario name is invalid
    """
    shortcuts = {
        "s": "sweep",
        "t": "trace",
    }

    resolved_name = shortcuts.get(scenario_name.lower(), scenario_name.lower())

    if resolved_name == "sweep":
        return SweepScenario(params, verbose=verbose)
    if resolved_name == "trace":
        return TraceScenario(params)

    raise ValueError(f"Invalid scenario: {scenario_name}. Available scenarios: sweep, trace (shortcuts: s, t)")


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        params = TuningParameters.from_env()
        scenario = get_scenario(args.scenario, params, verbose=args.verbose)
        scenario.run()
    except Exception as e:
        print(f"\n❌ Run failed: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()

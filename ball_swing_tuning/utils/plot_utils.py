"""
Trajectory plots for traced simulation runs.
"""

import math
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np


def plot_trace(
    trace: Dict[str, np.ndarray],
    folder: str = "figures",
    title: str = "",
    settled_tick: Optional[int] = None,
    dpi: int = 150,
    format: str = "png",
    show_plot: bool = False,
    save_plot: bool = True,
) -> Optional[Path]:
    """
    Plot position, speed, swing angle and controller correction over ticks.

    Args:
        trace: Arrays from TraceCollector.to_arrays() or load_trace()
        folder: Output folder
        title: Figure title
        settled_tick: Tick at which the ball settled (marked on every axis)
        dpi: Image resolution
        format: Image format (png, pdf, svg)
        show_plot: Whether to display the figure
        save_plot: Whether to save the figure

    Returns:
        Path of the saved figure, or None if nothing was saved
    """
    if len(trace["tick"]) == 0:
        print("⚠️  Empty trace, skipping plot")
        return None

    ticks = trace["tick"]
    fig, axes = plt.subplots(4, 1, figsize=(12, 12), sharex=True)
    fig.suptitle(title if title else "Ball-on-Swing Trajectory")

    panels = [
        (trace["position"], "Position", "Ball position"),
        (trace["speed"], "Speed", "Ball speed (per-tick average)"),
        (np.degrees(trace["angle"]), "Angle [deg]", "Swing angle"),
        (trace["correction"], "Correction [rad]", "Controller correction (before tilt limits)"),
    ]

    for ax, (values, ylabel, panel_title) in zip(axes, panels):
        ax.plot(ticks, values, linewidth=2)
        ax.axhline(y=0, color="k", linestyle=":", linewidth=1, alpha=0.5)
        if settled_tick is not None:
            ax.axvline(x=settled_tick, color="r", linestyle="--", linewidth=1, alpha=0.7, label=f"Settled (tick {settled_tick})")
            ax.legend()
        ax.set_ylabel(ylabel)
        ax.set_title(panel_title)
        ax.grid(True, alpha=0.3)

    max_angle_deg = math.degrees(np.max(np.abs(trace["angle"])))
    axes[2].set_ylim(-max(max_angle_deg, 1.0) * 1.1, max(max_angle_deg, 1.0) * 1.1)
    axes[-1].set_xlabel("Tick")

    plt.tight_layout()

    output_path = None
    if save_plot:
        output_dir = Path(folder)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / f"trajectory.{format}"
        plt.savefig(output_path, dpi=dpi, format=format, bbox_inches="tight")
        print(f"   📊 Trajectory plot saved: {output_path}")

    if show_plot:
        plt.show()
    else:
        plt.close(fig)

    return output_path

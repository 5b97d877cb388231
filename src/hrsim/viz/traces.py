"""
Plots of neuron traces and negotiated timing.

- Membrane potential over time, with optional spike markers
- Phase portrait in the (x, z) plane (fast vs slow variable)
- Negotiated dt and sub-step count across host periods
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from hrsim.core.negotiator import NegotiationResult


def plot_membrane_potential(
    trace: np.ndarray,
    dt: float,
    title: str = "Membrane Potential",
    spike_times: np.ndarray | None = None,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
    color: str = "#1f4e79",
    millivolts: bool = False,
) -> tuple[Figure, Axes]:
    """
    Plot x against model time.

    Args:
        trace: Membrane potential x [n], or state trace [n, 3]
        dt: Time between samples
        title: Plot title
        spike_times: Optional spike times to mark
        ax: Existing axes (creates new if None)
        color: Line color
        millivolts: Scale x by 1000, as the mV output port does

    Returns:
        (fig, ax) tuple
    """
    trace = np.asarray(trace)
    x = trace[:, 0] if trace.ndim == 2 else trace
    scale = 1000.0 if millivolts else 1.0

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    t = np.arange(len(x)) * dt
    ax.plot(t, x * scale, color=color, linewidth=0.8)

    if spike_times is not None and len(spike_times) > 0:
        idx = np.clip(np.round(np.asarray(spike_times) / dt).astype(int), 0, len(x) - 1)
        ax.scatter(spike_times, x[idx] * scale, color="red", s=12, zorder=3, label="Spikes")
        ax.legend(loc="upper right")

    ax.set_title(title)
    ax.set_xlabel("t (model units)")
    ax.set_ylabel("x (mV)" if millivolts else "x")
    return fig, ax


def plot_phase_portrait(
    trace: np.ndarray,
    title: str = "Phase Portrait (x, z)",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (6, 6),
    color: str = "#2a7f62",
) -> tuple[Figure, Axes]:
    """
    Plot the trajectory in the (x, z) plane.

    Args:
        trace: State trace [n, 3]
        title: Plot title
        ax: Existing axes (creates new if None)

    Returns:
        (fig, ax) tuple
    """
    trace = np.asarray(trace)
    if trace.ndim != 2 or trace.shape[1] != 3:
        raise ValueError(f"Expected a state trace of shape [n, 3], got {trace.shape}")

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.plot(trace[:, 0], trace[:, 2], color=color, linewidth=0.6)
    ax.scatter([trace[0, 0]], [trace[0, 2]], color="green", s=40, zorder=3, label="Start")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.legend(loc="upper right")
    return fig, ax


def plot_negotiation(
    periods: Sequence[float],
    results: Sequence["NegotiationResult"],
    title: str = "Negotiated Timing",
    figsize: tuple[float, float] = (10, 4),
) -> Figure:
    """
    Plot dt and sub-step count chosen for each host period.

    Args:
        periods: Host periods, in seconds
        results: Negotiation result for each period
    """
    periods = np.asarray(periods, dtype=np.float64)
    dts = np.array([r.dt for r in results])
    steps = np.array([r.sub_step_count for r in results])

    fig, (ax_dt, ax_steps) = plt.subplots(1, 2, figsize=figsize)

    ax_dt.step(periods * 1000.0, dts, where="mid", color="#1f4e79")
    ax_dt.set_xscale("log")
    ax_dt.set_yscale("log")
    ax_dt.set_xlabel("host period (ms)")
    ax_dt.set_ylabel("dt")
    ax_dt.set_title("Step size")

    ax_steps.step(periods * 1000.0, steps, where="mid", color="#a23b3b")
    ax_steps.set_xscale("log")
    ax_steps.set_xlabel("host period (ms)")
    ax_steps.set_ylabel("sub-steps per tick")
    ax_steps.set_title("Sub-step count")

    fig.suptitle(title)
    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)

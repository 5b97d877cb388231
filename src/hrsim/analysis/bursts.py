"""
Spike and burst detection on recorded membrane-potential traces.

Used offline to characterize a parameter set: how long one burst cycle
lasts in model time, and from that how many integration points a burst
needs at each candidate step size (see StepSizeTable.from_burst_period).

Times are in model time units: sample index × dt.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np
from scipy.signal import find_peaks


@dataclass
class Burst:
    """A run of spikes separated by short inter-spike intervals."""

    start: float  # Time of the first spike
    end: float    # Time of the last spike
    n_spikes: int

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class BurstStatistics:
    """Summary of the bursting activity in a trace."""

    spike_times: np.ndarray
    bursts: list[Burst]
    mean_period: float            # Mean interval between burst onsets
    mean_spikes_per_burst: float
    mean_duration: float


def _membrane_potential(trace: np.ndarray) -> np.ndarray:
    """Accept either an x trace [n] or a full state trace [n, 3]."""
    trace = np.asarray(trace, dtype=np.float64)
    if trace.ndim == 2:
        return trace[:, 0]
    if trace.ndim != 1:
        raise ValueError(f"Expected a [n] or [n, 3] trace, got shape {trace.shape}")
    return trace


def detect_spikes(trace: np.ndarray, dt: float, threshold: float = 1.0) -> np.ndarray:
    """
    Find spike peak times.

    Args:
        trace: Membrane potential x [n], or state trace [n, 3]
        dt: Time between samples
        threshold: Minimum peak height of x to count as a spike

    Returns:
        Spike times, ascending
    """
    x = _membrane_potential(trace)
    peaks, _ = find_peaks(x, height=threshold)
    return peaks * dt


def group_bursts(spike_times: np.ndarray, max_isi: float | None = None) -> list[Burst]:
    """
    Group spikes into bursts.

    A new burst starts whenever the gap to the previous spike exceeds
    max_isi. With max_isi=None the split point is the geometric mean of the
    shortest and longest inter-spike intervals, which separates intra-burst
    from inter-burst gaps when both are present.

    Args:
        spike_times: Ascending spike times
        max_isi: Longest gap still inside one burst

    Returns:
        Bursts in time order
    """
    spike_times = np.asarray(spike_times, dtype=np.float64)
    if spike_times.size == 0:
        return []

    isi = np.diff(spike_times)
    if max_isi is None:
        if isi.size == 0:
            max_isi = np.inf
        else:
            max_isi = float(np.sqrt(isi.min() * isi.max()))

    breaks = np.flatnonzero(isi > max_isi) + 1
    groups = np.split(spike_times, breaks)
    return [Burst(start=float(g[0]), end=float(g[-1]), n_spikes=len(g)) for g in groups]


def burst_statistics(
    trace: np.ndarray,
    dt: float,
    threshold: float = 1.0,
    max_isi: float | None = None,
    discard: int = 1,
) -> BurstStatistics:
    """
    Detect bursts in a trace and summarize them.

    Args:
        trace: Membrane potential x [n], or state trace [n, 3]
        dt: Time between samples
        threshold: Spike height threshold
        max_isi: Longest intra-burst gap (None: automatic)
        discard: Number of leading bursts to drop (initial transient and
                 a possibly truncated first burst)

    Raises:
        ValueError: if fewer than two bursts remain after discarding
    """
    spike_times = detect_spikes(trace, dt, threshold)
    bursts = group_bursts(spike_times, max_isi)[discard:]
    if len(bursts) < 2:
        raise ValueError(
            f"Need at least two bursts to measure a period, found {len(bursts)}; "
            "record a longer trace"
        )

    onsets = np.array([b.start for b in bursts])
    return BurstStatistics(
        spike_times=spike_times,
        bursts=bursts,
        mean_period=float(np.diff(onsets).mean()),
        mean_spikes_per_burst=float(np.mean([b.n_spikes for b in bursts])),
        mean_duration=float(np.mean([b.duration for b in bursts])),
    )


def measure_burst_period(
    trace: np.ndarray,
    dt: float,
    threshold: float = 1.0,
    max_isi: float | None = None,
    discard: int = 1,
) -> float:
    """Convenience function: mean burst onset interval of a trace."""
    return burst_statistics(trace, dt, threshold, max_isi, discard).mean_period

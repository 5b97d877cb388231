#!/usr/bin/env python3
"""
Demo: Step-Size Negotiation Across Host Periods

Shows how the neuron fits an integer number of integrator steps into each
host tick:

1. Record a trajectory offline and measure the burst period
2. Build a calibrated step-size table from it (points = period / dt)
3. Sweep host periods from 0.1 ms to 10 ms and negotiate (dt, sub-steps)
   with both the default and the calibrated table
4. Plot the chosen timing

Output: output/demo_negotiation/timing.png, output/demo_negotiation/trace.png
"""

import logging
import os

import numpy as np
import matplotlib.pyplot as plt

from hrsim.core import (
    DEFAULT_STEP_TABLE,
    ModelParameters,
    SimulationState,
    StepSizeNegotiator,
    StepSizeTable,
    TimingState,
    simulate,
)
from hrsim.analysis import burst_statistics
from hrsim.viz import plot_membrane_potential, plot_negotiation, save_figure


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("  STEP-SIZE NEGOTIATION")
    print("=" * 60)

    # Measure the burst cycle
    dt = 0.01
    n_steps = 200_000
    print(f"\n1. Recording {n_steps} steps at dt={dt}...")
    trace = simulate(SimulationState().as_tuple(), ModelParameters(), dt, n_steps)
    stats = burst_statistics(trace, dt, max_isi=50.0)
    print(f"   Bursts found: {len(stats.bursts)}")
    print(f"   Mean burst period: {stats.mean_period:.1f} model time units")
    print(f"   Mean spikes per burst: {stats.mean_spikes_per_burst:.1f}")

    # Calibrated table on the default step grid
    print("\n2. Building calibrated table...")
    calibrated = StepSizeTable.from_burst_period(stats.mean_period, DEFAULT_STEP_TABLE.step_sizes)
    for default_entry, entry in zip(DEFAULT_STEP_TABLE, calibrated):
        print(f"   dt={entry.step_size:<7} default={default_entry.points:>10.1f}"
              f"  calibrated={entry.points:>10.1f}")

    # Sweep host periods
    print("\n3. Sweeping host periods...")
    periods = np.logspace(-4, -2, 60)
    default_results = []
    calibrated_results = []
    for table, results in ((DEFAULT_STEP_TABLE, default_results), (calibrated, calibrated_results)):
        negotiator = StepSizeNegotiator(table=table)
        for period in periods:
            timing = TimingState(period_seconds=float(period), burst_duration=1.0)
            results.append(negotiator.negotiate(timing))

    for period, result in list(zip(periods, default_results))[::12]:
        branch = "accepted" if result.accepted else "fallback"
        print(f"   period={period * 1000:7.3f} ms  dt={result.dt:<7} "
              f"sub-steps={result.sub_step_count:<4} ({branch})")

    # Plot
    print("\n4. Plotting...")
    os.makedirs("output/demo_negotiation", exist_ok=True)

    fig = plot_negotiation(periods, default_results, title="Default table")
    save_figure(fig, "output/demo_negotiation/timing.png")
    plt.close(fig)

    fig = plot_negotiation(periods, calibrated_results, title="Calibrated table")
    save_figure(fig, "output/demo_negotiation/timing_calibrated.png")
    plt.close(fig)

    fig, _ = plot_membrane_potential(trace, dt, spike_times=stats.spike_times)
    save_figure(fig, "output/demo_negotiation/trace.png")
    plt.close(fig)
    print("   Saved: output/demo_negotiation/")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Demo: A Hindmarsh–Rose Neuron on a 1 kHz Host

Drives one neuron the way a real-time host would:

1. Push a configuration document (parameters + burst duration)
2. Tick at a fixed host period, reading the mV output port each tick
3. Halfway through, the host switches to 2 kHz; the neuron re-negotiates
   its step size and sub-step count on the spot
4. Plot the output signal as the host saw it

Output: output/demo_real_time/membrane.png
"""

import logging
import os

import numpy as np
import matplotlib.pyplot as plt

from hrsim.host import create_neuron, apply_config, OUTPUTS
from hrsim.viz import plot_membrane_potential


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("  REAL-TIME HINDMARSH–ROSE NEURON")
    print("=" * 60)

    neuron = create_neuron(instance_id=1)

    print("\n1. Configuring neuron...")
    result = apply_config(neuron, {"e": 3.25, "mu": 0.006, "burst_duration": 1.0})
    print(f"   dt = {result.dt}, sub-steps per tick = {result.sub_step_count}")

    n_ticks = 4000
    periods = [0.001] * (n_ticks // 2) + [0.0005] * (n_ticks // 2)
    signal = np.empty(n_ticks)

    print(f"\n2. Ticking {n_ticks} times (1 kHz, then 2 kHz)...")
    for n, period in enumerate(periods):
        if n == n_ticks // 2:
            print(f"   Host period -> {period * 1000:.1f} ms")
        neuron.tick(period)
        signal[n] = neuron.get_output(OUTPUTS[1])
        if n == n_ticks // 2:
            timing = neuron.timing
            print(f"   dt = {timing.dt}, sub-steps per tick = {timing.sub_step_count}")

    print(f"\n   Ticks run: {neuron.current_tick}")
    print(f"   Integrator steps: {neuron.total_sub_steps}")
    print(f"   Output range: [{signal.min():.1f}, {signal.max():.1f}] mV")

    print("\n3. Plotting...")
    fig, ax = plot_membrane_potential(
        signal / 1000.0,
        dt=1.0,
        title="Membrane potential as read by the host",
        millivolts=True,
    )
    ax.set_xlabel("host tick")
    ax.axvline(n_ticks // 2, color="orange", linestyle="--", label="period change")
    ax.legend(loc="upper right")

    os.makedirs("output/demo_real_time", exist_ok=True)
    fig.savefig("output/demo_real_time/membrane.png", dpi=150, bbox_inches="tight")
    plt.close()
    print("   Saved: output/demo_real_time/membrane.png")


if __name__ == "__main__":
    main()

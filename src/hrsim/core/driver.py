"""
Simulation driver: one Hindmarsh–Rose neuron on a real-time host.

State machine:
- reconfigure: new parameters / timing → re-run the negotiator
- period change: host period differs from the last one seen → adopt it,
  re-run the negotiator before integrating
- tick: run sub_step_count integrator applications with the current dt,
  the frozen input and the current parameters

The host's period on each tick is authoritative; a configured period is
only advisory until the host supplies one.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import sys

import numpy as np

from hrsim.core.state import (
    MAX_SUB_STEPS,
    ModelParameters,
    SimulationState,
    TimingState,
)
from hrsim.core.integrator import integrate
from hrsim.core.negotiator import NegotiationResult, StepSizeNegotiator

logger = logging.getLogger(__name__)

INPUT_I_SYN = "i_syn"
OUTPUT_MEMBRANE_V = "Membrane potential (V)"
OUTPUT_MEMBRANE_MV = "Membrane potential (mV)"


@dataclass
class HindmarshRoseNeuron:
    """
    A single neuron advanced once per host tick.

    Instances share nothing mutable, so separate neurons can be driven from
    separate threads. A single instance expects serialized calls.
    """

    state: SimulationState = field(default_factory=SimulationState)
    params: ModelParameters = field(default_factory=ModelParameters)
    timing: TimingState = field(default_factory=TimingState)
    negotiator: StepSizeNegotiator = field(default_factory=StepSizeNegotiator)
    i_syn: float = 0.0  # Frozen across all sub-steps of a tick

    current_tick: int = field(default=0, init=False)
    total_sub_steps: int = field(default=0, init=False)
    last_negotiation: NegotiationResult | None = field(default=None, init=False)
    # Last (x, y, z) applied through configure_state
    _configured_state: tuple[float, float, float] | None = field(default=None, init=False)

    def __post_init__(self):
        self._configured_state = self.state.as_tuple()
        self.renegotiate()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def renegotiate(self) -> NegotiationResult:
        """Refresh dt and sub_step_count from the current timing."""
        self.last_negotiation = self.negotiator.apply(self.timing)
        return self.last_negotiation

    def reconfigure(
        self,
        *,
        e: float | None = None,
        mu: float | None = None,
        s: float | None = None,
        vh: float | None = None,
        burst_duration: float | None = None,
        period_seconds: float | None = None,
        time_increment: float | None = None,
    ) -> NegotiationResult:
        """
        Update parameters and timing, then re-run the negotiator.

        Arguments left as None keep their current values. time_increment
        overrides dt before negotiation; negative values clamp to zero and a
        zero override leaves dt as it was.
        """
        if e is not None:
            self.params.e = e
        if mu is not None:
            self.params.mu = mu
        if s is not None:
            self.params.s = s
        if vh is not None:
            self.params.vh = vh
        if burst_duration is not None:
            self.timing.burst_duration = burst_duration
        if period_seconds is not None:
            self.timing.period_seconds = period_seconds
        if time_increment is not None:
            dt = max(time_increment, 0.0)
            if dt > 0.0:
                self.timing.dt = dt
        return self.renegotiate()

    def configure_state(self, x: float, y: float, z: float) -> bool:
        """
        Set (x, y, z) as a group, only if it differs from the last configured triple.

        Re-sending the same configuration must not yank a running trajectory
        back to its starting point.

        Returns:
            True if the state was overwritten
        """
        triple = (x, y, z)
        if triple == self._configured_state:
            return False
        self._configured_state = triple
        self.state.assign(triple)
        return True

    def set_input(self, name: str, value: float) -> None:
        """Write a named input port. Only i_syn exists; other names are ignored."""
        if name == INPUT_I_SYN:
            self.i_syn = value

    def tick(self, period_seconds: float | None = None) -> None:
        """
        Advance the neuron by one host tick.

        Args:
            period_seconds: Host tick period. When given and different from
                            the last period seen, it replaces the configured
                            one and the negotiator runs first. None keeps the
                            configured timing.
        """
        # A NaN on either side counts as a change
        if period_seconds is not None and (
            not abs(self.timing.period_seconds - period_seconds) <= sys.float_info.epsilon
        ):
            logger.debug(
                "Host period changed %g -> %g", self.timing.period_seconds, period_seconds
            )
            self.timing.period_seconds = period_seconds
            self.renegotiate()

        steps = min(max(self.timing.sub_step_count, 1), MAX_SUB_STEPS)
        new_state = integrate(
            self.state.as_tuple(), self.params, self.i_syn, self.timing.dt, steps
        )
        self.state.assign(new_state)

        self.current_tick += 1
        self.total_sub_steps += steps

    # ------------------------------------------------------------------
    # Readout
    # ------------------------------------------------------------------

    def get_output(self, name: str) -> float:
        """Read a named output port. Unknown names read as 0.0."""
        if name in ("x", OUTPUT_MEMBRANE_V):
            return self.state.x
        if name == OUTPUT_MEMBRANE_MV:
            return self.state.x * 1000.0
        if name == "y":
            return self.state.y
        if name == "z":
            return self.state.z
        return 0.0

    def run(
        self,
        n_ticks: int,
        period_seconds: float | None = None,
        record: bool = False,
    ) -> dict:
        """
        Run n_ticks ticks back to back.

        Args:
            n_ticks: Number of ticks
            period_seconds: Host period passed to every tick (None: configured timing)
            record: Also return the state after every tick as "trace" [n_ticks, 3]

        Returns:
            Statistics dictionary
        """
        trace = np.empty((n_ticks, 3), dtype=np.float64) if record else None
        start_steps = self.total_sub_steps

        for n in range(n_ticks):
            self.tick(period_seconds)
            if trace is not None:
                trace[n] = self.state.as_tuple()

        stats = {
            "n_ticks": n_ticks,
            "current_tick": self.current_tick,
            "sub_steps": self.total_sub_steps - start_steps,
            "dt": self.timing.dt,
            "sub_step_count": self.timing.sub_step_count,
            "x": self.state.x,
            "y": self.state.y,
            "z": self.state.z,
        }
        if trace is not None:
            stats["trace"] = trace
        return stats


def create_default_neuron() -> HindmarshRoseNeuron:
    """Factory for a neuron with default state, parameters and timing."""
    return HindmarshRoseNeuron()

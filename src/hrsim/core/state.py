"""
State, parameters and timing for a single Hindmarsh–Rose neuron.

The neuron carries ONLY three kinds of data:
- SimulationState: the (x, y, z) variables advanced by the integrator
- ModelParameters: coefficients of the vector field (fixed during a step)
- TimingState: step size and sub-step count negotiated against the host period

Defaults place the model in a self-sustained bursting regime.
"""

from __future__ import annotations
from dataclasses import dataclass, astuple

# Hard cap on integrator applications per host tick
MAX_SUB_STEPS = 10_000

DEFAULT_X = -0.9013747551021072
DEFAULT_Y = -3.15948829665501
DEFAULT_Z = 3.247826955037619


@dataclass
class SimulationState:
    """The three state variables of the model."""

    x: float = DEFAULT_X  # Membrane potential
    y: float = DEFAULT_Y  # Fast recovery variable
    z: float = DEFAULT_Z  # Slow adaptation current

    def as_tuple(self) -> tuple[float, float, float]:
        """Return (x, y, z)."""
        return astuple(self)

    def assign(self, values: tuple[float, float, float]) -> None:
        """Overwrite all three variables at once."""
        self.x, self.y, self.z = values

    def copy(self) -> SimulationState:
        return SimulationState(self.x, self.y, self.z)


@dataclass
class ModelParameters:
    """
    Coefficients of the Hindmarsh–Rose vector field.

    Read-only while a step is in progress. The defaults (e=3.25, mu=0.006)
    sit in the regular bursting region of the (e, mu) plane.
    """

    e: float = 3.25    # External drive baseline
    mu: float = 0.006  # Time scale of the slow variable (small, positive)
    s: float = 4.0     # Slow-variable coupling to x
    vh: float = 1.0    # Coupling weight between fast and slow subsystems


@dataclass
class TimingState:
    """
    Step size and sub-step budget for one host tick.

    period_seconds is advisory until the host supplies its own period on a
    tick; the host value always wins.
    """

    dt: float = 0.0015              # Integration step size
    sub_step_count: int = 1         # Integrator applications per tick
    period_seconds: float = 0.001   # Host tick period
    burst_duration: float = 1.0     # Target burst window (<= 0 disables matching)

    @property
    def frequency(self) -> float:
        """Host tick frequency, or 0.0 when the period is not usable."""
        if self.period_seconds <= 0.0:
            return 0.0
        return 1.0 / self.period_seconds

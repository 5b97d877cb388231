"""
Core neuron engine.

This layer knows NOTHING about hosts, JSON documents or plotting.
It only knows:
- The (x, y, z) state, model parameters and tick timing
- The Hindmarsh–Rose vector field
- A fixed-coefficient six-stage Runge–Kutta step
- How to pick a step size and sub-step count for a host tick period
"""

from hrsim.core.state import (
    MAX_SUB_STEPS,
    SimulationState,
    ModelParameters,
    TimingState,
)
from hrsim.core.vector_field import hindmarsh_rose, derivative
from hrsim.core.integrator import rk_step, integrate, simulate
from hrsim.core.step_table import StepSizeEntry, StepSizeTable, DEFAULT_STEP_TABLE
from hrsim.core.negotiator import (
    NegotiationResult,
    StepSizeNegotiator,
    TableMatch,
    search_table,
)
from hrsim.core.driver import HindmarshRoseNeuron, create_default_neuron

__all__ = [
    "MAX_SUB_STEPS",
    "SimulationState",
    "ModelParameters",
    "TimingState",
    "hindmarsh_rose",
    "derivative",
    "rk_step",
    "integrate",
    "simulate",
    "StepSizeEntry",
    "StepSizeTable",
    "DEFAULT_STEP_TABLE",
    "NegotiationResult",
    "StepSizeNegotiator",
    "TableMatch",
    "search_table",
    "HindmarshRoseNeuron",
    "create_default_neuron",
]

"""
Hindmarsh–Rose vector field.

    dx/dt = y + 3x² − x³ − vh·z + e − i_syn
    dy/dt = 1 − 5x² − y
    dz/dt = mu · (−vh·z + s·(x + 1.6))

The evaluator is pure: it can be called at any candidate point, which is
what the Runge–Kutta stages need. The model may diverge for pathological
parameters; that is a property of the equations and is not checked here.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hrsim.core.state import ModelParameters

Vector3 = tuple[float, float, float]


def hindmarsh_rose(
    x: float,
    y: float,
    z: float,
    params: "ModelParameters",
    i_syn: float = 0.0,
) -> Vector3:
    """
    Evaluate the instantaneous derivative at (x, y, z).

    Args:
        x, y, z: Candidate state
        params: Model coefficients
        i_syn: External (synaptic) input, held fixed over a step

    Returns:
        (dx/dt, dy/dt, dz/dt)
    """
    x2 = x * x
    dx = y + 3.0 * x2 - x2 * x - params.vh * z + params.e - i_syn
    dy = 1.0 - 5.0 * x2 - y
    dz = params.mu * (-params.vh * z + params.s * (x + 1.6))
    return dx, dy, dz


def derivative(state: Vector3, params: "ModelParameters", i_syn: float = 0.0) -> Vector3:
    """Tuple-in, tuple-out form of hindmarsh_rose."""
    return hindmarsh_rose(state[0], state[1], state[2], params, i_syn)

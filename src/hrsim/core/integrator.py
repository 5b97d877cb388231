"""
Fixed-coefficient explicit Runge–Kutta integrator.

Six stages, fifth-order combination only. There is no embedded lower-order
solution: every step is taken at full size and never rejected.

Butcher tableau (c is implied by the row sums of A):

    0     |
    1/5   | 1/5
    3/10  | 3/40     9/40
    3/5   | 3/10    -9/10   6/5
    9/10  | 3/40     27/40  -3/5     3/4
    1     | 107/162  5/2    -140/27  35/9   -70/81
    ------+----------------------------------------------
          | 8/81     0       25/63   25/108  25/81  -1/28

The coefficients are stored as exact fractions evaluated in double
precision, not as truncated decimals.

The per-step path works on plain floats and small per-step lists, with no
numpy arrays.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from hrsim.core.vector_field import hindmarsh_rose, Vector3

if TYPE_CHECKING:
    from hrsim.core.state import ModelParameters


# Stage coefficients a_ij, row i holds the weights of k_1..k_{i-1}
RK_A: tuple[tuple[float, ...], ...] = (
    (),
    (1.0 / 5.0,),
    (3.0 / 40.0, 9.0 / 40.0),
    (3.0 / 10.0, -9.0 / 10.0, 6.0 / 5.0),
    (3.0 / 40.0, 27.0 / 40.0, -3.0 / 5.0, 3.0 / 4.0),
    (107.0 / 162.0, 5.0 / 2.0, -140.0 / 27.0, 35.0 / 9.0, -70.0 / 81.0),
)

# Combination weights b_i
RK_B: tuple[float, ...] = (
    8.0 / 81.0,
    0.0,
    25.0 / 63.0,
    25.0 / 108.0,
    25.0 / 81.0,
    -1.0 / 28.0,
)

N_STAGES = len(RK_B)


def rk_step(
    state: Vector3,
    params: "ModelParameters",
    i_syn: float,
    dt: float,
) -> Vector3:
    """
    Advance (x, y, z) by exactly one step of size dt.

    Each stage evaluates the vector field at v0 + Σ a_ij·k_j, accumulated
    left to right, with k_i = dt·f(stage point). The new state is
    v0 + Σ b_i·k_i.

    Args:
        state: Current (x, y, z)
        params: Model coefficients, fixed for the whole step
        i_syn: External input, fixed for the whole step
        dt: Step size

    Returns:
        The state after one step
    """
    x0, y0, z0 = state
    kx = [0.0] * N_STAGES
    ky = [0.0] * N_STAGES
    kz = [0.0] * N_STAGES

    for i in range(N_STAGES):
        sx, sy, sz = x0, y0, z0
        for j, a in enumerate(RK_A[i]):
            sx += a * kx[j]
            sy += a * ky[j]
            sz += a * kz[j]
        dx, dy, dz = hindmarsh_rose(sx, sy, sz, params, i_syn)
        kx[i] = dt * dx
        ky[i] = dt * dy
        kz[i] = dt * dz

    incx = incy = incz = 0.0
    for i, b in enumerate(RK_B):
        if b == 0.0:
            continue
        incx += b * kx[i]
        incy += b * ky[i]
        incz += b * kz[i]

    return x0 + incx, y0 + incy, z0 + incz


def integrate(
    state: Vector3,
    params: "ModelParameters",
    i_syn: float,
    dt: float,
    n_steps: int,
) -> Vector3:
    """
    Apply rk_step n_steps times with the same dt and frozen input.

    This is the per-tick update. n_steps <= 0 returns the state unchanged.
    """
    for _ in range(n_steps):
        state = rk_step(state, params, i_syn, dt)
    return state


def simulate(
    state: Vector3,
    params: "ModelParameters",
    dt: float,
    n_steps: int,
    i_syn: float | np.ndarray = 0.0,
) -> np.ndarray:
    """
    Record a trajectory for offline analysis.

    Args:
        state: Initial (x, y, z)
        params: Model coefficients
        dt: Step size
        n_steps: Number of steps to take
        i_syn: Constant input, or an array of length n_steps giving the
               input frozen over each step

    Returns:
        Array of shape [n_steps + 1, 3]; row 0 is the initial state
    """
    inputs = np.broadcast_to(np.asarray(i_syn, dtype=np.float64), (n_steps,))

    trajectory = np.empty((n_steps + 1, 3), dtype=np.float64)
    trajectory[0] = state
    for n in range(n_steps):
        state = rk_step(state, params, float(inputs[n]), dt)
        trajectory[n + 1] = state
    return trajectory

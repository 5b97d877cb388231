"""
Step-size negotiator: fit an integer number of integrator steps into a tick.

The host imposes a fixed tick period. The neuron must run a whole number of
integration steps per tick, using a step size small enough to stay stable,
so that successive bursts line up with a requested burst duration in real
time.

Two regimes:
- burst_duration <= 0: keep dt, run round(period / dt) steps per tick
- burst_duration > 0:  search the step-size table for a dt whose points per
  burst tile the requested burst window, then run
  round(pts_burst / (burst_duration · freq)) steps per tick

TABLE SEARCH (pts_live = burst_duration · freq):
1. aux = pts_live, factor = 1
2. While aux < smallest points in the table:
     aux = pts_live · factor; factor += 1
     candidate = first entry, largest step first, with points > aux
     ratio = candidate.points / pts_live
     accept if frac(ratio) <= 0.1 · trunc(ratio)
3. If nothing was accepted, take the first entry exceeding the LAST aux
   (this depends on how many multiples were tried; kept as is)
4. If no entry exceeds aux, dt stays put and there is no pts_burst

The sub-step count is always clamped to [1, MAX_SUB_STEPS].
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math

from hrsim.core.state import MAX_SUB_STEPS, TimingState
from hrsim.core.step_table import DEFAULT_STEP_TABLE, StepSizeEntry, StepSizeTable

logger = logging.getLogger(__name__)

# Acceptance tolerance: fractional part of the points ratio relative to its integer part
NEAR_INTEGER_TOLERANCE = 0.1


@dataclass(frozen=True)
class TableMatch:
    """Outcome of a successful table search."""

    entry: StepSizeEntry
    accepted: bool  # True: near-integer acceptance, False: unconditional fallback
    aux: float      # Scaled request the entry was compared against
    multiples_tried: int

    @property
    def step_size(self) -> float:
        return self.entry.step_size

    @property
    def points(self) -> float:
        return self.entry.points


@dataclass(frozen=True)
class NegotiationResult:
    """
    Step size and sub-step count chosen for the current timing.

    pts_burst is None when no table search ran or the search found nothing.
    accepted is None when no table search ran.
    """

    dt: float
    sub_step_count: int
    pts_burst: float | None = None
    accepted: bool | None = None


def round_half_away(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves up."""
    return math.floor(value + 0.5)


def clamp_sub_steps(value: float) -> int:
    """Round and clamp a step count to [1, MAX_SUB_STEPS]."""
    # Also catches inf and NaN
    if not value < MAX_SUB_STEPS:
        return MAX_SUB_STEPS
    return max(1, round_half_away(value))


def search_table(table: StepSizeTable, pts_live: float) -> TableMatch | None:
    """
    Pick a step size whose points per burst tile pts_live.

    Multiples of pts_live are tried while the scaled request stays below the
    table's smallest points value. The first candidate whose points are a
    near-integer multiple of pts_live wins. Otherwise the table is scanned
    once more at the last scaled request and the first entry exceeding it is
    taken unconditionally.

    The number of multiples is bounded by MAX_SUB_STEPS: past that the
    sub-step count saturates at the cap whichever entry is picked.

    Args:
        table: Candidate step sizes
        pts_live: Requested burst length in ticks (burst_duration · freq)

    Returns:
        The match, or None if pts_live is not positive or no entry has more
        points than the request
    """
    if not pts_live > 0.0:
        return None

    aux = pts_live
    factor = 1

    while aux < table.min_points and factor <= MAX_SUB_STEPS:
        aux = pts_live * factor
        factor += 1

        candidate = table.first_exceeding(aux)
        if candidate is None:
            continue

        ratio = candidate.points / pts_live
        if math.isinf(ratio):
            # Request below float resolution; the sub-step count saturates anyway
            return TableMatch(candidate, accepted=True, aux=aux, multiples_tried=factor - 1)
        int_part = math.trunc(ratio)
        frac_part = ratio - int_part
        if frac_part <= NEAR_INTEGER_TOLERANCE * int_part:
            return TableMatch(candidate, accepted=True, aux=aux, multiples_tried=factor - 1)

    candidate = table.first_exceeding(aux)
    if candidate is None:
        return None
    return TableMatch(candidate, accepted=False, aux=aux, multiples_tried=factor - 1)


@dataclass
class StepSizeNegotiator:
    """Chooses (dt, sub_step_count) for a TimingState from a step-size table."""

    table: StepSizeTable = field(default_factory=lambda: DEFAULT_STEP_TABLE)

    def negotiate(self, timing: TimingState) -> NegotiationResult:
        """
        Compute the step size and sub-step count for the given timing.

        Does not modify timing. See the module docstring for the regimes.
        """
        period = timing.period_seconds
        dt = timing.dt

        # NaN periods land here too
        if not period > 0.0:
            return NegotiationResult(dt=dt, sub_step_count=1)

        if timing.burst_duration <= 0.0:
            return NegotiationResult(dt=dt, sub_step_count=clamp_sub_steps(period / dt))

        pts_live = timing.burst_duration * timing.frequency
        match = search_table(self.table, pts_live)
        if match is None:
            logger.warning(
                "No step size in table covers %.6g points (burst_duration=%g, period=%g); "
                "keeping dt=%g",
                pts_live, timing.burst_duration, period, dt,
            )
            return NegotiationResult(dt=dt, sub_step_count=clamp_sub_steps(period / dt))

        return NegotiationResult(
            dt=match.step_size,
            sub_step_count=clamp_sub_steps(match.points / pts_live),
            pts_burst=match.points,
            accepted=match.accepted,
        )

    def apply(self, timing: TimingState) -> NegotiationResult:
        """Negotiate and write dt and sub_step_count back into timing."""
        result = self.negotiate(timing)
        timing.dt = result.dt
        timing.sub_step_count = result.sub_step_count
        logger.debug(
            "Negotiated dt=%g sub_steps=%d (period=%g, burst_duration=%g, pts_burst=%s)",
            result.dt, result.sub_step_count, timing.period_seconds,
            timing.burst_duration, result.pts_burst,
        )
        return result

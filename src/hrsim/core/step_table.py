"""
Step-size table: candidate integration steps and the points each one needs.

Each entry pairs a step size with the number of integration points it takes
to simulate one burst of the model at that step. Larger steps need fewer
points (cheaper per simulated second, less accurate). The negotiator picks
from this table; it never invents a step size.

The ordering invariant (step size ascending, points strictly descending) is
checked once at construction.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence


@dataclass(frozen=True)
class StepSizeEntry:
    """One (step size, achievable points) record."""

    step_size: float
    points: float


class StepSizeTable:
    """
    Immutable, ordered sequence of StepSizeEntry records.

    Raises:
        ValueError: if the table is empty, holds non-positive values, or is
                    not ascending in step size and strictly descending in
                    points.
    """

    def __init__(self, entries: Iterable[StepSizeEntry | tuple[float, float]]):
        records = tuple(
            e if isinstance(e, StepSizeEntry) else StepSizeEntry(float(e[0]), float(e[1]))
            for e in entries
        )
        if not records:
            raise ValueError("StepSizeTable needs at least one entry")

        for entry in records:
            if entry.step_size <= 0.0 or entry.points <= 0.0:
                raise ValueError(f"Non-positive table entry: {entry}")

        for prev, cur in zip(records, records[1:]):
            if cur.step_size <= prev.step_size:
                raise ValueError(
                    f"Step sizes must be strictly ascending: {prev.step_size} then {cur.step_size}"
                )
            if cur.points >= prev.points:
                raise ValueError(
                    f"Points must be strictly descending: {prev.points} then {cur.points}"
                )

        self._entries = records

    @classmethod
    def from_pairs(cls, step_sizes: Sequence[float], points: Sequence[float]) -> StepSizeTable:
        """Build a table from two parallel sequences."""
        if len(step_sizes) != len(points):
            raise ValueError("step_sizes and points must have the same length")
        return cls(zip(step_sizes, points))

    @classmethod
    def from_burst_period(
        cls,
        burst_period: float,
        step_sizes: Sequence[float],
    ) -> StepSizeTable:
        """
        Derive a table from a measured burst period.

        points = burst_period / step_size, i.e. how many integration points
        one burst spans at that step. See hrsim.analysis.measure_burst_period.

        Args:
            burst_period: Burst onset interval in model time units
            step_sizes: Ascending candidate step sizes
        """
        if burst_period <= 0.0:
            raise ValueError(f"burst_period must be positive, got {burst_period}")
        return cls((h, burst_period / h) for h in step_sizes)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StepSizeEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> StepSizeEntry:
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StepSizeTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"StepSizeTable({len(self)} entries, dt {self.min_step}..{self.max_step})"

    def largest_first(self) -> Iterator[StepSizeEntry]:
        """Iterate from the largest step size to the smallest."""
        return reversed(self._entries)

    def first_exceeding(self, aux: float) -> StepSizeEntry | None:
        """
        First entry, scanning largest step first, whose points exceed aux.

        Returns None when no entry has more than aux points.
        """
        for entry in self.largest_first():
            if entry.points > aux:
                return entry
        return None

    @property
    def step_sizes(self) -> tuple[float, ...]:
        return tuple(e.step_size for e in self._entries)

    @property
    def points(self) -> tuple[float, ...]:
        return tuple(e.points for e in self._entries)

    @property
    def min_step(self) -> float:
        return self._entries[0].step_size

    @property
    def max_step(self) -> float:
        return self._entries[-1].step_size

    @property
    def min_points(self) -> float:
        """Fewest achievable points (at the largest step size)."""
        return self._entries[-1].points

    @property
    def max_points(self) -> float:
        return self._entries[0].points

    def __contains__(self, step_size: object) -> bool:
        return step_size in self.step_sizes


DEFAULT_STEP_TABLE = StepSizeTable.from_pairs(
    step_sizes=[0.0005, 0.001, 0.0015, 0.002, 0.003, 0.005, 0.01, 0.015, 0.02, 0.03, 0.05, 0.1],
    points=[
        577638.0, 286092.5, 189687.0, 142001.8, 94527.4, 56664.4,
        28313.6, 18381.1, 14223.2, 9497.0, 5716.9, 2829.7,
    ],
)

"""Inclusive numeric ranges used for clamping, remapping and random draws."""

from dataclasses import dataclass
from typing import Iterable, Union

import numpy as np

Number = Union[int, float]


@dataclass(frozen=True)
class Range:
    """An inclusive range [lower, upper]."""

    lower: Number
    upper: Number

    def __post_init__(self):
        if self.lower > self.upper:
            raise ValueError(
                f"Range lower bound {self.lower} is greater than upper bound {self.upper}"
            )

    @classmethod
    def of(cls, values: Iterable[Number]) -> "Range":
        """Build the smallest range containing every given value."""
        arr = np.fromiter(values, dtype=np.float64)
        if arr.size == 0:
            raise ValueError("Cannot build a range from no values")
        return cls(float(arr.min()), float(arr.max()))

    @property
    def span(self) -> Number:
        return self.upper - self.lower

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2

    def __contains__(self, value: Number) -> bool:
        return self.lower <= value <= self.upper

    def coerce(self, value: Number) -> Number:
        """Clamp the value into this range."""
        return min(max(value, self.lower), self.upper)

    def normalize(self, value: Number) -> float:
        """Fraction of the way from lower to upper, clamped to [0, 1]."""
        if self.span == 0:
            return 0.0
        return min(max((value - self.lower) / self.span, 0.0), 1.0)

    def map_to(self, value: Number, other: "Range") -> float:
        """Linearly map a value in this range onto the other range.

        A zero-width source range maps everything onto the middle of the
        target range.
        """
        if self.span == 0:
            return other.midpoint
        return other.lower + (value - self.lower) / self.span * other.span

    def random_int(self, rng: np.random.Generator) -> int:
        """Random integer in [lower, upper], both ends included."""
        return int(rng.integers(int(self.lower), int(self.upper), endpoint=True))

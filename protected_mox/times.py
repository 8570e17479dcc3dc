"""Expected call-count ranges for verification."""

from __future__ import annotations

import dataclasses as dc
import math


@dc.dataclass(frozen=True, slots=True)
class Times:
    """Inclusive range of acceptable call counts."""

    minimum: int
    maximum: float

    def __post_init__(self) -> None:
        if isinstance(self.minimum, bool) or self.minimum < 0:
            msg = "minimum call count must be a non-negative integer"
            raise ValueError(msg)
        if self.maximum < self.minimum:
            msg = "maximum call count must not be below the minimum"
            raise ValueError(msg)

    @classmethod
    def never(cls) -> Times:
        return cls(0, 0)

    @classmethod
    def once(cls) -> Times:
        return cls(1, 1)

    @classmethod
    def exactly(cls, count: int) -> Times:
        return cls(count, count)

    @classmethod
    def at_least(cls, count: int) -> Times:
        return cls(count, math.inf)

    @classmethod
    def at_least_once(cls) -> Times:
        return cls(1, math.inf)

    @classmethod
    def at_most(cls, count: int) -> Times:
        return cls(0, count)

    @classmethod
    def at_most_once(cls) -> Times:
        return cls(0, 1)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> Times:
        """Return the inclusive range ``minimum..maximum``."""
        return cls(minimum, maximum)

    @classmethod
    def coerce(cls, times: Times | int) -> Times:
        """Accept a :class:`Times` or an exact ``int`` count."""
        if isinstance(times, Times):
            return times
        if isinstance(times, bool) or not isinstance(times, int):
            msg = f"times must be a Times or an int, got {type(times).__name__}"
            raise TypeError(msg)
        return cls.exactly(times)

    def verify(self, count: int) -> bool:
        """Return ``True`` when *count* lies within the range."""
        return self.minimum <= count <= self.maximum

    def __str__(self) -> str:
        """Return a phrase such as ``exactly 2 times``."""
        if self.minimum == self.maximum:
            return "never" if self.minimum == 0 else f"exactly {self.minimum} time(s)"
        if math.isinf(self.maximum):
            return f"at least {self.minimum} time(s)"
        if self.minimum == 0:
            return f"at most {int(self.maximum)} time(s)"
        return f"between {self.minimum} and {int(self.maximum)} time(s)"


__all__ = ["Times"]

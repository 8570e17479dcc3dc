"""Unit tests for call-count ranges."""

from __future__ import annotations

import pytest

from protected_mox import Times


@pytest.mark.parametrize(
    ("times", "accepted", "rejected", "text"),
    [
        (Times.never(), [0], [1], "never"),
        (Times.once(), [1], [0, 2], "exactly 1 time(s)"),
        (Times.exactly(3), [3], [2, 4], "exactly 3 time(s)"),
        (Times.at_least_once(), [1, 50], [0], "at least 1 time(s)"),
        (Times.at_least(2), [2, 3], [1], "at least 2 time(s)"),
        (Times.at_most_once(), [0, 1], [2], "at most 1 time(s)"),
        (Times.at_most(2), [0, 2], [3], "at most 2 time(s)"),
        (Times.between(1, 3), [1, 3], [0, 4], "between 1 and 3 time(s)"),
    ],
)
def test_ranges(
    times: Times, accepted: list[int], rejected: list[int], text: str
) -> None:
    """Each constructor accepts exactly its range of counts."""
    assert all(times.verify(count) for count in accepted)
    assert not any(times.verify(count) for count in rejected)
    assert str(times) == text


def test_invalid_ranges_are_rejected() -> None:
    """Negative minimums and inverted ranges are errors."""
    with pytest.raises(ValueError, match="non-negative"):
        Times.exactly(-1)
    with pytest.raises(ValueError, match="below the minimum"):
        Times.between(3, 1)


def test_coerce_accepts_ints() -> None:
    """A plain int means an exact count."""
    assert Times.coerce(2) == Times.exactly(2)
    once = Times.once()
    assert Times.coerce(once) is once


@pytest.mark.parametrize("value", [True, 1.0, "1"])
def test_coerce_rejects_other_types(value: object) -> None:
    """Only ``Times`` and ints are accepted."""
    with pytest.raises(TypeError, match="times must be a Times or an int"):
        Times.coerce(value)  # type: ignore[arg-type]

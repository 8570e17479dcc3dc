"""Unit tests for member lookup."""

from __future__ import annotations

import typing as t

import pytest

from protected_mox import AmbiguousMemberError, ItExpr
from protected_mox.arguments import classify_arguments
from protected_mox.locator import (
    NOT_FOUND,
    MemberLocator,
    MemberQuery,
    ResolvedMethod,
    ResolvedProperty,
    is_assignable,
    parameters_match,
)
from protected_mox.reflection import ByRef
from protected_mox.unittests._targets import Formatter


@pytest.mark.parametrize(
    ("parameter", "argument", "expected"),
    [
        (int, int, True),
        (object, str, True),
        (float, int, True),
        (complex, float, True),
        (int, float, False),
        (float, bool, False),
        (int, bool, True),
        (int | None, int, True),
        (t.Optional[str], str, True),  # noqa: UP045
        (list[str], list[int], True),
        (list[str], list, True),
        (ByRef(int), ByRef(int), True),
        (ByRef(int), int, False),
        (int, ByRef(int), False),
        (int, None, False),
    ],
)
def test_is_assignable(parameter: object, argument: object, *, expected: bool) -> None:
    """Arguments are accepted by compatible parameter types."""
    assert is_assignable(parameter, argument) is expected


def test_exact_match_requires_identical_types() -> None:
    """Exact matching turns off promotion and subclassing."""
    assert parameters_match((float,), (int,), exact=False)
    assert not parameters_match((float,), (int,), exact=True)
    assert parameters_match((float,), (float,), exact=True)


def test_parameter_count_must_match() -> None:
    """Shapes of a different length never match."""
    assert not parameters_match((int,), (), exact=False)


def test_find_single_overload() -> None:
    """The only compatible overload is selected."""
    locator = MemberLocator(Formatter)
    method = locator.find_method("_render", (str,))
    assert method is not None
    assert method.parameter_types == (str,)


def test_identical_overload_wins() -> None:
    """An int fits the int and the float overload; the int one is chosen."""
    query = MemberQuery("_scale", classify_arguments((2,)))
    resolved = MemberLocator(Formatter).resolve(query, allow_property=False)
    assert isinstance(resolved, ResolvedMethod)
    assert resolved.method.parameter_types == (int,)


def test_ambiguous_overloads_raise() -> None:
    """Several compatible overloads without an identical one are ambiguous."""
    locator = MemberLocator(Formatter)
    with pytest.raises(AmbiguousMemberError, match="2 signatures"):
        locator.find_method("_measure", (bool,))


def test_exact_match_disambiguates() -> None:
    """Exact matching picks the overload declared with the argument type."""
    method = MemberLocator(Formatter).find_method("_scale", (int,), exact=True)
    assert method is not None
    assert method.return_type is int


def test_no_compatible_signature() -> None:
    """Missing methods and mismatched shapes resolve to nothing."""
    locator = MemberLocator(Formatter)
    assert locator.find_method("_format", (str,)) is None
    assert locator.find_method("_format", (int, int)) is None
    assert locator.find_method("missing", ()) is None


def test_resolve_prefers_property_when_allowed() -> None:
    """Properties are considered first only when requested."""
    locator = MemberLocator(Formatter)
    query = MemberQuery("_count")
    resolved = locator.resolve(query, allow_property=True)
    assert isinstance(resolved, ResolvedProperty)
    assert resolved.property.name == "_count"
    assert locator.resolve(query, allow_property=False) is NOT_FOUND


def test_resolve_method_from_query() -> None:
    """Queries carry argument shapes inferred from matchers."""
    query = MemberQuery("_format", classify_arguments([ItExpr.is_any(int)]))
    resolved = MemberLocator(Formatter).resolve(query, allow_property=True)
    assert isinstance(resolved, ResolvedMethod)
    assert resolved.method.name == "_format"


def test_not_found_is_falsy() -> None:
    """The not-found sentinel reads as false."""
    assert not NOT_FOUND
    assert repr(NOT_FOUND) == "NOT_FOUND"

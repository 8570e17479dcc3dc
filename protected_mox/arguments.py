"""Classify raw call arguments and infer the types used for member lookup."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from . import messages
from .errors import NullArgumentMisuseError, UnsupportedMatcherMemberError
from .expressions import (
    Expr,
    FieldAccess,
    Lambda,
    MatcherCall,
    MemberAccess,
    PropertyAccess,
)
from .reflection import ByRef


@dc.dataclass(frozen=True, slots=True)
class LiteralValue:
    """A plain value, matched by equality."""

    value: object
    runtime_type: type

    @property
    def implied_type(self) -> type:
        """Return the type used for overload resolution."""
        return self.runtime_type


@dc.dataclass(frozen=True, slots=True)
class MatcherExpression:
    """A matcher or expression node standing in for a value."""

    expr: Expr
    implied_type: object


@dc.dataclass(frozen=True, slots=True)
class RefMatcher:
    """The by-reference wildcard ``ItExpr.ref(T).is_any``."""

    expr: FieldAccess
    implied_type: ByRef


ArgumentSpec = LiteralValue | MatcherExpression | RefMatcher


def classify_argument(arg: object) -> ArgumentSpec:
    """Return the :data:`ArgumentSpec` describing *arg*.

    Raises
    ------
    NullArgumentMisuseError
        If *arg* is ``None``.
    UnsupportedMatcherMemberError
        If *arg* accesses a member that is neither a field nor a property.
    """
    if arg is None:
        raise NullArgumentMisuseError(NullArgumentMisuseError.DEFAULT_MESSAGE)
    if not isinstance(arg, Expr):
        return LiteralValue(arg, type(arg))
    if isinstance(arg, Lambda):
        return MatcherExpression(arg, classify_argument(arg.body).implied_type)
    if isinstance(arg, MatcherCall):
        return MatcherExpression(arg, arg.returns)
    if isinstance(arg, FieldAccess):
        if arg.by_ref:
            return RefMatcher(arg, ByRef(arg.field_type))
        return MatcherExpression(arg, arg.field_type)
    if isinstance(arg, PropertyAccess):
        return MatcherExpression(arg, arg.property_type)
    if isinstance(arg, MemberAccess):
        raise UnsupportedMatcherMemberError(messages.unsupported_member(arg.member))
    folded = arg.fold()
    return MatcherExpression(arg, None if folded is None else folded.value_type)


def classify_arguments(args: t.Sequence[object]) -> tuple[ArgumentSpec, ...]:
    """Classify every argument in *args*, in order."""
    if args is None:
        raise NullArgumentMisuseError(NullArgumentMisuseError.DEFAULT_MESSAGE)
    return tuple(classify_argument(arg) for arg in args)


def argument_types(specs: t.Iterable[ArgumentSpec]) -> tuple[object, ...]:
    """Return the implied type of each spec."""
    return tuple(spec.implied_type for spec in specs)


__all__ = [
    "ArgumentSpec",
    "LiteralValue",
    "MatcherExpression",
    "RefMatcher",
    "argument_types",
    "classify_argument",
    "classify_arguments",
]

"""Expression nodes accepted as call arguments.

A plain value passed to a setup is compared by equality. An :class:`Expr`
describes how a value should be matched instead, and carries enough type
information to take part in overload resolution.
"""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .reflection import Ref

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .comparators import Comparator


class Expr:
    """Base class for argument expressions."""

    __slots__ = ()

    def matches(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies this expression."""
        raise NotImplementedError

    def fold(self) -> Constant | None:
        """Reduce the expression to a constant, or ``None`` if it cannot be."""
        return None


@dc.dataclass(frozen=True, slots=True)
class Constant(Expr):
    """A literal value typed as the parameter it is bound to."""

    value: object
    value_type: object

    def matches(self, value: object) -> bool:
        """Return ``True`` when *value* equals the constant."""
        return bool(value == self.value)

    def fold(self) -> Constant:
        """Return the constant itself."""
        return self

    def __str__(self) -> str:
        """Return the literal as written."""
        return repr(self.value)


@dc.dataclass(frozen=True, slots=True)
class MatcherCall(Expr):
    """A call to a matcher factory such as ``ItExpr.is_any(int)``."""

    name: str
    returns: object
    comparator: Comparator
    arguments: tuple[object, ...] = ()

    def matches(self, value: object) -> bool:
        """Delegate to the comparator."""
        return bool(self.comparator(value))

    def __str__(self) -> str:
        """Return the matcher call as written."""
        args = ", ".join(
            getattr(arg, "__name__", None) or repr(arg) for arg in self.arguments
        )
        return f"ItExpr.{self.name}({args})"


@dc.dataclass(frozen=True, slots=True)
class FieldAccess(Expr):
    """Read of a plain attribute on ``owner``.

    ``by_ref`` marks the by-reference wildcard, which matches any
    :class:`~protected_mox.reflection.Ref` cell.
    """

    owner: object
    field: str
    field_type: object
    by_ref: bool = False

    def matches(self, value: object) -> bool:
        """Compare *value* with the attribute's current value."""
        if self.by_ref:
            return isinstance(value, Ref)
        return bool(getattr(self.owner, self.field) == value)

    def __str__(self) -> str:
        """Return the attribute access as written."""
        if self.by_ref:
            return f"ItExpr.ref({_name(self.field_type)}).{self.field}"
        return f"{_name(self.owner)}.{self.field}"


@dc.dataclass(frozen=True, slots=True)
class PropertyAccess(Expr):
    """Read of a property on ``owner``."""

    owner: object
    name: str
    property_type: object

    def matches(self, value: object) -> bool:
        """Compare *value* with the property's current value."""
        return bool(getattr(self.owner, self.name) == value)

    def __str__(self) -> str:
        """Return the property access as written."""
        return f"{_name(self.owner)}.{self.name}"


@dc.dataclass(frozen=True, slots=True)
class MemberAccess(Expr):
    """Access to a member that is neither a field nor a property."""

    owner: object
    member: str

    def matches(self, value: object) -> bool:
        """Compare *value* with the member."""
        return bool(getattr(self.owner, self.member) == value)

    def __str__(self) -> str:
        """Return the member access as written."""
        return f"{_name(self.owner)}.{self.member}"


@dc.dataclass(frozen=True, slots=True)
class Lambda(Expr):
    """An inline predicate wrapping another expression."""

    body: Expr
    parameters: tuple[str, ...] = ()

    def matches(self, value: object) -> bool:
        """Delegate to the body."""
        return self.body.matches(value)

    def __str__(self) -> str:
        """Return the lambda as written."""
        return f"lambda {', '.join(self.parameters)}: {self.body}"


@dc.dataclass(frozen=True, slots=True)
class Deferred(Expr):
    """A value computed when the expression is folded or matched."""

    func: t.Callable[[], object]

    def matches(self, value: object) -> bool:
        """Compare *value* with a fresh evaluation of ``func``."""
        return bool(self.func() == value)

    def fold(self) -> Constant | None:
        """Evaluate ``func``; a ``None`` result cannot be typed."""
        value = self.func()
        if value is None:
            return None
        return Constant(value, type(value))

    def __str__(self) -> str:
        """Return a description of the deferred value."""
        return f"Deferred({getattr(self.func, '__qualname__', self.func)!r})"


def _name(obj: object) -> str:
    if isinstance(obj, type):
        return obj.__qualname__
    return getattr(obj, "__name__", None) or type(obj).__qualname__


__all__ = [
    "Constant",
    "Deferred",
    "Expr",
    "FieldAccess",
    "Lambda",
    "MatcherCall",
    "MemberAccess",
    "PropertyAccess",
]

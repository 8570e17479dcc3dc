"""``ItExpr`` matcher factory for setting up and verifying calls."""

from __future__ import annotations

import dataclasses as dc
import inspect
import typing as t

from .comparators import Contains, IsA, IsIn, IsNone, Predicate, Regex, StartsWith
from .expressions import FieldAccess, MatcherCall, MemberAccess, PropertyAccess
from .reflection import registry_for

_T = t.TypeVar("_T")


@dc.dataclass(frozen=True, slots=True)
class RefMatchers(t.Generic[_T]):
    """Matchers for parameters annotated ``Ref[T]``."""

    typ: type[_T]

    @property
    def is_any(self) -> FieldAccess:
        """Match any :class:`~protected_mox.reflection.Ref` cell."""
        return FieldAccess(self, "is_any", self.typ, by_ref=True)


class ItExpr:
    """Build argument matchers.

    Every factory returns an expression node whose type takes part in
    overload resolution, so ``ItExpr.is_any(int)`` selects an ``int``
    parameter just like the literal ``5`` does.
    """

    @staticmethod
    def is_any(typ: type[_T]) -> MatcherCall:
        """Match any value of *typ*, including ``None``."""
        return MatcherCall("is_any", typ, IsA(typ, nullable=True), (typ,))

    @staticmethod
    def is_not_null(typ: type[_T]) -> MatcherCall:
        """Match any value of *typ* except ``None``."""
        return MatcherCall("is_not_null", typ, IsA(typ), (typ,))

    @staticmethod
    def is_null(typ: type[_T]) -> MatcherCall:
        """Match ``None`` passed to a parameter of *typ*."""
        return MatcherCall("is_null", typ, IsNone(), (typ,))

    @staticmethod
    def is_(predicate: t.Callable[[_T], object], typ: type[_T]) -> MatcherCall:
        """Match values for which *predicate* is truthy."""
        return MatcherCall("is_", typ, Predicate(predicate), (predicate, typ))

    @staticmethod
    def is_in(values: t.Iterable[_T], typ: type[_T]) -> MatcherCall:
        """Match values equal to one of *values*."""
        items = tuple(values)
        return MatcherCall("is_in", typ, IsIn(items), (items, typ))

    @staticmethod
    def is_regex(pattern: str) -> MatcherCall:
        """Match strings containing a match for *pattern*."""
        return MatcherCall("is_regex", str, Regex(pattern), (pattern,))

    @staticmethod
    def contains(substring: str) -> MatcherCall:
        """Match strings containing *substring*."""
        return MatcherCall("contains", str, Contains(substring), (substring,))

    @staticmethod
    def starts_with(prefix: str) -> MatcherCall:
        """Match strings beginning with *prefix*."""
        return MatcherCall("starts_with", str, StartsWith(prefix), (prefix,))

    @staticmethod
    def ref(typ: type[_T]) -> RefMatchers[_T]:
        """Return matchers for by-reference parameters of *typ*."""
        return RefMatchers(typ)

    @staticmethod
    def value_of(
        owner: object, name: str
    ) -> FieldAccess | PropertyAccess | MemberAccess:
        """Match the current value of ``owner.name``.

        Properties and plain attributes carry their declared type. Any other
        member (a method, for instance) cannot be used as an argument.
        """
        cls = owner if isinstance(owner, type) else type(owner)
        static = inspect.getattr_static(owner, name)
        if isinstance(static, property):
            prop = registry_for(cls).find_property(name)
            prop_type = prop.property_type if prop is not None else object
            return PropertyAccess(owner, name, prop_type)
        if callable(static) or isinstance(static, (classmethod, staticmethod)):
            return MemberAccess(owner, name)
        hints = t.get_type_hints(cls)
        field_type = hints.get(name, type(getattr(owner, name)))
        return FieldAccess(owner, name, field_type)


__all__ = ["ItExpr", "RefMatchers"]

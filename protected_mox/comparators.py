"""Simple comparator classes used for argument matching."""

from __future__ import annotations

import dataclasses as dc
import re
import types
import typing as t

from .reflection import ByRef, Ref

_NUMERIC_TOWER: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def is_instance(value: object, typ: object) -> bool:
    """Return ``True`` when *value* is acceptable for the annotation *typ*.

    Unlike :func:`isinstance` this understands unions, ``Literal``,
    parameterised generics (checked against their origin), the numeric tower
    and :class:`~protected_mox.reflection.ByRef`. Annotations it cannot check
    accept every value.
    """
    if typ is object or typ is t.Any:
        return True
    if typ is None or typ is type(None):
        return value is None
    if isinstance(typ, ByRef):
        return isinstance(value, Ref)
    origin = t.get_origin(typ)
    if origin is t.Union or origin is types.UnionType:
        return any(is_instance(value, arg) for arg in t.get_args(typ))
    if origin is t.Literal:
        return value in t.get_args(typ)
    if origin is not None:
        return is_instance(value, origin)
    if isinstance(typ, type):
        if isinstance(value, bool) and typ in _NUMERIC_TOWER:
            return False
        return isinstance(value, (typ, *_NUMERIC_TOWER.get(typ, ())))
    return True


class Comparator(t.Protocol):
    """Callable returning ``True`` when a value matches."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        ...


@dc.dataclass(frozen=True, slots=True)
class Any:
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True


@dc.dataclass(frozen=True, slots=True)
class IsA:
    """Match values of ``typ``, optionally also ``None``."""

    typ: object
    nullable: bool = False

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        if value is None and self.nullable:
            return True
        return is_instance(value, self.typ)


@dc.dataclass(frozen=True, slots=True)
class IsNone:
    """Match ``None`` only."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* is ``None``."""
        return value is None


@dc.dataclass(frozen=True, slots=True)
class IsIn:
    """Match values equal to one of ``values``."""

    values: tuple[object, ...]

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* is among ``values``."""
        return value in self.values


@dc.dataclass(frozen=True, slots=True)
class Regex:
    """Match strings that ``pattern`` finds a match in."""

    pattern: str
    _compiled: re.Pattern[str] = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches *value*."""
        return isinstance(value, str) and bool(self._compiled.search(value))


@dc.dataclass(frozen=True, slots=True)
class Contains:
    """Match if ``item`` is found in *value*."""

    item: object

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        try:
            return self.item in value  # type: ignore[operator]
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class StartsWith:
    """Match strings beginning with ``prefix``."""

    prefix: str

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)


@dc.dataclass(frozen=True, slots=True)
class Predicate:
    """Use a custom ``func`` to determine a match."""

    func: t.Callable[[t.Any], object]

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))


__all__ = [
    "Any",
    "Comparator",
    "Contains",
    "IsA",
    "IsIn",
    "IsNone",
    "Predicate",
    "Regex",
    "StartsWith",
    "is_instance",
]

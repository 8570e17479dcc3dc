"""Call descriptors: which member is accessed, and with which arguments.

Descriptors are the single representation handed to the mock engine. The
by-name :class:`~protected_mox.protected.ProtectedMock` and the recorder
behind :meth:`~protected_mox.mock.Mock.setup` both build them here, so equal
inputs give equal descriptors.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as t

from .arguments import classify_argument
from .expressions import Constant, Expr, Lambda
from .matchers import ItExpr
from .reflection import MethodInfo, PropertyInfo


class _Unset(enum.Enum):
    UNSET = enum.auto()

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET
"""Marker for an omitted property value; the setter then matches any value."""


class CallKind(enum.StrEnum):
    """Kind of member access recorded by a mock."""

    METHOD = "method"
    GET = "get"
    SET = "set"


@dc.dataclass(frozen=True, slots=True)
class CallRecord:
    """A member access performed on a mocked object."""

    kind: CallKind
    attribute: str
    name: str
    args: tuple[object, ...] = ()

    def __str__(self) -> str:
        """Return the access as it would be written."""
        if self.kind is CallKind.GET:
            return f"obj.{self.name}"
        if self.kind is CallKind.SET:
            return f"obj.{self.name} = {self.args[0]!r}"
        return f"obj.{self.name}({', '.join(repr(arg) for arg in self.args)})"


@dc.dataclass(frozen=True, slots=True)
class Invocation:
    """Call of ``member`` with positional ``arguments``."""

    member: MethodInfo
    arguments: tuple[Expr, ...]

    def matches(self, record: CallRecord) -> bool:
        """Return ``True`` if *record* is a matching call of ``member``."""
        return (
            record.kind is CallKind.METHOD
            and record.attribute == self.member.attribute
            and len(record.args) == len(self.arguments)
            and all(
                expr.matches(value)
                for expr, value in zip(self.arguments, record.args, strict=True)
            )
        )

    def __str__(self) -> str:
        """Return the call as it would be written."""
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"obj.{self.member.name}({args})"


@dc.dataclass(frozen=True, slots=True)
class PropertyRead:
    """Read of ``member``."""

    member: PropertyInfo

    def matches(self, record: CallRecord) -> bool:
        """Return ``True`` if *record* reads ``member``."""
        return record.kind is CallKind.GET and record.attribute == self.member.attribute

    def __str__(self) -> str:
        """Return the read as it would be written."""
        return f"obj.{self.member.name}"


@dc.dataclass(frozen=True, slots=True)
class PropertyWrite:
    """Assignment of ``value`` to ``member``."""

    member: PropertyInfo
    value: Expr

    def matches(self, record: CallRecord) -> bool:
        """Return ``True`` if *record* assigns a matching value to ``member``."""
        return (
            record.kind is CallKind.SET
            and record.attribute == self.member.attribute
            and self.value.matches(record.args[0])
        )

    def __str__(self) -> str:
        """Return the assignment as it would be written."""
        return f"obj.{self.member.name} = {self.value}"


CallDescriptor = Invocation | PropertyRead | PropertyWrite


def _coerce(value: object, parameter_type: object) -> object:
    if (
        parameter_type in (float, complex)
        and isinstance(value, int)
        and not isinstance(value, bool)
    ):
        return t.cast("type", parameter_type)(value)
    return value


def bind_argument(parameter_type: object, arg: object) -> Expr:
    """Return the expression bound to a parameter of *parameter_type*.

    Expressions are used as they are, after unwrapping one enclosing
    :class:`~protected_mox.expressions.Lambda`. Plain values become constants
    typed as the parameter.
    """
    if isinstance(arg, Lambda):
        return arg.body
    if isinstance(arg, Expr):
        return arg
    return Constant(_coerce(arg, parameter_type), parameter_type)


def method_call(method: MethodInfo, args: t.Sequence[object]) -> Invocation:
    """Build the :class:`Invocation` of *method* with *args*."""
    return Invocation(
        method,
        tuple(
            bind_argument(param, arg)
            for param, arg in zip(method.parameter_types, args, strict=True)
        ),
    )


def property_read(prop: PropertyInfo) -> PropertyRead:
    """Build the :class:`PropertyRead` of *prop*."""
    return PropertyRead(prop)


def property_write(
    prop: PropertyInfo,
    value: object = UNSET,
    value_type: object | None = None,
) -> PropertyWrite:
    """Build the :class:`PropertyWrite` of *prop*.

    When *value* is omitted the write matches any value of *value_type*,
    which defaults to the property's declared type.
    """
    typ = prop.property_type if value_type is None else value_type
    if value is UNSET:
        return PropertyWrite(prop, ItExpr.is_any(t.cast("type", typ)))
    classify_argument(value)  # rejects None and unsupported members
    return PropertyWrite(prop, bind_argument(typ, value))


__all__ = [
    "UNSET",
    "CallDescriptor",
    "CallKind",
    "CallRecord",
    "Invocation",
    "PropertyRead",
    "PropertyWrite",
    "bind_argument",
    "method_call",
    "property_read",
    "property_write",
]

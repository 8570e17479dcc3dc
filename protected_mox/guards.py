"""Validation checks applied to resolved members.

Each guard raises on the first violation; callers invoke them in a fixed
order so exactly one error is ever reported.
"""

from __future__ import annotations

import typing as t

from . import messages
from .errors import (
    CantSetReturnValueForVoidError,
    EmptyNameError,
    MemberMissingError,
    MethodIsPublicError,
    MethodMissingError,
    PropertyNotReadableError,
    PropertyNotWritableError,
    UnexpectedPublicPropertyError,
)
from .locator import is_assignable

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .arguments import ArgumentSpec
    from .reflection import MethodInfo, PropertyInfo

_M = t.TypeVar("_M")


def ensure_name(name: str | None, parameter: str) -> str:
    """Reject ``None``, empty and whitespace-only member names."""
    if name is None or not name.strip():
        raise EmptyNameError(messages.empty_name(parameter))
    return name


def ensure_member_present(target: type, name: str, member: _M | None) -> _M:
    """Raise :class:`MemberMissingError` when *member* is ``None``."""
    if member is None:
        raise MemberMissingError(messages.member_missing(target, name))
    return member


def ensure_method_present(
    target: type,
    name: str,
    method: MethodInfo | None,
    specs: t.Sequence[ArgumentSpec],
) -> MethodInfo:
    """Raise :class:`MethodMissingError` listing the inferred argument types."""
    if method is None:
        types = [spec.implied_type for spec in specs]
        raise MethodMissingError(messages.method_missing(target, name, types))
    return method


def ensure_method_not_public(target: type, method: MethodInfo) -> None:
    if method.is_public:
        raise MethodIsPublicError(messages.method_is_public(target, method.name))


def ensure_getter_not_public(target: type, prop: PropertyInfo) -> None:
    if prop.has_public_getter:
        msg = messages.unexpected_public_property(target, prop.name)
        raise UnexpectedPublicPropertyError(msg)


def ensure_setter_not_public(target: type, prop: PropertyInfo) -> None:
    if prop.has_public_setter:
        msg = messages.unexpected_public_property(target, prop.name)
        raise UnexpectedPublicPropertyError(msg)


def ensure_returns_value(method: MethodInfo) -> None:
    if method.returns_void:
        raise CantSetReturnValueForVoidError(
            CantSetReturnValueForVoidError.DEFAULT_MESSAGE
        )


def ensure_readable(target: type, prop: PropertyInfo) -> None:
    if not prop.can_read:
        msg = messages.property_not_readable(target, prop.name)
        raise PropertyNotReadableError(msg)


def ensure_writable(target: type, prop: PropertyInfo) -> None:
    if not prop.can_write:
        msg = messages.property_not_writable(target, prop.name)
        raise PropertyNotWritableError(msg)


def ensure_property_type(
    target: type, prop: PropertyInfo, property_type: object | None
) -> None:
    """Reject a *property_type* the declared property type cannot be read as.

    Unannotated properties accept any requested type.
    """
    if property_type is None or prop.property_type is object:
        return
    if not is_assignable(property_type, prop.property_type):
        msg = messages.property_type_mismatch(
            target, prop.name, prop.property_type, property_type
        )
        raise TypeError(msg)


__all__ = [
    "ensure_getter_not_public",
    "ensure_member_present",
    "ensure_method_not_public",
    "ensure_method_present",
    "ensure_name",
    "ensure_property_type",
    "ensure_readable",
    "ensure_returns_value",
    "ensure_setter_not_public",
    "ensure_writable",
]

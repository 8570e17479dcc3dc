"""Human-readable messages for resolution failures."""

from __future__ import annotations

import types
import typing as t

from .reflection import ByRef


def type_name(typ: object) -> str:
    """Return a short, readable name for the annotation *typ*.

    >>> type_name(dict[str, list[int]])
    'dict[str, list[int]]'
    """
    if typ is None or typ is type(None):
        return "None"
    if isinstance(typ, ByRef):
        return f"Ref[{type_name(typ.element_type)}]"
    origin = t.get_origin(typ)
    if origin is t.Union or origin is types.UnionType:
        return " | ".join(type_name(arg) for arg in t.get_args(typ))
    if origin is not None:
        args = ", ".join(
            repr(arg) if origin is t.Literal else type_name(arg)
            for arg in t.get_args(typ)
        )
        return f"{type_name(origin)}[{args}]"
    if isinstance(typ, type):
        return typ.__qualname__
    return getattr(typ, "__name__", None) or str(typ)


def empty_name(parameter: str) -> str:
    return f"{parameter} must be a non-empty member name"


def member_missing(target: type, member: str) -> str:
    return f"Type {type_name(target)} does not have a member named {member!r}."


def _shapes(argument_types: t.Sequence[object]) -> str:
    return ", ".join("?" if typ is None else type_name(typ) for typ in argument_types)


def method_missing(
    target: type, method: str, argument_types: t.Sequence[object]
) -> str:
    shapes = _shapes(argument_types)
    return (
        f"Type {type_name(target)} does not have a matching method named "
        f"{method!r} taking arguments ({shapes})."
    )


def ambiguous_method(
    target: type, method: str, argument_types: t.Sequence[object], count: int
) -> str:
    shapes = _shapes(argument_types)
    return (
        f"{count} signatures of {type_name(target)}.{method} accept arguments "
        f"({shapes}); pass exact_parameter_match=True or more specific matchers."
    )


def method_is_public(target: type, method: str) -> str:
    return (
        f"Method {type_name(target)}.{method} is public. Use the strongly-typed "
        "Mock.setup/Mock.verify instead."
    )


def unexpected_public_property(target: type, prop: str) -> str:
    return (
        f"Property {type_name(target)}.{prop} has a public accessor. Use the "
        "strongly-typed Mock.setup_get/Mock.setup_set instead."
    )


def property_not_readable(target: type, prop: str) -> str:
    return f"Property {type_name(target)}.{prop} is not readable."


def property_not_writable(target: type, prop: str) -> str:
    return f"Property {type_name(target)}.{prop} is not writable."


def unsupported_member(member: str) -> str:
    return f"Member {member!r} is neither a field nor a property."


def property_type_mismatch(
    target: type, prop: str, declared: object, requested: object
) -> str:
    return (
        f"Property {type_name(target)}.{prop} is declared as "
        f"{type_name(declared)}, not {type_name(requested)}."
    )


def no_matching_member(target: type, analog: type, member: str) -> str:
    return (
        f"Type {type_name(target)} does not have a member matching "
        f"{type_name(analog)}.{member} by name and signature."
    )


__all__ = [
    "ambiguous_method",
    "empty_name",
    "member_missing",
    "method_is_public",
    "method_missing",
    "no_matching_member",
    "property_not_readable",
    "property_not_writable",
    "property_type_mismatch",
    "type_name",
    "unexpected_public_property",
    "unsupported_member",
]

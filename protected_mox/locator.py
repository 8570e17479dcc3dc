"""Locate the method or property a by-name query refers to."""

from __future__ import annotations

import dataclasses as dc
import logging
import types
import typing as t

from . import messages
from .arguments import ArgumentSpec, argument_types
from .errors import AmbiguousMemberError
from .reflection import ByRef, MethodInfo, PropertyInfo, registry_for

logger = logging.getLogger(__name__)

_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


@dc.dataclass(frozen=True, slots=True)
class MemberQuery:
    """Name and argument shapes of one lookup."""

    name: str
    argument_specs: tuple[ArgumentSpec, ...] = ()
    exact_match: bool = False

    @property
    def argument_types(self) -> tuple[object, ...]:
        """Return the implied type of each argument."""
        return argument_types(self.argument_specs)


@dc.dataclass(frozen=True, slots=True)
class ResolvedMethod:
    """A query resolved to a method signature."""

    method: MethodInfo


@dc.dataclass(frozen=True, slots=True)
class ResolvedProperty:
    """A query resolved to a property."""

    property: PropertyInfo


class _NotFound:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()

ResolvedMember = ResolvedMethod | ResolvedProperty | _NotFound


def is_assignable(parameter_type: object, argument_type: object) -> bool:
    """Return ``True`` when *argument_type* may be passed as *parameter_type*.

    By-reference types only accept an identical by-reference type.
    """
    if argument_type is None:
        return False
    if isinstance(parameter_type, ByRef) or isinstance(argument_type, ByRef):
        return parameter_type == argument_type
    if parameter_type is object or parameter_type is t.Any:
        return True
    if parameter_type == argument_type:
        return True
    origin = t.get_origin(parameter_type)
    if origin is t.Union or origin is types.UnionType:
        return any(
            is_assignable(arg, argument_type) for arg in t.get_args(parameter_type)
        )
    if origin is not None:
        return is_assignable(origin, t.get_origin(argument_type) or argument_type)
    argument_origin = t.get_origin(argument_type)
    if argument_origin is not None:
        return is_assignable(parameter_type, argument_origin)
    if isinstance(parameter_type, type) and isinstance(argument_type, type):
        if argument_type is bool and parameter_type in _PROMOTIONS:
            return False
        return issubclass(argument_type, parameter_type) or argument_type in (
            _PROMOTIONS.get(parameter_type, ())
        )
    return False


def parameters_match(
    parameter_types: t.Sequence[object],
    argument_types: t.Sequence[object],
    *,
    exact: bool,
) -> bool:
    """Compare declared parameter types with inferred argument types."""
    if len(parameter_types) != len(argument_types):
        return False
    if exact:
        pairs = zip(parameter_types, argument_types, strict=True)
        return all(param == arg for param, arg in pairs)
    return all(
        is_assignable(param, arg)
        for param, arg in zip(parameter_types, argument_types, strict=True)
    )


class MemberLocator:
    """Resolve member names on ``target`` to methods or properties."""

    def __init__(self, target: type) -> None:
        self.target = target
        self._registry = registry_for(target)

    def find_property(self, name: str) -> PropertyInfo | None:
        """Return the property called *name*, ignoring argument shapes."""
        return self._registry.find_property(name)

    def has_method(self, name: str) -> bool:
        """Return ``True`` when any method signature is called *name*."""
        return bool(self._registry.find_methods(name))

    def find_method(
        self,
        name: str,
        argument_types: t.Sequence[object],
        *,
        exact: bool = False,
    ) -> MethodInfo | None:
        """Return the single signature of *name* accepting *argument_types*.

        When several signatures accept the arguments, the one declared with
        exactly the argument types wins.

        Raises
        ------
        AmbiguousMemberError
            If more than one signature accepts the argument types and none
            or several declare them exactly.
        """
        candidates = [
            method
            for method in self._registry.find_methods(name)
            if method.arity == len(argument_types)
            and parameters_match(method.parameter_types, argument_types, exact=exact)
        ]
        if len(candidates) > 1 and not exact:
            identical = [
                method
                for method in candidates
                if parameters_match(method.parameter_types, argument_types, exact=True)
            ]
            candidates = identical or candidates
        if len(candidates) > 1:
            msg = messages.ambiguous_method(
                self.target, name, argument_types, len(candidates)
            )
            raise AmbiguousMemberError(msg)
        return candidates[0] if candidates else None

    def resolve(self, query: MemberQuery, *, allow_property: bool) -> ResolvedMember:
        """Resolve *query*, trying properties first when *allow_property*."""
        if allow_property:
            prop = self.find_property(query.name)
            if prop is not None:
                logger.debug(
                    "Resolved %s.%s to property", self.target.__qualname__, query.name
                )
                return ResolvedProperty(prop)
        method = self.find_method(
            query.name, query.argument_types, exact=query.exact_match
        )
        if method is None:
            logger.debug(
                "No member of %s matches %s%s",
                self.target.__qualname__,
                query.name,
                query.argument_types,
            )
            return NOT_FOUND
        logger.debug(
            "Resolved %s.%s to %s", self.target.__qualname__, query.name, method
        )
        return ResolvedMethod(method)


__all__ = [
    "NOT_FOUND",
    "MemberLocator",
    "MemberQuery",
    "ResolvedMember",
    "ResolvedMethod",
    "ResolvedProperty",
    "is_assignable",
    "parameters_match",
]

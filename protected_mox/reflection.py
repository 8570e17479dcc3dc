"""Member metadata read from a target class.

Python has no access modifiers, so accessibility follows the usual naming
convention: ``name`` is public, ``_name`` is protected and ``__name`` (stored
name-mangled as ``_Owner__name``) is private. Dunder names are public.

Overloaded methods are described by their :func:`typing.overload`
signatures. A method without registered overloads contributes its own
signature. Parameter and return types come from resolved type hints; an
unannotated parameter or return is treated as :class:`object`.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import functools
import inspect
import logging
import typing as t

logger = logging.getLogger(__name__)

_T = t.TypeVar("_T")

_EXCLUDED_METHODS = frozenset(
    {"__init__", "__new__", "__init_subclass__", "__class_getitem__"}
)
_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class Accessibility(enum.StrEnum):
    """Visibility level implied by a member name."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


_RANK = {
    Accessibility.PUBLIC: 0,
    Accessibility.PROTECTED: 1,
    Accessibility.PRIVATE: 2,
}


def accessibility_of(name: str) -> Accessibility:
    """Return the accessibility implied by *name*."""
    if name.startswith("__") and name.endswith("__"):
        return Accessibility.PUBLIC
    if name.startswith("__"):
        return Accessibility.PRIVATE
    if name.startswith("_"):
        return Accessibility.PROTECTED
    return Accessibility.PUBLIC


def _stricter(first: Accessibility, second: Accessibility) -> Accessibility:
    return first if _RANK[first] >= _RANK[second] else second


class Ref(t.Generic[_T]):
    """Mutable cell passed to parameters annotated ``Ref[T]``.

    Methods use it to hand values back to the caller, the way ``ref`` and
    ``out`` parameters do in languages that have them.
    """

    __slots__ = ("value",)

    def __init__(self, value: _T | None = None) -> None:
        self.value = value

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Ref({self.value!r})"


@dc.dataclass(frozen=True, slots=True)
class ByRef:
    """Type of a by-reference parameter or argument."""

    element_type: object


@dc.dataclass(frozen=True, slots=True)
class MethodInfo:
    """One callable signature of an instance method."""

    name: str
    attribute: str
    parameter_names: tuple[str, ...]
    parameter_types: tuple[object, ...]
    return_type: object
    accessibility: Accessibility
    declaring_type: type
    function: t.Callable[..., t.Any] = dc.field(compare=False, repr=False)

    @property
    def is_public(self) -> bool:
        """Return ``True`` when the method is publicly accessible."""
        return self.accessibility is Accessibility.PUBLIC

    @property
    def returns_void(self) -> bool:
        """Return ``True`` when the method is annotated to return ``None``."""
        return self.return_type is None or self.return_type is type(None)

    @property
    def arity(self) -> int:
        """Return the number of positional parameters after ``self``."""
        return len(self.parameter_types)


@dc.dataclass(frozen=True, slots=True)
class PropertyInfo:
    """A ``property`` declared on the target class."""

    name: str
    attribute: str
    property_type: object
    getter_accessibility: Accessibility | None
    setter_accessibility: Accessibility | None
    declaring_type: type
    descriptor: property = dc.field(compare=False, repr=False)

    @property
    def can_read(self) -> bool:
        """Return ``True`` when the property has a getter."""
        return self.getter_accessibility is not None

    @property
    def can_write(self) -> bool:
        """Return ``True`` when the property has a setter."""
        return self.setter_accessibility is not None

    @property
    def has_public_getter(self) -> bool:
        """Return ``True`` when the getter is publicly accessible."""
        return self.getter_accessibility is Accessibility.PUBLIC

    @property
    def has_public_setter(self) -> bool:
        """Return ``True`` when the setter is publicly accessible."""
        return self.setter_accessibility is Accessibility.PUBLIC


def _parameter_type(annotation: object) -> object:
    if annotation is inspect.Parameter.empty:
        return object
    if t.get_origin(annotation) is Ref:
        args = t.get_args(annotation)
        return ByRef(args[0] if args else object)
    return annotation


def _type_hints(func: t.Callable[..., t.Any]) -> dict[str, t.Any]:
    """Resolve annotations of *func*, falling back to none on failure."""
    try:
        return t.get_type_hints(func)
    except (NameError, TypeError) as exc:
        logger.warning(
            "Could not resolve annotations of %s; treating them as object: %s",
            getattr(func, "__qualname__", func),
            exc,
        )
        return {}


def _method_info(
    name: str,
    attribute: str,
    signature_func: t.Callable[..., t.Any],
    implementation: t.Callable[..., t.Any],
    owner: type,
) -> MethodInfo:
    hints = _type_hints(signature_func)
    parameters = [
        param
        for param in inspect.signature(signature_func).parameters.values()
        if param.kind in _POSITIONAL_KINDS
    ][1:]
    return MethodInfo(
        name=name,
        attribute=attribute,
        parameter_names=tuple(param.name for param in parameters),
        parameter_types=tuple(
            _parameter_type(hints.get(param.name, inspect.Parameter.empty))
            for param in parameters
        ),
        return_type=hints.get("return", object),
        accessibility=accessibility_of(name),
        declaring_type=owner,
        function=implementation,
    )


def _method_infos(
    name: str, attribute: str, func: t.Callable[..., t.Any], owner: type
) -> tuple[MethodInfo, ...]:
    signatures = t.get_overloads(func) or [func]
    return tuple(
        _method_info(name, attribute, signature, func, owner)
        for signature in signatures
    )


def _accessor_accessibility(
    name: str, accessor: t.Callable[..., t.Any] | None
) -> Accessibility | None:
    if accessor is None:
        return None
    accessor_name = getattr(accessor, "__name__", "")
    return _stricter(accessibility_of(name), accessibility_of(accessor_name))


def _property_type(prop: property) -> object:
    if prop.fget is not None:
        hints = _type_hints(prop.fget)
        if "return" in hints:
            return hints["return"]
    if prop.fset is not None:
        hints = _type_hints(prop.fset)
        values = [hint for key, hint in hints.items() if key != "return"]
        if values:
            return values[-1]
    return object


def _property_info(
    name: str, attribute: str, prop: property, owner: type
) -> PropertyInfo:
    return PropertyInfo(
        name=name,
        attribute=attribute,
        property_type=_property_type(prop),
        getter_accessibility=_accessor_accessibility(name, prop.fget),
        setter_accessibility=_accessor_accessibility(name, prop.fset),
        declaring_type=owner,
        descriptor=prop,
    )


def _demangle(owner: type, attribute: str) -> str | None:
    """Return ``__name`` for a mangled ``_Owner__name`` attribute."""
    prefix = f"_{owner.__name__.lstrip('_')}__"
    if attribute.startswith(prefix) and not attribute.endswith("__"):
        return attribute[len(prefix) - 2 :]
    return None


class MemberRegistry:
    """Methods and properties of one class, indexed by name.

    The registry walks the MRO (without :class:`object`) once. The most
    derived definition of an attribute hides any base definition. Private
    members are reachable by both their source name and mangled attribute.
    """

    def __init__(self, target: type) -> None:
        self.target = target
        self._methods: dict[str, tuple[MethodInfo, ...]] = {}
        self._properties: dict[str, PropertyInfo] = {}
        seen: set[str] = set()
        for owner in target.__mro__:
            if owner is object:
                continue
            for attribute, value in vars(owner).items():
                if attribute in seen:
                    continue
                seen.add(attribute)
                self._register(owner, attribute, value)
        logger.debug(
            "Indexed %s: %d method name(s), %d property name(s)",
            target.__qualname__,
            len(self._methods),
            len(self._properties),
        )

    def _register(self, owner: type, attribute: str, value: object) -> None:
        name = _demangle(owner, attribute) or attribute
        if isinstance(value, property):
            info = _property_info(name, attribute, value, owner)
            self._properties.setdefault(name, info)
            self._properties.setdefault(attribute, info)
        elif inspect.isfunction(value) and attribute not in _EXCLUDED_METHODS:
            infos = _method_infos(name, attribute, value, owner)
            self._methods.setdefault(name, infos)
            self._methods.setdefault(attribute, infos)

    def find_methods(self, name: str) -> tuple[MethodInfo, ...]:
        """Return every signature registered under *name*."""
        return self._methods.get(name, ())

    def find_property(self, name: str) -> PropertyInfo | None:
        """Return the property registered under *name*, if any."""
        return self._properties.get(name)

    def methods(self) -> dict[str, tuple[MethodInfo, ...]]:
        """Return signatures keyed by class attribute."""
        return {infos[0].attribute: infos for infos in self._methods.values()}

    def properties(self) -> dict[str, PropertyInfo]:
        """Return properties keyed by class attribute."""
        return {info.attribute: info for info in self._properties.values()}


@functools.cache
def registry_for(target: type) -> MemberRegistry:
    """Return the cached :class:`MemberRegistry` for *target*."""
    return MemberRegistry(target)


__all__ = [
    "Accessibility",
    "ByRef",
    "MemberRegistry",
    "MethodInfo",
    "PropertyInfo",
    "Ref",
    "accessibility_of",
    "registry_for",
]

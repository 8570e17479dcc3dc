"""Record a member access written as a lambda over a stand-in object."""

from __future__ import annotations

import typing as t

from .arguments import classify_arguments
from .descriptors import method_call, property_read, property_write
from .errors import MemberMissingError
from .guards import ensure_method_present
from .locator import MemberLocator
from .messages import type_name

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor

_STATE = "_protected_mox_recorder_state"


class _RecorderState:
    __slots__ = ("descriptors", "locator", "public_only")

    def __init__(self, target: type, *, public_only: bool) -> None:
        self.locator = MemberLocator(target)
        self.public_only = public_only
        self.descriptors: list[CallDescriptor] = []

    @property
    def target(self) -> type:
        return self.locator.target

    def check_public(self, name: str, *, public: bool) -> None:
        if self.public_only and not public:
            msg = (
                f"Type {type_name(self.target)} does not have a public member "
                f"named {name!r}; configure non-public members through "
                "Mock.protected()."
            )
            raise MemberMissingError(msg)

    def missing(self, name: str) -> MemberMissingError:
        msg = f"Type {type_name(self.target)} has no member named {name!r}"
        return MemberMissingError(msg)


class _Recorder:
    """Stand-in for the mocked object that records the member it touches."""

    __slots__ = (_STATE,)

    def __init__(self, target: type, *, public_only: bool) -> None:
        state = _RecorderState(target, public_only=public_only)
        object.__setattr__(self, _STATE, state)

    def __getattr__(self, name: str) -> object:
        state: _RecorderState = object.__getattribute__(self, _STATE)
        prop = state.locator.find_property(name)
        if prop is not None:
            state.check_public(name, public=prop.has_public_getter)
            state.descriptors.append(property_read(prop))
            return None

        def call(*args: object) -> None:
            specs = classify_arguments(args)
            method = state.locator.find_method(name, [s.implied_type for s in specs])
            method = ensure_method_present(state.target, name, method, specs)
            state.check_public(name, public=method.is_public)
            state.descriptors.append(method_call(method, args))

        if not state.locator.has_method(name):
            raise state.missing(name)
        return call

    def __setattr__(self, name: str, value: object) -> None:
        state: _RecorderState = object.__getattribute__(self, _STATE)
        prop = state.locator.find_property(name)
        if prop is None:
            state.check_public(name, public=False)
            raise state.missing(name)
        state.check_public(name, public=prop.has_public_setter)
        state.descriptors.append(property_write(prop, value))


def record(
    target: type,
    access: t.Callable[[t.Any], object],
    *,
    public_only: bool = True,
) -> CallDescriptor:
    """Return the descriptor of the member access performed by *access*.

    Only public members may be touched unless *public_only* is false.

    >>> record(Service, lambda s: s.run(ItExpr.is_any(int)))  # doctest: +SKIP
    """
    recorder = _Recorder(target, public_only=public_only)
    access(recorder)
    state: _RecorderState = object.__getattribute__(recorder, _STATE)
    if len(state.descriptors) != 1:
        msg = (
            f"Expected exactly one member access on {type_name(target)}, "
            f"recorded {len(state.descriptors)}"
        )
        raise ValueError(msg)
    return state.descriptors[0]


__all__ = ["record"]

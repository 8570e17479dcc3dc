"""Configure non-public members through a class that mirrors them.

An analog is any class declaring members with the names and signatures of
the mocked class's non-public members. Lambdas written against the analog
are recorded, then each member is mapped onto the mocked class::

    class FormatterHooks:
        def _format(self, n: int) -> str: ...

    hooks = mock.protected().as_(FormatterHooks)
    hooks.setup(lambda h: h._format(5)).returns("five")
    hooks.verify(lambda h: h._format(ItExpr.is_any(int)), Times.once())

Methods map to the signature declaring exactly the analog's parameter types;
properties map by name.
"""

from __future__ import annotations

import logging
import typing as t

from . import guards, messages
from .descriptors import Invocation, PropertyRead, PropertyWrite
from .errors import MemberMissingError
from .locator import MemberLocator
from .recorder import record
from .times import Times

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor
    from .mock import Mock
    from .reflection import MethodInfo, PropertyInfo
    from .setups import SequenceSetup, Setup

logger = logging.getLogger(__name__)

T = t.TypeVar("T")
A = t.TypeVar("A")


class ProtectedAsMock(t.Generic[T, A]):
    """Lambda-based access to non-public members, written over ``analog``."""

    def __init__(self, mock: Mock[T], analog: type[A]) -> None:
        self._mock = mock
        self.analog = analog
        self._locator = MemberLocator(mock.target)

    @property
    def target(self) -> type[T]:
        """Return the mocked class."""
        return self._mock.target

    def _matching_method(self, analog_method: MethodInfo) -> MethodInfo:
        method = self._locator.find_method(
            analog_method.name, analog_method.parameter_types, exact=True
        )
        if method is None:
            msg = messages.no_matching_member(
                self.target, self.analog, analog_method.name
            )
            raise MemberMissingError(msg)
        return method

    def _matching_property(self, analog_property: PropertyInfo) -> PropertyInfo:
        prop = self._locator.find_property(analog_property.name)
        if prop is None:
            msg = messages.no_matching_member(
                self.target, self.analog, analog_property.name
            )
            raise MemberMissingError(msg)
        return prop

    def _translate(self, descriptor: CallDescriptor) -> CallDescriptor:
        """Rebuild *descriptor* over the matching member of the mocked class."""
        if isinstance(descriptor, Invocation):
            method = self._matching_method(descriptor.member)
            guards.ensure_method_not_public(self.target, method)
            translated: CallDescriptor = Invocation(method, descriptor.arguments)
        elif isinstance(descriptor, PropertyRead):
            prop = self._matching_property(descriptor.member)
            guards.ensure_getter_not_public(self.target, prop)
            guards.ensure_readable(self.target, prop)
            translated = PropertyRead(prop)
        else:
            prop = self._matching_property(descriptor.member)
            guards.ensure_setter_not_public(self.target, prop)
            guards.ensure_writable(self.target, prop)
            translated = PropertyWrite(prop, descriptor.value)
        logger.debug(
            "Mapped %s.%s onto %s",
            self.analog.__qualname__,
            descriptor.member.name,
            self.target.__qualname__,
        )
        return translated

    def _record(self, access: t.Callable[[A], object]) -> CallDescriptor:
        return self._translate(record(self.analog, access, public_only=False))

    def setup(
        self, access: t.Callable[[A], object], *, result_type: object | None = None
    ) -> Setup:
        """Set up the member access *access* performs on the analog."""
        descriptor = self._record(access)
        if result_type is not None and isinstance(descriptor, Invocation):
            guards.ensure_returns_value(descriptor.member)
        return self._mock.add_setup(descriptor, result_type=result_type)

    def setup_sequence(
        self, access: t.Callable[[A], object], *, result_type: object | None = None
    ) -> SequenceSetup:
        """Script successive results of the access *access* performs."""
        descriptor = self._record(access)
        if result_type is not None and isinstance(descriptor, Invocation):
            guards.ensure_returns_value(descriptor.member)
        return self._mock.add_sequence(descriptor, result_type=result_type)

    def verify(
        self,
        access: t.Callable[[A], object],
        times: Times | int | None = None,
    ) -> None:
        """Assert the access *access* performs happened *times* times.

        *times* defaults to :meth:`Times.at_least_once`.
        """
        expected = Times.at_least_once() if times is None else times
        self._mock.verify_descriptor(self._record(access), expected)


__all__ = ["ProtectedAsMock"]

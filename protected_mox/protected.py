"""Set up and verify non-public members by name.

Non-public members cannot be written in the lambdas accepted by
:meth:`Mock.setup <protected_mox.mock.Mock.setup>`, so this facade resolves a
member name plus an argument list to the same call descriptor and forwards it
to the mock::

    mock.protected().setup("_format", 5, result_type=str).returns("five")
    mock.protected().verify("_format", Times.once(), ItExpr.is_any(int))
"""

from __future__ import annotations

import logging
import typing as t

from . import guards
from .analog import ProtectedAsMock
from .arguments import classify_arguments
from .descriptors import UNSET, method_call, property_read, property_write
from .locator import MemberLocator, MemberQuery, ResolvedMethod, ResolvedProperty
from .reflection import PropertyInfo
from .times import Times

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .mock import Mock
    from .reflection import MethodInfo
    from .setups import SequenceSetup, Setup

logger = logging.getLogger(__name__)

T = t.TypeVar("T")
A = t.TypeVar("A")


class ProtectedMock(t.Generic[T]):
    """By-name access to the protected members of a :class:`Mock`."""

    def __init__(self, mock: Mock[T]) -> None:
        self._mock = mock
        self._locator = MemberLocator(mock.target)

    @property
    def target(self) -> type[T]:
        """Return the mocked class."""
        return self._mock.target

    def as_(self, analog: type[A]) -> ProtectedAsMock[T, A]:
        """Return lambda-based access to non-public members through *analog*.

        *analog* declares members with the same names and signatures as the
        non-public members of the mocked class, so they can be written as
        ``lambda a: a._format(5)`` instead of by name.
        """
        return ProtectedAsMock(self._mock, analog)

    # ------------------------------------------------------------------
    # Resolution helpers
    # ------------------------------------------------------------------
    def _query(
        self, name: str, args: tuple[object, ...], *, exact: bool
    ) -> MemberQuery:
        return MemberQuery(name, classify_arguments(args), exact)

    def _resolve(
        self, query: MemberQuery, *, allow_property: bool
    ) -> MethodInfo | PropertyInfo | None:
        """Resolve *query*; a property found first must have a non-public getter."""
        resolved = self._locator.resolve(query, allow_property=allow_property)
        if isinstance(resolved, ResolvedProperty):
            guards.ensure_getter_not_public(self.target, resolved.property)
            guards.ensure_readable(self.target, resolved.property)
            return resolved.property
        if isinstance(resolved, ResolvedMethod):
            return resolved.method
        return None

    def _readable_property(
        self, name: str, property_type: object | None = None
    ) -> PropertyInfo:
        prop = guards.ensure_member_present(
            self.target, name, self._locator.find_property(name)
        )
        guards.ensure_getter_not_public(self.target, prop)
        guards.ensure_readable(self.target, prop)
        guards.ensure_property_type(self.target, prop, property_type)
        return prop

    def _writable_property(self, name: str) -> PropertyInfo:
        prop = guards.ensure_member_present(
            self.target, name, self._locator.find_property(name)
        )
        guards.ensure_setter_not_public(self.target, prop)
        guards.ensure_writable(self.target, prop)
        return prop

    def _log(self, operation: str, query: MemberQuery, member: object) -> None:
        logger.debug(
            "%s(%r) on %s with %d argument(s) resolved to %s",
            operation,
            query.name,
            self.target.__qualname__,
            len(query.argument_specs),
            member,
        )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def setup(
        self,
        method_name: str,
        *args: object,
        result_type: object | None = None,
        exact_parameter_match: bool = False,
    ) -> Setup:
        """Set up a call of the non-public method *method_name*.

        With *result_type*, a non-public property of that name takes
        precedence, the method must return a value and ``returns()`` is
        checked against *result_type*.
        """
        guards.ensure_name(method_name, "method_name")
        query = self._query(method_name, args, exact=exact_parameter_match)
        member = self._resolve(query, allow_property=result_type is not None)
        self._log("setup", query, member)
        if isinstance(member, PropertyInfo):
            return self._mock.add_setup(property_read(member), result_type=result_type)
        method = guards.ensure_method_present(
            self.target, method_name, member, query.argument_specs
        )
        if result_type is not None:
            guards.ensure_returns_value(method)
        guards.ensure_method_not_public(self.target, method)
        return self._mock.add_setup(method_call(method, args), result_type=result_type)

    def setup_get(
        self, property_name: str, property_type: object | None = None
    ) -> Setup:
        """Set up reads of the non-public property *property_name*."""
        guards.ensure_name(property_name, "property_name")
        prop = self._readable_property(property_name, property_type)
        return self._mock.add_setup(property_read(prop), result_type=property_type)

    def setup_set(
        self,
        property_name: str,
        value: object = UNSET,
        property_type: object | None = None,
    ) -> Setup:
        """Set up writes of *value* (any value by default) to *property_name*."""
        guards.ensure_name(property_name, "property_name")
        prop = self._writable_property(property_name)
        return self._mock.add_setup(property_write(prop, value, property_type))

    def setup_sequence(
        self,
        method_or_property_name: str,
        *args: object,
        result_type: object | None = None,
        exact_parameter_match: bool = False,
    ) -> SequenceSetup:
        """Script successive results of a non-public method or property.

        Repeated calls for the same member and arguments extend one script.
        """
        guards.ensure_name(method_or_property_name, "method_or_property_name")
        query = self._query(method_or_property_name, args, exact=exact_parameter_match)
        member = self._resolve(query, allow_property=result_type is not None)
        self._log("setup_sequence", query, member)
        if isinstance(member, PropertyInfo):
            return self._mock.add_sequence(
                property_read(member), result_type=result_type
            )
        method = guards.ensure_member_present(
            self.target, method_or_property_name, member
        )
        if result_type is not None:
            guards.ensure_returns_value(method)
        guards.ensure_method_not_public(self.target, method)
        return self._mock.add_sequence(
            method_call(method, args), result_type=result_type
        )

    # ------------------------------------------------------------------
    # Verify
    # ------------------------------------------------------------------
    def verify(
        self,
        method_name: str,
        times: Times | int,
        *args: object,
        result_type: object | None = None,
        exact_parameter_match: bool = False,
    ) -> None:
        """Assert the non-public method *method_name* was called *times* times.

        With *result_type*, a non-public property of that name takes
        precedence and its reads are counted instead.
        """
        guards.ensure_name(method_name, "method_name")
        expected = Times.coerce(times)
        query = self._query(method_name, args, exact=exact_parameter_match)
        member = self._resolve(query, allow_property=result_type is not None)
        self._log("verify", query, member)
        if isinstance(member, PropertyInfo):
            self._mock.verify_descriptor(property_read(member), expected)
            return
        method = guards.ensure_method_present(
            self.target, method_name, member, query.argument_specs
        )
        guards.ensure_method_not_public(self.target, method)
        self._mock.verify_descriptor(method_call(method, args), expected)

    def verify_get(
        self,
        property_name: str,
        times: Times | int,
        property_type: object | None = None,
    ) -> None:
        """Assert the non-public property *property_name* was read *times* times."""
        guards.ensure_name(property_name, "property_name")
        expected = Times.coerce(times)
        prop = self._readable_property(property_name, property_type)
        self._mock.verify_descriptor(property_read(prop), expected)

    def verify_set(
        self,
        property_name: str,
        times: Times | int,
        value: object = UNSET,
        property_type: object | None = None,
    ) -> None:
        """Assert *value* (any value by default) was assigned *times* times."""
        guards.ensure_name(property_name, "property_name")
        expected = Times.coerce(times)
        prop = self._writable_property(property_name)
        self._mock.verify_descriptor(
            property_write(prop, value, property_type), expected
        )


__all__ = ["ProtectedMock"]

"""Mock engine: intercepts member access and stores setups and calls."""

from __future__ import annotations

import enum
import functools
import inspect
import logging
import typing as t
from collections import deque

from .descriptors import CallKind, CallRecord
from .errors import UnexpectedCallError
from .protected import ProtectedMock
from .recorder import record
from .reflection import registry_for
from .setups import SequenceSetup, Setup
from .times import Times
from .verifiers import CountVerifier, SetupVerifier

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor
    from .reflection import MethodInfo, PropertyInfo

logger = logging.getLogger(__name__)

T = t.TypeVar("T")

_SCALAR_DEFAULTS: dict[object, object] = {
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
    bool: False,
}
_EMPTY_CONTAINERS = (list, dict, set, frozenset, tuple)


class MockBehavior(enum.StrEnum):
    """How a mock answers calls that no setup handles."""

    LOOSE = "LOOSE"
    STRICT = "STRICT"


def default_value(return_type: object) -> object:
    """Return the value an unconfigured member yields for *return_type*."""
    origin = t.get_origin(return_type) or return_type
    if origin in _SCALAR_DEFAULTS:
        return _SCALAR_DEFAULTS[origin]
    if origin in _EMPTY_CONTAINERS:
        return t.cast("type", origin)()
    return None


class Mock(t.Generic[T]):
    """Mock of ``target`` with intercepted methods and properties."""

    def __init__(
        self,
        target: type[T],
        *,
        behavior: MockBehavior = MockBehavior.LOOSE,
        call_base: bool = False,
        constructor_args: tuple[object, ...] | None = None,
        max_journal_entries: int | None = None,
    ) -> None:
        """Create a mock of *target*.

        Parameters
        ----------
        target:
            Class to mock. Every method and property it declares or inherits
            (apart from those of :class:`object`) is intercepted.
        behavior:
            :attr:`MockBehavior.STRICT` raises :class:`UnexpectedCallError`
            for calls without a setup; :attr:`MockBehavior.LOOSE` (the
            default) answers them with a default value.
        call_base:
            When ``True``, calls without a setup run the real implementation.
        constructor_args:
            Arguments for ``target.__init__``. When omitted the mocked object
            is created without running the constructor.
        max_journal_entries:
            Maximum number of calls retained in :attr:`journal`. ``None``
            keeps every call.
        """
        if max_journal_entries is not None and max_journal_entries <= 0:
            msg = "max_journal_entries must be positive"
            raise ValueError(msg)
        self.target = target
        self.behavior = behavior
        self.call_base = call_base
        self._constructor_args = constructor_args
        self._setups: list[Setup | SequenceSetup] = []
        self._object: T | None = None
        self.journal: deque[CallRecord] = deque(maxlen=max_journal_entries)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Mock({self.target.__qualname__}, behavior={self.behavior})"

    # ------------------------------------------------------------------
    # Mocked object
    # ------------------------------------------------------------------
    @property
    def object(self) -> T:
        """Return the mocked instance, creating it on first access."""
        if self._object is None:
            proxy = self._build_proxy()
            if self._constructor_args is None:
                self._object = t.cast("T", object.__new__(proxy))
            else:
                self._object = t.cast("T", proxy(*self._constructor_args))
        return self._object

    def protected(self) -> ProtectedMock[T]:
        """Return the by-name API for non-public members."""
        return ProtectedMock(self)

    def _build_proxy(self) -> type:
        registry = registry_for(self.target)
        namespace: dict[str, object] = {
            "__module__": self.target.__module__,
            "__qualname__": f"{self.target.__qualname__}Mock",
        }
        for attribute, infos in registry.methods().items():
            namespace[attribute] = self._method_interceptor(infos[0])
        for attribute, prop in registry.properties().items():
            namespace[attribute] = self._property_interceptor(prop)
        proxy = type(f"{self.target.__name__}Mock", (self.target,), namespace)
        proxy.__abstractmethods__ = frozenset()
        return proxy

    def _method_interceptor(self, method: MethodInfo) -> t.Callable[..., object]:
        mock = self
        function = method.function
        signature = inspect.signature(function)

        @functools.wraps(function)
        def intercept(instance: object, *args: object, **kwargs: object) -> object:
            bound = signature.bind(instance, *args, **kwargs)
            bound.apply_defaults()
            call = CallRecord(
                CallKind.METHOD, method.attribute, method.name, tuple(bound.args[1:])
            )
            return mock._dispatch(
                call,
                base=lambda: function(instance, *args, **kwargs),
                return_type=method.return_type,
            )

        return intercept

    def _property_interceptor(self, prop: PropertyInfo) -> property:
        mock = self
        real = prop.descriptor
        fget = fset = None
        if real.fget is not None:
            getter = real.fget

            def fget(instance: object) -> object:
                call = CallRecord(CallKind.GET, prop.attribute, prop.name)
                return mock._dispatch(
                    call,
                    base=lambda: getter(instance),
                    return_type=prop.property_type,
                )

        if real.fset is not None:
            setter = real.fset

            def fset(instance: object, value: object) -> None:
                call = CallRecord(CallKind.SET, prop.attribute, prop.name, (value,))
                mock._dispatch(
                    call,
                    base=lambda: setter(instance, value),
                    return_type=None,
                )

        return property(fget, fset, real.fdel, real.__doc__)

    def _dispatch(
        self,
        call: CallRecord,
        *,
        base: t.Callable[[], object],
        return_type: object,
    ) -> object:
        """Record *call* and answer it from the most recent matching setup."""
        self.journal.append(call)
        for setup in reversed(self._setups):
            if setup.matches(call):
                logger.debug("Call %s handled by %r", call, setup)
                return setup.execute(
                    call, base=base, default=lambda: default_value(return_type)
                )
        logger.debug("Call %s on %r matched no setup", call, self)
        if self.behavior is MockBehavior.STRICT:
            msg = (
                f"{self.target.__qualname__} mock with strict behavior received "
                f"{call}, which no setup handles"
            )
            raise UnexpectedCallError(msg)
        if self.call_base:
            return base()
        return default_value(return_type)

    # ------------------------------------------------------------------
    # Descriptor-based engine API
    # ------------------------------------------------------------------
    def add_setup(
        self, descriptor: CallDescriptor, *, result_type: object | None = None
    ) -> Setup:
        """Register and return a :class:`Setup` for *descriptor*."""
        setup = Setup(descriptor, result_type=result_type)
        self._setups.append(setup)
        logger.debug("Added setup %s to %r", descriptor, self)
        return setup

    def add_sequence(
        self, descriptor: CallDescriptor, *, result_type: object | None = None
    ) -> SequenceSetup:
        """Return the :class:`SequenceSetup` for *descriptor*.

        An existing sequence on an equal descriptor is reused, and moved
        ahead of later setups, so new steps extend its script.
        """
        for index, setup in enumerate(self._setups):
            if isinstance(setup, SequenceSetup) and setup.descriptor == descriptor:
                del self._setups[index]
                self._setups.append(setup)
                if result_type is not None:
                    setup.result_type = result_type
                logger.debug("Extending sequence %s on %r", descriptor, self)
                return setup
        sequence = SequenceSetup(descriptor, result_type=result_type)
        self._setups.append(sequence)
        logger.debug("Added sequence %s to %r", descriptor, self)
        return sequence

    def verify_descriptor(self, descriptor: CallDescriptor, times: Times | int) -> None:
        """Assert *descriptor* matched the journal *times* times."""
        count = CountVerifier().verify(descriptor, Times.coerce(times), self.journal)
        logger.debug("Verified %s on %r: %d call(s)", descriptor, self, count)

    # ------------------------------------------------------------------
    # Strongly-typed API for public members
    # ------------------------------------------------------------------
    def setup(
        self, access: t.Callable[[T], object], *, result_type: object | None = None
    ) -> Setup:
        """Set up the public member access performed by *access*.

        ``mock.setup(lambda m: m.run(5))`` configures a method call,
        ``mock.setup(lambda m: m.level)`` a property read and
        ``mock.setup(lambda m: setattr(m, "level", 3))`` a property write.
        """
        return self.add_setup(record(self.target, access), result_type=result_type)

    def setup_sequence(
        self, access: t.Callable[[T], object], *, result_type: object | None = None
    ) -> SequenceSetup:
        """Set up successive results for the access performed by *access*."""
        return self.add_sequence(record(self.target, access), result_type=result_type)

    def verify(
        self,
        access: t.Callable[[T], object],
        times: Times | int | None = None,
    ) -> None:
        """Assert the access performed by *access* happened *times* times.

        *times* defaults to :meth:`Times.at_least_once`.
        """
        expected = Times.at_least_once() if times is None else times
        self.verify_descriptor(record(self.target, access), expected)

    def verify_all(self, *, only_verifiable: bool = False) -> None:
        """Assert every setup (or every verifiable one) matched a call."""
        SetupVerifier().verify(
            self._setups, self.journal, only_verifiable=only_verifiable
        )

    @property
    def setups(self) -> tuple[Setup | SequenceSetup, ...]:
        """Return the registered setups, oldest first."""
        return tuple(self._setups)

    def invocations(self, name: str | None = None) -> list[CallRecord]:
        """Return recorded method calls, optionally only those of *name*."""
        return [
            call
            for call in self.journal
            if call.kind is CallKind.METHOD and (name is None or call.name == name)
        ]

    def reset(self) -> None:
        """Forget every setup and recorded call."""
        self._setups.clear()
        self.journal.clear()


class MockRepository:
    """Create mocks with shared defaults and verify them together."""

    def __init__(
        self,
        *,
        behavior: MockBehavior = MockBehavior.LOOSE,
        call_base: bool = False,
    ) -> None:
        self.behavior = behavior
        self.call_base = call_base
        self._mocks: list[Mock[t.Any]] = []

    def create(self, target: type[T], **kwargs: t.Any) -> Mock[T]:  # noqa: ANN401
        """Create a :class:`Mock` of *target* using the repository defaults."""
        kwargs.setdefault("behavior", self.behavior)
        kwargs.setdefault("call_base", self.call_base)
        mock = Mock(target, **kwargs)
        self._mocks.append(mock)
        return mock

    @property
    def mocks(self) -> tuple[Mock[t.Any], ...]:
        """Return every mock created so far."""
        return tuple(self._mocks)

    def verify(self) -> None:
        """Verify the verifiable setups of every mock."""
        for mock in self._mocks:
            mock.verify_all(only_verifiable=True)

    def verify_all(self) -> None:
        """Verify every setup of every mock."""
        for mock in self._mocks:
            mock.verify_all()


__all__ = [
    "Mock",
    "MockBehavior",
    "MockRepository",
    "default_value",
]

"""Setup handles returned by the mock engine."""

from __future__ import annotations

import typing as t
from collections import deque

from .comparators import is_instance
from .descriptors import Invocation, PropertyWrite
from .errors import CantSetReturnValueForVoidError
from .messages import type_name

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor, CallRecord

_Action = t.Callable[[tuple[object, ...]], object]


class _BaseSetup:
    """State shared by all setup handles."""

    def __init__(
        self, descriptor: CallDescriptor, *, result_type: object | None = None
    ) -> None:
        self.descriptor = descriptor
        self.result_type = result_type
        self.match_count = 0
        self.is_verifiable = False

    def matches(self, record: CallRecord) -> bool:
        """Return ``True`` if this setup handles *record*."""
        return self.descriptor.matches(record)

    def verifiable(self) -> t.Self:
        """Include this setup in :meth:`Mock.verify_all` checks."""
        self.is_verifiable = True
        return self

    def _ensure_returnable(self) -> None:
        if isinstance(self.descriptor, PropertyWrite):
            msg = f"Setter setup {self.descriptor} cannot return a value"
            raise TypeError(msg)
        if (
            isinstance(self.descriptor, Invocation)
            and self.descriptor.member.returns_void
        ):
            raise CantSetReturnValueForVoidError(
                CantSetReturnValueForVoidError.DEFAULT_MESSAGE
            )

    def _check_result(self, value: object) -> None:
        self._ensure_returnable()
        if self.result_type is not None and not is_instance(value, self.result_type):
            msg = (
                f"{value!r} is not a valid result of type "
                f"{type_name(self.result_type)} for {self.descriptor}"
            )
            raise TypeError(msg)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"{type(self).__name__}({self.descriptor})"


class Setup(_BaseSetup):
    """Behaviour of a single configured member access."""

    def __init__(
        self, descriptor: CallDescriptor, *, result_type: object | None = None
    ) -> None:
        super().__init__(descriptor, result_type=result_type)
        self._action: _Action | None = None
        self._callbacks: list[t.Callable[..., object]] = []
        self._call_base = False

    def returns(self, value: object) -> Setup:
        """Return *value* from every matching call."""
        self._check_result(value)
        self._action = lambda _args: value
        return self

    def returns_using(self, func: t.Callable[..., object]) -> Setup:
        """Return ``func(*args)`` computed from each matching call."""
        self._ensure_returnable()
        self._action = lambda args: func(*args)
        return self

    def raises(self, exc: BaseException | type[BaseException]) -> Setup:
        """Raise *exc* from every matching call."""

        def _raise(_args: tuple[object, ...]) -> t.NoReturn:
            raise exc

        self._action = _raise
        return self

    def callback(self, func: t.Callable[..., object]) -> Setup:
        """Invoke ``func(*args)`` on every matching call, before any result."""
        self._callbacks.append(func)
        return self

    def calls_base(self) -> Setup:
        """Delegate matching calls to the real implementation."""
        self._call_base = True
        return self

    def execute(
        self,
        record: CallRecord,
        *,
        base: t.Callable[[], object],
        default: t.Callable[[], object],
    ) -> object:
        """Run the configured behaviour for *record*."""
        self.match_count += 1
        for func in self._callbacks:
            func(*record.args)
        if self._action is not None:
            return self._action(record.args)
        if self._call_base:
            return base()
        return default()


class SequenceSetup(_BaseSetup):
    """Successive behaviours consumed one per matching call.

    The engine hands out the same sequence for equal descriptors, so each
    configuration appends to the script instead of replacing it.
    """

    def __init__(
        self, descriptor: CallDescriptor, *, result_type: object | None = None
    ) -> None:
        super().__init__(descriptor, result_type=result_type)
        self._steps: deque[_Action] = deque()

    def returns(self, value: object) -> SequenceSetup:
        """Append a step returning *value*."""
        self._check_result(value)
        self._steps.append(lambda _args: value)
        return self

    def raises(self, exc: BaseException | type[BaseException]) -> SequenceSetup:
        """Append a step raising *exc*."""

        def _raise(_args: tuple[object, ...]) -> t.NoReturn:
            raise exc

        self._steps.append(_raise)
        return self

    def passes(self) -> SequenceSetup:
        """Append a step that does nothing and returns ``None``."""
        self._steps.append(lambda _args: None)
        return self

    @property
    def remaining(self) -> int:
        """Return the number of unconsumed steps."""
        return len(self._steps)

    def execute(
        self,
        record: CallRecord,
        *,
        base: t.Callable[[], object],
        default: t.Callable[[], object],
    ) -> object:
        """Consume the next step, or return the default once exhausted."""
        del base
        self.match_count += 1
        if not self._steps:
            return default()
        return self._steps.popleft()(record.args)


__all__ = ["SequenceSetup", "Setup"]

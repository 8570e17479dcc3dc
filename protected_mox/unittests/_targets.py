"""Classes mocked by the unit tests.

They live at module level so their annotations resolve through
:func:`typing.get_type_hints`.
"""

from __future__ import annotations

import abc
import dataclasses as dc
import typing as t

from protected_mox import Ref


class Formatter:
    """Formats numbers through a protected hook."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self._stored_level = 0

    def format(self, n: int) -> str:
        return self._format(n)

    def _format(self, n: int) -> str:
        return f"{self.prefix}{n}"

    def _reset(self) -> None:
        self._stored_level = 0

    def _describe(self, value, width: int = 10) -> str:  # noqa: ANN001
        return f"{value!s:>{width}}"

    @property
    def _count(self) -> int:
        return 3

    @property
    def _level(self) -> int:
        return self._stored_level

    @_level.setter
    def _level(self, value: int) -> None:
        self._stored_level = value

    @property
    def level(self) -> int:
        return self._stored_level

    @level.setter
    def level(self, value: int) -> None:
        self._stored_level = value

    def _set_volume(self, value: int) -> None:
        self._stored_level = value

    volume = property(lambda self: 1, _set_volume)

    def _set_secret(self, value: str) -> None:
        self.prefix = value

    _secret = property(None, _set_secret)

    def checksum(self, data: bytes) -> int:
        return self.__checksum(data)

    def __checksum(self, data: bytes) -> int:
        return len(data)

    @t.overload
    def _scale(self, value: int) -> int: ...

    @t.overload
    def _scale(self, value: float) -> float: ...

    def _scale(self, value: float) -> float:
        return value * 2

    @t.overload
    def _render(self, value: int) -> str: ...

    @t.overload
    def _render(self, value: str) -> str: ...

    def _render(self, value: int | str) -> str:
        return str(value)

    @t.overload
    def _measure(self, value: int) -> int: ...

    @t.overload
    def _measure(self, value: object) -> str: ...

    def _measure(self, value: object) -> int | str:
        return value if isinstance(value, int) else str(value)

    def _try_parse(self, text: str, result: Ref[int]) -> bool:
        if not text.isdigit():
            return False
        result.value = int(text)
        return True

    def _lookup(self, key: str | None) -> list[str]:
        return [] if key is None else [key]

    def _ratio(self, value: float) -> float:
        return value / 2


class StrictFormatter(Formatter):
    """Subclass overriding a protected hook."""

    def _format(self, n: int) -> str:
        return f"strict:{n}"


class Store(abc.ABC):
    """Abstract base whose hooks are all mocked."""

    @abc.abstractmethod
    def _load(self, key: str) -> bytes: ...

    def fetch(self, key: str) -> bytes:
        return self._load(key)


@dc.dataclass
class Settings:
    """Plain object whose members feed ``ItExpr.value_of``."""

    port: int = 8080
    host: str = "localhost"

    @property
    def width(self) -> int:
        return 10

    def describe(self) -> str:
        return f"{self.host}:{self.port}"


class FormatterHooks:
    """Mirror of :class:`Formatter`'s non-public members, used as an analog."""

    def format(self, n: int) -> str: ...

    def _format(self, n: int) -> str: ...

    def _reset(self) -> None: ...

    def _scale(self, value: float) -> float: ...

    def _describe(self, value: int) -> str: ...

    def _unknown(self) -> None: ...

    @property
    def _count(self) -> int: ...

    @property
    def _level(self) -> int: ...

    @_level.setter
    def _level(self, value: int) -> None: ...

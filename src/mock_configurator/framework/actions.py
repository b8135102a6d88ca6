"""Return actions attached to expectations.

Each action turns one claimed call into a result: a fixed value, the result
of a callback, a raised exception, the next element of a sequence, or a
lookup in an argument map.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any


class BaseReturnAction(ABC):
    """Abstract base class for return actions."""

    @abstractmethod
    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        """Produce the result for a call with *args* and *kwargs*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ReturnValue(BaseReturnAction):
    """Always return ``value``."""

    def __init__(self, value: Any) -> None:
        self.value = value

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"ReturnValue({self.value!r})"


class ReturnCallback(BaseReturnAction):
    """Call ``callback`` with the call's arguments and return its result."""

    def __init__(self, callback: Callable[..., Any]) -> None:
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        self.callback = callback

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        return self.callback(*args, **kwargs)

    def __repr__(self) -> str:
        return f"ReturnCallback({self.callback!r})"


class RaiseException(BaseReturnAction):
    """Raise the same ``exception`` instance on every call."""

    def __init__(self, exception: BaseException) -> None:
        if not isinstance(exception, BaseException):
            raise TypeError(
                f"exception must be an exception instance, got {type(exception).__name__}"
            )
        self.exception = exception

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        raise self.exception

    def __repr__(self) -> str:
        return f"RaiseException({self.exception!r})"


class ConsecutiveCalls(BaseReturnAction):
    """Return ``values`` in order across successive calls.

    Once the sequence is exhausted the last element repeats, or ``None`` is
    returned when ``repeat_last`` is off.
    """

    def __init__(self, values: Sequence[Any], repeat_last: bool = True) -> None:
        self.values = tuple(values)
        self.repeat_last = repeat_last
        self._position = 0

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        position = self._position
        self._position += 1
        if position < len(self.values):
            return self.values[position]
        if self.repeat_last and self.values:
            return self.values[-1]
        return None

    def __repr__(self) -> str:
        return f"ConsecutiveCalls({list(self.values)!r}, repeat_last={self.repeat_last})"


class ReturnValueMap(BaseReturnAction):
    """Look up the call's positional arguments in a table of entries.

    Accepts either a mapping of argument tuples to results (a non-tuple key
    stands for a single argument) or rows of ``[arg1, ..., argN, result]``.
    Calls with no matching entry return ``None``.
    """

    def __init__(self, entries: Mapping[Any, Any] | Iterable[Sequence[Any]]) -> None:
        self.entries: list[tuple[tuple[Any, ...], Any]] = []
        if isinstance(entries, Mapping):
            for key, result in entries.items():
                key_args = key if isinstance(key, tuple) else (key,)
                self.entries.append((key_args, result))
        else:
            for row in entries:
                row = tuple(row)
                if not row:
                    raise ValueError("value map rows must hold at least a result")
                self.entries.append((row[:-1], row[-1]))

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        if kwargs:
            return None
        for key_args, result in self.entries:
            if key_args == args:
                return result
        return None

    def __repr__(self) -> str:
        return f"ReturnValueMap({len(self.entries)} entries)"

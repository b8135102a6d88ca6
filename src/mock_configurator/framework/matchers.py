"""Argument matchers for ``with_args`` expectations.

A plain value given as an argument matcher is wrapped in ``EqualTo``;
``unittest.mock.ANY`` therefore works out of the box.  Use the factory
functions for anything other than equality::

    {"save": {"return": True, "arguments": [instance_of(User), anything()]}}
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class Matcher(ABC):
    """A predicate over a single call argument."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        """Return ``True`` if *value* satisfies this matcher."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description used in failure messages."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


class EqualTo(Matcher):
    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return bool(value == self.expected)

    def describe(self) -> str:
        return f"is equal to {self.expected!r}"


class IdenticalTo(Matcher):
    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return value is self.expected

    def describe(self) -> str:
        return f"is identical to {self.expected!r}"


class InstanceOf(Matcher):
    def __init__(self, cls: type | tuple[type, ...]) -> None:
        self.cls = cls

    def matches(self, value: Any) -> bool:
        return isinstance(value, self.cls)

    def describe(self) -> str:
        if isinstance(self.cls, tuple):
            names = ", ".join(c.__name__ for c in self.cls)
            return f"is an instance of one of ({names})"
        return f"is an instance of {self.cls.__name__}"


class Anything(Matcher):
    def matches(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        return "is anything"


class Callback(Matcher):
    """Delegate to a predicate function."""

    def __init__(self, predicate: Callable[[Any], bool], description: str = "") -> None:
        self.predicate = predicate
        self.description = description or getattr(predicate, "__name__", "predicate")

    def matches(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self) -> str:
        return f"is accepted by {self.description}"


# ---------------------------------------------------------------------------
# Factory functions
# ---------------------------------------------------------------------------

def equal_to(expected: Any) -> Matcher:
    return EqualTo(expected)


def identical_to(expected: Any) -> Matcher:
    return IdenticalTo(expected)


def instance_of(cls: type | tuple[type, ...]) -> Matcher:
    return InstanceOf(cls)


def anything() -> Matcher:
    return Anything()


def callback(predicate: Callable[[Any], bool], description: str = "") -> Matcher:
    return Callback(predicate, description)


def as_matcher(value: Any) -> Matcher:
    """Return *value* unchanged if it is a ``Matcher``, else ``EqualTo(value)``."""
    if isinstance(value, Matcher):
        return value
    return EqualTo(value)

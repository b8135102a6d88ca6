"""Invocation constraints for registered expectations.

A constraint decides two things: whether a given call (by its zero-based
index among the calls to one method) is claimed by an expectation, and,
at verification time, whether the expectation was satisfied.

Classes
-------
BaseInvocationConstraint
    Abstract base class for all constraints.
AnyInvocation
    Matches every call and never fails verification.
InvokedCount
    Matches every call; verification requires an exact number of calls.
InvokedAtIndex
    Matches only the call at one index; verification requires that call to
    have happened.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class BaseInvocationConstraint(ABC):
    """Abstract base class for invocation constraints."""

    @abstractmethod
    def matches(self, index: int) -> bool:
        """Return ``True`` if the call at *index* is claimed by this constraint."""

    @abstractmethod
    def verify(self, invoked: int, total_calls: int) -> str | None:
        """Return a failure message, or ``None`` when satisfied.

        Parameters
        ----------
        invoked:
            Number of calls this expectation claimed.
        total_calls:
            Number of calls made to the method overall.
        """

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description used in failure messages."""


@dataclass(frozen=True)
class AnyInvocation(BaseInvocationConstraint):
    """Zero or more calls."""

    def matches(self, index: int) -> bool:
        return True

    def verify(self, invoked: int, total_calls: int) -> str | None:
        return None

    def describe(self) -> str:
        return "invoked zero or more times"


@dataclass(frozen=True)
class InvokedCount(BaseInvocationConstraint):
    """Exactly ``expected`` calls.  ``once`` and ``never`` are 1 and 0."""

    expected: int

    def __post_init__(self) -> None:
        if self.expected < 0:
            raise ValueError(f"expected call count must be >= 0, got {self.expected}")

    def matches(self, index: int) -> bool:
        return True

    def verify(self, invoked: int, total_calls: int) -> str | None:
        if invoked == self.expected:
            return None
        if self.expected == 0:
            return f"was not expected to be called, actually called {invoked} time(s)"
        return (
            f"was expected to be called {self.expected} time(s), "
            f"actually called {invoked} time(s)"
        )

    def describe(self) -> str:
        return f"invoked {self.expected} time(s)"


@dataclass(frozen=True)
class InvokedAtIndex(BaseInvocationConstraint):
    """The call at zero-based ``index`` among the calls to the method."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"call index must be >= 0, got {self.index}")

    def matches(self, index: int) -> bool:
        return index == self.index

    def verify(self, invoked: int, total_calls: int) -> str | None:
        if invoked:
            return None
        return (
            f"was expected to be invoked at call index {self.index}, "
            f"but was only called {total_calls} time(s)"
        )

    def describe(self) -> str:
        return f"invoked at call index {self.index}"

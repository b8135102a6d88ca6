"""The mock-building capability the configurator is written against.

``MockFramework`` is injected into ``MockConfigurator``; it owns everything
the configurator does not: materializing mocks, recording calls, matching
arguments, and verifying expectations.  The configurator only translates a
declarative specification into calls on this interface.

Classes
-------
MockBuilder
    Per-target builder: constructor handling, intercepted methods, creation.
ExpectationBuilder
    Fluent registration of one expectation on one mock.
MockFramework
    Factory for builders, expectations, constraints, and actions, plus
    verification.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from mock_configurator.framework.actions import BaseReturnAction
from mock_configurator.framework.constraints import BaseInvocationConstraint


# ===================================================================== #
#  Builders                                                              #
# ===================================================================== #


class MockBuilder(ABC):
    """Builds one mock instance of a resolved target class."""

    @abstractmethod
    def disable_original_constructor(self) -> MockBuilder:
        """Create the mock without running the target's ``__init__``."""

    @abstractmethod
    def set_constructor_args(self, args: Sequence[Any]) -> MockBuilder:
        """Run the target's ``__init__`` with *args*."""

    @abstractmethod
    def set_methods(self, names: Iterable[str] | None) -> MockBuilder:
        """Choose which methods are intercepted.

        ``None`` intercepts every public method; a list intercepts exactly
        those names and leaves the rest of the class untouched.
        """

    @abstractmethod
    def get_mock(self) -> Any:
        """Materialize and return the mock instance."""


class ExpectationBuilder(ABC):
    """Chainable registration of a single expectation."""

    @abstractmethod
    def method(self, name: str) -> ExpectationBuilder:
        """Restrict the expectation to calls of method *name*."""

    @abstractmethod
    def with_args(self, *matchers: Any) -> ExpectationBuilder:
        """Require positional arguments to satisfy *matchers* in order."""

    @abstractmethod
    def will(self, action: BaseReturnAction) -> ExpectationBuilder:
        """Attach the return action used for claimed calls."""


# ===================================================================== #
#  Framework                                                             #
# ===================================================================== #


class MockFramework(ABC):
    """Abstract mock-building capability."""

    # -- building -----------------------------------------------------------

    @abstractmethod
    def get_mock_builder(self, target: type | str) -> MockBuilder:
        """Return a builder for *target*.

        Raises ``ResolutionError`` when *target* cannot be resolved.
        """

    @abstractmethod
    def expects(self, mock: Any, constraint: BaseInvocationConstraint) -> ExpectationBuilder:
        """Register a new expectation on *mock* governed by *constraint*."""

    # -- invocation constraints ---------------------------------------------

    @abstractmethod
    def any(self) -> BaseInvocationConstraint: ...

    @abstractmethod
    def once(self) -> BaseInvocationConstraint: ...

    @abstractmethod
    def never(self) -> BaseInvocationConstraint: ...

    @abstractmethod
    def exactly(self, count: int) -> BaseInvocationConstraint: ...

    @abstractmethod
    def at(self, index: int) -> BaseInvocationConstraint: ...

    # -- return actions -----------------------------------------------------

    @abstractmethod
    def returns(self, value: Any) -> BaseReturnAction: ...

    @abstractmethod
    def returns_callback(self, callback: Callable[..., Any]) -> BaseReturnAction: ...

    @abstractmethod
    def raises(self, exception: BaseException) -> BaseReturnAction: ...

    @abstractmethod
    def on_consecutive_calls(self, *values: Any) -> BaseReturnAction: ...

    @abstractmethod
    def returns_map(
        self, entries: Mapping[Any, Any] | Iterable[Sequence[Any]]
    ) -> BaseReturnAction: ...

    # -- verification -------------------------------------------------------

    @abstractmethod
    def verify(self, mock: Any) -> None:
        """Raise ``ExpectationFailedError`` if *mock* has unmet expectations."""

    @abstractmethod
    def verify_all(self) -> None:
        """Verify every mock built by this framework instance."""

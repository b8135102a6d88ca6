"""Domain exceptions for the mock configurator.

All exceptions inherit from ``MockConfiguratorError`` so callers can catch
the full family with a single ``except`` clause when needed.
"""

from __future__ import annotations

from typing import Any


class MockConfiguratorError(Exception):
    """Base exception for all mock configurator errors."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class ResolutionError(MockConfiguratorError):
    """Raised when a target class identifier cannot be resolved.

    Examples: the module does not import, the attribute is missing, or the
    resolved object is not a class.
    """

    def __init__(
        self,
        message: str = "Target could not be resolved",
        target: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.target = target


class ConfigurationError(MockConfiguratorError):
    """Raised when a method definition or mock document is malformed.

    A definition is malformed when its return type demands a ``return``
    payload that is missing or of the wrong shape, when the return type is
    unknown, or when an invocation count is not a non-negative integer.
    """

    def __init__(
        self,
        message: str = "Invalid mock configuration",
        method: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.method = method


class ExpectationFailedError(MockConfiguratorError, AssertionError):
    """Raised at verification time when registered expectations are unmet.

    Carries every failure found for the verified mock(s), so a single run
    reports all call-count and argument mismatches at once.
    """

    def __init__(
        self,
        message: str = "Mock expectations were not met",
        failures: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.failures: list[str] = failures or []
        if self.failures:
            message = message + ":\n" + "\n".join(f"  - {f}" for f in self.failures)
        super().__init__(message, details)

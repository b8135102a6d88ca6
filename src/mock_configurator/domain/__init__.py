"""Domain layer for the mock configurator.

Re-exports all public domain types so that consumers can write::

    from mock_configurator.domain import MethodDefinition, ReturnType
"""

# -- Enumerations -------------------------------------------------------------
from .enums import InvocationKind, ReturnType

# -- Value Objects ------------------------------------------------------------
from .values import MISSING, MethodDefinition, parse_method_spec

# -- Exceptions ---------------------------------------------------------------
from .exceptions import (
    ConfigurationError,
    ExpectationFailedError,
    MockConfiguratorError,
    ResolutionError,
)

__all__ = [
    # Enums
    "InvocationKind",
    "ReturnType",
    # Values
    "MISSING",
    "MethodDefinition",
    "parse_method_spec",
    # Exceptions
    "MockConfiguratorError",
    "ConfigurationError",
    "ExpectationFailedError",
    "ResolutionError",
]

"""Mock configurator.

Builds ready-to-use mock objects for unit tests from a declarative
description of which methods to stub, what they return, and how often they
must be called::

    from mock_configurator import build_mock, verify_mock

    repo = build_mock(UserRepository, {"find": {"return": alice, "call": "once"}})
    ...
    verify_mock(repo)
"""

__version__ = "0.1.0"

from mock_configurator.domain import (
    ConfigurationError,
    ExpectationFailedError,
    MethodDefinition,
    MockConfiguratorError,
    ResolutionError,
    ReturnType,
)
from mock_configurator.framework import (
    MockFramework,
    UnittestMockFramework,
    anything,
    callback,
    equal_to,
    identical_to,
    instance_of,
    verify_mock,
)
from mock_configurator.infrastructure import ConfiguratorConfig
from mock_configurator.services import MockConfigurator, build_mock

__all__ = [
    "build_mock",
    "verify_mock",
    "MockConfigurator",
    "ConfiguratorConfig",
    "MethodDefinition",
    "ReturnType",
    "MockFramework",
    "UnittestMockFramework",
    # Matchers
    "anything",
    "callback",
    "equal_to",
    "identical_to",
    "instance_of",
    # Errors
    "MockConfiguratorError",
    "ConfigurationError",
    "ExpectationFailedError",
    "ResolutionError",
]

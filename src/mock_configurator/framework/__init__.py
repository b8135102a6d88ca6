"""Mock-building capability for the mock configurator.

Re-exports the public API surface for convenience::

    from mock_configurator.framework import (
        MockFramework, UnittestMockFramework,
        equal_to, instance_of, anything,
    )
"""

from mock_configurator.framework.actions import (
    BaseReturnAction,
    ConsecutiveCalls,
    RaiseException,
    ReturnCallback,
    ReturnValue,
    ReturnValueMap,
)
from mock_configurator.framework.base import (
    ExpectationBuilder,
    MockBuilder,
    MockFramework,
)
from mock_configurator.framework.constraints import (
    AnyInvocation,
    BaseInvocationConstraint,
    InvokedAtIndex,
    InvokedCount,
)
from mock_configurator.framework.matchers import (
    Matcher,
    anything,
    as_matcher,
    callback,
    equal_to,
    identical_to,
    instance_of,
)
from mock_configurator.framework.resolution import resolve_class, resolve_object
from mock_configurator.framework.unittest_mock import (
    MethodMock,
    UnittestMockFramework,
    get_mock_state,
    verify_mock,
)

__all__ = [
    # Contract
    "MockFramework",
    "MockBuilder",
    "ExpectationBuilder",
    # unittest.mock implementation
    "UnittestMockFramework",
    "MethodMock",
    "get_mock_state",
    "verify_mock",
    # Constraints
    "BaseInvocationConstraint",
    "AnyInvocation",
    "InvokedCount",
    "InvokedAtIndex",
    # Actions
    "BaseReturnAction",
    "ReturnValue",
    "ReturnCallback",
    "RaiseException",
    "ConsecutiveCalls",
    "ReturnValueMap",
    # Matchers
    "Matcher",
    "anything",
    "as_matcher",
    "callback",
    "equal_to",
    "identical_to",
    "instance_of",
    # Resolution
    "resolve_class",
    "resolve_object",
]

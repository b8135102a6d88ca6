"""Domain enumerations for the mock configurator.

These enums capture the fixed vocabularies of a method definition: how a
stubbed method produces its result, and how often it is expected to be called.
"""

from enum import Enum


class ReturnType(Enum):
    """How a stubbed method produces its result."""

    VALUE = "value"
    CALLBACK = "callback"  # call a function with the invocation's arguments
    EXCEPTION = "exception"  # raise instead of returning
    CONSECUTIVE = "consecutive"  # one element per successive call
    VALUE_MAP = "value_map"  # argument tuple -> result lookup


class InvocationKind(Enum):
    """Recognized invocation-expectation keywords."""

    ANY = "any"
    ONCE = "once"
    NEVER = "never"
    AT = "at"  # per-call-index expectations
    EXACTLY = "exactly"

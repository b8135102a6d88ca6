"""``MockFramework`` implementation on top of ``unittest.mock``.

A mock is an instance of a generated subclass of the target class.  Every
intercepted method is replaced on that subclass by a ``MethodMock``, a
``MagicMock`` that keeps the original method's signature and whose
``side_effect`` dispatches to the expectations registered for the mock, so
the usual ``unittest.mock`` introspection keeps working::

    framework = UnittestMockFramework()
    repo = framework.get_mock_builder(Repository).set_methods(["find"]).get_mock()
    framework.expects(repo, framework.once()).method("find").will(
        framework.returns(user)
    )
    repo.find(42)
    repo.find.assert_called_once_with(42)
    framework.verify(repo)

Dispatch follows a first-match rule: every expectation claiming a call
records it, and the first one in registration order supplies the result.
Calls no expectation claims return ``None``.
"""

from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any
from unittest.mock import MagicMock

from mock_configurator.domain.exceptions import ExpectationFailedError, ResolutionError
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
from mock_configurator.framework.matchers import Matcher, as_matcher
from mock_configurator.framework.resolution import resolve_class

logger = logging.getLogger(__name__)

# Attribute on the generated subclass holding the mock's ``MockState``.
STATE_ATTR = "_mock_state"


def _format_call(label: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    parts = [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
    return f"{label}({', '.join(parts)})"


class MethodMock(MagicMock):
    """``MagicMock`` that rejects calls the original method would reject.

    The check runs before the call is recorded, so a ``TypeError`` leaves
    ``call_count`` and the per-method call index untouched.  Child mocks
    carry no signature.
    """

    def __init__(
        self, *args: Any, method_signature: inspect.Signature | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self.__dict__["_method_signature"] = method_signature

    @property
    def method_signature(self) -> inspect.Signature | None:
        return self.__dict__.get("_method_signature")

    def _mock_check_sig(self, /, *args: Any, **kwargs: Any) -> None:
        signature = self.method_signature
        if signature is not None:
            signature.bind(*args, **kwargs)


def _method_signature(cls: type, name: str) -> inspect.Signature | None:
    """Signature of *name* as called on an instance of *cls*, or ``None``."""
    try:
        raw = inspect.getattr_static(cls, name)
    except AttributeError:
        return None
    try:
        if isinstance(raw, staticmethod):
            return inspect.signature(raw.__func__)
        if isinstance(raw, classmethod):
            return inspect.signature(getattr(cls, name))
        if not inspect.isfunction(raw):
            return None
        signature = inspect.signature(raw)
    except (TypeError, ValueError):
        return None
    params = list(signature.parameters.values())
    if params and params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        params = params[1:]
    return signature.replace(parameters=params)


def _bound_arguments(
    signature: inspect.Signature | None, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> tuple[Any, ...]:
    """Call arguments in parameter order, keyword arguments included."""
    if signature is None:
        return args + tuple(kwargs.values())
    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return args + tuple(kwargs.values())
    values: list[Any] = []
    for name, value in bound.arguments.items():
        kind = signature.parameters[name].kind
        if kind is inspect.Parameter.VAR_POSITIONAL:
            values.extend(value)
        elif kind is inspect.Parameter.VAR_KEYWORD:
            values.extend(value.values())
        else:
            values.append(value)
    return tuple(values)


# ===================================================================== #
#  Expectation state                                                     #
# ===================================================================== #


class Expectation:
    """One registered expectation and the calls it has claimed."""

    def __init__(self, constraint: BaseInvocationConstraint, target_name: str) -> None:
        self.constraint = constraint
        self.target_name = target_name
        self.method_name: str | None = None
        self.matchers: tuple[Matcher, ...] | None = None
        self.action: BaseReturnAction | None = None
        self.invoked = 0
        self.argument_failures: list[str] = []

    @property
    def label(self) -> str:
        return f"{self.target_name}.{self.method_name or '*'}"

    def applies_to(self, method: str, index: int) -> bool:
        if self.method_name is not None and self.method_name != method:
            return False
        return self.constraint.matches(index)

    def invoke(
        self,
        method: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        signature: inspect.Signature | None = None,
    ) -> Any:
        self.invoked += 1
        if self.matchers is not None:
            self._check_arguments(self.matchers, method, args, kwargs, signature)
        if self.action is None:
            return None
        return self.action.invoke(args, kwargs)

    def _check_arguments(
        self,
        matchers: tuple[Matcher, ...],
        method: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        signature: inspect.Signature | None,
    ) -> None:
        call = _format_call(f"{self.target_name}.{method}", args, kwargs)
        values = _bound_arguments(signature, args, kwargs)
        if len(values) < len(matchers):
            self.argument_failures.append(
                f"parameter count for invocation {call} is too low, "
                f"expected at least {len(matchers)}"
            )
            return
        for position, matcher in enumerate(matchers):
            if not matcher.matches(values[position]):
                self.argument_failures.append(
                    f"parameter {position} for invocation {call} does not match: "
                    f"expected a value that {matcher.describe()}, got {values[position]!r}"
                )
                return

    def verify(self, total_calls: int) -> list[str]:
        failures = [f"{self.label}() {msg}" for msg in self.argument_failures]
        message = self.constraint.verify(self.invoked, total_calls)
        if message is not None:
            failures.append(f"{self.label}() {message}")
        return failures

    def __repr__(self) -> str:
        return (
            f"<Expectation {self.label} {self.constraint.describe()} "
            f"action={self.action!r} invoked={self.invoked}>"
        )


class MockState:
    """Expectations and per-method ``MethodMock`` objects of one mock."""

    def __init__(self, target: type) -> None:
        self.target = target
        self.method_mocks: dict[str, MethodMock] = {}
        self.expectations: list[Expectation] = []

    def add_method(self, name: str) -> MethodMock:
        # Names the target does not define accept any call.
        method_mock = MethodMock(
            name=f"{self.target.__qualname__}.{name}",
            return_value=None,
            method_signature=_method_signature(self.target, name),
        )

        def _dispatch(*args: Any, **kwargs: Any) -> Any:
            return self.dispatch(name, args, kwargs)

        method_mock.side_effect = _dispatch
        self.method_mocks[name] = method_mock
        return method_mock

    def call_count(self, method: str | None) -> int:
        if method is None:
            return sum(m.call_count for m in self.method_mocks.values())
        method_mock = self.method_mocks.get(method)
        return method_mock.call_count if method_mock is not None else 0

    def dispatch(self, method: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        # MagicMock has already recorded this call, so call_count includes it.
        method_mock = self.method_mocks[method]
        index = method_mock.call_count - 1
        result: Any = None
        claimed = False
        for expectation in self.expectations:
            if not expectation.applies_to(method, index):
                continue
            value = expectation.invoke(method, args, kwargs, method_mock.method_signature)
            if not claimed:
                result = value
                claimed = True
        return result

    def failures(self) -> list[str]:
        failures: list[str] = []
        for expectation in self.expectations:
            failures.extend(expectation.verify(self.call_count(expectation.method_name)))
        return failures


def get_mock_state(mock: Any) -> MockState:
    """Return the ``MockState`` of a mock built by ``UnittestMockFramework``."""
    state = getattr(type(mock), STATE_ATTR, None)
    if not isinstance(state, MockState):
        raise TypeError(
            f"{type(mock).__name__} instance is not a mock built by UnittestMockFramework"
        )
    return state


def verify_mock(mock: Any) -> None:
    """Raise ``ExpectationFailedError`` listing every unmet expectation of *mock*."""
    state = get_mock_state(mock)
    failures = state.failures()
    if failures:
        raise ExpectationFailedError(
            f"Expectations failed for mock of {state.target.__qualname__}",
            failures=failures,
        )


# ===================================================================== #
#  Builders                                                              #
# ===================================================================== #


def _interceptable_methods(cls: type, include_private: bool) -> list[str]:
    """Names of the methods intercepted when no explicit list is given."""
    names = []
    for name in dir(cls):
        if name.startswith("__"):
            continue
        if name.startswith("_") and not include_private:
            continue
        if inspect.isroutine(inspect.getattr_static(cls, name)):
            names.append(name)
    return names


class UnittestMockBuilder(MockBuilder):
    """Builds a subclass of the target with ``MagicMock`` methods."""

    def __init__(self, framework: UnittestMockFramework, target: type) -> None:
        self._framework = framework
        self._target = target
        self._methods: list[str] | None = None
        self._call_constructor = True
        self._constructor_args: tuple[Any, ...] = ()

    def disable_original_constructor(self) -> UnittestMockBuilder:
        self._call_constructor = False
        return self

    def set_constructor_args(self, args: Sequence[Any]) -> UnittestMockBuilder:
        self._call_constructor = True
        self._constructor_args = tuple(args)
        return self

    def set_methods(self, names: Iterable[str] | None) -> UnittestMockBuilder:
        self._methods = None if names is None else list(names)
        return self

    def get_mock(self) -> Any:
        target = self._target
        if self._methods is None:
            names = _interceptable_methods(target, self._framework.stub_private_methods)
        else:
            names = list(self._methods)
        # Abstract methods are always intercepted so the subclass is concrete.
        for name in sorted(getattr(target, "__abstractmethods__", ())):
            if name not in names:
                names.append(name)

        state = MockState(target)
        namespace: dict[str, Any] = {name: state.add_method(name) for name in names}
        namespace[STATE_ATTR] = state

        try:
            mock_cls = types.new_class(
                f"Mock_{target.__name__}",
                (target,),
                exec_body=lambda ns: ns.update(namespace),
            )
        except TypeError as exc:
            raise ResolutionError(
                f"Cannot mock {target.__qualname__}: {exc}",
                target=target.__qualname__,
            ) from exc
        mock_cls.__module__ = target.__module__

        if self._call_constructor:
            mock = mock_cls(*self._constructor_args)
        else:
            mock = mock_cls.__new__(mock_cls)

        self._framework._register(mock)
        logger.debug(
            "Built mock of %s (constructor=%s) intercepting %s",
            target.__qualname__,
            "on" if self._call_constructor else "off",
            names,
        )
        return mock


class UnittestExpectationBuilder(ExpectationBuilder):
    def __init__(self, expectation: Expectation, state: MockState) -> None:
        self._expectation = expectation
        self._state = state

    @property
    def expectation(self) -> Expectation:
        return self._expectation

    def method(self, name: str) -> UnittestExpectationBuilder:
        if name not in self._state.method_mocks:
            raise ValueError(
                f"Method '{name}' is not intercepted on this mock of "
                f"{self._state.target.__qualname__}; "
                f"intercepted: {sorted(self._state.method_mocks)}"
            )
        self._expectation.method_name = name
        return self

    def with_args(self, *matchers: Any) -> UnittestExpectationBuilder:
        self._expectation.matchers = tuple(as_matcher(m) for m in matchers)
        return self

    def will(self, action: BaseReturnAction) -> UnittestExpectationBuilder:
        self._expectation.action = action
        return self


# ===================================================================== #
#  Framework                                                             #
# ===================================================================== #


class UnittestMockFramework(MockFramework):
    """``unittest.mock``-backed mock-building capability.

    Parameters
    ----------
    repeat_last_consecutive:
        Whether consecutive-call actions repeat their last element once
        exhausted (otherwise they return ``None``).
    stub_private_methods:
        Whether single-underscore methods are intercepted when no explicit
        method list is given.
    """

    def __init__(
        self,
        repeat_last_consecutive: bool = True,
        stub_private_methods: bool = False,
    ) -> None:
        self.repeat_last_consecutive = repeat_last_consecutive
        self.stub_private_methods = stub_private_methods
        self._mocks: list[Any] = []

    @property
    def mocks(self) -> list[Any]:
        """Mocks built by this framework, in creation order."""
        return list(self._mocks)

    def _register(self, mock: Any) -> None:
        self._mocks.append(mock)

    # -- building -----------------------------------------------------------

    def get_mock_builder(self, target: type | str) -> UnittestMockBuilder:
        return UnittestMockBuilder(self, resolve_class(target))

    def expects(
        self, mock: Any, constraint: BaseInvocationConstraint
    ) -> UnittestExpectationBuilder:
        state = get_mock_state(mock)
        expectation = Expectation(constraint, state.target.__qualname__)
        state.expectations.append(expectation)
        return UnittestExpectationBuilder(expectation, state)

    # -- invocation constraints ---------------------------------------------

    def any(self) -> AnyInvocation:
        return AnyInvocation()

    def once(self) -> InvokedCount:
        return InvokedCount(1)

    def never(self) -> InvokedCount:
        return InvokedCount(0)

    def exactly(self, count: int) -> InvokedCount:
        return InvokedCount(count)

    def at(self, index: int) -> InvokedAtIndex:
        return InvokedAtIndex(index)

    # -- return actions -----------------------------------------------------

    def returns(self, value: Any) -> ReturnValue:
        return ReturnValue(value)

    def returns_callback(self, callback: Callable[..., Any]) -> ReturnCallback:
        return ReturnCallback(callback)

    def raises(self, exception: BaseException) -> RaiseException:
        return RaiseException(exception)

    def on_consecutive_calls(self, *values: Any) -> ConsecutiveCalls:
        return ConsecutiveCalls(values, repeat_last=self.repeat_last_consecutive)

    def returns_map(
        self, entries: Mapping[Any, Any] | Iterable[Sequence[Any]]
    ) -> ReturnValueMap:
        return ReturnValueMap(entries)

    # -- verification -------------------------------------------------------

    def verify(self, mock: Any) -> None:
        verify_mock(mock)

    def verify_all(self) -> None:
        failures: list[str] = []
        for mock in self._mocks:
            failures.extend(get_mock_state(mock).failures())
        if failures:
            raise ExpectationFailedError(
                f"Expectations failed for {len(self._mocks)} mock(s)",
                failures=failures,
            )

"""Mock configurator: declarative method specifications to configured mocks.

Translates a mapping such as::

    {
        "find": {"return": user, "call": "once", "arguments": [42]},
        "load": {"return": ["a", "b"], "return_type": "consecutive"},
        "save": {"return": IOError("disk full")},
        "next": {"return": {0: "first", 2: "third"}, "call": "at"},
        "close": None,
    }

into expectation registrations on an injected ``MockFramework`` and returns
the resulting mock.  The configurator performs no recovery: malformed
definitions raise ``ConfigurationError`` before the mock is built, and an
unresolvable target raises ``ResolutionError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mock_configurator.domain.enums import InvocationKind, ReturnType
from mock_configurator.domain.exceptions import ConfigurationError
from mock_configurator.domain.values import MethodDefinition, parse_method_spec
from mock_configurator.framework.actions import BaseReturnAction
from mock_configurator.framework.base import MockFramework
from mock_configurator.framework.constraints import BaseInvocationConstraint
from mock_configurator.framework.unittest_mock import UnittestMockFramework
from mock_configurator.infrastructure.config import ConfiguratorConfig

if TYPE_CHECKING:
    from mock_configurator.infrastructure.serialization import MockDocument

logger = logging.getLogger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


@dataclass(frozen=True)
class _PlannedExpectation:
    """An expectation resolved from a definition, registered once the mock exists."""

    method: str
    constraint: BaseInvocationConstraint
    action: BaseReturnAction
    arguments: tuple[Any, ...] | None = None


# ===================================================================== #
#  MockConfigurator                                                      #
# ===================================================================== #


class MockConfigurator:
    """Builds mocks from declarative method specifications.

    Parameters
    ----------
    framework:
        The mock-building capability.  Defaults to a
        ``UnittestMockFramework`` configured from *config*.
    config:
        Behavior switches; see ``ConfiguratorConfig``.
    """

    def __init__(
        self,
        framework: MockFramework | None = None,
        config: ConfiguratorConfig | None = None,
    ) -> None:
        self.config = config or ConfiguratorConfig()
        self.config.validate()
        self.framework: MockFramework = framework or UnittestMockFramework(
            repeat_last_consecutive=self.config.repeat_last_consecutive,
            stub_private_methods=self.config.stub_private_methods,
        )
        self._action_factories: dict[
            ReturnType, Callable[[str, MethodDefinition], BaseReturnAction]
        ] = {
            ReturnType.VALUE: self._value_action,
            ReturnType.CALLBACK: self._callback_action,
            ReturnType.EXCEPTION: self._exception_action,
            ReturnType.CONSECUTIVE: self._consecutive_action,
            ReturnType.VALUE_MAP: self._value_map_action,
        }

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #

    def build_mock(
        self,
        target: type | str,
        methods: Mapping[str, Any] | None = None,
        constructor_args: Sequence[Any] | None = None,
    ) -> Any:
        """Build a mock of *target* configured by *methods*.

        Parameters
        ----------
        target:
            The class to mock, or its import path.
        methods:
            Mapping of method name to definition (dict, ``MethodDefinition``
            or ``None``).  Only the named methods are intercepted.  When
            omitted, every public method is intercepted and returns ``None``.
        constructor_args:
            Positional arguments for the target's constructor.  ``None`` or
            an empty sequence suppresses the constructor.

        Returns
        -------
        Any
            The configured mock instance.
        """
        definitions = parse_method_spec(methods) if methods is not None else None
        if constructor_args is not None and not _is_sequence(constructor_args):
            raise ConfigurationError(
                f"constructor_args must be a sequence, got {type(constructor_args).__name__}"
            )

        # Every definition is checked before the target's constructor runs.
        planned: list[_PlannedExpectation] = []
        for name, definition in (definitions or {}).items():
            if definition is None:
                logger.debug("Method %s left unconfigured", name)
                continue
            planned.extend(self._plan_method(name, definition))

        builder = self.framework.get_mock_builder(target)
        builder.set_methods(list(definitions) if definitions is not None else None)
        if constructor_args:
            builder.set_constructor_args(list(constructor_args))
        else:
            builder.disable_original_constructor()
        mock = builder.get_mock()

        for expectation in planned:
            registered = (
                self.framework.expects(mock, expectation.constraint)
                .method(expectation.method)
                .will(expectation.action)
            )
            if expectation.arguments is not None:
                registered.with_args(*expectation.arguments)
        return mock

    def build_from_document(self, document: MockDocument) -> Any:
        """Build a mock from a parsed JSON/YAML ``MockDocument``."""
        return self.build_mock(
            document.target,
            document.method_definitions(),
            document.constructor_args,
        )

    def verify(self, mock: Any | None = None) -> None:
        """Verify *mock*, or every mock built through this configurator's framework."""
        if mock is None:
            self.framework.verify_all()
        else:
            self.framework.verify(mock)

    # ------------------------------------------------------------------ #
    #  Per-method configuration                                           #
    # ------------------------------------------------------------------ #

    def _plan_method(self, name: str, definition: MethodDefinition) -> list[_PlannedExpectation]:
        """Resolve one definition into the expectations it registers."""
        kind, count = self._resolve_invocation(name, definition.invocation)

        if kind is InvocationKind.AT:
            return self._plan_call_indexes(name, definition)

        return_type = definition.resolved_return_type()
        action = self._action_factories[return_type](name, definition)
        constraint = self._build_constraint(kind, count)
        logger.debug(
            "Configured %s: %s, %s, arguments=%s",
            name,
            return_type.value,
            kind.value if count is None else f"exactly {count}",
            definition.arguments,
        )
        return [_PlannedExpectation(name, constraint, action, definition.arguments)]

    def _plan_call_indexes(
        self, name: str, definition: MethodDefinition
    ) -> list[_PlannedExpectation]:
        """One ``at(index)`` expectation per index -> value pair."""
        if not definition.has_return:
            raise ConfigurationError(
                f"'return' mapping of call index to value is required for "
                f"call='at' on '{name}'",
                method=name,
            )
        payload = definition.return_value
        if isinstance(payload, Mapping):
            pairs = list(payload.items())
        elif _is_sequence(payload):
            pairs = list(enumerate(payload))
        else:
            raise ConfigurationError(
                f"call='at' on '{name}' needs a mapping of call index to value, "
                f"got {type(payload).__name__}",
                method=name,
            )
        for index, _ in pairs:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ConfigurationError(
                    f"call='at' on '{name}': call indexes must be non-negative "
                    f"integers, got {index!r}",
                    method=name,
                )
        logger.debug("Configured %s: per-call-index %s", name, [i for i, _ in pairs])
        return [
            _PlannedExpectation(name, self.framework.at(index), self.framework.returns(value))
            for index, value in pairs
        ]

    # ------------------------------------------------------------------ #
    #  Invocation constraints                                             #
    # ------------------------------------------------------------------ #

    def _resolve_invocation(self, name: str, raw: Any) -> tuple[InvocationKind, int | None]:
        """Map a raw ``call`` entry to an invocation kind and optional count."""
        if raw is None:
            return InvocationKind.ANY, None
        if isinstance(raw, InvocationKind) and raw is not InvocationKind.EXACTLY:
            return raw, None

        count: Any = None
        if isinstance(raw, bool):
            count = None
        elif isinstance(raw, (int, float)):
            count = raw
        elif isinstance(raw, str):
            keyword = raw.strip().lower()
            try:
                kind = InvocationKind(keyword)
            except ValueError:
                kind = None
            if kind is not None and kind is not InvocationKind.EXACTLY:
                return kind, None
            try:
                count = int(keyword)
            except ValueError:
                try:
                    count = float(keyword)
                except ValueError:
                    count = None

        if count is not None:
            if isinstance(count, int):
                valid = count >= 0
            else:
                valid = count == count and count >= 0 and count.is_integer()
            if not valid:
                raise ConfigurationError(
                    f"Invocation count for '{name}' must be a non-negative integer, "
                    f"got {raw!r}",
                    method=name,
                )
            return InvocationKind.EXACTLY, int(count)

        if self.config.strict_invocation:
            raise ConfigurationError(
                f"Unrecognized invocation expectation {raw!r} for '{name}'. "
                f"Expected one of {[k.value for k in InvocationKind if k is not InvocationKind.EXACTLY]} "
                f"or a call count",
                method=name,
            )
        logger.warning(
            "Unrecognized invocation expectation %r for %s; using 'any'", raw, name
        )
        return InvocationKind.ANY, None

    def _build_constraint(
        self, kind: InvocationKind, count: int | None
    ) -> BaseInvocationConstraint:
        if kind is InvocationKind.ONCE:
            return self.framework.once()
        if kind is InvocationKind.NEVER:
            return self.framework.never()
        if kind is InvocationKind.EXACTLY and count is not None:
            return self.framework.exactly(count)
        return self.framework.any()

    # ------------------------------------------------------------------ #
    #  Return actions                                                     #
    # ------------------------------------------------------------------ #

    def _require_return(self, name: str, definition: MethodDefinition) -> Any:
        if not definition.has_return:
            return_type = definition.resolved_return_type()
            raise ConfigurationError(
                f"'return' is required for return_type '{return_type.value}' on '{name}'",
                method=name,
            )
        return definition.return_value

    def _value_action(self, name: str, definition: MethodDefinition) -> BaseReturnAction:
        value = definition.return_value if definition.has_return else None
        return self.framework.returns(value)

    def _callback_action(self, name: str, definition: MethodDefinition) -> BaseReturnAction:
        payload = self._require_return(name, definition)
        if not callable(payload):
            raise ConfigurationError(
                f"return_type 'callback' on '{name}' needs a callable, "
                f"got {type(payload).__name__}",
                method=name,
            )
        return self.framework.returns_callback(payload)

    def _exception_action(self, name: str, definition: MethodDefinition) -> BaseReturnAction:
        payload = self._require_return(name, definition)
        if not isinstance(payload, BaseException):
            raise ConfigurationError(
                f"return_type 'exception' on '{name}' needs an exception instance, "
                f"got {type(payload).__name__}",
                method=name,
            )
        return self.framework.raises(payload)

    def _consecutive_action(self, name: str, definition: MethodDefinition) -> BaseReturnAction:
        payload = self._require_return(name, definition)
        if not _is_sequence(payload) or not payload:
            raise ConfigurationError(
                f"return_type 'consecutive' on '{name}' needs a non-empty sequence, "
                f"got {payload!r}",
                method=name,
            )
        return self.framework.on_consecutive_calls(*payload)

    def _value_map_action(self, name: str, definition: MethodDefinition) -> BaseReturnAction:
        payload = self._require_return(name, definition)
        if isinstance(payload, Mapping):
            return self.framework.returns_map(payload)
        if _is_sequence(payload) and all(_is_sequence(row) for row in payload):
            try:
                return self.framework.returns_map(payload)
            except ValueError as exc:
                raise ConfigurationError(
                    f"Invalid value map for '{name}': {exc}", method=name
                ) from exc
        raise ConfigurationError(
            f"return_type 'value_map' on '{name}' needs a mapping of argument tuples "
            f"to results or a sequence of [args..., result] rows, got {payload!r}",
            method=name,
        )


# ===================================================================== #
#  Module-level convenience                                              #
# ===================================================================== #


def build_mock(
    target: type | str,
    methods: Mapping[str, Any] | None = None,
    constructor_args: Sequence[Any] | None = None,
    *,
    framework: MockFramework | None = None,
    config: ConfiguratorConfig | None = None,
) -> Any:
    """Build a configured mock with a fresh ``MockConfigurator``.

    Verify it afterwards with ``verify_mock(mock)``.
    """
    configurator = MockConfigurator(framework=framework, config=config)
    return configurator.build_mock(target, methods, constructor_args)

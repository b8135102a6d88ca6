"""Value objects for the mock configurator.

A ``MethodDefinition`` is the typed form of one entry in a declarative mock
specification such as::

    {
        "find": {"return": user, "call": "once", "arguments": [42]},
        "save": {"return": IOError("disk full")},
        "close": None,
    }

Definitions are frozen dataclasses, compared by value.  They hold the raw
payloads only; turning them into framework calls is the configurator's job.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .enums import ReturnType
from .exceptions import ConfigurationError


class _Missing:
    """Marker for a definition that carries no ``return`` payload."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

# Keys accepted in the declarative dict form.
_DEFINITION_KEYS = frozenset({"return", "return_type", "call", "arguments"})


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


# ---------------------------------------------------------------------------
# MethodDefinition
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MethodDefinition:
    """Return behavior and call expectations for one mocked method.

    Attributes
    ----------
    return_value:
        Payload matching ``return_type``.  ``MISSING`` when the definition
        has no ``return`` key.
    return_type:
        Explicit return type, or ``None`` to infer it from ``return_value``.
    invocation:
        Raw invocation expectation: ``None`` (any), a keyword such as
        ``"once"``, an ``InvocationKind``, or a call count.
    arguments:
        Ordered argument matchers, or ``None`` for no argument constraint.
    """

    return_value: Any = MISSING
    return_type: ReturnType | None = None
    invocation: Any = None
    arguments: tuple[Any, ...] | None = None

    @property
    def has_return(self) -> bool:
        """True when a ``return`` payload was given (``None`` counts)."""
        return self.return_value is not MISSING

    def resolved_return_type(self) -> ReturnType:
        """Return the explicit return type, or infer one from the payload.

        An exception instance infers ``EXCEPTION``, any other callable infers
        ``CALLBACK``, and everything else is a plain ``VALUE``.
        """
        if self.return_type is not None:
            return self.return_type
        if isinstance(self.return_value, BaseException):
            return ReturnType.EXCEPTION
        if self.has_return and callable(self.return_value):
            return ReturnType.CALLBACK
        return ReturnType.VALUE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], method: str = "") -> MethodDefinition:
        """Build a definition from the declarative ``return`` / ``call`` dict form.

        Raises ``ConfigurationError`` on unknown keys, an unknown return
        type, or an ``arguments`` entry that is not a sequence.
        """
        unknown = set(data) - _DEFINITION_KEYS
        if unknown:
            raise ConfigurationError(
                f"Unknown keys {sorted(unknown)} in definition of '{method}'. "
                f"Allowed: {sorted(_DEFINITION_KEYS)}",
                method=method,
            )

        return_type = data.get("return_type")
        if return_type is not None and not isinstance(return_type, ReturnType):
            try:
                return_type = ReturnType(return_type)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown return_type {return_type!r} for '{method}'. "
                    f"Expected one of {[t.value for t in ReturnType]}",
                    method=method,
                ) from None

        arguments = data.get("arguments")
        if arguments is not None:
            if not _is_sequence(arguments):
                raise ConfigurationError(
                    f"'arguments' for '{method}' must be a sequence of matchers, "
                    f"got {type(arguments).__name__}",
                    method=method,
                )
            arguments = tuple(arguments)

        return cls(
            return_value=data.get("return", MISSING),
            return_type=return_type,
            invocation=data.get("call"),
            arguments=arguments,
        )


# ---------------------------------------------------------------------------
# Mock specification parsing
# ---------------------------------------------------------------------------

def parse_method_spec(
    methods: Mapping[str, Any],
) -> dict[str, MethodDefinition | None]:
    """Normalize a mock specification to ``{name: MethodDefinition | None}``.

    Values may be ``None``, ready-made ``MethodDefinition`` objects, or
    declarative dicts.  Insertion order is preserved.
    """
    if not isinstance(methods, Mapping):
        raise ConfigurationError(
            f"Method specification must be a mapping of method name to "
            f"definition, got {type(methods).__name__}"
        )
    result: dict[str, MethodDefinition | None] = {}
    for name, definition in methods.items():
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Method names must be non-empty strings, got {name!r}")
        if definition is None or isinstance(definition, MethodDefinition):
            result[name] = definition
        elif isinstance(definition, Mapping):
            result[name] = MethodDefinition.from_dict(definition, method=name)
        else:
            raise ConfigurationError(
                f"Definition of '{name}' must be a mapping, MethodDefinition or "
                f"None, got {type(definition).__name__}",
                method=name,
            )
    return result

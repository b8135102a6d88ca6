"""JSON / YAML mock documents.

A mock document describes one mock declaratively::

    target: myapp.repositories.UserRepository
    constructor_args: [dsn]
    methods:
      find: {return: {id: 1, name: alice}, call: once, arguments: [1]}
      count: {return: [3, 2, 1], return_type: consecutive}
      delete:
        return_type: exception
        return: {type: builtins.PermissionError, args: [read-only]}
      close: null

Documents are validated with pydantic models.  Any validation or parse
failure raises ``ConfigurationError`` with the underlying error chained.
Exception payloads are resolved by import path; per-call-index maps with
string keys (as JSON forces) have their keys coerced to integers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from mock_configurator.domain.enums import InvocationKind, ReturnType
from mock_configurator.domain.exceptions import ConfigurationError, ResolutionError
from mock_configurator.domain.values import MISSING, MethodDefinition
from mock_configurator.framework.resolution import resolve_class

logger = logging.getLogger(__name__)


# -- Schemas -----------------------------------------------------------------


class ExceptionSpec(BaseModel):
    """An exception to instantiate: import path plus constructor arguments."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(description="Import path of the exception class")
    args: list[Any] = Field(default_factory=list)

    def build(self, method: str = "") -> BaseException:
        try:
            cls = resolve_class(self.type)
        except ResolutionError as exc:
            raise ConfigurationError(
                f"Cannot build exception for '{method}': {exc}", method=method
            ) from exc
        if not issubclass(cls, BaseException):
            raise ConfigurationError(
                f"'{self.type}' for '{method}' is not an exception class",
                method=method,
            )
        return cls(*self.args)


class MethodDefinitionModel(BaseModel):
    """Schema of one method entry; mirrors ``MethodDefinition.from_dict``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    return_value: Any = Field(default=None, alias="return")
    return_type: ReturnType | None = None
    call: StrictInt | StrictStr | None = None
    arguments: list[Any] | None = None

    def to_definition(self, method: str) -> MethodDefinition:
        payload = self.return_value if "return_value" in self.model_fields_set else MISSING

        if self.return_type is ReturnType.EXCEPTION and payload is not MISSING:
            payload = _build_exception(payload, method)

        if _is_call_index(self.call) and isinstance(payload, dict):
            payload = _coerce_index_keys(payload, method)

        return MethodDefinition(
            return_value=payload,
            return_type=self.return_type,
            invocation=self.call,
            arguments=tuple(self.arguments) if self.arguments is not None else None,
        )


class MockDocument(BaseModel):
    """A complete mock description: target, constructor args, methods."""

    model_config = ConfigDict(extra="forbid")

    target: str = Field(description="Import path of the class to mock")
    constructor_args: list[Any] | None = None
    methods: dict[str, MethodDefinitionModel | None] | None = None

    def method_definitions(self) -> dict[str, MethodDefinition | None] | None:
        if self.methods is None:
            return None
        return {
            name: model.to_definition(name) if model is not None else None
            for name, model in self.methods.items()
        }


# -- Helpers -----------------------------------------------------------------


def _is_call_index(call: Any) -> bool:
    return isinstance(call, str) and call.strip().lower() == InvocationKind.AT.value


def _build_exception(payload: Any, method: str) -> BaseException:
    if isinstance(payload, str):
        payload = {"type": payload}
    try:
        spec = ExceptionSpec.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid exception payload for '{method}': {exc}", method=method
        ) from exc
    return spec.build(method)


def _coerce_index_keys(payload: dict[Any, Any], method: str) -> dict[int, Any]:
    result: dict[int, Any] = {}
    for key, value in payload.items():
        try:
            index = int(key)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"call='at' on '{method}': call index {key!r} is not an integer",
                method=method,
            ) from None
        result[index] = value
    return result


# -- Loaders -----------------------------------------------------------------


def mock_document_from_dict(data: dict[str, Any]) -> MockDocument:
    """Validate a plain dict as a ``MockDocument``."""
    try:
        return MockDocument.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid mock document: {exc}") from exc


def mock_document_from_json(text: str) -> MockDocument:
    """Parse and validate a JSON mock document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON mock document: {exc}") from exc
    return mock_document_from_dict(data)


def mock_document_from_yaml(text: str) -> MockDocument:
    """Parse and validate a YAML mock document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML mock document: {exc}") from exc
    return mock_document_from_dict(data)


def load_mock_document(path: str | Path) -> MockDocument:
    """Read a mock document from disk; the suffix selects JSON or YAML."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    logger.debug("Loading mock document %s", path)
    if suffix == ".json":
        return mock_document_from_json(text)
    if suffix in (".yaml", ".yml"):
        return mock_document_from_yaml(text)
    raise ConfigurationError(
        f"Unsupported mock document format '{suffix}' for {path}; use .json, .yaml or .yml"
    )

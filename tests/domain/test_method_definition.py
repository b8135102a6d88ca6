"""Tests for MethodDefinition and method specification parsing."""

from __future__ import annotations

import pytest

from mock_configurator.domain.enums import ReturnType
from mock_configurator.domain.exceptions import ConfigurationError
from mock_configurator.domain.values import MISSING, MethodDefinition, parse_method_spec


class TestReturnTypeInference:
    """Inference of the return type from the payload shape."""

    def test_callable_infers_callback(self) -> None:
        definition = MethodDefinition(return_value=lambda: 1)
        assert definition.resolved_return_type() is ReturnType.CALLBACK

    def test_exception_instance_infers_exception(self) -> None:
        definition = MethodDefinition(return_value=ValueError("boom"))
        assert definition.resolved_return_type() is ReturnType.EXCEPTION

    def test_plain_value_infers_value(self) -> None:
        assert MethodDefinition(return_value=42).resolved_return_type() is ReturnType.VALUE
        assert MethodDefinition(return_value=[1, 2]).resolved_return_type() is ReturnType.VALUE

    def test_missing_return_infers_value(self) -> None:
        assert MethodDefinition().resolved_return_type() is ReturnType.VALUE

    def test_explicit_type_wins(self) -> None:
        definition = MethodDefinition(return_value=len, return_type=ReturnType.VALUE)
        assert definition.resolved_return_type() is ReturnType.VALUE


class TestFromDict:
    """Building definitions from the declarative dict form."""

    def test_full_definition(self) -> None:
        definition = MethodDefinition.from_dict(
            {"return": 5, "return_type": "value", "call": "once", "arguments": [1, 2]},
            method="add",
        )
        assert definition.return_value == 5
        assert definition.return_type is ReturnType.VALUE
        assert definition.invocation == "once"
        assert definition.arguments == (1, 2)

    def test_empty_dict(self) -> None:
        definition = MethodDefinition.from_dict({})
        assert definition.return_value is MISSING
        assert not definition.has_return
        assert definition.arguments is None

    def test_none_return_is_present(self) -> None:
        definition = MethodDefinition.from_dict({"return": None})
        assert definition.has_return
        assert definition.return_value is None

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown keys") as info:
            MethodDefinition.from_dict({"retrun": 1}, method="add")
        assert info.value.method == "add"

    def test_unknown_return_type_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown return_type"):
            MethodDefinition.from_dict({"return": 1, "return_type": "stream"})

    def test_arguments_must_be_sequence(self) -> None:
        with pytest.raises(ConfigurationError, match="sequence of matchers"):
            MethodDefinition.from_dict({"return": 1, "arguments": "abc"})

    def test_accepts_enum_return_type(self) -> None:
        definition = MethodDefinition.from_dict(
            {"return": [1], "return_type": ReturnType.CONSECUTIVE}
        )
        assert definition.return_type is ReturnType.CONSECUTIVE


class TestParseMethodSpec:
    """Normalization of whole specifications."""

    def test_preserves_order_and_none(self) -> None:
        ready = MethodDefinition(return_value=3)
        spec = parse_method_spec({"b": {"return": 1}, "a": None, "c": ready})
        assert list(spec) == ["b", "a", "c"]
        assert spec["a"] is None
        assert spec["c"] is ready
        assert spec["b"] == MethodDefinition(return_value=1)

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            parse_method_spec(["add"])  # type: ignore[arg-type]

    def test_rejects_bad_definition(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            parse_method_spec({"add": 42})

    def test_rejects_non_string_name(self) -> None:
        with pytest.raises(ConfigurationError, match="non-empty strings"):
            parse_method_spec({1: None})  # type: ignore[dict-item]

    def test_missing_repr(self) -> None:
        assert repr(MISSING) == "MISSING"
        assert not MISSING

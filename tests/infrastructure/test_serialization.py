"""Tests for JSON / YAML mock documents."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mock_configurator.domain.enums import ReturnType
from mock_configurator.domain.exceptions import ConfigurationError, ExpectationFailedError
from mock_configurator.domain.values import MISSING
from mock_configurator.framework.unittest_mock import verify_mock
from mock_configurator.infrastructure.serialization import (
    ExceptionSpec,
    MethodDefinitionModel,
    MockDocument,
    load_mock_document,
    mock_document_from_dict,
    mock_document_from_json,
    mock_document_from_yaml,
)
from mock_configurator.services.configurator import MockConfigurator
from tests.helpers.sample_classes import Calculator

CALCULATOR = "tests.helpers.sample_classes.Calculator"

YAML_DOCUMENT = f"""
target: {CALCULATOR}
constructor_args: [4, yaml]
methods:
  add: {{return: 42}}
  describe: {{return: 1, call: never}}
  divide:
    return_type: exception
    return: {{type: builtins.ZeroDivisionError, args: [nope]}}
  total: null
"""


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class TestMethodDefinitionModel:

    def test_return_alias(self) -> None:
        model = MethodDefinitionModel.model_validate({"return": 5, "call": "once"})
        definition = model.to_definition("add")
        assert definition.return_value == 5
        assert definition.invocation == "once"

    def test_absent_return_is_missing(self) -> None:
        definition = MethodDefinitionModel.model_validate({"call": 2}).to_definition("add")
        assert definition.return_value is MISSING
        assert definition.invocation == 2

    def test_explicit_null_return(self) -> None:
        definition = MethodDefinitionModel.model_validate({"return": None}).to_definition("add")
        assert definition.has_return
        assert definition.return_value is None

    def test_arguments_become_tuple(self) -> None:
        definition = MethodDefinitionModel.model_validate(
            {"return": 1, "arguments": [1, "x"]}
        ).to_definition("add")
        assert definition.arguments == (1, "x")

    def test_return_type_parsed(self) -> None:
        model = MethodDefinitionModel.model_validate(
            {"return": [1, 2], "return_type": "consecutive"}
        )
        assert model.return_type is ReturnType.CONSECUTIVE

    def test_call_index_keys_coerced(self) -> None:
        definition = MethodDefinitionModel.model_validate(
            {"return": {"0": "a", "2": "c"}, "call": "at"}
        ).to_definition("next")
        assert definition.return_value == {0: "a", 2: "c"}

    def test_call_index_key_not_integer(self) -> None:
        model = MethodDefinitionModel.model_validate({"return": {"first": "a"}, "call": "at"})
        with pytest.raises(ConfigurationError, match="not an integer"):
            model.to_definition("next")

    def test_exception_payload_built(self) -> None:
        definition = MethodDefinitionModel.model_validate(
            {
                "return_type": "exception",
                "return": {"type": "builtins.KeyError", "args": ["missing"]},
            }
        ).to_definition("load")
        assert isinstance(definition.return_value, KeyError)
        assert definition.return_value.args == ("missing",)

    def test_exception_payload_as_string(self) -> None:
        definition = MethodDefinitionModel.model_validate(
            {"return_type": "exception", "return": "builtins.TimeoutError"}
        ).to_definition("load")
        assert isinstance(definition.return_value, TimeoutError)


class TestExceptionSpec:

    def test_unresolvable_type(self) -> None:
        spec = ExceptionSpec(type="no_such_module_xyz.Boom")
        with pytest.raises(ConfigurationError, match="Cannot build exception"):
            spec.build("load")

    def test_non_exception_class(self) -> None:
        spec = ExceptionSpec(type=CALCULATOR)
        with pytest.raises(ConfigurationError, match="not an exception class"):
            spec.build("load")


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


class TestDocumentLoaders:

    def test_from_dict(self) -> None:
        document = mock_document_from_dict({"target": CALCULATOR})
        assert isinstance(document, MockDocument)
        assert document.constructor_args is None
        assert document.method_definitions() is None

    def test_from_yaml(self) -> None:
        document = mock_document_from_yaml(YAML_DOCUMENT)
        assert document.target == CALCULATOR
        assert document.constructor_args == [4, "yaml"]
        definitions = document.method_definitions()
        assert definitions is not None
        assert list(definitions) == ["add", "describe", "divide", "total"]
        assert definitions["total"] is None
        assert isinstance(definitions["divide"].return_value, ZeroDivisionError)

    def test_from_json(self) -> None:
        text = json.dumps(
            {
                "target": CALCULATOR,
                "methods": {"add": {"return": {"0": 1, "1": 2}, "call": "at"}},
            }
        )
        definitions = mock_document_from_json(text).method_definitions()
        assert definitions["add"].return_value == {0: 1, 1: 2}

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"target": CALCULATOR, "colour": "blue"},
            {"target": CALCULATOR, "methods": {"add": {"returns": 1}}},
            {"target": CALCULATOR, "methods": {"add": {"return_type": "generator"}}},
            {"target": CALCULATOR, "methods": {"add": {"call": 1.5}}},
        ],
    )
    def test_invalid_documents(self, data: dict) -> None:
        with pytest.raises(ConfigurationError, match="Invalid mock document"):
            mock_document_from_dict(data)

    def test_invalid_json(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            mock_document_from_json("{target: ")

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            mock_document_from_yaml("target: [unclosed")

    def test_load_by_suffix(self, tmp_path: Path) -> None:
        yaml_path = tmp_path / "calculator.yml"
        yaml_path.write_text(YAML_DOCUMENT, encoding="utf-8")
        json_path = tmp_path / "calculator.json"
        json_path.write_text(json.dumps({"target": CALCULATOR}), encoding="utf-8")

        assert load_mock_document(yaml_path).constructor_args == [4, "yaml"]
        assert load_mock_document(str(json_path)).target == CALCULATOR

    def test_load_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "calculator.toml"
        path.write_text("target = 'x'", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unsupported mock document format"):
            load_mock_document(path)


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


class TestBuildFromDocument:

    def test_yaml_document(self, configurator: MockConfigurator) -> None:
        mock = configurator.build_from_document(mock_document_from_yaml(YAML_DOCUMENT))

        assert isinstance(mock, Calculator)
        assert mock.precision == 4
        assert mock.label == "yaml"
        assert mock.add(1, 2) == 42
        assert mock.total(1, 2) is None
        with pytest.raises(ZeroDivisionError, match="nope"):
            mock.divide(1, 0)
        verify_mock(mock)

        mock.describe()
        with pytest.raises(ExpectationFailedError, match="describe"):
            verify_mock(mock)

    def test_json_call_index_document(self, configurator: MockConfigurator) -> None:
        document = mock_document_from_json(
            json.dumps(
                {
                    "target": CALCULATOR,
                    "methods": {"describe": {"return": {"0": "a", "2": "c"}, "call": "at"}},
                }
            )
        )
        mock = configurator.build_from_document(document)

        assert [mock.describe(), mock.describe(), mock.describe()] == ["a", None, "c"]
        verify_mock(mock)

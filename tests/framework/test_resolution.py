"""Tests for class resolution."""

from __future__ import annotations

import json.decoder
from collections import OrderedDict

import pytest

from mock_configurator.domain.exceptions import ResolutionError
from mock_configurator.framework.resolution import resolve_class, resolve_object
from tests.helpers.sample_classes import Calculator


class TestResolveClass:

    def test_class_passes_through(self) -> None:
        assert resolve_class(Calculator) is Calculator

    def test_dotted_path(self) -> None:
        assert resolve_class("collections.OrderedDict") is OrderedDict

    def test_colon_path(self) -> None:
        assert resolve_class("json.decoder:JSONDecoder") is json.decoder.JSONDecoder

    def test_project_path(self) -> None:
        assert resolve_class("tests.helpers.sample_classes.Calculator") is Calculator

    def test_missing_module(self) -> None:
        with pytest.raises(ResolutionError, match="no importable module") as info:
            resolve_class("no_such_package_xyz.Thing")
        assert info.value.target == "no_such_package_xyz.Thing"

    def test_missing_attribute(self) -> None:
        with pytest.raises(ResolutionError, match="no attribute 'Missing'"):
            resolve_class("collections.Missing")

    def test_missing_colon_module(self) -> None:
        with pytest.raises(ResolutionError):
            resolve_class("no_such_package_xyz:Thing")

    def test_not_a_class(self) -> None:
        with pytest.raises(ResolutionError, match="not a class"):
            resolve_class("tests.helpers.sample_classes.NOT_A_CLASS")

    def test_wrong_target_type(self) -> None:
        with pytest.raises(ResolutionError, match="class or an import path"):
            resolve_class(42)  # type: ignore[arg-type]

    def test_bare_name_fails(self) -> None:
        with pytest.raises(ResolutionError):
            resolve_class("OrderedDict")


class TestResolveObject:

    def test_module_only_with_colon(self) -> None:
        assert resolve_object("json:") is json

    def test_empty_path(self) -> None:
        with pytest.raises(ResolutionError, match="Invalid import path"):
            resolve_object("  ")

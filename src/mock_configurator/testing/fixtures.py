"""pytest fixtures for building and verifying configured mocks.

Import the fixtures into a ``conftest.py``::

    from mock_configurator.testing.fixtures import (  # noqa: F401
        mock_configurator,
        mock_configurator_config,
        mock_framework,
    )

Every mock built through ``mock_configurator`` is verified when the test
finishes, so unmet call expectations fail the test at teardown.  Override
``mock_configurator_config`` to change behavior for a module or package.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from mock_configurator.framework.unittest_mock import UnittestMockFramework
from mock_configurator.infrastructure.config import ConfiguratorConfig
from mock_configurator.services.configurator import MockConfigurator


@pytest.fixture
def mock_configurator_config() -> ConfiguratorConfig:
    """Default configuration; override to customize."""
    return ConfiguratorConfig()


@pytest.fixture
def mock_framework(mock_configurator_config: ConfiguratorConfig) -> UnittestMockFramework:
    """A fresh ``unittest.mock``-backed framework for the test."""
    return UnittestMockFramework(
        repeat_last_consecutive=mock_configurator_config.repeat_last_consecutive,
        stub_private_methods=mock_configurator_config.stub_private_methods,
    )


@pytest.fixture
def mock_configurator(
    mock_framework: UnittestMockFramework,
    mock_configurator_config: ConfiguratorConfig,
) -> Iterator[MockConfigurator]:
    """A configurator whose mocks are verified at teardown."""
    configurator = MockConfigurator(framework=mock_framework, config=mock_configurator_config)
    yield configurator
    if mock_configurator_config.auto_verify:
        mock_framework.verify_all()

"""Shared fixtures for the mock configurator test suite."""

from __future__ import annotations

import pytest

from mock_configurator.framework.unittest_mock import UnittestMockFramework
from mock_configurator.infrastructure.config import ConfiguratorConfig
from mock_configurator.services.configurator import MockConfigurator
from mock_configurator.testing.fixtures import (  # noqa: F401
    mock_configurator,
    mock_configurator_config,
    mock_framework,
)


# ---------------------------------------------------------------------------
# Framework / configurator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def framework() -> UnittestMockFramework:
    """A fresh framework with default behavior."""
    return UnittestMockFramework()


@pytest.fixture
def configurator(framework: UnittestMockFramework) -> MockConfigurator:
    """A configurator over the shared ``framework`` fixture (no auto-verify)."""
    return MockConfigurator(framework=framework)


@pytest.fixture
def strict_configurator() -> MockConfigurator:
    """A configurator that rejects unknown invocation keywords."""
    return MockConfigurator(config=ConfiguratorConfig(strict_invocation=True))

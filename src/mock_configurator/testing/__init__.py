"""Public testing utilities for the mock configurator.

Provides pytest fixtures and a ``unittest.TestCase`` mixin that build
configured mocks and verify them when the test finishes.
"""

from mock_configurator.testing.case import MockHelperMixin

__all__ = ["MockHelperMixin"]

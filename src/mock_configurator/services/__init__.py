"""Service layer for the mock configurator.

Re-exports public service types for convenient top-level access::

    from mock_configurator.services import MockConfigurator, build_mock
"""

from mock_configurator.services.configurator import MockConfigurator, build_mock

__all__ = ["MockConfigurator", "build_mock"]

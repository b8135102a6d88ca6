"""Infrastructure layer for the mock configurator.

Re-exports the public API surface for convenience::

    from mock_configurator.infrastructure import (
        ConfiguratorConfig, load_config_from_json,
        MockDocument, mock_document_from_json, mock_document_from_yaml,
    )
"""

from mock_configurator.infrastructure.config import (
    ConfiguratorConfig,
    load_config_from_json,
)
from mock_configurator.infrastructure.serialization import (
    ExceptionSpec,
    MethodDefinitionModel,
    MockDocument,
    load_mock_document,
    mock_document_from_dict,
    mock_document_from_json,
    mock_document_from_yaml,
)

__all__ = [
    # Configuration
    "ConfiguratorConfig",
    "load_config_from_json",
    # Documents
    "ExceptionSpec",
    "MethodDefinitionModel",
    "MockDocument",
    "load_mock_document",
    "mock_document_from_dict",
    "mock_document_from_json",
    "mock_document_from_yaml",
]

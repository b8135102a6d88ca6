"""Configuration dataclass for the mock configurator.

``ConfiguratorConfig`` is a plain frozen ``dataclass`` with a ``validate()``
method that raises ``ValueError`` on invalid values, plus ``to_dict`` /
``from_dict`` helpers and a JSON loader.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class ConfiguratorConfig:
    """Parameters governing how specifications become mocks.

    Attributes
    ----------
    strict_invocation:
        If ``True``, an unrecognized ``call`` keyword raises
        ``ConfigurationError`` instead of falling back to ``any``.
    repeat_last_consecutive:
        If ``True``, consecutive-call stubs repeat their last element once
        exhausted; otherwise they return ``None``.
    stub_private_methods:
        If ``True``, single-underscore methods are intercepted when a mock is
        built without a method specification.
    auto_verify:
        If ``True``, the testing helpers verify every built mock at teardown.
    """

    strict_invocation: bool = False
    repeat_last_consecutive: bool = True
    stub_private_methods: bool = False
    auto_verify: bool = True

    def validate(self) -> None:
        """Raise ``ValueError`` if any field has the wrong type."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ValueError(
                    f"{f.name} must be a bool, got {type(value).__name__} ({value!r})"
                )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfiguratorConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


def load_config_from_json(json_str: str) -> ConfiguratorConfig:
    """Parse a JSON object into a validated ``ConfiguratorConfig``.

    Unknown keys are ignored.
    """
    raw = json.loads(json_str)
    if not isinstance(raw, dict):
        raise ValueError("Top-level JSON must be an object")
    return ConfiguratorConfig.from_dict(raw)

"""Resolution of class identifiers to class objects.

Targets may be given as classes or as import paths, either dotted
(``"package.module.ClassName"``, nested classes allowed) or with a colon
separating module and attribute (``"package.module:ClassName"``).
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from mock_configurator.domain.exceptions import ResolutionError

logger = logging.getLogger(__name__)


def _walk(obj: Any, attr_path: str, target: str) -> Any:
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ResolutionError(
                f"Cannot resolve '{target}': no attribute '{part}'",
                target=target,
            ) from None
    return obj


def resolve_object(target: str) -> Any:
    """Import and return the object named by *target*.

    Raises ``ResolutionError`` when no prefix of the path imports as a module
    or the remaining attributes are missing.
    """
    if not isinstance(target, str) or not target.strip():
        raise ResolutionError(f"Invalid import path {target!r}", target=str(target))

    if ":" in target:
        module_name, _, attr_path = target.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ResolutionError(
                f"Cannot resolve '{target}': {exc}", target=target
            ) from exc
        return _walk(module, attr_path, target) if attr_path else module

    parts = target.split(".")
    # Try the longest importable module prefix first.
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            missing = exc.name or ""
            if missing != module_name and not module_name.startswith(missing + "."):
                # The module exists but one of its own imports is missing.
                raise ResolutionError(
                    f"Cannot resolve '{target}': {exc}", target=target
                ) from exc
            continue
        except ImportError as exc:
            raise ResolutionError(
                f"Cannot resolve '{target}': {exc}", target=target
            ) from exc
        logger.debug("Resolved module %s for %s", module_name, target)
        return _walk(module, ".".join(parts[split:]), target)

    raise ResolutionError(
        f"Cannot resolve '{target}': no importable module in path", target=target
    )


def resolve_class(target: type | str) -> type:
    """Return the class for *target* (a class or an import path)."""
    if isinstance(target, type):
        return target
    if not isinstance(target, str):
        raise ResolutionError(
            f"Target must be a class or an import path, got {type(target).__name__}",
            target=repr(target),
        )
    obj = resolve_object(target)
    if not isinstance(obj, type):
        raise ResolutionError(
            f"'{target}' resolved to {type(obj).__name__}, not a class",
            target=target,
        )
    return obj

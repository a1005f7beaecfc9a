"""Loaders that turn a lookup key into a service factory descriptor."""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import re
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from lazydi.core.errors import LoadError
from lazydi.core.models import ServiceFactory

LOGGER = logging.getLogger(__name__)

_MODULE_PREFIX = "lazydi_services"


class ServiceLoader(Protocol):
    """Protocol describing how the resolver obtains factories."""

    def load(self, key: str) -> ServiceFactory:
        """Return the factory stored under ``key`` or raise :class:`LoadError`."""
        raise NotImplementedError


class FileLoader:
    """Load factories from Python source files addressed by path.

    Each file exposes a callable named ``factory_attribute``. Its
    ``dependencies`` and ``cache`` settings are read from attributes on the
    callable first and from module-level globals of the same name second.
    A module-level ``cache`` must be a ``bool`` and a module-level
    ``dependencies`` a list or mapping of names; other values are ignored.
    Imported modules are kept per resolved path, so a file is executed once.
    """

    def __init__(self, *, factory_attribute: str = "factory") -> None:
        """Initialise the loader with an empty module cache."""
        self.factory_attribute = factory_attribute
        self._modules: dict[Path, ModuleType] = {}

    def load(self, key: str) -> ServiceFactory:
        """Import the file at ``key`` and describe its factory."""
        path = Path(key).resolve()
        module = self._modules.get(path)
        if module is None:
            module = self._import(path)
            self._modules[path] = module

        target = getattr(module, self.factory_attribute, None)
        if target is None:
            raise LoadError(
                f"Module {path} does not define '{self.factory_attribute}'"
            )
        return ServiceFactory.from_callable(
            target,
            dependencies=_declared_dependencies(target, module),
            cache=_declared_cache(target, module),
        )

    def forget(self, key: str) -> bool:
        """Drop the imported module for ``key`` so the next load re-executes it."""
        return self._modules.pop(Path(key).resolve(), None) is not None

    def _import(self, path: Path) -> ModuleType:
        if not path.is_file():
            raise LoadError(f"No service module found at {path}")
        digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
        stem = re.sub(r"\W", "_", path.stem)
        module_name = f"{_MODULE_PREFIX}_{stem}_{digest}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoadError(f"Cannot import service module at {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise LoadError(f"Failed to import service module at {path}") from exc
        LOGGER.debug("Imported service module %s", path)
        return module


class MappingLoader:
    """Serve factories from an in-memory mapping of lookup keys."""

    def __init__(
        self, factories: Mapping[str, Callable[..., Any] | ServiceFactory] | None = None
    ) -> None:
        """Initialise the loader with optional pre-registered factories."""
        self._factories: dict[str, Callable[..., Any] | ServiceFactory] = dict(
            factories or {}
        )

    def register(self, key: str, factory: Callable[..., Any] | ServiceFactory) -> None:
        """Register or replace the factory stored under ``key``."""
        self._factories[key] = factory

    def load(self, key: str) -> ServiceFactory:
        """Return the registered factory for ``key``."""
        try:
            entry = self._factories[key]
        except KeyError:
            raise LoadError(f"No factory registered for '{key}'") from None
        if isinstance(entry, ServiceFactory):
            return entry
        return ServiceFactory.from_callable(entry)


def _declared_dependencies(target: Any, module: ModuleType) -> Any:
    declared = getattr(target, "dependencies", None)
    if declared is not None:
        return declared
    # Module globals count only when they have the shape of a declaration.
    declared = getattr(module, "dependencies", None)
    if isinstance(declared, Mapping):
        return declared
    if isinstance(declared, Sequence) and not isinstance(
        declared, (str, bytes, bytearray)
    ):
        return declared
    return None


def _declared_cache(target: Any, module: ModuleType) -> bool | None:
    declared = getattr(target, "cache", None)
    if declared is not None:
        return declared
    declared = getattr(module, "cache", None)
    return declared if isinstance(declared, bool) else None


__all__ = ["FileLoader", "MappingLoader", "ServiceLoader"]

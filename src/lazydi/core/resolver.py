"""Lazy, recursive service resolution with optional memoization."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .models import Batch, Keyed, ServiceFactory, Single, classify_request

if TYPE_CHECKING:
    from lazydi.loading import ServiceLoader

    from .config import ResolverSettings

LOGGER = logging.getLogger(__name__)


class Resolver:
    """Resolve services by name, building them from loaded factories on demand.

    A factory may declare dependencies, which are resolved through this same
    resolver before the factory runs, and may ask for its instance to be
    cached. Cached instances are returned for every later request of the
    same name and are never evicted.

    The dependency graph must be acyclic. Resolving a service that depends
    on itself, directly or transitively, is undefined and will not return.

    Concurrent first requests for the same uncached name are not
    deduplicated: each builds its own instance and the first cache write
    wins.
    """

    def __init__(
        self,
        root: str | Path = "",
        *,
        loader: ServiceLoader,
        suffix: str = "",
    ) -> None:
        """Initialise the resolver with an empty cache."""
        self._root = str(root)
        self._suffix = suffix
        self._loader = loader
        self._cache: dict[str, Any] = {}

    @classmethod
    def from_settings(cls, settings: ResolverSettings) -> Resolver:
        """Build a file-backed resolver from configuration."""
        from lazydi.loading import FileLoader

        loader = FileLoader(factory_attribute=settings.factory_attribute)
        return cls(settings.root, loader=loader, suffix=settings.suffix)

    @property
    def root(self) -> str:
        """Root location prefixed to every lookup key."""
        return self._root

    @property
    def suffix(self) -> str:
        """Fixed suffix appended to every lookup key."""
        return self._suffix

    @property
    def loader(self) -> ServiceLoader:
        """Loader used to locate factories on a cache miss."""
        return self._loader

    async def get(self, request: Any) -> Any:
        """Resolve a name, a sequence of names, or a mapping of names.

        The result mirrors the request: one instance, a list in input order,
        or a dict with the request's keys. Members of a batch are resolved
        concurrently and the first failure is raised as-is.
        """
        parsed = classify_request(request)
        if isinstance(parsed, Single):
            return await self._resolve_one(parsed.name)
        if isinstance(parsed, Batch):
            return list(
                await asyncio.gather(*(self._resolve_one(name) for name in parsed.names))
            )
        return await self._resolve_keyed(parsed)

    def set(self, name: str, instance: Any, *, force: bool = False) -> None:
        """Cache ``instance`` under ``name``.

        An existing entry is kept unless ``force`` is true.
        """
        if name in self._cache and not force:
            LOGGER.debug("Ignoring write for already cached service: %s", name)
            return
        self._cache[name] = instance
        LOGGER.debug("Cached service: %s", name)

    def has(self, name: str) -> bool:
        """Return whether an instance is cached for ``name``."""
        return name in self._cache

    def cached_names(self) -> list[str]:
        """Return the names currently cached, in insertion order."""
        return list(self._cache)

    def lookup_key(self, name: str) -> str:
        """Compose the loader key for a service name."""
        if self._root:
            return f"{self._root.rstrip('/')}/{name}{self._suffix}"
        return f"{name}{self._suffix}"

    async def _resolve_keyed(self, request: Keyed) -> dict[Any, Any]:
        keys = list(request.names)
        instances = await asyncio.gather(
            *(self._resolve_one(request.names[key]) for key in keys)
        )
        return dict(zip(keys, instances))

    async def _resolve_one(self, name: str) -> Any:
        if name in self._cache:
            LOGGER.debug("Cache hit for service: %s", name)
            return self._cache[name]

        LOGGER.debug("Cache miss for service: %s", name)
        factory = self._load(name)

        resolved = None
        if factory.dependencies is not None:
            resolved = await self.get(_as_request(factory.dependencies))

        instance = await factory.build(resolved)
        if factory.cacheable:
            self.set(name, instance)
        return instance

    def _load(self, name: str) -> ServiceFactory:
        key = self.lookup_key(name)
        LOGGER.debug("Loading factory for %s from %s", name, key)
        return self._loader.load(key)


def _as_request(dependencies: Any) -> Any:
    if isinstance(dependencies, Mapping):
        return Keyed(dependencies)
    return Batch(tuple(dependencies))


__all__ = ["Resolver"]

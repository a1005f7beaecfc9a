"""Process-wide access to one shared resolver."""

from __future__ import annotations

import logging
from typing import Any

from .errors import ConfigurationError, ResolverNotInstalledError
from .resolver import Resolver

LOGGER = logging.getLogger(__name__)


class ResolverSlot:
    """Holds at most one resolver reference that callers can reach without wiring.

    The slot does not own the resolver: clearing it leaves the resolver and
    its cache untouched.
    """

    def __init__(self) -> None:
        """Start in the uninstalled state."""
        self._resolver: Resolver | None = None

    @property
    def installed(self) -> bool:
        """Whether a resolver is currently installed."""
        return self._resolver is not None

    def install(self, resolver: Resolver) -> None:
        """Install ``resolver``, replacing any previous one."""
        if not isinstance(resolver, Resolver):
            raise ConfigurationError(
                f"Expected a Resolver instance, got {type(resolver).__name__}"
            )
        if self._resolver is not None and self._resolver is not resolver:
            LOGGER.info("Replacing installed global resolver")
        else:
            LOGGER.info("Installed global resolver")
        self._resolver = resolver

    def clear(self) -> None:
        """Drop the installed resolver, if any."""
        if self._resolver is not None:
            LOGGER.info("Cleared global resolver")
        self._resolver = None

    def current(self) -> Resolver:
        """Return the installed resolver or raise if there is none."""
        if self._resolver is None:
            raise ResolverNotInstalledError(
                "No resolver installed; call install_global() first"
            )
        return self._resolver

    async def get(self, request: Any) -> Any:
        """Resolve ``request`` through the installed resolver."""
        return await self.current().get(request)

    def set(self, name: str, instance: Any, *, force: bool = False) -> None:
        """Cache ``instance`` on the installed resolver."""
        self.current().set(name, instance, force=force)


global_slot = ResolverSlot()


def install_global(resolver: Resolver) -> None:
    """Make ``resolver`` reachable through the module-level helpers."""
    global_slot.install(resolver)


def clear_global() -> None:
    """Return the global front door to the uninstalled state."""
    global_slot.clear()


async def get_global(request: Any) -> Any:
    """Resolve ``request`` through the globally installed resolver.

    Raises :class:`ResolverNotInstalledError` when awaited with nothing
    installed.
    """
    return await global_slot.get(request)


def set_global(name: str, instance: Any, *, force: bool = False) -> None:
    """Cache ``instance`` on the globally installed resolver.

    Raises :class:`ResolverNotInstalledError` immediately when nothing is
    installed.
    """
    global_slot.set(name, instance, force=force)


__all__ = [
    "ResolverSlot",
    "clear_global",
    "get_global",
    "global_slot",
    "install_global",
    "set_global",
]

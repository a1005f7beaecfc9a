"""Exceptions raised at the resolver boundary."""

from __future__ import annotations


class LoadError(RuntimeError):
    """Raised when a loader cannot produce a factory for a lookup key."""


class ConfigurationError(RuntimeError):
    """Raised when the resolver API is used outside its contract."""


class ResolverNotInstalledError(ConfigurationError):
    """Raised when the global front door is used before a resolver is installed."""


__all__ = ["ConfigurationError", "LoadError", "ResolverNotInstalledError"]

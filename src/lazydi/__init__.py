"""Lazy, recursive service resolution with a process-wide front door."""

from .core import (
    ConfigurationError,
    LoadError,
    Resolver,
    ResolverNotInstalledError,
    ServiceFactory,
    clear_global,
    get_global,
    install_global,
    set_global,
)
from .loading import FileLoader, MappingLoader, ServiceLoader

__all__ = [
    "ConfigurationError",
    "FileLoader",
    "LoadError",
    "MappingLoader",
    "Resolver",
    "ResolverNotInstalledError",
    "ServiceFactory",
    "ServiceLoader",
    "clear_global",
    "get_global",
    "install_global",
    "set_global",
]

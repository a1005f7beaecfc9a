"""Core resolver, global front door, configuration and logging."""

from .config import AppSettings, LoggingSettings, ResolverSettings, load_app_settings
from .errors import ConfigurationError, LoadError, ResolverNotInstalledError
from .front_door import (
    ResolverSlot,
    clear_global,
    get_global,
    global_slot,
    install_global,
    set_global,
)
from .logging import configure_logging
from .models import Batch, Keyed, ServiceFactory, Single, classify_request
from .resolver import Resolver

__all__ = [
    "AppSettings",
    "Batch",
    "ConfigurationError",
    "Keyed",
    "LoadError",
    "LoggingSettings",
    "Resolver",
    "ResolverNotInstalledError",
    "ResolverSettings",
    "ResolverSlot",
    "ServiceFactory",
    "Single",
    "classify_request",
    "clear_global",
    "configure_logging",
    "get_global",
    "global_slot",
    "install_global",
    "load_app_settings",
    "set_global",
]

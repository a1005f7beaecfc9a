"""Application configuration models and loader utilities."""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, Field


class ResolverSettings(BaseModel):
    """Settings controlling where service factories are looked up."""

    root: Path = Field(
        default=Path("./services"), description="Directory holding service modules"
    )
    suffix: str = Field(
        default=".py", description="Suffix appended to every service lookup key"
    )
    factory_attribute: str = Field(
        default="factory", description="Name of the factory callable in each module"
    )


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Toggle JSON structured logging"
    )


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


ENV_PREFIX = "LAZYDI_"

_BOOLEAN_WORDS = {"true": True, "false": False}


def _prefixed(values: Mapping[str, str | None]) -> dict[str, str | None]:
    """Keep only entries that belong to this application."""
    return {key: value for key, value in values.items() if key.startswith(ENV_PREFIX)}


def _read_sources(
    env_file: Path | str | None, include_environment: bool
) -> dict[str, str | None]:
    """Return raw prefixed values, process environment taking precedence."""
    entries: dict[str, str | None] = {}
    if env_file and Path(env_file).is_file():
        entries.update(_prefixed(dotenv_values(env_file)))
    if include_environment:
        entries.update(_prefixed(os.environ))
    return entries


def _coerce(raw: str | None) -> Any:
    """Map empty strings to ``None`` and boolean words to ``bool``."""
    if not raw:
        return None
    return _BOOLEAN_WORDS.get(raw.lower(), raw)


def _nest(entries: Mapping[str, str | None]) -> dict[str, Any]:
    """Expand ``PREFIX_SECTION__FIELD`` keys into a nested dictionary."""
    tree: dict[str, Any] = {}
    for key, raw in entries.items():
        path = [part.lower() for part in key[len(ENV_PREFIX) :].split("__") if part]
        if not path:
            continue
        *sections, field = path
        node = tree
        for section in sections:
            node = node.setdefault(section, {})
        node[field] = _coerce(raw)
    return tree


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load application settings from an env file, the environment and overrides.

    Keys use the ``LAZYDI_`` prefix and ``__`` to step into a section, for
    example ``LAZYDI_RESOLVER__ROOT``.
    """
    values = _nest(_read_sources(env_file, include_environment))
    values.update(overrides)
    return AppSettings.model_validate(values)


__all__ = [
    "AppSettings",
    "LoggingSettings",
    "ResolverSettings",
    "load_app_settings",
]

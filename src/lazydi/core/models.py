"""Domain models shared by the resolver and its loaders."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .errors import LoadError

Dependencies = Union[Sequence[str], Mapping[Any, str]]


@dataclass(frozen=True, slots=True)
class ServiceFactory:
    """Descriptor for a callable able to build one service instance.

    ``dependencies`` is either an ordered sequence of service names or a
    mapping from the key the factory expects to a service name. When it is
    ``None`` the factory is invoked without arguments.
    """

    invoke: Callable[..., Any]
    dependencies: Dependencies | None = None
    cacheable: bool = False

    @classmethod
    def from_callable(
        cls,
        target: Callable[..., Any],
        *,
        dependencies: Any = None,
        cache: Any = None,
    ) -> ServiceFactory:
        """Build a descriptor from a callable carrying ``dependencies``/``cache`` attributes.

        Explicit keyword values take precedence over attributes set on the
        callable itself.
        """
        if not callable(target):
            raise LoadError(f"Factory {target!r} is not callable")
        if dependencies is None:
            dependencies = getattr(target, "dependencies", None)
        if cache is None:
            cache = getattr(target, "cache", False)
        return cls(
            invoke=target,
            dependencies=_normalize_dependencies(dependencies),
            cacheable=bool(cache),
        )

    async def build(self, resolved: Any = None) -> Any:
        """Invoke the factory and await its result when it is awaitable."""
        if self.dependencies is None:
            result = self.invoke()
        else:
            result = self.invoke(resolved)
        if inspect.isawaitable(result):
            result = await result
        return result


def _normalize_dependencies(raw: Any) -> Dependencies | None:
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        if not all(isinstance(name, str) for name in raw.values()):
            raise LoadError("Dependency mapping values must be service names")
        return dict(raw)
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        if not all(isinstance(name, str) for name in raw):
            raise LoadError("Dependency sequence must contain service names")
        return tuple(raw)
    raise LoadError(
        f"Unsupported dependency declaration of type {type(raw).__name__}"
    )


@dataclass(frozen=True, slots=True)
class Single:
    """Request for exactly one service."""

    name: str


@dataclass(frozen=True, slots=True)
class Batch:
    """Request for an ordered list of services."""

    names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Keyed:
    """Request for services addressed by caller-chosen keys."""

    names: Mapping[Any, str]


ServiceRequest = Union[Single, Batch, Keyed]


def classify_request(request: Any) -> ServiceRequest:
    """Turn a name, a sequence of names or a mapping of names into a request."""
    if isinstance(request, (Single, Batch, Keyed)):
        return request
    if isinstance(request, str):
        return Single(request)
    if isinstance(request, Mapping):
        _require_names(request.values())
        return Keyed(dict(request))
    if isinstance(request, Sequence) and not isinstance(request, (bytes, bytearray)):
        _require_names(request)
        return Batch(tuple(request))
    raise TypeError(
        f"Cannot resolve request of type {type(request).__name__}; "
        "expected a name, a sequence of names or a mapping of names"
    )


def _require_names(names: Iterable[Any]) -> None:
    for name in names:
        if not isinstance(name, str):
            raise TypeError(
                f"Service names must be strings, got {type(name).__name__}"
            )


__all__ = [
    "Batch",
    "Dependencies",
    "Keyed",
    "ServiceFactory",
    "ServiceRequest",
    "Single",
    "classify_request",
]

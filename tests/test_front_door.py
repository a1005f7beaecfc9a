"""Tests for the process-wide resolver front door."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from lazydi.core import (
    ConfigurationError,
    Resolver,
    ResolverNotInstalledError,
    ResolverSlot,
    clear_global,
    get_global,
    global_slot,
    install_global,
    set_global,
)
from lazydi.loading import MappingLoader


@pytest.fixture(autouse=True)
def reset_global_slot() -> Iterator[None]:
    """Ensure every test starts and ends with nothing installed."""

    clear_global()
    yield
    clear_global()


@pytest.fixture
def resolver() -> Resolver:
    return Resolver(loader=MappingLoader({"svc": lambda: "built"}))


@pytest.mark.asyncio
async def test_get_global_before_install_rejects() -> None:
    """Reading through an empty front door fails when awaited, not when called."""

    pending = get_global("svc")
    with pytest.raises(ResolverNotInstalledError):
        await pending


def test_set_global_before_install_raises_immediately() -> None:
    """Writing through an empty front door raises synchronously."""

    with pytest.raises(ResolverNotInstalledError):
        set_global("svc", object())


def test_not_installed_error_is_a_configuration_error() -> None:
    """The uninstalled error belongs to the configuration error family."""

    assert issubclass(ResolverNotInstalledError, ConfigurationError)


def test_install_rejects_non_resolver() -> None:
    """Only resolver instances can be installed."""

    with pytest.raises(ConfigurationError):
        install_global(object())  # type: ignore[arg-type]
    assert not global_slot.installed


@pytest.mark.asyncio
async def test_installed_resolver_is_shared(resolver: Resolver) -> None:
    """After installation the front door returns the resolver's own instances."""

    instance = object()
    install_global(resolver)
    resolver.set("shared", instance)

    assert await get_global("shared") is instance
    assert await get_global("shared") is await resolver.get("shared")
    assert await get_global(["svc", "shared"]) == ["built", instance]


@pytest.mark.asyncio
async def test_set_global_writes_to_installed_resolver(resolver: Resolver) -> None:
    """set_global follows the resolver's write policy."""

    install_global(resolver)
    set_global("svc", "first")
    set_global("svc", "second")
    assert await resolver.get("svc") == "first"

    set_global("svc", "second", force=True)
    assert await resolver.get("svc") == "second"


@pytest.mark.asyncio
async def test_install_replaces_previous_resolver(resolver: Resolver) -> None:
    """Installing again swaps the shared reference."""

    other = Resolver(loader=MappingLoader({"svc": lambda: "other"}))
    install_global(resolver)
    install_global(other)

    assert global_slot.current() is other
    assert await get_global("svc") == "other"


@pytest.mark.asyncio
async def test_clear_leaves_resolver_untouched(resolver: Resolver) -> None:
    """Clearing drops only the reference, not the resolver's cache."""

    install_global(resolver)
    set_global("kept", 1)
    clear_global()
    clear_global()

    assert not global_slot.installed
    assert await resolver.get("kept") == 1
    with pytest.raises(ResolverNotInstalledError):
        await get_global("kept")


@pytest.mark.asyncio
async def test_slots_are_independent(resolver: Resolver) -> None:
    """Separate slots do not observe each other's installation."""

    slot = ResolverSlot()
    slot.install(resolver)

    assert await slot.get("svc") == "built"
    assert not global_slot.installed

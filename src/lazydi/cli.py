"""Command-line entry point for lazydi."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from lazydi.core import (
    AppSettings,
    Resolver,
    ResolverSlot,
    configure_logging,
    load_app_settings,
)


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Resolve lazily built services")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory holding service modules (overrides configuration).",
    )
    parser.add_argument(
        "--suffix",
        default=None,
        help="Suffix appended to service names when locating modules.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="info",
        choices=["info", "resolve"],
        help="Operation to execute.",
    )
    parser.add_argument(
        "names",
        nargs="*",
        help="Service names to resolve with the 'resolve' command.",
    )
    return parser


def apply_overrides(args: argparse.Namespace, settings: AppSettings) -> AppSettings:
    """Return settings with command-line overrides applied."""
    updates: dict[str, object] = {}
    if args.root is not None:
        updates["root"] = args.root
    if args.suffix is not None:
        updates["suffix"] = args.suffix
    if not updates:
        return settings
    resolver_settings = settings.resolver.model_copy(update=updates)
    return settings.model_copy(update={"resolver": resolver_settings})


def execute(args: argparse.Namespace, settings: AppSettings) -> int:
    """Execute the requested CLI command and return the exit status."""
    if args.command == "info":
        print(f"Service root: {settings.resolver.root}")
        print(f"Module suffix: {settings.resolver.suffix!r}")
        print(f"Factory attribute: {settings.resolver.factory_attribute}")
        return 0

    if not args.names:
        print("No service names given.", file=sys.stderr)
        return 2

    slot = ResolverSlot()
    slot.install(Resolver.from_settings(settings.resolver))
    try:
        instances = asyncio.run(slot.get(list(args.names)))
    except Exception as exc:  # noqa: BLE001 - report any factory failure
        print(f"Resolution failed: {exc!r}", file=sys.stderr)
        return 1

    for name, instance in zip(args.names, instances):
        print(f"{name}: {instance!r}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = apply_overrides(args, load_app_settings(args.env_file))
    configure_logging(settings.logging)
    return execute(args, settings)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())

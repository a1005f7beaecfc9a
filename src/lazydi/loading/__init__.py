"""Factory loaders consumed by the resolver."""

from .loader import FileLoader, MappingLoader, ServiceLoader

__all__ = ["FileLoader", "MappingLoader", "ServiceLoader"]

"""Pluggable type, conversion and metadata backends consumed by the mapping engine."""

from .interface import (
    DEFAULT_TYPE_KEY,
    EntityMetadataProvider,
    TerminalValueConverter,
    TypeRegistry,
)
from .conversions import ConversionRegistry, NATIVE_TYPES
from .registry import SimpleTypeRegistry
from .metadata import ClassMetadataProvider

__all__ = [
    # Interfaces
    "DEFAULT_TYPE_KEY",
    "EntityMetadataProvider",
    "TerminalValueConverter",
    "TypeRegistry",
    # Implementations
    "ClassMetadataProvider",
    "ConversionRegistry",
    "NATIVE_TYPES",
    "SimpleTypeRegistry",
]

"""Shared configuration object for the mapping pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from dmk.backend import (
    DEFAULT_TYPE_KEY,
    ClassMetadataProvider,
    ConversionRegistry,
    EntityMetadataProvider,
    SimpleTypeRegistry,
    TerminalValueConverter,
    TypeRegistry,
)

from ..models import EntityDescriptor


@dataclass
class MappingContext:
    """Holds the collaborators shared by every stage of a mapping pass.

    Built once, read-only afterwards, and shared by reference between
    mappers and concurrent calls.
    """

    type_registry: TypeRegistry
    conversions: TerminalValueConverter
    metadata: EntityMetadataProvider
    separator: str = "."

    @classmethod
    def create(
        cls,
        type_key: str = DEFAULT_TYPE_KEY,
        naming: str = "simple",
        separator: str = ".",
        converters: Mapping[type, Callable[[Any], Any]] | None = None,
        simple_types: Iterable[type] = (),
        aliases: Mapping[type, str] | None = None,
    ) -> MappingContext:
        """Wire up the default registry, converters and class metadata."""
        conversions = ConversionRegistry(converters)
        registry = SimpleTypeRegistry(
            conversions,
            type_key=type_key,
            naming=naming,
            simple_types=simple_types,
            aliases=aliases,
        )
        return cls(
            type_registry=registry,
            conversions=conversions,
            metadata=ClassMetadataProvider(registry),
            separator=separator,
        )

    @property
    def type_key(self) -> str:
        return self.type_registry.type_key

    def type_key_for(self, entity: EntityDescriptor | None) -> str:
        """Discriminator key for values described by the given entity."""
        if entity is not None and entity.type_key:
            return entity.type_key
        return self.type_registry.type_key

    def entity_for(self, entity: EntityDescriptor | type | None) -> EntityDescriptor | None:
        """Accept a descriptor, a class or None where an entity is expected."""
        if entity is None or isinstance(entity, EntityDescriptor):
            return entity
        return self.metadata.get_entity(entity)

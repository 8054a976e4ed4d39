"""Entity metadata built from Python classes and memoized per type."""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import typing
from typing import Any, Iterator

from pydantic import BaseModel

from ..mapping.models import (
    DocumentField,
    EntityDescriptor,
    PropertyDescriptor,
    TypeDescriptor,
)
from .interface import EntityMetadataProvider, TypeRegistry

logger = logging.getLogger(__name__)

_NON_ENTITY_TYPES = (
    collections.abc.Mapping,
    list,
    tuple,
    set,
    frozenset,
)


class ClassMetadataProvider(EntityMetadataProvider):
    """Builds `EntityDescriptor`s from dataclasses, pydantic models and annotated classes.

    Descriptors are built lazily on first lookup and cached; nested entities
    are not resolved eagerly, so self-referencing types are fine.

    Document keys come from, in order: a `DocumentField` annotation, the
    dataclass field metadata ``key``, the pydantic serialization alias or
    alias, and finally the attribute name. A class may set ``__type_key__``
    to use another discriminator key and ``__type_alias__`` to set its type
    identifier.
    """

    def __init__(self, type_registry: TypeRegistry) -> None:
        self.type_registry = type_registry
        self._cache: dict[type, EntityDescriptor | None] = {}

    def get_entity(self, type_: type | None) -> EntityDescriptor | None:
        if type_ is None or not isinstance(type_, type):
            return None
        if type_ in self._cache:
            return self._cache[type_]
        entity = self._build_entity(type_) if self.is_entity_type(type_) else None
        self._cache[type_] = entity
        return entity

    def is_entity_type(self, type_: type) -> bool:
        if type_ is object or self.type_registry.is_terminal(type_):
            return False
        return not issubclass(type_, _NON_ENTITY_TYPES)

    def _build_entity(self, type_: type) -> EntityDescriptor:
        entity = EntityDescriptor(
            type=type_,
            type_key=getattr(type_, "__type_key__", None),
            alias=type_.__dict__.get("__type_alias__"),
        )
        for prop in self._discover_properties(type_):
            entity.properties[prop.name] = prop
        logger.debug(
            "Described entity %s with properties %s",
            entity.name,
            list(entity.properties),
        )
        return entity

    def _discover_properties(self, type_: type) -> Iterator[PropertyDescriptor]:
        if issubclass(type_, BaseModel):
            for name, info in type_.model_fields.items():
                descriptor = TypeDescriptor.of(info.annotation)
                key = (
                    self._declared_key(tuple(info.metadata) + descriptor.metadata)
                    or info.serialization_alias
                    or info.alias
                    or name
                )
                yield PropertyDescriptor(name=name, key=key, type=descriptor)
            return

        hints = self._type_hints(type_)
        if dataclasses.is_dataclass(type_):
            for dc_field in dataclasses.fields(type_):
                descriptor = TypeDescriptor.of(hints.get(dc_field.name, Any))
                key = (
                    self._declared_key(descriptor.metadata)
                    or dc_field.metadata.get("key")
                    or dc_field.name
                )
                yield PropertyDescriptor(name=dc_field.name, key=key, type=descriptor)
            return

        for name, annotation in hints.items():
            if name.startswith("_"):
                continue
            if typing.get_origin(annotation) is typing.ClassVar:
                continue
            descriptor = TypeDescriptor.of(annotation)
            key = self._declared_key(descriptor.metadata) or name
            yield PropertyDescriptor(name=name, key=key, type=descriptor)

    @staticmethod
    def _declared_key(metadata: tuple[Any, ...]) -> str | None:
        for meta in metadata:
            if isinstance(meta, DocumentField):
                return meta.key
        return None

    @staticmethod
    def _type_hints(type_: type) -> dict[str, Any]:
        try:
            return typing.get_type_hints(type_, include_extras=True)
        except (NameError, TypeError) as exc:
            # Unresolvable forward references: keep the names, drop the types.
            logger.debug("Could not resolve annotations of %s: %s", type_.__qualname__, exc)
            hints: dict[str, Any] = {}
            for base in reversed(type_.__mro__):
                for name in getattr(base, "__annotations__", {}):
                    hints[name] = Any
            return hints

from __future__ import annotations

import collections.abc
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Annotated, Dict, Mapping, Union

# Operator name -> (raw field path -> raw value), e.g. {"$set": {"model.value": 1}}.
Specification = Mapping[str, Mapping[str, Any]]

# Operator name -> (mapped key -> converted fragment).
MappedDocument = Dict[str, Dict[str, Any]]

_COLLECTION_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
)
_MAP_ORIGINS = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)


class MappingStage(str, Enum):
    """Per-entry stages of an update mapping pass."""
    RESOLVING = "resolving"
    CONVERTING = "converting"
    TAGGING = "tagging"
    ASSEMBLING = "assembling"


class DocumentField:
    """Declares the document key of a property.

    Used as ``Annotated`` metadata::

        class Child:
            value: Annotated[str, DocumentField("v")]
    """

    def __init__(self, key: str) -> None:
        self.key = key

    def __repr__(self) -> str:
        return f"DocumentField({self.key!r})"


@dataclass(frozen=True)
class TypeDescriptor:
    """A declared type annotation reduced to what the mapper needs."""

    type: type | None = None
    element: TypeDescriptor | None = None
    is_collection: bool = False
    is_map: bool = False
    metadata: tuple[Any, ...] = ()

    @property
    def actual_type(self) -> type | None:
        """Element type of collections and maps, the plain type otherwise."""
        if (self.is_collection or self.is_map) and self.element is not None:
            return self.element.actual_type
        if self.is_collection or self.is_map:
            return None
        return self.type

    @property
    def component(self) -> TypeDescriptor | None:
        """Descriptor of the elements (collections) or values (maps)."""
        if self.is_collection or self.is_map:
            return self.element
        return None

    @classmethod
    def of(cls, annotation: Any) -> TypeDescriptor:
        """Build a descriptor from a (possibly generic) type annotation."""
        metadata: tuple[Any, ...] = ()
        if typing.get_origin(annotation) is Annotated:
            metadata = tuple(annotation.__metadata__)
            annotation = typing.get_args(annotation)[0]

        # typing.Any is a class on recent interpreters
        if annotation is Any:
            return cls(metadata=metadata)

        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)

        if origin is typing.ClassVar:
            return cls.of(args[0]) if args else cls()

        if origin is Union or _is_union_type(annotation):
            candidates = [arg for arg in args if arg is not type(None)]
            if len(candidates) == 1:
                inner = cls.of(candidates[0])
                return cls(
                    type=inner.type,
                    element=inner.element,
                    is_collection=inner.is_collection,
                    is_map=inner.is_map,
                    metadata=metadata + inner.metadata,
                )
            return cls(metadata=metadata)

        if origin is not None and isinstance(origin, type):
            if issubclass(origin, str):
                return cls(type=origin, metadata=metadata)
            if origin in _MAP_ORIGINS or issubclass(origin, collections.abc.Mapping):
                value = cls.of(args[1]) if len(args) == 2 else None
                return cls(type=origin, element=value, is_map=True, metadata=metadata)
            if origin in _COLLECTION_ORIGINS or issubclass(origin, collections.abc.Collection):
                element = None
                if args and args[0] is not Ellipsis:
                    element = cls.of(args[0])
                return cls(type=origin, element=element, is_collection=True, metadata=metadata)
            return cls(type=origin, metadata=metadata)

        if isinstance(annotation, type):
            if issubclass(annotation, (str, bytes)):
                return cls(type=annotation, metadata=metadata)
            if issubclass(annotation, collections.abc.Mapping):
                return cls(type=annotation, is_map=True, metadata=metadata)
            if issubclass(annotation, (list, tuple, set, frozenset)):
                return cls(type=annotation, is_collection=True, metadata=metadata)
            return cls(type=annotation, metadata=metadata)

        # Any, TypeVars, unresolved forward references
        return cls(metadata=metadata)

    def __str__(self) -> str:
        name = getattr(self.type, "__qualname__", None) or "Any"
        if self.is_collection or self.is_map:
            inner = str(self.element) if self.element is not None else "Any"
            return f"{name}[{inner}]"
        return name


def _is_union_type(annotation: Any) -> bool:
    return isinstance(annotation, types.UnionType)


@dataclass(frozen=True)
class PropertyDescriptor:
    """A persistent property of an entity."""

    name: str
    key: str
    type: TypeDescriptor = field(default_factory=TypeDescriptor)


@dataclass
class EntityDescriptor:
    """Describes a structured type and its persistent properties."""

    type: type
    properties: dict[str, PropertyDescriptor] = field(default_factory=dict)
    type_key: str | None = None
    alias: str | None = None

    @property
    def name(self) -> str:
        return self.type.__qualname__

    def get_property(self, name: str) -> PropertyDescriptor | None:
        """Look a property up by attribute name, then by document key."""
        prop = self.properties.get(name)
        if prop is not None:
            return prop
        for candidate in self.properties.values():
            if candidate.key == name:
                return candidate
        return None


@dataclass(frozen=True)
class Field:
    """The result of resolving a raw field path against entity metadata."""

    name: str
    mapped_key: str
    segments: tuple[str, ...] = ()
    target: PropertyDescriptor | None = None
    entity: EntityDescriptor | None = None
    value_entity: EntityDescriptor | None = None
    declared_type: TypeDescriptor | None = None

    @property
    def is_mapped(self) -> bool:
        return self.target is not None

    @classmethod
    def unmapped(cls, path: str, separator: str = ".") -> Field:
        return cls(name=path, mapped_key=path, segments=tuple(path.split(separator)))

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..mapping.models import EntityDescriptor, PropertyDescriptor

DEFAULT_TYPE_KEY = "_class"


class TerminalValueConverter(ABC):
    """Abstract base class for converters of terminal (non-structured) values."""

    @abstractmethod
    def has_conversion(self, type_: type) -> bool:
        """Whether values of this type convert directly to a document value."""
        pass

    @abstractmethod
    def to_document_value(self, value: Any) -> Any:
        """Convert a terminal value to its document representation."""
        pass

    def can_convert(self, type_: type) -> bool:
        """Whether the type is representable without structural mapping.

        Plain maps and sequences count as representable: their keys are
        domain keys, never a place for type information.
        """
        if self.has_conversion(type_):
            return True
        return issubclass(type_, (Mapping, list, tuple, set, frozenset))


class TypeRegistry(ABC):
    """Abstract base class for the simple-type and type-identifier registry."""

    def __init__(self, type_key: str = DEFAULT_TYPE_KEY):
        self.type_key = type_key

    @abstractmethod
    def is_terminal(self, type_: type) -> bool:
        """Whether the type is directly representable in a document."""
        pass

    @abstractmethod
    def identifier_for_type(self, type_: type) -> str:
        """Canonical identifier for a class."""
        pass

    def type_identifier_of(self, value: Any) -> str:
        """Canonical identifier of the value's concrete runtime type."""
        return self.identifier_for_type(type(value))

    def is_type_key(self, key: str, type_key: str | None = None) -> bool:
        return key == (type_key or self.type_key)

    def write_type(self, type_: type, fragment: dict, type_key: str | None = None) -> bool:
        """Write a type tag into a document fragment unless one is present.

        Returns whether the tag was written.
        """
        key = type_key or self.type_key
        if key in fragment:
            return False
        fragment[key] = self.identifier_for_type(type_)
        return True


class EntityMetadataProvider(ABC):
    """Abstract base class for entity metadata lookups."""

    @abstractmethod
    def get_entity(self, type_: type | None) -> EntityDescriptor | None:
        """Return the descriptor of a structured type, or None for terminal/unknown types."""
        pass

    def get_property(self, entity: EntityDescriptor | None, name: str) -> PropertyDescriptor | None:
        """Find a property of an entity by attribute name or document key."""
        if entity is None:
            return None
        return entity.get_property(name)

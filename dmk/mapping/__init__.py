"""Mapping layer for turning Python object graphs into MongoDB documents.

This module provides functionality to:
- Resolve dotted field paths against entity metadata
- Convert nested objects, collections and maps into document fragments
- Keep the type of polymorphic values with a discriminator (``_class``)
- Build update specifications
"""

from .errors import ConversionError, EntityDefinitionError, MappingError
from .models import (
    DocumentField,
    EntityDescriptor,
    Field,
    MappedDocument,
    MappingStage,
    PropertyDescriptor,
    Specification,
    TypeDescriptor,
)
from .mapper import DocumentMapper, UpdateDocumentMapper
from .pipeline import MappingContext
from .update import Position, Update

__all__ = [
    # Errors
    "ConversionError",
    "EntityDefinitionError",
    "MappingError",
    # Models
    "DocumentField",
    "EntityDescriptor",
    "Field",
    "MappedDocument",
    "MappingStage",
    "PropertyDescriptor",
    "Specification",
    "TypeDescriptor",
    # Mappers
    "DocumentMapper",
    "MappingContext",
    "UpdateDocumentMapper",
    "Position",
    "Update",
]

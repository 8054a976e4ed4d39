"""Document Mapping Kit - map Python object graphs to MongoDB documents."""

from .mapping import (
    ConversionError,
    DocumentField,
    DocumentMapper,
    EntityDescriptor,
    MappingContext,
    MappingError,
    Update,
    UpdateDocumentMapper,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "DocumentField",
    "DocumentMapper",
    "EntityDescriptor",
    "MappingContext",
    "MappingError",
    "Update",
    "UpdateDocumentMapper",
]

"""Composable stages of a document mapping pass."""

from .context import MappingContext
from .path_resolution import FieldPathResolver
from .type_tagging import PassThroughTagging, TypeTaggingPolicy
from .value_conversion import ValueConverter

__all__ = [
    "MappingContext",
    "FieldPathResolver",
    "PassThroughTagging",
    "TypeTaggingPolicy",
    "ValueConverter",
]

"""Decides when a converted fragment needs a type discriminator."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..models import TypeDescriptor
from .context import MappingContext

logger = logging.getLogger(__name__)


class PassThroughTagging:
    """Tagging policy that never writes type information.

    Used for query mapping, where a discriminator would turn an equality
    match on an embedded object into a mismatch.
    """

    def __init__(self, context: MappingContext) -> None:
        self.context = context

    def maybe_tag(self, raw: Any, mapped_key: str, fragment: Any, type_key: str) -> Any:
        return fragment

    def tag_nested(
        self,
        raw: Any,
        fragment: Any,
        declared: TypeDescriptor | None,
        type_key: str,
    ) -> Any:
        return fragment


class TypeTaggingPolicy(PassThroughTagging):
    """Writes a type discriminator into structured fragments of polymorphic values.

    A tag is written when all of these hold:

    1. the raw value is not None,
    2. the mapped key is not the discriminator key itself,
    3. the fragment is a key/value tree,
    4. there is no direct conversion for the raw value's concrete type.

    Condition 4 is checked against the conversion registry, so registering a
    converter for a class switches tagging off for its values. Tags are
    written insert-if-absent: a key already present in the fragment (a user
    field with the same name, or a tag written by a nested conversion) is
    never overwritten.
    """

    def should_tag(self, raw: Any, mapped_key: str, fragment: Any, type_key: str) -> bool:
        if raw is None:
            return False
        if self.context.type_registry.is_type_key(mapped_key, type_key):
            return False
        if not isinstance(fragment, dict):
            return False
        return not self.context.conversions.can_convert(type(raw))

    def maybe_tag(self, raw: Any, mapped_key: str, fragment: Any, type_key: str) -> Any:
        if not self.should_tag(raw, mapped_key, fragment, type_key):
            return fragment
        written = self.context.type_registry.write_type(type(raw), fragment, type_key)
        if not written:
            logger.debug(
                "Keeping existing '%s' in fragment for '%s'", type_key, mapped_key
            )
        return fragment

    def tag_nested(
        self,
        raw: Any,
        fragment: Any,
        declared: TypeDescriptor | None,
        type_key: str,
    ) -> Any:
        """Tag a nested property or element whose concrete type differs from the declared one."""
        if raw is None or isinstance(raw, Mapping) or not isinstance(fragment, dict):
            return fragment
        if declared is not None and declared.type is type(raw):
            return fragment
        if self.context.conversions.can_convert(type(raw)):
            return fragment
        self.context.type_registry.write_type(type(raw), fragment, type_key)
        return fragment

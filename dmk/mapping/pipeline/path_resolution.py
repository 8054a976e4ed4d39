"""Resolution of dotted field paths against entity metadata."""

from __future__ import annotations

import logging
import re

from ..models import EntityDescriptor, Field, PropertyDescriptor, TypeDescriptor
from .context import MappingContext

logger = logging.getLogger(__name__)

# "$", "$[]", "$[identifier]" and array indexes address elements, not properties.
_POSITIONAL_SEGMENT = re.compile(r"^(\$|\$\[\w*\]|\d+)$")


class FieldPathResolver:
    """Maps raw field paths to document keys, best effort."""

    def __init__(self, context: MappingContext) -> None:
        self.context = context

    @staticmethod
    def is_positional(segment: str) -> bool:
        return bool(_POSITIONAL_SEGMENT.match(segment))

    def resolve(self, path: str, entity: EntityDescriptor | None) -> Field:
        """Resolve ``path`` starting at ``entity``.

        Unknown segments never raise: the whole path is then used unchanged
        as the document key and the field carries no property.
        """
        separator = self.context.separator
        if entity is None:
            return Field.unmapped(path, separator)

        segments = tuple(path.split(separator))
        metadata = self.context.metadata
        mapped: list[str] = []
        current: EntityDescriptor | None = entity
        declaring: EntityDescriptor | None = None
        prop: PropertyDescriptor | None = None
        declared: TypeDescriptor | None = None

        for segment in segments:
            if self.is_positional(segment):
                mapped.append(segment)
                if declared is not None and declared.component is not None:
                    declared = declared.component
                continue

            candidate = metadata.get_property(current, segment)
            if candidate is None:
                logger.debug(
                    "Segment '%s' of '%s' not found on %s, passing path through",
                    segment,
                    path,
                    current.name if current is not None else None,
                )
                return Field.unmapped(path, separator)

            mapped.append(candidate.key)
            declaring = current
            prop = candidate
            declared = candidate.type
            current = metadata.get_entity(candidate.type.actual_type)

        return Field(
            name=path,
            mapped_key=separator.join(mapped),
            segments=segments,
            target=prop,
            entity=declaring,
            value_entity=current,
            declared_type=declared,
        )

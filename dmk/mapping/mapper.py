"""Query and update document mappers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .errors import ConversionError
from .models import EntityDescriptor, Field, MappedDocument, MappingStage, Specification
from .pipeline import (
    FieldPathResolver,
    MappingContext,
    PassThroughTagging,
    TypeTaggingPolicy,
    ValueConverter,
)

logger = logging.getLogger(__name__)

_LOGICAL_KEYWORDS = ("$and", "$or", "$nor")


def _is_operator_document(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and len(value) > 0
        and all(isinstance(key, str) and key.startswith("$") for key in value)
    )


def _assign(result: dict[str, Any], field: Field, fragment: Any) -> None:
    if field.mapped_key in result:
        logger.warning(
            "Path '%s' maps to '%s' which is already set, overwriting",
            field.name,
            field.mapped_key,
        )
    result[field.mapped_key] = fragment


class DocumentMapper:
    """Maps documents keyed by field paths against entity metadata.

    The tagging policy decides whether converted values carry type
    information; by default nothing is tagged, which is what queries need.
    """

    def __init__(
        self,
        context: MappingContext,
        tagging: PassThroughTagging | None = None,
    ) -> None:
        self.context = context
        self.tagging = tagging or PassThroughTagging(context)
        self.resolver = FieldPathResolver(context)
        self.converter = ValueConverter(context, self.tagging)

    def get_mapped_object(
        self,
        document: Mapping[str, Any],
        entity: EntityDescriptor | type | None = None,
    ) -> dict[str, Any]:
        """Map a query document: keys are resolved, values converted."""
        entity = self.context.entity_for(entity)
        type_key = self.context.type_key_for(entity)
        result: dict[str, Any] = {}
        for key, value in document.items():
            if key in _LOGICAL_KEYWORDS and isinstance(value, (list, tuple)):
                result[key] = [self.get_mapped_object(part, entity) for part in value]
                continue
            if key.startswith("$"):
                result[key] = self.converter.convert(value, type_key=type_key)
                continue
            field = self.resolver.resolve(key, entity)
            _assign(result, field, self.get_mapped_value(field, value, type_key))
        return result

    def get_mapped_value(self, field: Field, value: Any, type_key: str | None = None) -> Any:
        """Convert the value of one field and apply the tagging policy.

        Operator documents such as ``{"$each": [...]}`` or ``{"$gt": 5}`` are
        mapped operand by operand in the field's context.
        """
        type_key = type_key or self.context.type_key
        if _is_operator_document(value):
            return {
                operator: self.get_mapped_value(field, operand, type_key)
                for operator, operand in value.items()
            }
        fragment, value_key = self.convert_value(field, value, type_key)
        return self.tag_value(field, value, fragment, value_key)

    def convert_value(self, field: Field, value: Any, type_key: str) -> tuple[Any, str]:
        """Convert a plain (non-operator) value; returns the fragment and its discriminator key."""
        value_key = self.converter.type_key_of(value, type_key)
        return self.converter.convert(value, field.declared_type, value_key), value_key

    def tag_value(self, field: Field, value: Any, fragment: Any, type_key: str) -> Any:
        return self.tagging.maybe_tag(value, field.mapped_key, fragment, type_key)


class UpdateDocumentMapper:
    """Maps update specifications, keeping the type information of polymorphic values.

    Shares the engine of `DocumentMapper`, configured with `TypeTaggingPolicy`
    so that nested objects written by an update can be read back as their
    concrete type.
    """

    def __init__(self, context: MappingContext, mapper: DocumentMapper | None = None) -> None:
        self.context = context
        self.mapper = mapper or DocumentMapper(context, TypeTaggingPolicy(context))

    def get_mapped_object(
        self,
        specification: Specification,
        entity: EntityDescriptor | type | None = None,
    ) -> MappedDocument:
        """Map every operator and field path of ``specification``.

        Operator and field order follow the input. Unknown paths are passed
        through; a `ConversionError` aborts the whole call.
        """
        entity = self.context.entity_for(entity)
        type_key = self.context.type_key_for(entity)
        mapped: MappedDocument = {}

        for operator, fields in specification.items():
            if not isinstance(fields, Mapping):
                mapped[operator] = self._convert_opaque(operator, fields, type_key)
                continue

            target: dict[str, Any] = mapped.setdefault(operator, {})
            for path, raw in fields.items():
                stage = MappingStage.RESOLVING
                try:
                    field = self.mapper.resolver.resolve(path, entity)
                    stage = MappingStage.CONVERTING
                    if _is_operator_document(raw):
                        fragment = self.mapper.get_mapped_value(field, raw, type_key)
                    else:
                        fragment, value_key = self.mapper.convert_value(field, raw, type_key)
                        stage = MappingStage.TAGGING
                        fragment = self.mapper.tag_value(field, raw, fragment, value_key)
                    stage = MappingStage.ASSEMBLING
                    _assign(target, field, fragment)
                except ConversionError as exc:
                    raise exc.with_context(operator=operator, path=path, stage=stage.value)

        return mapped

    def _convert_opaque(self, operator: str, value: Any, type_key: str) -> Any:
        try:
            return self.mapper.converter.convert(value, type_key=type_key)
        except ConversionError as exc:
            raise exc.with_context(operator=operator, stage=MappingStage.CONVERTING.value)

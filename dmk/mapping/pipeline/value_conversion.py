"""Recursive conversion of Python values into document fragments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

from ..errors import ConversionError
from ..models import TypeDescriptor
from .context import MappingContext
from .type_tagging import PassThroughTagging

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


class ValueConverter:
    """Converts raw values into fragments: scalars, lists or dicts.

    Terminal values go to the conversion registry. Maps and sequences are
    converted element by element. Any other object becomes a dict of its
    declared properties, keyed by document key, followed by its other public
    instance attributes; ``None`` values are left out.

    Nested values are handed to the tagging policy with their declared type,
    so a polymorphic nested value keeps its type. The fragment returned for
    the top-level value is never tagged here.
    """

    def __init__(self, context: MappingContext, tagging: PassThroughTagging | None = None) -> None:
        self.context = context
        self.tagging = tagging or PassThroughTagging(context)

    def convert(
        self,
        value: Any,
        declared: TypeDescriptor | None = None,
        type_key: str | None = None,
    ) -> Any:
        return self._convert(value, declared, type_key or self.context.type_key, frozenset())

    def type_key_of(self, value: Any, default: str) -> str:
        """Discriminator key for a value: its entity's own key, else ``default``."""
        if value is None:
            return default
        entity = self.context.metadata.get_entity(type(value))
        if entity is not None and entity.type_key:
            return entity.type_key
        return default

    def _convert(
        self,
        value: Any,
        declared: TypeDescriptor | None,
        type_key: str,
        seen: frozenset[int],
    ) -> Any:
        if value is None:
            return None

        value_type = type(value)
        if self.context.type_registry.is_terminal(value_type):
            if self.context.conversions.has_conversion(value_type):
                return self.context.conversions.to_document_value(value)
            # configured simple type without a converter
            return value

        if id(value) in seen:
            raise ConversionError(value, f"Cyclic reference to {value_type.__qualname__}")
        seen = seen | {id(value)}

        if isinstance(value, Mapping):
            return self._convert_map(value, declared, type_key, seen)
        if isinstance(value, _SEQUENCE_TYPES):
            return self._convert_sequence(value, declared, type_key, seen)
        return self._convert_object(value, type_key, seen)

    def _convert_nested(
        self,
        value: Any,
        declared: TypeDescriptor | None,
        type_key: str,
        seen: frozenset[int],
    ) -> Any:
        fragment = self._convert(value, declared, type_key, seen)
        return self.tagging.tag_nested(value, fragment, declared, self.type_key_of(value, type_key))

    def _convert_map(
        self,
        value: Mapping,
        declared: TypeDescriptor | None,
        type_key: str,
        seen: frozenset[int],
    ) -> dict[str, Any]:
        value_declared = declared.component if declared is not None and declared.is_map else None
        result: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                key = str(self._convert(key, None, type_key, seen))
            result[key] = self._convert_nested(item, value_declared, type_key, seen)
        return result

    def _convert_sequence(
        self,
        value: Any,
        declared: TypeDescriptor | None,
        type_key: str,
        seen: frozenset[int],
    ) -> list[Any]:
        element_declared: TypeDescriptor | None
        if declared is None or declared.is_map:
            element_declared = None
        elif declared.is_collection:
            element_declared = declared.component
        else:
            # e.g. {"$in": [...]} against a scalar property
            element_declared = declared
        return [
            self._convert_nested(element, element_declared, type_key, seen)
            for element in value
        ]

    def _convert_object(self, value: Any, type_key: str, seen: frozenset[int]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, item, item_declared in self._iter_properties(value):
            if item is None:
                continue
            result[key] = self._convert_nested(item, item_declared, type_key, seen)
        return result

    def _iter_properties(self, value: Any) -> Iterator[tuple[str, Any, TypeDescriptor | None]]:
        """Declared properties first, then any other public instance attributes."""
        entity = self.context.metadata.get_entity(type(value))
        declared = entity.properties if entity is not None else {}
        for prop in declared.values():
            yield prop.key, getattr(value, prop.name, None), prop.type

        attributes = _instance_attributes(value)
        if attributes is None:
            if declared:
                return
            raise ConversionError(
                value, f"{type(value).__qualname__} has no mappable properties"
            )
        for name, item in attributes.items():
            if name not in declared and not name.startswith("_"):
                yield name, item, None


def _instance_attributes(value: Any) -> dict[str, Any] | None:
    """Attributes stored on the instance, from ``__dict__`` and ``__slots__``.

    Returns None when the object has neither.
    """
    attributes: dict[str, Any] | None = None
    for base in reversed(type(value).__mro__):
        slots = base.__dict__.get("__slots__")
        if slots is None:
            continue
        if attributes is None:
            attributes = {}
        for name in (slots,) if isinstance(slots, str) else slots:
            if name.startswith("_"):
                continue
            try:
                attributes[name] = getattr(value, name)
            except AttributeError:
                # declared slot never assigned
                continue
    try:
        instance_dict = vars(value)
    except TypeError:
        return attributes
    if attributes is None:
        attributes = {}
    attributes.update(instance_dict)
    return attributes

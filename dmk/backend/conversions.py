"""Direct conversions of terminal values into BSON-encodable document values."""

from __future__ import annotations

import datetime
import decimal
import logging
import re
import uuid
from enum import Enum
from typing import Any, Callable, Mapping

from bson.binary import Binary, UuidRepresentation
from bson.code import Code
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

from ..mapping.errors import ConversionError
from .interface import TerminalValueConverter

logger = logging.getLogger(__name__)

Converter = Callable[[Any], Any]

# Types the BSON encoder writes as they are.
NATIVE_TYPES: tuple[type, ...] = (
    str,
    int,
    float,
    bool,
    bytes,
    datetime.datetime,
    ObjectId,
    Decimal128,
    Binary,
    Regex,
    Int64,
    Timestamp,
    Code,
    MinKey,
    MaxKey,
    DBRef,
    re.Pattern,
)


def _convert_enum(value: Enum) -> Any:
    return value.value


def _convert_decimal(value: decimal.Decimal) -> Decimal128:
    return Decimal128(value)


def _convert_uuid(value: uuid.UUID) -> Binary:
    return Binary.from_uuid(value, UuidRepresentation.STANDARD)


def _convert_date(value: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(value, datetime.time.min)


DEFAULT_CONVERTERS: dict[type, Converter] = {
    Enum: _convert_enum,
    decimal.Decimal: _convert_decimal,
    uuid.UUID: _convert_uuid,
    datetime.date: _convert_date,
}


class ConversionRegistry(TerminalValueConverter):
    """Registry of direct value conversions, keyed by source class.

    A converter registered for a class also applies to its subclasses, unless
    the subclass is natively encodable (``datetime`` is not converted by the
    ``date`` converter). A converter registered for the exact class always
    wins.
    """

    def __init__(
        self,
        converters: Mapping[type, Converter] | None = None,
        use_defaults: bool = True,
    ) -> None:
        self._converters: dict[type, Converter] = {}
        if use_defaults:
            self._converters.update(DEFAULT_CONVERTERS)
        if converters:
            self._converters.update(converters)

    def register(self, type_: type, converter: Converter) -> None:
        """Register a converter. Intended for setup, before mapping starts."""
        logger.debug("Registering converter for %s", type_.__qualname__)
        self._converters[type_] = converter

    def find_converter(self, type_: type) -> Converter | None:
        converter = self._converters.get(type_)
        if converter is not None:
            return converter
        for base in type_.__mro__[1:]:
            converter = self._converters.get(base)
            if converter is not None:
                return converter
        return None

    @staticmethod
    def is_native(type_: type) -> bool:
        return issubclass(type_, NATIVE_TYPES)

    def has_conversion(self, type_: type) -> bool:
        return self.is_native(type_) or self.find_converter(type_) is not None

    def to_document_value(self, value: Any) -> Any:
        value_type = type(value)
        converter = self._converters.get(value_type)
        if converter is None:
            if self.is_native(value_type):
                return value
            converter = self.find_converter(value_type)
        if converter is None:
            raise ConversionError(
                value, f"No conversion registered for {value_type.__qualname__}"
            )
        try:
            return converter(value)
        except ConversionError:
            raise
        except Exception as exc:
            raise ConversionError(
                value, f"Converter for {value_type.__qualname__} failed: {exc}"
            ) from exc

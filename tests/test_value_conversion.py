import datetime
import uuid

import pytest
from bson.binary import Binary
from bson.objectid import ObjectId

from dmk.mapping import ConversionError, TypeDescriptor
from dmk.mapping.pipeline import ValueConverter

from tests.models import Circle, Customer, Address, Node, Shape, Status, Untyped


def test_none_converts_to_none(converter):
    assert converter.convert(None) is None


def test_native_values_pass_through(converter):
    oid = ObjectId()
    moment = datetime.datetime(2023, 1, 2, 3, 4, 5)

    assert converter.convert(oid) is oid
    assert converter.convert(moment) == moment
    assert converter.convert(b"raw") == b"raw"
    assert converter.convert(True) is True


def test_registered_terminal_conversions(converter):
    identifier = uuid.UUID("12345678-1234-5678-1234-567812345678")

    assert converter.convert(datetime.date(2020, 2, 3)) == datetime.datetime(2020, 2, 3)
    assert converter.convert(Status.ACTIVE) == "active"
    converted = converter.convert(identifier)
    assert isinstance(converted, Binary)
    assert converted.as_uuid() == identifier


def test_sequences_convert_elementwise(converter):
    assert converter.convert((1, "a", None)) == [1, "a", None]


def test_map_keys_are_stringified(converter):
    assert converter.convert({1: "one", Status.RETIRED: "gone"}) == {"1": "one", "retired": "gone"}


def test_map_values_keep_their_type(converter):
    converted = converter.convert({"shape": Circle("c")}, TypeDescriptor.of(dict[str, Shape]))

    assert converted == {"shape": {"name": "c", "radius": 1.0, "_class": "Circle"}}


def test_map_itself_is_never_tagged(converter):
    assert "_class" not in converter.convert({"a": 1}, TypeDescriptor.of(Shape))


def test_top_level_object_is_left_untagged(converter):
    assert converter.convert(Circle("c"), TypeDescriptor.of(Shape)) == {"name": "c", "radius": 1.0}


def test_elements_of_unknown_type_are_tagged(converter):
    assert converter.convert([Circle("c")]) == [{"name": "c", "radius": 1.0, "_class": "Circle"}]


def test_pydantic_models_use_aliases(converter):
    customer = Customer(name="ann", address=Address(street="Main", town="Springfield"), tags=["a"])

    assert converter.convert(customer) == {
        "name": "ann",
        "address": {"street": "Main", "town": "Springfield"},
        "tags": ["a"],
    }


def test_objects_without_declared_properties_use_public_attributes(converter):
    assert converter.convert(Untyped(1, "x")) == {"a": 1, "b": "x"}


def test_shared_references_are_not_cycles(converter):
    shared = Circle("shared")

    assert converter.convert([shared, shared]) == [
        {"name": "shared", "radius": 1.0, "_class": "Circle"},
        {"name": "shared", "radius": 1.0, "_class": "Circle"},
    ]


def test_cycles_are_rejected(converter):
    first = Node("a")
    second = Node("b", first)
    first.next = second

    with pytest.raises(ConversionError, match="Cyclic reference"):
        converter.convert(first)


def test_unsupported_terminal_value_raises(context):
    with pytest.raises(ConversionError) as exc_info:
        context.conversions.to_document_value(1j)

    assert exc_info.value.value == 1j


def test_pass_through_tagging_writes_nothing(context):
    plain = ValueConverter(context)

    assert plain.convert([Circle("c")]) == [{"name": "c", "radius": 1.0}]

from typing import Annotated, Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Set

from dmk.mapping import DocumentField, EntityDescriptor, Field, PropertyDescriptor, TypeDescriptor

from tests.models import Shape


def test_plain_type():
    descriptor = TypeDescriptor.of(int)

    assert descriptor.type is int
    assert descriptor.actual_type is int
    assert not descriptor.is_collection
    assert not descriptor.is_map


def test_optional_is_unwrapped():
    assert TypeDescriptor.of(Optional[Shape]).type is Shape
    assert TypeDescriptor.of(Shape | None).type is Shape


def test_collections():
    for annotation in (List[Shape], list[Shape], Sequence[Shape], Set[Shape], tuple[Shape, ...]):
        descriptor = TypeDescriptor.of(annotation)
        assert descriptor.is_collection
        assert descriptor.actual_type is Shape
        assert descriptor.component.type is Shape


def test_maps():
    for annotation in (Dict[str, Shape], dict[str, Shape], Mapping[str, Shape]):
        descriptor = TypeDescriptor.of(annotation)
        assert descriptor.is_map
        assert descriptor.actual_type is Shape


def test_bare_containers_have_no_element_type():
    assert TypeDescriptor.of(list).is_collection
    assert TypeDescriptor.of(list).actual_type is None
    assert TypeDescriptor.of(dict).is_map


def test_strings_are_not_collections():
    assert not TypeDescriptor.of(str).is_collection
    assert not TypeDescriptor.of(bytes).is_collection


def test_unknown_types():
    assert TypeDescriptor.of(Any).type is None
    assert TypeDescriptor.of(int | str).type is None
    assert TypeDescriptor.of("Forward").type is None


def test_annotated_metadata_is_kept():
    marker = DocumentField("k")

    descriptor = TypeDescriptor.of(Annotated[Optional[int], marker])

    assert descriptor.type is int
    assert marker in descriptor.metadata


def test_class_var_is_unwrapped():
    assert TypeDescriptor.of(ClassVar[int]).type is int


def test_str_rendering():
    assert str(TypeDescriptor.of(List[Shape])) == "list[Shape]"
    assert str(TypeDescriptor.of(Any)) == "Any"


def test_entity_property_lookup():
    entity = EntityDescriptor(
        type=Shape,
        properties={"name": PropertyDescriptor(name="name", key="n")},
    )

    assert entity.get_property("name").key == "n"
    assert entity.get_property("n").name == "name"
    assert entity.get_property("other") is None
    assert entity.name == "Shape"


def test_unmapped_field():
    field = Field.unmapped("a.b")

    assert field.mapped_key == "a.b"
    assert field.segments == ("a", "b")
    assert not field.is_mapped

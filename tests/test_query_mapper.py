import datetime
import logging

from tests.models import Circle, Customer, Drawing, Status


def test_keys_are_mapped_and_objects_left_untagged(query_mapper):
    document = query_mapper.get_mapped_object(
        {"owner": "alice", "main": Circle("c")},
        Drawing,
    )

    assert document == {"owner_id": "alice", "main": {"name": "c", "radius": 1.0}}


def test_logical_operators_are_mapped_recursively(query_mapper):
    document = query_mapper.get_mapped_object(
        {"$or": [{"owner": "alice"}, {"notes": "draft"}]},
        Drawing,
    )

    assert document == {"$or": [{"owner_id": "alice"}, {"n": "draft"}]}


def test_operator_documents_are_mapped_per_operand(query_mapper):
    document = query_mapper.get_mapped_object(
        {
            "status": {"$in": [Status.ACTIVE, Status.RETIRED]},
            "created": {"$gt": datetime.date(2020, 1, 1)},
        },
        Drawing,
    )

    assert document == {
        "status": {"$in": ["active", "retired"]},
        "created": {"$gt": datetime.datetime(2020, 1, 1)},
    }


def test_top_level_operators_are_converted(query_mapper):
    document = query_mapper.get_mapped_object({"$comment": "lookup", "title": "t"}, Drawing)

    assert document == {"$comment": "lookup", "title": "t"}


def test_nested_pydantic_aliases(query_mapper):
    document = query_mapper.get_mapped_object({"address.city": "Oslo"}, Customer)

    assert document == {"address.town": "Oslo"}


def test_without_entity_keys_are_kept(query_mapper):
    document = query_mapper.get_mapped_object({"owner": "alice", "size": {"$gte": 2}})

    assert document == {"owner": "alice", "size": {"$gte": 2}}


def test_key_collisions_are_reported(query_mapper, caplog):
    with caplog.at_level(logging.WARNING, logger="dmk.mapping.mapper"):
        document = query_mapper.get_mapped_object({"notes": "a", "n": "b"}, Drawing)

    assert document == {"n": "b"}
    assert "already set" in caplog.text

import pytest

from dmk.mapping import DocumentMapper, MappingContext, UpdateDocumentMapper
from dmk.mapping.pipeline import FieldPathResolver, TypeTaggingPolicy, ValueConverter


@pytest.fixture()
def context():
    return MappingContext.create()


@pytest.fixture()
def update_mapper(context):
    return UpdateDocumentMapper(context)


@pytest.fixture()
def query_mapper(context):
    return DocumentMapper(context)


@pytest.fixture()
def resolver(context):
    return FieldPathResolver(context)


@pytest.fixture()
def tagging(context):
    return TypeTaggingPolicy(context)


@pytest.fixture()
def converter(context, tagging):
    return ValueConverter(context, tagging)

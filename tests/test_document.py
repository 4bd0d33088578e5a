"""Tests for parsing and serializing JSON:API documents."""

import pytest

from jsonapi_core.exceptions import InvalidDocument
from jsonapi_core.schemas.document import (
    Document,
    JSONAPIObject,
    parse_document,
    serialize_document,
)
from jsonapi_core.schemas.links import LinkObject
from jsonapi_core.schemas.resource import (
    RelationshipObject,
    ResourceIdentifierObject,
    ResourceObject,
    ToMany,
    ToOne,
)


def test_parse_single_resource():
    document = parse_document(
        {"data": {"type": "post", "id": "1", "attributes": {"title": "Hi"}}}
    )

    assert isinstance(document.data, ResourceObject)
    assert document.data.id == "1"
    assert document.data.type == "post"
    assert document.data.attributes == {"title": "Hi"}
    assert document.data.relationships == {}
    assert document.included is None


def test_parse_relationship_linkage_shapes():
    document = parse_document(
        {
            "data": {
                "type": "articles",
                "lid": "tmp-1",
                "relationships": {
                    "author": {"data": {"type": "people", "id": "9"}},
                    "editor": {"data": None},
                    "comments": {
                        "data": [
                            {"type": "comments", "id": "5"},
                            {"type": "comments", "lid": "c"},
                        ]
                    },
                    "tags": {"links": {"related": "/articles/1/tags"}},
                },
            }
        }
    )
    relationships = document.data.relationships

    assert document.data.local_id == "tmp-1"
    author = ResourceIdentifierObject(type="people", id="9")
    assert relationships["author"].data == ToOne(data=author)
    assert relationships["editor"].data == ToOne()
    comments = relationships["comments"].data.identifiers
    assert [identifier.local_id for identifier in comments] == [None, "c"]
    assert isinstance(relationships["comments"].data, ToMany)
    assert relationships["tags"].data is None
    assert relationships["tags"].links == {"related": "/articles/1/tags"}


def test_parse_collection_with_included_and_links():
    document = parse_document(
        {
            "data": [{"type": "articles", "id": "1"}],
            "included": [{"type": "people", "id": "2", "attributes": {"name": "Ada"}}],
            "links": {
                "self": "/articles",
                "next": {"href": "/articles?page[number]=2", "meta": {"count": 3}},
            },
            "meta": {"total": 1},
            "jsonapi": {"version": "1.1"},
        }
    )

    assert [resource.id for resource in document.resources] == ["1"]
    assert document.included[0].attributes == {"name": "Ada"}
    assert document.links["next"] == LinkObject(
        href="/articles?page[number]=2", meta={"count": 3}
    )
    assert document.meta == {"total": 1}
    assert document.jsonapi == JSONAPIObject(version="1.1")


def test_parse_null_data_is_kept_explicit():
    document = parse_document({"data": None})

    assert document.data is None
    assert document.has_data
    assert document.serialize() == {"data": None}


@pytest.mark.parametrize(
    "payload, pointer",
    [
        ([], ""),
        ({"data": {"id": "1"}}, "/data"),
        ({"data": {"type": "articles", "id": 1}}, "/data/id"),
        ({"data": {"type": "articles", "id": ""}}, "/data/id"),
        ({"data": [{"type": "articles"}, "oops"]}, "/data/1"),
        ({"data": "articles"}, "/data"),
        (
            {"data": {"type": "articles", "attributes": {"id": "1"}}},
            "/data/attributes/id",
        ),
        (
            {"data": {"type": "articles", "relationships": {"type": {}}}},
            "/data/relationships/type",
        ),
        ({"data": {"type": "articles", "attributes": []}}, "/data/attributes"),
        (
            {
                "data": {
                    "type": "articles",
                    "relationships": {"author": {"data": {"type": "people"}}},
                }
            },
            "/data/relationships/author/data",
        ),
        (
            {"data": {"type": "articles", "relationships": {"author": {"data": "2"}}}},
            "/data/relationships/author/data",
        ),
        ({"data": {"type": "articles", "meta": "x"}}, "/data/meta"),
        ({"data": None, "links": {"self": {"title": "no href"}}}, "/links/self/href"),
        ({"data": None, "links": {"self": 1}}, "/links/self"),
        ({"data": None, "included": {}}, "/included"),
        ({"included": []}, "/included"),
        ({"errors": {}}, "/errors"),
        ({"data": None, "jsonapi": {"version": "2.0"}}, "/jsonapi/version"),
    ],
)
def test_parse_rejects_invalid_documents(payload, pointer):
    with pytest.raises(InvalidDocument) as excinfo:
        parse_document(payload)

    assert excinfo.value.pointer == pointer
    assert excinfo.value.source == {"pointer": pointer}
    assert excinfo.value.links["about"].startswith("https://jsonapi.org/format/")


def test_parse_rejects_data_and_errors():
    with pytest.raises(InvalidDocument, match="both 'data' and 'errors'"):
        parse_document({"data": None, "errors": [{"status": "400"}]})


def test_parse_rejects_field_both_attribute_and_relationship():
    with pytest.raises(InvalidDocument, match="both an attribute and a relationship"):
        parse_document(
            {
                "data": {
                    "type": "articles",
                    "attributes": {"author": "Ada"},
                    "relationships": {"author": {"data": None}},
                }
            }
        )


def test_parse_error_document():
    document = parse_document(
        {
            "errors": [
                {"status": 422, "title": "Invalid", "source": {"pointer": "/data"}}
            ],
            "meta": None,
        }
    )

    assert document.errors[0].status == "422"
    assert document.errors[0].source == {"pointer": "/data"}
    assert document.meta is None
    assert not document.has_data


def test_serialize_resource_object():
    resource = ResourceObject(
        type="articles",
        id="1",
        attributes={"title": "Hi"},
        relationships={
            "author": RelationshipObject(
                data=ToOne(data=ResourceIdentifierObject(type="people", id="2"))
            ),
            "comments": RelationshipObject(data=ToMany()),
            "editor": RelationshipObject(data=ToOne()),
        },
        links={"self": "/articles/1"},
    )

    assert resource.serialize() == {
        "type": "articles",
        "id": "1",
        "attributes": {"title": "Hi"},
        "relationships": {
            "author": {"data": {"type": "people", "id": "2"}},
            "comments": {"data": []},
            "editor": {"data": None},
        },
        "links": {"self": "/articles/1"},
    }


def test_serialize_keeps_empty_attributes_and_local_ids():
    resource = ResourceObject(type="articles", local_id="tmp")

    assert resource.serialize() == {"type": "articles", "lid": "tmp", "attributes": {}}


def test_serialize_meta_only_document():
    document = Document(meta={"count": 0}, jsonapi=JSONAPIObject(version="1.0"))

    assert serialize_document(document) == {
        "meta": {"count": 0},
        "jsonapi": {"version": "1.0"},
    }


def test_serialize_rejects_data_and_errors():
    document = Document(data=None, errors=[])

    with pytest.raises(InvalidDocument):
        document.serialize()


def test_parse_then_serialize_is_stable():
    payload = {
        "data": [
            {
                "type": "articles",
                "id": "1",
                "attributes": {"title": "Hi"},
                "relationships": {"author": {"data": {"type": "people", "id": "2"}}},
            }
        ],
        "included": [{"type": "people", "id": "2", "attributes": {"name": "Ada"}}],
        "links": {"self": "/articles"},
    }

    assert parse_document(payload).serialize() == payload

"""Tests for the FastAPI dependencies, response class and middleware."""

import json
import logging

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from jsonapi_core.dependencies import JSONAPIBody, JSONAPIQuery
from jsonapi_core.middleware import ContentNegotiationMiddleware, ErrorHandlerMiddleware
from jsonapi_core.query.context import QueryContext
from jsonapi_core.responses import JSONAPIResponse
from jsonapi_core.schemas.document import Document

JSONAPI_HEADERS = {
    "content-type": "application/vnd.api+json",
    "accept": "application/vnd.api+json",
}


@pytest.fixture
def client(api, graph):
    app = FastAPI()
    app.add_middleware(ContentNegotiationMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    @app.get("/articles")
    def list_articles(query: QueryContext = Depends(JSONAPIQuery(api, "articles"))):
        return JSONAPIResponse(api.normalize("articles", graph, query))

    @app.post("/articles")
    def create_article(params: dict = Depends(JSONAPIBody(api, "articles"))):
        return JSONAPIResponse({"meta": params}, status_code=201)

    @app.post("/documents")
    def echo_document(
        document: Document = Depends(JSONAPIBody(api, "articles", denormalize=False)),
    ):
        return JSONAPIResponse(document)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database unavailable")

    return TestClient(app)


def test_render_with_query(client):
    response = client.get(
        "/articles", params={"include": "author", "fields[articles]": "title"}
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/vnd.api+json"
    body = response.json()
    attributes = [resource["attributes"] for resource in body["data"]]
    assert attributes == [{"title": "Hi"}, {"title": "Again"}]
    included = [(resource["type"], resource["id"]) for resource in body["included"]]
    assert included == [("people", "2")]


def test_invalid_query_becomes_error_document(client, caplog):
    with caplog.at_level(logging.WARNING, logger="jsonapi_core"):
        response = client.get("/articles", params={"include": "bogus"})

    assert response.status_code == 400
    assert response.json() == {
        "errors": [
            {
                "status": "400",
                "title": "Invalid Query Parameter",
                "detail": "invalid parameter include=bogus for type articles",
                "source": {"parameter": "include"},
            }
        ]
    }
    assert any("include=bogus" in record.getMessage() for record in caplog.records)


def test_body_is_denormalized(client):
    payload = {
        "data": {
            "type": "articles",
            "attributes": {"title": "New", "wordCount": 2},
            "relationships": {"author": {"data": {"type": "people", "id": "2"}}},
        }
    }

    response = client.post(
        "/articles", content=json.dumps(payload), headers=JSONAPI_HEADERS
    )

    assert response.status_code == 201
    assert response.json() == {
        "meta": {
            "title": "New",
            "word_count": 2,
            "author": {"type": "people", "id": "2"},
            "author_id": "2",
        }
    }


def test_body_document_is_returned(client):
    payload = {"data": {"type": "articles", "id": "1", "attributes": {"title": "Hi"}}}

    response = client.post(
        "/documents", content=json.dumps(payload), headers=JSONAPI_HEADERS
    )

    assert response.json() == payload


def test_invalid_document_points_at_the_problem(client):
    payload = {"data": {"type": "articles", "attributes": {"id": "1"}}}

    response = client.post(
        "/articles", content=json.dumps(payload), headers=JSONAPI_HEADERS
    )

    assert response.status_code == 400
    error = response.json()["errors"][0]
    assert error["source"] == {"pointer": "/data/attributes/id"}
    assert error["links"]["about"].startswith("https://jsonapi.org/format/")


def test_malformed_json_body(client):
    response = client.post("/articles", content="{not json", headers=JSONAPI_HEADERS)

    assert response.status_code == 400
    detail = response.json()["errors"][0]["detail"]
    assert detail == "Request body must be a JSON document"


@pytest.mark.parametrize(
    "content_type",
    ["application/json", "application/vnd.api+json; charset=utf-8"],
)
def test_unsupported_content_type(client, content_type):
    response = client.post(
        "/articles", content="{}", headers={"content-type": content_type}
    )

    assert response.status_code == 415
    error = response.json()["errors"][0]
    assert error["status"] == "415"
    assert error["source"] == {"header": "content-type"}


def test_content_type_with_extension_is_accepted(client):
    headers = {
        "content-type": 'application/vnd.api+json; ext="https://jsonapi.org/ext/atomic"'
    }

    response = client.post(
        "/articles", content=json.dumps({"data": None}), headers=headers
    )

    assert response.status_code == 201


@pytest.mark.parametrize(
    "accept", ["text/html", "application/vnd.api+json; charset=utf-8"]
)
def test_not_acceptable(client, accept):
    response = client.get("/articles", headers={"accept": accept})

    assert response.status_code == 406
    assert response.json()["errors"][0]["source"] == {"header": "accept"}


@pytest.mark.parametrize(
    "accept", ["*/*", "text/html, application/vnd.api+json", "application/*"]
)
def test_acceptable(client, accept):
    assert client.get("/articles", headers={"accept": accept}).status_code == 200


def test_unexpected_errors_become_500(client, caplog):
    with caplog.at_level(logging.ERROR, logger="jsonapi_core"):
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {
        "errors": [{"status": "500", "title": "Internal Server Error"}]
    }
    assert caplog.records[-1].exc_info is not None

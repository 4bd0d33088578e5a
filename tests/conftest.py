"""Pytest configuration and fixtures."""

import pytest

from jsonapi_core.api import JSONAPI
from jsonapi_core.config import JSONAPISettings
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import JSONAPIResource, ResourceSchema


class ArticleResource(JSONAPIResource):
    class Meta:
        type_ = "articles"
        attributes = ["title", "body", "word_count"]
        relationships = {
            "author": {"resource": "people"},
            "comments": {"resource": "comments", "many": True},
        }

    @classmethod
    def links(cls, data):
        return {"self": f"/articles/{data['id']}"}


PEOPLE = ResourceSchema(
    type="people",
    attributes=["name", "first_name"],
    relationships={"articles": {"resource": "articles", "many": True}},
)

COMMENTS = ResourceSchema(
    type="comments",
    attributes=["body"],
    relationships={"user": {"resource": "people"}},
)


@pytest.fixture
def registry():
    """Registry of articles, people and comments (people link back to articles)."""
    return ResourceRegistry([ArticleResource, PEOPLE, COMMENTS])


@pytest.fixture
def article_resource():
    return ArticleResource


@pytest.fixture
def articles(registry):
    return registry.get("articles")


@pytest.fixture
def settings():
    return JSONAPISettings()


@pytest.fixture
def api(registry, settings):
    return JSONAPI(registry, settings)


@pytest.fixture
def graph():
    """Two articles by the same author.

    The second article's comment is by that author too.
    """
    author = {"id": 2, "name": "Ada", "first_name": "Ada", "articles": []}
    reader = {"id": 3, "name": "Bob", "first_name": "Bob", "articles": []}
    first = {
        "id": 1,
        "title": "Hi",
        "body": "First",
        "word_count": 1,
        "author": author,
        "comments": [{"id": 10, "body": "Nice", "user": reader}],
    }
    second = {
        "id": 4,
        "title": "Again",
        "body": "Second",
        "word_count": 2,
        "author": author,
        "comments": [{"id": 11, "body": "Thanks", "user": author}],
    }
    author["articles"] = [first, second]
    return [first, second]

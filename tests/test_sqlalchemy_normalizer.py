"""Tests for rendering SQLAlchemy instances."""

from typing import List, Optional

import pytest
from sqlalchemy import ForeignKey, create_engine, select
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
    selectinload,
)

from jsonapi_core.query.context import parse_query
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema
from jsonapi_core.sqlalchemy.normalizer import SQLAlchemyNormalizer


class Base(DeclarativeBase):
    pass


class Person(Base):
    __tablename__ = "people"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str]
    articles: Mapped[List["Article"]] = relationship(back_populates="author")


class Article(Base):
    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str]
    author_id: Mapped[Optional[int]] = mapped_column(ForeignKey("people.id"))
    author: Mapped[Optional[Person]] = relationship(back_populates="articles")
    comments: Mapped[List["Comment"]] = relationship(back_populates="article")


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    body: Mapped[str]
    article_id: Mapped[int] = mapped_column(ForeignKey("articles.id"))
    article: Mapped[Article] = relationship(back_populates="comments")
    user_id: Mapped[int] = mapped_column(ForeignKey("people.id"))
    user: Mapped[Person] = relationship()


class Playlist(Base):
    __tablename__ = "playlists"

    id: Mapped[int] = mapped_column(primary_key=True)

    def __iter__(self):
        return iter(())


@pytest.fixture
def sql_registry():
    return ResourceRegistry(
        [
            ResourceSchema(
                type="articles",
                attributes=["title"],
                relationships={
                    "author": {"resource": "people"},
                    "comments": {"resource": "comments", "many": True},
                },
            ),
            ResourceSchema(
                type="people",
                attributes=["name"],
                relationships={"articles": {"resource": "articles", "many": True}},
            ),
            ResourceSchema(
                type="comments",
                attributes=["body"],
                relationships={"user": {"resource": "people"}},
            ),
        ]
    )


@pytest.fixture
def engine():
    """Create an in-memory database holding two articles by the same author."""
    engine = create_engine("sqlite://", echo=False)
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        ada = Person(id=2, name="Ada")
        bob = Person(id=3, name="Bob")
        first = Article(id=1, title="Hi", author=ada)
        second = Article(id=4, title="Again", author=ada)
        session.add_all(
            [
                first,
                second,
                bob,
                Comment(id=10, body="Nice", article=first, user=bob),
                Comment(id=11, body="Thanks", article=second, user=ada),
            ]
        )
        session.commit()
    try:
        yield engine
    finally:
        engine.dispose()


def load_articles(engine, *options):
    with Session(engine) as session:
        statement = select(Article).options(*options).order_by(Article.id)
        return session.scalars(statement).all()


def test_unloaded_relationships_are_omitted(engine, sql_registry):
    articles = load_articles(engine)
    normalizer = SQLAlchemyNormalizer(sql_registry)

    document = normalizer.normalize(sql_registry.get("articles"), articles).serialize()

    assert document["data"] == [
        {"type": "articles", "id": "1", "attributes": {"title": "Hi"}},
        {"type": "articles", "id": "4", "attributes": {"title": "Again"}},
    ]


def test_loaded_relationships_are_rendered_and_included(engine, sql_registry):
    articles = load_articles(
        engine,
        selectinload(Article.author),
        selectinload(Article.comments).selectinload(Comment.user),
    )
    schema = sql_registry.get("articles")
    query = parse_query(schema, sql_registry, {"include": "author,comments.user"})

    normalizer = SQLAlchemyNormalizer(sql_registry)
    document = normalizer.normalize(schema, articles, query).serialize()

    assert document["data"][0]["relationships"] == {
        "author": {"data": {"type": "people", "id": "2"}},
        "comments": {"data": [{"type": "comments", "id": "10"}]},
    }
    included = [(resource["type"], resource["id"]) for resource in document["included"]]
    assert included == [
        ("people", "2"),
        ("comments", "10"),
        ("people", "3"),
        ("comments", "11"),
    ]
    people = document["included"][0]
    assert people["attributes"] == {"name": "Ada"}
    assert "relationships" not in people


def test_set_empty_relationships_render_empty_linkage(sql_registry):
    article = Article(id=5, title="Orphan", author=None, comments=[])

    normalizer = SQLAlchemyNormalizer(sql_registry)
    document = normalizer.normalize(sql_registry.get("articles"), article).serialize()

    assert document["data"]["relationships"] == {
        "author": {"data": None},
        "comments": {"data": []},
    }


def test_plain_objects_fall_back_to_attribute_access(sql_registry):
    document = SQLAlchemyNormalizer(sql_registry).normalize(
        sql_registry.get("people"), {"id": 9, "name": "Eve", "articles": []}
    ).serialize()

    assert document["data"]["relationships"] == {"articles": {"data": []}}


def test_scalar_results_render_as_collections(engine, sql_registry):
    normalizer = SQLAlchemyNormalizer(sql_registry)

    with Session(engine) as session:
        result = session.scalars(select(Article).order_by(Article.id))
        schema = sql_registry.get("articles")
        document = normalizer.normalize(schema, result).serialize()

    assert [resource["id"] for resource in document["data"]] == ["1", "4"]


def test_mapped_instances_are_never_collections(sql_registry):
    normalizer = SQLAlchemyNormalizer(sql_registry)

    assert normalizer.is_collection(Playlist(id=1)) is False
    assert normalizer.is_collection([Playlist(id=1)]) is True

"""Tests for field name recasing."""

import pytest

from jsonapi_core.config import FieldCase
from jsonapi_core.resources.recase import camelize, dasherize, recase, underscore


@pytest.mark.parametrize(
    "field, expected",
    [
        ("top_posts", "topPosts"),
        ("top-posts", "topPosts"),
        ("a_b_c", "aBC"),
        ("name", "name"),
        ("topPosts", "topPosts"),
        ("_top__posts_", "_top__posts_"),
        ("", ""),
    ],
)
def test_camelize(field, expected):
    assert camelize(field) == expected


@pytest.mark.parametrize(
    "field, expected",
    [
        ("top_posts", "top-posts"),
        ("a_b_c", "a-b-c"),
        ("_top__posts_", "_top__posts_"),
    ],
)
def test_dasherize(field, expected):
    assert dasherize(field) == expected


@pytest.mark.parametrize(
    "field, expected",
    [
        ("topPosts", "top_posts"),
        ("top-posts", "top_posts"),
        ("a-b-c", "a_b_c"),
        ("corgiAge", "corgi_age"),
        ("top_posts", "top_posts"),
    ],
)
def test_underscore(field, expected):
    assert underscore(field) == expected


def test_recase_accepts_mode_names():
    assert recase("word_count", "dasherize") == "word-count"
    assert recase("wordCount", FieldCase.UNDERSCORE) == "word_count"


def test_recase_modes_are_idempotent():
    for case in FieldCase:
        once = recase("first_name", case)
        assert recase(once, case) == once


def test_recase_rejects_unknown_mode():
    with pytest.raises(ValueError):
        recase("name", "shout")

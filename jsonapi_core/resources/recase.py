"""Field name case transforms used at the wire boundary."""

from __future__ import annotations

import re

from jsonapi_core.config import FieldCase

# Separators only count when an alphanumeric character sits on both sides.
_SEPARATOR = re.compile(r"(?<=[a-zA-Z0-9])[-_](?=[a-zA-Z0-9])")
_UNDERSCORE = re.compile(r"(?<=[a-zA-Z0-9])_(?=[a-zA-Z0-9])")
_DASH = re.compile(r"(?<=[a-zA-Z0-9])-(?=[a-zA-Z0-9])")
_CAMEL_HUMP = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _upper_first(segment: str) -> str:
    return segment[:1].upper() + segment[1:]


def _lower_first(segment: str) -> str:
    return segment[:1].lower() + segment[1:]


def camelize(field: str) -> str:
    """Return ``field`` in camelCase, e.g. ``top_posts`` -> ``topPosts``."""
    if not field:
        return field
    head, *tail = _SEPARATOR.split(field)
    return _lower_first(head) + "".join(_upper_first(segment) for segment in tail)


def dasherize(field: str) -> str:
    """Return ``field`` with inner underscores replaced by dashes."""
    return _UNDERSCORE.sub("-", field)


def underscore(field: str) -> str:
    """Return ``field`` in snake_case, e.g. ``corgiAge`` -> ``corgi_age``."""
    return _CAMEL_HUMP.sub("_", _DASH.sub("_", field)).lower()


_TRANSFORMS = {
    FieldCase.CAMELIZE: camelize,
    FieldCase.DASHERIZE: dasherize,
    FieldCase.UNDERSCORE: underscore,
}


def recase(field: str, case: FieldCase | str) -> str:
    """Recase a field name.

    Underscores and dashes that are not between letters or digits are kept as
    they are, so ``_top__posts_`` is returned unchanged by every mode.
    """
    return _TRANSFORMS[FieldCase(case)](field)

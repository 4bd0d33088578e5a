"""Sorting: the ``sort`` query parameter."""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple

from jsonapi_core.config import FieldCase, JSONAPISettings
from jsonapi_core.exceptions import InvalidQuery
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema

from .params import split_csv


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortField(NamedTuple):
    """One sort criterion; ``field`` joins a relationship path with underscores."""

    direction: SortDirection
    field: str


def parse_sort(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    sort: Any,
    settings: JSONAPISettings | None = None,
) -> list[SortField]:
    """Parse ``sort=-created,author.name`` into ordered sort criteria."""
    if sort is None:
        return []
    if not isinstance(sort, str):
        raise InvalidQuery(type=schema.type, param="sort", value=sort)

    case = (settings or JSONAPISettings()).case
    criteria = []
    for item in split_csv(sort):
        direction = SortDirection.DESC if item.startswith("-") else SortDirection.ASC
        path = item[1:] if direction is SortDirection.DESC else item
        segments = path.split(".")
        if not all(segments):
            raise InvalidQuery(type=schema.type, param="sort", value=item)
        field = _resolve(schema, registry, segments, case)
        criteria.append(SortField(direction, field))
    return criteria


def _resolve(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    segments: list[str],
    case: FieldCase,
) -> str:
    current = schema
    names = []
    for segment in segments[:-1]:
        name = current.resolve_field(segment, case)
        relationship = current.relationship(name)
        if relationship is None:
            raise InvalidQuery(type=current.type, param="sort", value=segment)
        names.append(name)
        current = registry.related(current, relationship)

    field = current.resolve_field(segments[-1], case)
    if field != current.id_attribute and field not in current.attribute_names:
        raise InvalidQuery(type=current.type, param="sort", value=segments[-1])
    names.append(field)
    return "_".join(names)

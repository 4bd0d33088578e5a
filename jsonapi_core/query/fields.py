"""Sparse fieldsets: the ``fields[<type>]`` query parameter."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from jsonapi_core.config import JSONAPISettings
from jsonapi_core.exceptions import InvalidQuery
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema

from .params import split_csv

logger = logging.getLogger(__name__)


def parse_fields(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    fields: Any,
    settings: JSONAPISettings | None = None,
) -> dict[str, frozenset[str]]:
    """Validate requested fieldsets and return internal attribute names per type.

    A type missing from the result means "all attributes"; an empty set means
    "no attributes" (``fields[articles]=``).
    """
    case = (settings or JSONAPISettings()).case
    if fields is None:
        return {}
    if not isinstance(fields, Mapping):
        raise InvalidQuery(type=schema.type, param="fields", value=fields)

    parsed: dict[str, frozenset[str]] = {}
    for type_, value in fields.items():
        param = f"fields[{type_}]"
        target = registry.reachable_type(schema, type_)
        if target is None:
            logger.debug("No relationship of %s exposes type %s", schema.type, type_)
            raise InvalidQuery(type=schema.type, param=param, value=type_)
        if not isinstance(value, str):
            raise InvalidQuery(type=target.type, param=param, value=value)

        names = {name: target.resolve_field(name, case) for name in split_csv(value)}
        unknown = sorted(
            name for name, field in names.items() if field not in target.attribute_names
        )
        if unknown:
            raise InvalidQuery(type=target.type, param=param, value=",".join(unknown))
        parsed[type_] = frozenset(names.values())
    return parsed

"""Default ``filter`` parser: accept a mapping unchanged."""

from __future__ import annotations

from typing import Any, Mapping

from jsonapi_core.config import JSONAPISettings
from jsonapi_core.exceptions import InvalidQuery
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema


def parse_filter(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    filter_: Any,
    settings: JSONAPISettings | None = None,
) -> Any:
    """Return the filter mapping as received; any other shape is rejected.

    Applications interpret filters themselves by registering their own parser.
    """
    if filter_ is None:
        return {}
    if not isinstance(filter_, Mapping):
        raise InvalidQuery(type=schema.type, param="filter", value=filter_)
    return filter_

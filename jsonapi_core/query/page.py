"""Default ``page`` parser: pass the ``page[...]`` mapping through."""

from __future__ import annotations

from typing import Any, Mapping

from jsonapi_core.config import JSONAPISettings
from jsonapi_core.exceptions import InvalidQuery
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema


def parse_page(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    page: Any,
    settings: JSONAPISettings | None = None,
) -> Any:
    if page is None:
        return {}
    if not isinstance(page, Mapping):
        raise InvalidQuery(type=schema.type, param="page", value=page)
    return page

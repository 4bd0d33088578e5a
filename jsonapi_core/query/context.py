"""Parsed query state for one request."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from jsonapi_core.config import JSONAPISettings
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema

from .fields import parse_fields
from .filter import parse_filter
from .include import parse_include
from .page import parse_page
from .params import split_query_params
from .sort import SortField, parse_sort
from .tree import IncludeTree

logger = logging.getLogger(__name__)

QueryParser = Callable[
    [ResourceSchema, ResourceRegistry, Any, Optional[JSONAPISettings]], Any
]

DEFAULT_QUERY_PARSERS: dict[str, QueryParser] = {
    "fields": parse_fields,
    "filter": parse_filter,
    "include": parse_include,
    "page": parse_page,
    "sort": parse_sort,
}


class QueryContext(BaseModel):
    """Validated ``fields``, ``sort``, ``include``, ``filter`` and ``page`` values."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    resource_type: str
    fields: Dict[str, frozenset[str]] = Field(default_factory=dict)
    sort: List[SortField] = Field(default_factory=list)
    include: IncludeTree = Field(default_factory=dict)
    filter: Any = Field(default_factory=dict)
    page: Any = Field(default_factory=dict)

    def fields_for(self, type_: str) -> frozenset[str] | None:
        """Return the requested attribute names for ``type_``, ``None`` meaning all."""
        return self.fields.get(type_)


def parse_query(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    params: Mapping[str, Any],
    *,
    settings: JSONAPISettings | None = None,
    parsers: Mapping[str, QueryParser] | None = None,
) -> QueryContext:
    """Parse every JSON:API query parameter family in ``params`` for ``schema``.

    ``params`` is the raw query map (``fields[articles]`` style keys) or an
    already nested one. Each family is parsed independently and the first
    failure propagates as :class:`~jsonapi_core.exceptions.InvalidQuery`.
    """
    parsers = {**DEFAULT_QUERY_PARSERS, **(parsers or {})}
    families = split_query_params(params)
    values = {
        family: parser(schema, registry, families.get(family), settings)
        for family, parser in parsers.items()
        if family in DEFAULT_QUERY_PARSERS
    }
    logger.debug("Parsed query for %s: %s", schema.type, sorted(families))
    return QueryContext(resource_type=schema.type, **values)

"""Entry point tying a registry, settings and a normalizer together."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from jsonapi_core.config import JSONAPISettings
from jsonapi_core.normalizer.base import Normalizer
from jsonapi_core.query.context import QueryContext, QueryParser, parse_query
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import JSONAPIResource, ResourceSchema
from jsonapi_core.schemas.document import Document, parse_document

logger = logging.getLogger(__name__)

ResourceRef = Union[str, ResourceSchema, type[JSONAPIResource]]


class JSONAPI:
    """One JSON:API surface over a set of registered resource types.

    Resources are referenced by type name, by schema, or by declarative
    :class:`~jsonapi_core.resources.schema.JSONAPIResource` class.

    Example:
        api = JSONAPI(registry, JSONAPISettings(case="dasherize"))
        query = api.parse_query("articles", {"include": "author"})
        body = api.render("articles", articles, query)
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        settings: JSONAPISettings | None = None,
        *,
        normalizer_class: type[Normalizer] = Normalizer,
        query_parsers: Mapping[str, QueryParser] | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or JSONAPISettings()
        self.normalizer = normalizer_class(registry, self.settings)
        self.query_parsers = dict(query_parsers or {})

    def schema(self, resource: ResourceRef) -> ResourceSchema:
        if isinstance(resource, ResourceSchema):
            return resource
        if isinstance(resource, str):
            return self.registry.get(resource)
        return self.registry.get(resource.Meta.type_)

    def parse_query(
        self, resource: ResourceRef, params: Mapping[str, Any]
    ) -> QueryContext:
        """Validate the query parameters of a request against ``resource``."""
        return parse_query(
            self.schema(resource),
            self.registry,
            params,
            settings=self.settings,
            parsers=self.query_parsers,
        )

    def parse_document(self, payload: Any) -> Document:
        return parse_document(payload)

    def denormalize(
        self, resource: ResourceRef, document: Document
    ) -> dict[str, Any] | list[dict[str, Any]]:
        return self.normalizer.denormalize(document, self.schema(resource))

    def parse_body(
        self, resource: ResourceRef, payload: Any
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """Parse a decoded request body and flatten it into params for ``resource``."""
        return self.denormalize(resource, self.parse_document(payload))

    def normalize(
        self,
        resource: ResourceRef,
        data: Any,
        query: QueryContext | None = None,
        *,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> Document:
        return self.normalizer.normalize(
            self.schema(resource), data, query, links=links, meta=meta
        )

    def render(
        self,
        resource: ResourceRef,
        data: Any,
        query: QueryContext | None = None,
        *,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return the wire-ready document for ``data``."""
        return self.normalize(resource, data, query, links=links, meta=meta).serialize()

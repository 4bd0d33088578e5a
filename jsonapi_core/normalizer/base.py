"""Translate application object graphs to and from JSON:API documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Mapping

from pydantic import BaseModel

from jsonapi_core.config import JSONAPISettings
from jsonapi_core.core.document import JSONAPIDocumentBuilder
from jsonapi_core.exceptions import InvalidDocument
from jsonapi_core.query.context import QueryContext
from jsonapi_core.query.tree import IncludeTree
from jsonapi_core.resources.recase import recase
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import Relationship, ResourceSchema
from jsonapi_core.schemas.base import pointer_join
from jsonapi_core.schemas.document import Document
from jsonapi_core.schemas.resource import (
    Linkage,
    RelationshipObject,
    ResourceIdentifierObject,
    ResourceObject,
    ToMany,
    ToOne,
)

logger = logging.getLogger(__name__)

CLIENT_IDS_REFERENCE = "https://jsonapi.org/format/#crud-creating-client-ids"


@dataclass
class _IncludeState:
    """Per-call bookkeeping for compound documents."""

    seen: set[Hashable] = field(default_factory=set)
    visited: set[Hashable] = field(default_factory=set)
    included: list[ResourceObject] = field(default_factory=list)


class Normalizer:
    """Convert between application data and JSON:API documents.

    Application data may be mappings or plain objects. Subclasses adapt access
    to other data sources by overriding :meth:`get_value`, :meth:`is_loaded`
    and :meth:`is_collection`, and shape request params by overriding the
    ``resource_params`` / ``denormalize_*`` hooks.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        settings: JSONAPISettings | None = None,
        *,
        document_builder: JSONAPIDocumentBuilder | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or JSONAPISettings()
        if document_builder is None:
            version = self.settings.version if self.settings.jsonapi_object else None
            document_builder = JSONAPIDocumentBuilder(version=version)
        self.document_builder = document_builder

    # Application data access

    def get_value(self, data: Any, key: str) -> Any:
        """Read ``key`` from a mapping or an object."""
        if isinstance(data, Mapping):
            return data.get(key)
        return getattr(data, key, None)

    def is_loaded(self, data: Any, key: str) -> bool:
        """Return False when relationship ``key`` is not available on ``data``."""
        return True

    def is_collection(self, value: Any) -> bool:
        """Return True when ``value`` holds several resources.

        Any iterable counts (lists, generators, ORM result objects) except
        strings, bytes, mappings and pydantic models, which render as a single
        resource.
        """
        if isinstance(value, (str, bytes, Mapping, BaseModel)):
            return False
        return isinstance(value, Iterable)

    def get_local_id(self, schema: ResourceSchema, data: Any) -> str | None:
        """Return the client-generated local id of ``data``, if it has one."""
        return None

    # Request params hooks

    def resource_params(self) -> dict[str, Any]:
        return {}

    def denormalize_attribute(
        self, params: dict[str, Any], key: str, value: Any
    ) -> dict[str, Any]:
        params[key] = value
        return params

    def denormalize_relationship(
        self,
        params: dict[str, Any],
        relationship: RelationshipObject,
        key: str,
        value: Any,
    ) -> dict[str, Any]:
        """Store the related value and a foreign-key style ``<key>_id`` entry."""
        params[key] = value
        linkage = relationship.data
        if isinstance(linkage, ToMany):
            params[f"{key}_id"] = [identifier.id for identifier in linkage.data]
        elif isinstance(linkage, ToOne):
            params[f"{key}_id"] = None if linkage.data is None else linkage.data.id
        return params

    # Object graph -> document

    def normalize(
        self,
        schema: ResourceSchema,
        data: Any,
        query: QueryContext | None = None,
        *,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> Document:
        """Render ``data`` (one resource, a collection of them, or ``None``).

        Attributes are pruned with ``query.fields``. Related resources named by
        ``query.include`` are collected into ``included`` once per
        ``(type, id)``, in order of first discovery.
        """
        include = query.include if query is not None else {}
        state = _IncludeState()
        many = self.is_collection(data)
        if many:
            roots = list(data)
        else:
            roots = [] if data is None else [data]
        resources = [self._resource_object(schema, item, query) for item in roots]
        state.seen.update(self._identity(schema, item) for item in roots)
        for item in roots:
            self._collect_included(schema, item, include, query, state)

        included = state.included if include else None
        logger.debug(
            "Normalized %d %s resources with %d included",
            len(resources),
            schema.type,
            len(state.included),
        )
        if many:
            return self.document_builder.build_collection(
                resources, included=included, links=links, meta=meta
            )
        return self.document_builder.build_single(
            resources[0] if resources else None,
            included=included,
            links=links,
            meta=meta,
        )

    def _resource_object(
        self, schema: ResourceSchema, data: Any, query: QueryContext | None
    ) -> ResourceObject:
        resource_id = self.get_value(data, schema.id_attribute)
        return ResourceObject(
            type=schema.type,
            id=None if resource_id is None else str(resource_id),
            local_id=self.get_local_id(schema, data),
            attributes=self._attributes(schema, data, query),
            relationships=self._relationships(schema, data),
            links=schema.links(data) if schema.links else None,
            meta=schema.meta(data) if schema.meta else None,
        )

    def _attributes(
        self, schema: ResourceSchema, data: Any, query: QueryContext | None
    ) -> dict[str, Any]:
        requested = query.fields_for(schema.type) if query is not None else None
        attributes: dict[str, Any] = {}
        for attribute in schema.attributes:
            if requested is not None and attribute.name not in requested:
                continue
            if attribute.serialize is False:
                continue
            if callable(attribute.serialize):
                value = attribute.serialize(data, query)
            else:
                value = self.get_value(data, attribute.source_key)
            attributes[recase(attribute.name, self.settings.case)] = value
        return attributes

    def _relationships(
        self, schema: ResourceSchema, data: Any
    ) -> dict[str, RelationshipObject]:
        relationships: dict[str, RelationshipObject] = {}
        for relationship in schema.relationships:
            if not self.is_loaded(data, relationship.source_key):
                continue
            target = self.registry.related(schema, relationship)
            related = self._related_items(schema, relationship, data)
            path = f"{schema.type}.{relationship.name}"
            identifiers = [self._identifier(target, item, path) for item in related]
            linkage: Linkage
            if relationship.many:
                linkage = ToMany(data=identifiers)
            else:
                linkage = ToOne(data=identifiers[0] if identifiers else None)
            wire_name = recase(relationship.name, self.settings.case)
            relationships[wire_name] = RelationshipObject(data=linkage)
        return relationships

    def _related_items(
        self, schema: ResourceSchema, relationship: Relationship, data: Any
    ) -> list[Any]:
        related = self.get_value(data, relationship.source_key)
        if related is None:
            return []
        path = f"{schema.type}.{relationship.name}"
        if relationship.many and not self.is_collection(related):
            raise InvalidDocument(
                f"Single resource given to render for many relationship '{path}'"
            )
        if not relationship.many and self.is_collection(related):
            raise InvalidDocument(
                "List of resources given to render for one-to-one relationship "
                f"'{path}'"
            )
        return list(related) if relationship.many else [related]

    def _identifier(
        self, schema: ResourceSchema, data: Any, path: str
    ) -> ResourceIdentifierObject:
        resource_id = self.get_value(data, schema.id_attribute)
        local_id = self.get_local_id(schema, data)
        if resource_id is None and local_id is None:
            raise InvalidDocument(
                f"Resource of type '{schema.type}' related through '{path}' "
                "has no 'id' or 'lid'"
            )
        return ResourceIdentifierObject(
            type=schema.type,
            id=None if resource_id is None else str(resource_id),
            local_id=local_id,
        )

    def _identity(self, schema: ResourceSchema, data: Any) -> Hashable:
        resource_id = self.get_value(data, schema.id_attribute)
        if resource_id is not None:
            return (schema.type, str(resource_id), None)
        local_id = self.get_local_id(schema, data)
        if local_id is not None:
            return (schema.type, None, local_id)
        # Unidentified resources dedupe by object identity.
        return (schema.type, None, id(data))

    def _collect_included(
        self,
        schema: ResourceSchema,
        data: Any,
        tree: IncludeTree,
        query: QueryContext | None,
        state: _IncludeState,
    ) -> None:
        for relationship in schema.relationships:
            if relationship.name not in tree:
                continue
            if not self.is_loaded(data, relationship.source_key):
                continue
            target = self.registry.related(schema, relationship)
            related = self._related_items(schema, relationship, data)
            for item in related:
                identity = self._identity(target, item)
                if identity not in state.seen:
                    state.seen.add(identity)
                    state.included.append(self._resource_object(target, item, query))

            subtree = tree[relationship.name] or {}
            if not subtree:
                continue
            for item in related:
                visit = (self._identity(target, item), id(subtree))
                if visit in state.visited:
                    continue
                state.visited.add(visit)
                self._collect_included(target, item, subtree, query, state)

    # Document -> request params

    def denormalize(
        self, document: Document, schema: ResourceSchema
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """Flatten a parsed request document into params for ``schema``.

        Member names are mapped back to the declared field names under the
        configured case (undeclared names are underscored). Relationships
        contribute ``<name>_id`` entries plus the related params found in
        ``included`` (or the raw identifier when the related resource was not
        included). Fields the schema does not declare are passed through.
        """
        if isinstance(document.data, list):
            return [
                self._denormalize_resource(
                    document, resource, schema, pointer_join("/data", index), set()
                )
                for index, resource in enumerate(document.data)
            ]
        if document.data is None:
            return {}
        return self._denormalize_resource(
            document, document.data, schema, "/data", set()
        )

    def _denormalize_resource(
        self,
        document: Document,
        resource: ResourceObject,
        schema: ResourceSchema,
        pointer: str,
        visiting: set[Hashable],
    ) -> dict[str, Any]:
        params = self.resource_params()
        if resource.id is not None:
            params = self.denormalize_attribute(
                params, schema.id_attribute, resource.id
            )
        elif schema.client_generated_ids or self.settings.client_generated_ids:
            raise InvalidDocument(
                "Resource ID not received in request and API requires "
                "Client-Generated IDs",
                pointer=pointer,
                reference=CLIENT_IDS_REFERENCE,
            )

        case = self.settings.case
        for wire_name, value in resource.attributes.items():
            name = schema.resolve_field(wire_name, case)
            attribute = schema.attribute(name)
            if attribute is None:
                params = self.denormalize_attribute(params, name, value)
            elif attribute.deserialize is False:
                continue
            elif callable(attribute.deserialize):
                params = self.denormalize_attribute(
                    params, attribute.source_key, attribute.deserialize(value)
                )
            else:
                params = self.denormalize_attribute(params, attribute.source_key, value)

        visiting = visiting | {resource.identity}
        for wire_name, relationship_object in resource.relationships.items():
            linkage = relationship_object.data
            if linkage is None:
                continue
            name = schema.resolve_field(wire_name, case)
            data_pointer = pointer_join(pointer, "relationships", wire_name, "data")
            declared = schema.relationship(name)
            target = None
            key = name
            if declared is not None:
                self._check_cardinality(declared, linkage, data_pointer)
                target = self.registry.related(schema, declared)
                key = declared.source_key
            value = self._related_params(document, linkage, target, visiting)
            params = self.denormalize_relationship(
                params, relationship_object, key, value
            )
        return params

    @staticmethod
    def _check_cardinality(
        relationship: Relationship, linkage: Linkage, pointer: str
    ) -> None:
        if relationship.many and isinstance(linkage, ToOne):
            raise InvalidDocument(
                f"Relationship '{relationship.name}' expects a list of resources",
                pointer=pointer,
            )
        if not relationship.many and isinstance(linkage, ToMany):
            raise InvalidDocument(
                f"Relationship '{relationship.name}' expects a single resource",
                pointer=pointer,
            )

    def _related_params(
        self,
        document: Document,
        linkage: Linkage,
        target: ResourceSchema | None,
        visiting: set[Hashable],
    ) -> Any:
        if isinstance(linkage, ToMany):
            return [
                self._find_included(document, identifier, target, visiting)
                for identifier in linkage.data
            ]
        if linkage.data is None:
            return None
        return self._find_included(document, linkage.data, target, visiting)

    def _find_included(
        self,
        document: Document,
        identifier: ResourceIdentifierObject,
        target: ResourceSchema | None,
        visiting: set[Hashable],
    ) -> dict[str, Any]:
        for index, resource in enumerate(document.included or []):
            if resource.type != identifier.type:
                continue
            same_id = identifier.id is not None and resource.id == identifier.id
            same_lid = (
                identifier.local_id is not None
                and resource.local_id == identifier.local_id
            )
            if not (same_id or same_lid):
                continue
            if target is None or resource.identity in visiting:
                break
            return self._denormalize_resource(
                document, resource, target, pointer_join("/included", index), visiting
            )
        return identifier.serialize()

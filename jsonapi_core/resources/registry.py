"""Process-wide lookup from resource type to its schema."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterator, Union

from jsonapi_core.resources.schema import JSONAPIResource, Relationship, ResourceSchema

logger = logging.getLogger(__name__)

Registrable = Union[ResourceSchema, type[JSONAPIResource]]


class ResourceRegistry:
    """Hold resource schemas registered during application startup.

    Lookups of unknown types raise ``KeyError``: asking for a type that was
    never registered is a programming error, not a client error.
    """

    def __init__(self, resources: list[Registrable] | None = None) -> None:
        self._schemas: dict[str, ResourceSchema] = {}
        for resource in resources or []:
            self.register(resource)

    def register(self, resource: Registrable) -> ResourceSchema:
        """Register a schema (or a declarative resource class) and return the schema."""
        schema = resource if isinstance(resource, ResourceSchema) else resource.schema()
        if schema.type in self._schemas:
            raise ValueError(f"Resource type '{schema.type}' is already registered.")
        self._schemas[schema.type] = schema
        logger.debug("Registered JSON:API resource type %s", schema.type)
        return schema

    def get(self, type_: str) -> ResourceSchema:
        try:
            return self._schemas[type_]
        except KeyError:
            raise KeyError(f"Unknown resource type '{type_}'.") from None

    def __contains__(self, type_: object) -> bool:
        return type_ in self._schemas

    def __iter__(self) -> Iterator[ResourceSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def related(
        self, schema: ResourceSchema, relationship: Relationship | str
    ) -> ResourceSchema:
        """Return the target schema of one of ``schema``'s relationships."""
        if isinstance(relationship, str):
            declared = schema.relationship(relationship)
            if declared is None:
                raise KeyError(
                    f"Resource type '{schema.type}' has no relationship "
                    f"'{relationship}'."
                )
            relationship = declared
        return self.get(relationship.resource)

    def reachable_type(
        self, schema: ResourceSchema, type_: str
    ) -> ResourceSchema | None:
        """Find ``type_`` among the schemas reachable from ``schema``.

        The walk is breadth-first and visits each type once, so cyclic schemas
        terminate.
        """
        if schema.type == type_:
            return schema
        seen = {schema.type}
        queue = deque([schema])
        while queue:
            current = queue.popleft()
            for relationship in current.relationships:
                if relationship.resource in seen:
                    continue
                target = self.get(relationship.resource)
                if target.type == type_:
                    return target
                seen.add(target.type)
                queue.append(target)
        return None

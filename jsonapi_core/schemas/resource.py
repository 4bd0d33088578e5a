"""Resource objects, resource identifiers and relationship linkage."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field

from jsonapi_core.resources.schema import RESERVED_FIELD_NAMES

from .base import (
    invalid,
    parse_meta,
    parse_non_empty_string,
    pointer_join,
    require_object,
    serialize_members,
)
from .links import Link, parse_links, serialize_links

RESOURCE_SECTION = "#document-resource-objects"
RELATIONSHIP_SECTION = "#document-resource-object-relationships"
LINKAGE_SECTION = "#document-resource-object-linkage"

_FIELD_KIND = {"attributes": "an attribute", "relationships": "a relationship"}


class ResourceIdentifierObject(BaseModel):
    """Resource identifier object: type plus id or lid."""

    type: str
    id: Optional[str] = None
    local_id: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str = "") -> "ResourceIdentifierObject":
        owner = "Resource identifier object"
        payload = require_object(payload, pointer, owner, LINKAGE_SECTION)
        type_ = parse_non_empty_string(payload, "type", pointer, owner, required=True)
        id_ = parse_non_empty_string(payload, "id", pointer, owner)
        local_id = parse_non_empty_string(payload, "lid", pointer, owner)
        if id_ is None and local_id is None:
            raise invalid(
                f"{owner} must have an 'id' or a 'lid'", pointer, LINKAGE_SECTION
            )
        meta = parse_meta(payload, pointer, owner)
        return cls(type=type_, id=id_, local_id=local_id, meta=meta)

    def serialize(self) -> dict[str, Any]:
        return serialize_members(
            type=self.type, id=self.id, lid=self.local_id, meta=self.meta
        )


class ToOne(BaseModel):
    """To-one linkage; ``data`` is ``None`` for an empty relationship."""

    data: Optional[ResourceIdentifierObject] = None

    @property
    def identifiers(self) -> list[ResourceIdentifierObject]:
        return [] if self.data is None else [self.data]

    def serialize(self) -> dict[str, Any] | None:
        return None if self.data is None else self.data.serialize()


class ToMany(BaseModel):
    """To-many linkage; an empty relationship is an empty list."""

    data: List[ResourceIdentifierObject] = Field(default_factory=list)

    @property
    def identifiers(self) -> list[ResourceIdentifierObject]:
        return list(self.data)

    def serialize(self) -> list[dict[str, Any]]:
        return [identifier.serialize() for identifier in self.data]


Linkage = Union[ToOne, ToMany]


class RelationshipObject(BaseModel):
    """Relationship object. ``data`` is ``None`` when the linkage member is absent."""

    data: Optional[Linkage] = None
    links: Optional[Dict[str, Link]] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str = "") -> "RelationshipObject":
        owner = "Relationship object"
        payload = require_object(payload, pointer, owner, RELATIONSHIP_SECTION)
        return cls(
            data=cls._parse_data(payload, pointer),
            links=parse_links(payload.get("links"), pointer_join(pointer, "links")),
            meta=parse_meta(payload, pointer, owner),
        )

    @staticmethod
    def _parse_data(payload: Mapping[str, Any], pointer: str) -> Linkage | None:
        if "data" not in payload:
            return None
        data = payload["data"]
        data_pointer = pointer_join(pointer, "data")
        if data is None:
            return ToOne()
        if isinstance(data, Mapping):
            return ToOne(data=ResourceIdentifierObject.parse(data, data_pointer))
        if isinstance(data, list):
            return ToMany(
                data=[
                    ResourceIdentifierObject.parse(
                        item, pointer_join(data_pointer, index)
                    )
                    for index, item in enumerate(data)
                ]
            )
        raise invalid(
            "Relationship 'data' must be null, an object or a list",
            data_pointer,
            LINKAGE_SECTION,
        )

    def serialize(self) -> dict[str, Any]:
        relationship: dict[str, Any] = {}
        if self.data is not None:
            relationship["data"] = self.data.serialize()
        links = serialize_links(self.links)
        if links:
            relationship["links"] = links
        if self.meta:
            relationship["meta"] = self.meta
        return relationship


class ResourceObject(BaseModel):
    """Resource object with attributes and relationships."""

    type: str
    id: Optional[str] = None
    local_id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relationships: Dict[str, RelationshipObject] = Field(default_factory=dict)
    links: Optional[Dict[str, Link]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def identity(self) -> tuple[str, str | None, str | None]:
        """Deduplication key: ``(type, id)`` or, without an id, ``(type, lid)``."""
        if self.id is not None:
            return (self.type, self.id, None)
        return (self.type, None, self.local_id)

    @classmethod
    def parse(cls, payload: Any, pointer: str = "") -> "ResourceObject":
        owner = "Resource object"
        payload = require_object(payload, pointer, owner, RESOURCE_SECTION)
        type_ = parse_non_empty_string(payload, "type", pointer, owner, required=True)
        attributes = cls._parse_fields(payload, "attributes", pointer)
        relationships = {
            name: RelationshipObject.parse(
                value, pointer_join(pointer, "relationships", name)
            )
            for name, value in cls._parse_fields(
                payload, "relationships", pointer
            ).items()
        }
        shared = sorted(set(attributes).intersection(relationships))
        if shared:
            raise invalid(
                f"Resource object field '{shared[0]}' is both an attribute "
                "and a relationship",
                pointer_join(pointer, "relationships", shared[0]),
                RESOURCE_SECTION,
            )
        return cls(
            type=type_,
            id=parse_non_empty_string(payload, "id", pointer, owner),
            local_id=parse_non_empty_string(payload, "lid", pointer, owner),
            attributes=attributes,
            relationships=relationships,
            links=parse_links(payload.get("links"), pointer_join(pointer, "links")),
            meta=parse_meta(payload, pointer, owner),
        )

    @staticmethod
    def _parse_fields(
        payload: Mapping[str, Any], member: str, pointer: str
    ) -> dict[str, Any]:
        fields = payload.get(member)
        if fields is None:
            return {}
        member_pointer = pointer_join(pointer, member)
        fields = require_object(
            fields, member_pointer, f"Resource object '{member}'", RESOURCE_SECTION
        )
        for reserved in sorted(RESERVED_FIELD_NAMES):
            if reserved in fields:
                raise invalid(
                    f"Resource object cannot have {_FIELD_KIND[member]} "
                    f"named '{reserved}'",
                    pointer_join(member_pointer, reserved),
                    RESOURCE_SECTION,
                )
        return dict(fields)

    def serialize(self) -> dict[str, Any]:
        resource: dict[str, Any] = {"type": self.type}
        if self.id is not None:
            resource["id"] = self.id
        if self.local_id is not None:
            resource["lid"] = self.local_id
        resource["attributes"] = dict(self.attributes)
        if self.relationships:
            resource["relationships"] = {
                name: relationship.serialize()
                for name, relationship in self.relationships.items()
            }
        links = serialize_links(self.links)
        if links:
            resource["links"] = links
        if self.meta:
            resource["meta"] = self.meta
        return resource

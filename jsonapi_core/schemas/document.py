"""Top-level JSON:API documents."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel

from jsonapi_core.exceptions import InvalidDocument

from .base import SPEC_URL, invalid, parse_meta, pointer_join, require_object
from .error import ErrorObject
from .links import Link, parse_links, serialize_links
from .resource import ResourceObject

logger = logging.getLogger(__name__)

TOP_LEVEL_SECTION = "#document-top-level"
JSONAPI_SECTION = "#document-jsonapi-object"
SUPPORTED_VERSIONS = ("1.0", "1.1")


class JSONAPIObject(BaseModel):
    """The top-level ``jsonapi`` member describing the server implementation."""

    version: Optional[Literal["1.0", "1.1"]] = None
    ext: Optional[List[str]] = None
    profile: Optional[List[str]] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str = "/jsonapi") -> "JSONAPIObject":
        payload = require_object(payload, pointer, "JSON:API object", JSONAPI_SECTION)
        version = payload.get("version")
        if version is not None and version not in SUPPORTED_VERSIONS:
            raise invalid(
                f"JSON:API object has invalid version ({version})",
                pointer_join(pointer, "version"),
                JSONAPI_SECTION,
            )
        uris: dict[str, list[str]] = {}
        for member in ("ext", "profile"):
            value = payload.get(member)
            if value is None:
                continue
            if not isinstance(value, list) or not all(
                isinstance(uri, str) for uri in value
            ):
                raise invalid(
                    f"JSON:API object '{member}' must be a list of URIs",
                    pointer_join(pointer, member),
                    JSONAPI_SECTION,
                )
            uris[member] = list(value)
        meta = parse_meta(payload, pointer, "JSON:API object")
        return cls(version=version, meta=meta, **uris)

    def serialize(self) -> dict[str, Any]:
        jsonapi: dict[str, Any] = {}
        if self.version is not None:
            jsonapi["version"] = self.version
        if self.ext:
            jsonapi["ext"] = list(self.ext)
        if self.profile:
            jsonapi["profile"] = list(self.profile)
        if self.meta:
            jsonapi["meta"] = self.meta
        return jsonapi


PrimaryData = Union[ResourceObject, List[ResourceObject], None]


class Document(BaseModel):
    """Top-level document.

    ``data`` is rendered whenever it was set explicitly, even to ``None``, so a
    missing to-one resource serializes as ``"data": null`` while a meta-only
    document carries no ``data`` member at all.
    """

    data: PrimaryData = None
    included: Optional[List[ResourceObject]] = None
    errors: Optional[List[ErrorObject]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Link]] = None
    jsonapi: Optional[JSONAPIObject] = None

    @property
    def has_data(self) -> bool:
        return self.data is not None or "data" in self.model_fields_set

    @property
    def resources(self) -> list[ResourceObject]:
        """Primary data as a list, whatever its cardinality."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return list(self.data)
        return [self.data]

    @classmethod
    def parse(cls, payload: Any) -> "Document":
        """Parse a decoded request body into a document.

        Fails on the first violation.
        """
        payload = require_object(payload, "", "Document", TOP_LEVEL_SECTION)
        if "data" in payload and "errors" in payload:
            raise invalid(
                "Document cannot contain both 'data' and 'errors' members",
                "",
                TOP_LEVEL_SECTION,
            )
        members: dict[str, Any] = {}
        if "data" in payload:
            members["data"] = cls._parse_data(payload["data"])
        if payload.get("included") is not None:
            members["included"] = cls._parse_included(payload)
        if payload.get("errors") is not None:
            errors = payload["errors"]
            if not isinstance(errors, list):
                raise invalid(
                    "Document 'errors' must be a list", "/errors", TOP_LEVEL_SECTION
                )
            members["errors"] = [
                ErrorObject.parse(error, pointer_join("/errors", index))
                for index, error in enumerate(errors)
            ]
        if payload.get("jsonapi") is not None:
            members["jsonapi"] = JSONAPIObject.parse(payload["jsonapi"])
        document = cls(
            meta=parse_meta(payload, "", "Document"),
            links=parse_links(payload.get("links"), "/links"),
            **members,
        )
        logger.debug(
            "Parsed document with %d primary and %d included resources",
            len(document.resources),
            len(document.included or []),
        )
        return document

    @staticmethod
    def _parse_data(data: Any) -> PrimaryData:
        if data is None:
            return None
        if isinstance(data, Mapping):
            return ResourceObject.parse(data, "/data")
        if isinstance(data, list):
            return [
                ResourceObject.parse(item, pointer_join("/data", index))
                for index, item in enumerate(data)
            ]
        raise invalid(
            "Document 'data' must be null, an object or a list",
            "/data",
            TOP_LEVEL_SECTION,
        )

    @staticmethod
    def _parse_included(payload: Mapping[str, Any]) -> list[ResourceObject]:
        if "data" not in payload:
            raise invalid(
                "Document 'included' cannot be present if 'data' isn't also present",
                "/included",
                TOP_LEVEL_SECTION,
            )
        included = payload["included"]
        if not isinstance(included, list):
            raise invalid(
                "Document 'included' must be a list", "/included", TOP_LEVEL_SECTION
            )
        return [
            ResourceObject.parse(item, pointer_join("/included", index))
            for index, item in enumerate(included)
        ]

    def serialize(self) -> dict[str, Any]:
        """Return the wire-ready mapping for this document."""
        if self.has_data and self.errors is not None:
            raise InvalidDocument(
                "Document cannot contain both 'data' and 'errors' members",
                reference=f"{SPEC_URL}{TOP_LEVEL_SECTION}",
            )
        document: dict[str, Any] = {}
        if self.has_data:
            if isinstance(self.data, list):
                document["data"] = [resource.serialize() for resource in self.data]
            else:
                document["data"] = None if self.data is None else self.data.serialize()
        if self.included is not None:
            document["included"] = [resource.serialize() for resource in self.included]
        if self.errors is not None:
            document["errors"] = [error.serialize() for error in self.errors]
        if self.meta:
            document["meta"] = self.meta
        links = serialize_links(self.links)
        if links:
            document["links"] = links
        if self.jsonapi is not None:
            document["jsonapi"] = self.jsonapi.serialize()
        return document


def parse_document(payload: Any) -> Document:
    """Parse a decoded JSON:API document."""
    return Document.parse(payload)


def serialize_document(document: Document) -> dict[str, Any]:
    """Serialize a document into a JSON-ready mapping."""
    return document.serialize()

"""Atomic Operations extension envelope."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field

from .base import (
    invalid,
    parse_meta,
    parse_non_empty_string,
    pointer_join,
    require_object,
)
from .error import ErrorObject
from .resource import ResourceIdentifierObject, ResourceObject

EXTENSION_URI = "https://jsonapi.org/ext/atomic"
SECTION = "#operation-objects"
OPERATIONS = ("add", "update", "remove")


class OperationRef(BaseModel):
    """Target of an operation: a resource, or one of its relationships."""

    type: str
    id: Optional[str] = None
    local_id: Optional[str] = None
    relationship: Optional[str] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str) -> "OperationRef":
        owner = "Operation 'ref'"
        payload = require_object(payload, pointer, owner, SECTION)
        return cls(
            type=parse_non_empty_string(payload, "type", pointer, owner, required=True),
            id=parse_non_empty_string(payload, "id", pointer, owner),
            local_id=parse_non_empty_string(payload, "lid", pointer, owner),
            relationship=parse_non_empty_string(
                payload, "relationship", pointer, owner
            ),
        )


OperationData = Union[
    ResourceObject, ResourceIdentifierObject, List[ResourceIdentifierObject], None
]


class OperationObject(BaseModel):
    """One entry of ``atomic:operations``."""

    op: Literal["add", "update", "remove"]
    ref: Optional[OperationRef] = None
    href: Optional[str] = None
    data: OperationData = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str) -> "OperationObject":
        payload = require_object(payload, pointer, "Operation object", SECTION)
        op = payload.get("op")
        if op not in OPERATIONS:
            raise invalid(
                f"Operation 'op' must be one of {', '.join(OPERATIONS)}",
                pointer_join(pointer, "op"),
                SECTION,
            )
        if payload.get("ref") is not None and payload.get("href") is not None:
            raise invalid(
                "Operation cannot contain both 'ref' and 'href'", pointer, SECTION
            )
        ref = payload.get("ref")
        href = payload.get("href")
        if href is not None and not isinstance(href, str):
            raise invalid(
                "Operation 'href' must be a string",
                pointer_join(pointer, "href"),
                SECTION,
            )
        target = None
        if ref is not None:
            target = OperationRef.parse(ref, pointer_join(pointer, "ref"))
        return cls(
            op=op,
            ref=target,
            href=href,
            data=cls._parse_data(payload, ref, href, pointer),
            meta=parse_meta(payload, pointer, "Operation object"),
        )

    @staticmethod
    def _parse_data(
        payload: Mapping[str, Any], ref: Any, href: str | None, pointer: str
    ) -> OperationData:
        data = payload.get("data")
        data_pointer = pointer_join(pointer, "data")
        if data is None:
            return None
        targets_relationship = (
            isinstance(ref, Mapping) and ref.get("relationship") is not None
        ) or (href is not None and "/relationships/" in href)
        # Relationship operations carry linkage, every other operation a resource.
        if targets_relationship or isinstance(data, list):
            if isinstance(data, list):
                return [
                    ResourceIdentifierObject.parse(
                        item, pointer_join(data_pointer, index)
                    )
                    for index, item in enumerate(data)
                ]
            return ResourceIdentifierObject.parse(data, data_pointer)
        return ResourceObject.parse(data, data_pointer)


class ResultObject(BaseModel):
    """One entry of ``atomic:results``."""

    data: Optional[ResourceObject] = None
    meta: Optional[Dict[str, Any]] = None

    def serialize(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.data is not None:
            result["data"] = self.data.serialize()
        if self.meta:
            result["meta"] = self.meta
        return result


class AtomicDocument(BaseModel):
    """Request (operations) or response (results/errors) of the atomic extension."""

    operations: List[OperationObject] = Field(default_factory=list)
    results: List[ResultObject] = Field(default_factory=list)
    errors: List[ErrorObject] = Field(default_factory=list)
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any) -> "AtomicDocument":
        payload = require_object(payload, "", "Document", SECTION)
        operations = payload.get("atomic:operations")
        if not isinstance(operations, list):
            raise invalid(
                "Document 'atomic:operations' must be a list",
                "/atomic:operations",
                SECTION,
            )
        return cls(
            operations=[
                OperationObject.parse(
                    operation, pointer_join("/atomic:operations", index)
                )
                for index, operation in enumerate(operations)
            ],
            meta=parse_meta(payload, "", "Document"),
        )

    def serialize(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self.results:
            document["atomic:results"] = [result.serialize() for result in self.results]
        if self.errors:
            document["errors"] = [error.serialize() for error in self.errors]
        if self.meta:
            document["meta"] = self.meta
        return document

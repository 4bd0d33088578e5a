"""Error objects."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel

from .base import invalid, parse_meta, pointer_join, require_object, serialize_members
from .links import Link, parse_links, serialize_links

SECTION = "#error-objects"


class ErrorObject(BaseModel):
    """Error object describing one problem encountered while processing a request."""

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Link]] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str = "") -> "ErrorObject":
        payload = require_object(payload, pointer, "Error object", SECTION)
        members: dict[str, Any] = {}
        for member in ("id", "status", "code", "title", "detail"):
            value = payload.get(member)
            if value is None:
                continue
            if not isinstance(value, (str, int)):
                raise invalid(
                    f"Error object '{member}' must be a string",
                    pointer_join(pointer, member),
                    SECTION,
                )
            members[member] = str(value)
        if payload.get("source") is not None:
            source = require_object(
                payload["source"],
                pointer_join(pointer, "source"),
                "Error object 'source'",
                SECTION,
            )
            members["source"] = dict(source)
        return cls(
            links=parse_links(payload.get("links"), pointer_join(pointer, "links")),
            meta=parse_meta(payload, pointer, "Error object"),
            **members,
        )

    def serialize(self) -> dict[str, Any]:
        return serialize_members(
            id=self.id,
            status=self.status,
            code=self.code,
            title=self.title,
            detail=self.detail,
            source=self.source or None,
            links=serialize_links(self.links),
            meta=self.meta or None,
        )

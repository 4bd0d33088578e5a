"""Link objects and links members."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel

from .base import invalid, parse_meta, pointer_join, serialize_members

SECTION = "#document-links"


class LinkObject(BaseModel):
    """Link object: an ``href`` plus optional descriptive members."""

    href: str
    rel: Optional[str] = None
    describedby: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    hreflang: Optional[Union[str, list[str]]] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def parse(cls, payload: Any, pointer: str = "") -> "LinkObject":
        href = payload.get("href")
        if not isinstance(href, str) or not href:
            raise invalid(
                "Link object 'href' must be a non-empty string",
                pointer_join(pointer, "href"),
                SECTION,
            )
        optional = {
            member: payload[member]
            for member in ("rel", "describedby", "title", "type", "hreflang")
            if payload.get(member) is not None
        }
        meta = parse_meta(payload, pointer, "Link object")
        return cls(href=href, meta=meta, **optional)

    def serialize(self) -> dict[str, Any]:
        return serialize_members(
            href=self.href,
            rel=self.rel,
            describedby=self.describedby,
            title=self.title,
            type=self.type,
            hreflang=self.hreflang,
            meta=self.meta,
        )


Link = Union[str, LinkObject, None]


def parse_links(payload: Any, pointer: str) -> dict[str, Link] | None:
    """Parse the ``links`` member found at ``pointer``."""
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        raise invalid("'links' must be an object", pointer, SECTION)
    links: dict[str, Link] = {}
    for name, link in payload.items():
        if link is None or isinstance(link, str):
            links[name] = link
        elif isinstance(link, Mapping):
            links[name] = LinkObject.parse(link, pointer_join(pointer, name))
        else:
            raise invalid(
                f"Link '{name}' must be a string, an object or null",
                pointer_join(pointer, name),
                SECTION,
            )
    return links


def serialize_links(links: dict[str, Link] | None) -> dict[str, Any] | None:
    if not links:
        return None
    return {
        name: link.serialize() if isinstance(link, LinkObject) else link
        for name, link in links.items()
    }

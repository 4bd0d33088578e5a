"""Shared parsing helpers for JSON:API document members."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from jsonapi_core.exceptions import InvalidDocument

logger = logging.getLogger(__name__)

SPEC_URL = "https://jsonapi.org/format/"


def pointer_join(pointer: str, *tokens: Any) -> str:
    """Append reference tokens to a JSON pointer, escaping them per RFC 6901."""
    for token in tokens:
        escaped = str(token).replace("~", "~0").replace("/", "~1")
        pointer = f"{pointer}/{escaped}"
    return pointer


def invalid(message: str, pointer: str, section: str = "") -> InvalidDocument:
    logger.debug("Rejecting document at %r: %s", pointer, message)
    return InvalidDocument(message, pointer=pointer, reference=f"{SPEC_URL}{section}")


def require_object(
    value: Any, pointer: str, what: str, section: str = ""
) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise invalid(f"{what} must be an object", pointer, section)
    return value


def parse_meta(
    payload: Mapping[str, Any], pointer: str, owner: str
) -> dict[str, Any] | None:
    """Return the ``meta`` member of ``payload``; a present one must be an object."""
    meta = payload.get("meta")
    if meta is None:
        return None
    if not isinstance(meta, Mapping):
        raise invalid(
            f"{owner} 'meta' must be an object",
            pointer_join(pointer, "meta"),
            "#document-meta",
        )
    return dict(meta)


def parse_non_empty_string(
    payload: Mapping[str, Any],
    member: str,
    pointer: str,
    owner: str,
    *,
    required: bool = False,
) -> str | None:
    if member not in payload or (payload[member] is None and not required):
        if required:
            raise invalid(
                f"{owner} must have a '{member}'", pointer, "#document-resource-objects"
            )
        return None
    value = payload[member]
    if not isinstance(value, str) or not value:
        raise invalid(
            f"{owner} '{member}' must be a non-empty string",
            pointer_join(pointer, member),
            "#document-resource-objects",
        )
    return value


def serialize_members(**members: Any) -> dict[str, Any]:
    """Collect members into a wire dict, leaving out ``None`` values."""
    return {name: value for name, value in members.items() if value is not None}

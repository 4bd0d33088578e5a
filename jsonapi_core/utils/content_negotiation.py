"""Helpers for JSON:API content negotiation."""

from __future__ import annotations

from typing import Any

from jsonapi_core.exceptions import InvalidHeader

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
NEGOTIATION_REFERENCE = "https://jsonapi.org/format/#content-negotiation"
BODYLESS_METHODS = frozenset({"DELETE", "GET", "HEAD"})
WILDCARD_MEDIA_TYPES = frozenset({"*/*", "application/*"})


def _split_parameters(value: str) -> list[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _parse_param_value(value: str) -> list[str]:
    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    if not value:
        return []
    return value.split(" ")


def parse_jsonapi_media_type(content_type: str) -> dict[str, Any]:
    """Parse JSON:API media type parameters (ext/profile)."""
    parts = _split_parameters(content_type)
    media_type = parts[0].lower() if parts else ""
    params: dict[str, Any] = {"media_type": media_type, "ext": [], "profile": []}

    for param in parts[1:]:
        if "=" not in param:
            continue
        name, raw_value = param.split("=", 1)
        name = name.strip().lower()
        raw_value = raw_value.strip()
        if name in {"ext", "profile"}:
            params[name] = _parse_param_value(raw_value)
        else:
            params.setdefault("other_params", {})[name] = raw_value
    return params


def is_jsonapi_media_type(value: str) -> bool:
    """Return True for the JSON:API media type without unsupported parameters."""
    parsed = parse_jsonapi_media_type(value)
    return parsed["media_type"] == JSONAPI_MEDIA_TYPE and not parsed.get("other_params")


def validate_content_type(method: str, content_type: str | None) -> None:
    """Reject request bodies that are not sent as ``application/vnd.api+json``.

    Requests without a body (``GET``, ``HEAD``, ``DELETE``) and requests that
    carry no ``Content-Type`` header are accepted.
    """
    if method.upper() in BODYLESS_METHODS or not content_type:
        return
    if not is_jsonapi_media_type(content_type):
        raise InvalidHeader(
            header="content-type",
            message=(
                "The 'content-type' request header must contain the JSON:API "
                f"mime type ({JSONAPI_MEDIA_TYPE})"
            ),
            status="415",
            reference=NEGOTIATION_REFERENCE,
        )


def validate_accept(accept: str | None) -> None:
    """Reject ``Accept`` headers that rule out every usable JSON:API media type."""
    if not accept:
        return
    for media_range in accept.split(","):
        media_range = media_range.strip()
        if not media_range:
            continue
        media_type = parse_jsonapi_media_type(media_range)["media_type"]
        if media_type in WILDCARD_MEDIA_TYPES or is_jsonapi_media_type(media_range):
            return
    raise InvalidHeader(
        header="accept",
        message=(
            "The 'accept' request header must contain the JSON:API "
            f"mime type ({JSONAPI_MEDIA_TYPE})"
        ),
        status="406",
        reference=NEGOTIATION_REFERENCE,
    )

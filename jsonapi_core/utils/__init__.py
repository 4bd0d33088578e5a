"""Header helpers for JSON:API."""

from .content_negotiation import (
    JSONAPI_MEDIA_TYPE,
    is_jsonapi_media_type,
    parse_jsonapi_media_type,
    validate_accept,
    validate_content_type,
)

__all__ = [
    "JSONAPI_MEDIA_TYPE",
    "is_jsonapi_media_type",
    "parse_jsonapi_media_type",
    "validate_accept",
    "validate_content_type",
]

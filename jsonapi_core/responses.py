"""Responses carrying the JSON:API media type."""

from typing import Any

from starlette.responses import JSONResponse

from jsonapi_core.schemas.document import Document
from jsonapi_core.utils.content_negotiation import JSONAPI_MEDIA_TYPE


class JSONAPIResponse(JSONResponse):
    """JSON response for JSON:API documents.

    Accepts either a :class:`~jsonapi_core.schemas.document.Document` or an
    already serialized mapping.
    """

    media_type = JSONAPI_MEDIA_TYPE

    def render(self, content: Any) -> bytes:
        if isinstance(content, Document):
            content = content.serialize()
        return super().render(content)

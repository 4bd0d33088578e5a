"""JSON:API content negotiation middleware."""

import logging
from typing import Any

from jsonapi_core.core.errors import JSONAPIErrorBuilder
from jsonapi_core.exceptions import InvalidHeader
from jsonapi_core.responses import JSONAPIResponse
from jsonapi_core.utils.content_negotiation import (
    validate_accept,
    validate_content_type,
)

logger = logging.getLogger(__name__)


class ContentNegotiationMiddleware:
    """Ensure JSON:API media type for requests and responses."""

    def __init__(
        self, app: Any, *, error_builder: JSONAPIErrorBuilder | None = None
    ) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.error_builder = error_builder or JSONAPIErrorBuilder()

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Validate JSON:API headers before passing to downstream app."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "").upper()
        headers = {
            k.decode("latin-1").lower(): v.decode("latin-1")
            for k, v in scope.get("headers", [])
        }
        try:
            validate_content_type(method, headers.get("content-type"))
            validate_accept(headers.get("accept"))
        except InvalidHeader as exc:
            logger.warning(
                "Rejected %s %s: %s", method, scope.get("path", ""), exc.message
            )
            response = JSONAPIResponse(
                self.error_builder.exception_document(exc),
                status_code=int(exc.status),
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)

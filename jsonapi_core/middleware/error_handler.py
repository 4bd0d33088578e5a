"""JSON:API error handling middleware."""

import logging
from typing import Any

from jsonapi_core.core.errors import JSONAPIErrorBuilder
from jsonapi_core.exceptions import JSONAPIError
from jsonapi_core.responses import JSONAPIResponse

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents."""

    def __init__(
        self, app: Any, *, error_builder: JSONAPIErrorBuilder | None = None
    ) -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.error_builder = error_builder or JSONAPIErrorBuilder()

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except JSONAPIError as exc:
            logger.warning("JSON:API request failed (%s): %s", exc.status, exc.message)
            response = JSONAPIResponse(
                self.error_builder.exception_document(exc),
                status_code=int(exc.status),
            )
            await response(scope, receive, send)
        except Exception:
            logger.exception("Unhandled error while serving %s", scope.get("path", ""))
            error = self.error_builder.error_object(
                status="500", title="Internal Server Error"
            )
            response = JSONAPIResponse(
                self.error_builder.error_document([error]),
                status_code=500,
            )
            await response(scope, receive, send)

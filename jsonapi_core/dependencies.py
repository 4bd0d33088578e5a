"""FastAPI dependencies parsing JSON:API requests."""

from typing import Any

from fastapi import Request

from jsonapi_core.api import JSONAPI, ResourceRef
from jsonapi_core.exceptions import InvalidDocument
from jsonapi_core.query.context import QueryContext
from jsonapi_core.schemas.document import Document


class JSONAPIQuery:
    """Dependency returning the validated :class:`QueryContext` of a request.

    Example:
        @app.get("/articles")
        async def list_articles(
            query: QueryContext = Depends(JSONAPIQuery(api, "articles")),
        ):
            ...
    """

    def __init__(self, api: JSONAPI, resource: ResourceRef) -> None:
        self.api = api
        self.resource = resource

    def __call__(self, request: Request) -> QueryContext:
        return self.api.parse_query(self.resource, dict(request.query_params))


class JSONAPIBody:
    """Dependency returning the denormalized params of a request document.

    With ``denormalize=False`` the parsed :class:`Document` is returned instead.
    """

    def __init__(
        self, api: JSONAPI, resource: ResourceRef, *, denormalize: bool = True
    ) -> None:
        self.api = api
        self.resource = resource
        self.denormalize = denormalize

    async def __call__(self, request: Request) -> Any:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise InvalidDocument("Request body must be a JSON document") from exc
        document: Document = self.api.parse_document(payload)
        if not self.denormalize:
            return document
        return self.api.denormalize(self.resource, document)

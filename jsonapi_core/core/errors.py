"""JSON:API error objects from explicit fields or typed failures."""

from typing import Any, Iterable

from jsonapi_core.exceptions import JSONAPIError
from jsonapi_core.schemas.document import Document
from jsonapi_core.schemas.error import ErrorObject


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        links: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> ErrorObject:
        """Return an error object; at least one member must be given."""
        members = {
            "status": status,
            "code": code,
            "title": title,
            "detail": detail,
            "source": source,
            "links": links,
            "meta": meta,
        }
        if all(value is None for value in members.values()):
            raise ValueError("Error object must include at least one field.")
        return ErrorObject(**members)

    def from_exception(self, exc: JSONAPIError) -> ErrorObject:
        """Return the error object describing a typed failure."""
        return self.error_object(
            status=exc.status,
            title=exc.title,
            detail=exc.detail,
            source=exc.source,
            links=exc.links,
        )

    def error_document(self, errors: Iterable[ErrorObject]) -> Document:
        """Return a document with an errors array."""
        return Document(errors=list(errors))

    def exception_document(self, exc: JSONAPIError) -> dict[str, Any]:
        """Return the wire-ready error document for a typed failure."""
        return self.error_document([self.from_exception(exc)]).serialize()

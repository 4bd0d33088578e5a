"""JSON:API document construction."""

from typing import Any, Iterable, Mapping

from jsonapi_core.schemas.document import Document, JSONAPIObject
from jsonapi_core.schemas.error import ErrorObject
from jsonapi_core.schemas.resource import ResourceObject


class JSONAPIDocumentBuilder:
    """Build top-level documents from normalized resource objects."""

    def __init__(self, *, version: str | None = None) -> None:
        """Advertise ``version`` in a ``jsonapi`` member when given."""
        self.version = version

    def build_single(
        self,
        resource: ResourceObject | None,
        *,
        included: Iterable[ResourceObject] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> Document:
        """Return a document whose primary data is one resource object (or null)."""
        return self._build(resource, included=included, links=links, meta=meta)

    def build_collection(
        self,
        resources: Iterable[ResourceObject],
        *,
        included: Iterable[ResourceObject] | None = None,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> Document:
        """Return a document whose primary data is a list of resource objects."""
        return self._build(list(resources), included=included, links=links, meta=meta)

    def build_meta(self, meta: Mapping[str, Any]) -> Document:
        """Return a document carrying only top-level meta."""
        return Document(meta=dict(meta), jsonapi=self._jsonapi())

    def build_error(self, errors: Iterable[ErrorObject]) -> Document:
        """Return an error document."""
        return Document(errors=list(errors), jsonapi=self._jsonapi())

    def _build(
        self,
        data: ResourceObject | list[ResourceObject] | None,
        *,
        included: Iterable[ResourceObject] | None,
        links: Mapping[str, Any] | None,
        meta: Mapping[str, Any] | None,
    ) -> Document:
        document = Document(data=data, jsonapi=self._jsonapi())
        if included is not None:
            document.included = list(included)
        if links:
            document.links = dict(links)
        if meta:
            document.meta = dict(meta)
        return document

    def _jsonapi(self) -> JSONAPIObject | None:
        return None if self.version is None else JSONAPIObject(version=self.version)

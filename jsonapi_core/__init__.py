"""JSON:API document codec, query engine and normalizer for FastAPI."""

from .api import JSONAPI
from .config import FieldCase, JSONAPISettings
from .core.document import JSONAPIDocumentBuilder
from .core.errors import JSONAPIErrorBuilder
from .exceptions import InvalidDocument, InvalidHeader, InvalidQuery, JSONAPIError
from .normalizer.base import Normalizer
from .query.context import QueryContext
from .resources.registry import ResourceRegistry
from .resources.schema import Attribute, JSONAPIResource, Relationship, ResourceSchema
from .schemas.document import Document

__all__ = [
    "JSONAPI",
    "Attribute",
    "Document",
    "FieldCase",
    "InvalidDocument",
    "InvalidHeader",
    "InvalidQuery",
    "JSONAPIDocumentBuilder",
    "JSONAPIError",
    "JSONAPIErrorBuilder",
    "JSONAPIResource",
    "JSONAPISettings",
    "Normalizer",
    "QueryContext",
    "Relationship",
    "ResourceRegistry",
    "ResourceSchema",
]

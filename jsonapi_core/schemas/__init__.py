"""Document codec: JSON:API document entities with parse and serialize."""

from .atomic import AtomicDocument, OperationObject, OperationRef, ResultObject
from .document import Document, JSONAPIObject, parse_document, serialize_document
from .error import ErrorObject
from .links import LinkObject
from .resource import (
    Linkage,
    RelationshipObject,
    ResourceIdentifierObject,
    ResourceObject,
    ToMany,
    ToOne,
)

__all__ = [
    "AtomicDocument",
    "Document",
    "ErrorObject",
    "JSONAPIObject",
    "LinkObject",
    "Linkage",
    "OperationObject",
    "OperationRef",
    "RelationshipObject",
    "ResourceIdentifierObject",
    "ResourceObject",
    "ResultObject",
    "ToMany",
    "ToOne",
    "parse_document",
    "serialize_document",
]

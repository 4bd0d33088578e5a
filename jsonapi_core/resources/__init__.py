"""Resource schemas, the schema registry and field recasing."""

from .recase import recase
from .registry import ResourceRegistry
from .schema import Attribute, JSONAPIResource, Relationship, ResourceSchema

__all__ = [
    "Attribute",
    "JSONAPIResource",
    "Relationship",
    "ResourceRegistry",
    "ResourceSchema",
    "recase",
]

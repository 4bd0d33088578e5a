"""Immutable resource descriptors consulted by the codec and query parsers."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from jsonapi_core.config import FieldCase
from jsonapi_core.resources.recase import recase, underscore

RESERVED_FIELD_NAMES = frozenset({"id", "type"})


class Attribute(BaseModel):
    """Attribute declaration.

    ``key`` is the attribute read from (and written to) application data when it
    differs from the field name. ``serialize`` and ``deserialize`` either toggle the
    attribute in each direction or compute the value: ``serialize(data, query)`` and
    ``deserialize(value)``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    key: Optional[str] = None
    serialize: Union[bool, Callable[..., Any]] = True
    deserialize: Union[bool, Callable[..., Any]] = True

    @property
    def source_key(self) -> str:
        return self.key or self.name


class Relationship(BaseModel):
    """Relationship declaration pointing at another resource type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    resource: str = Field(min_length=1)
    many: bool = False
    key: Optional[str] = None

    @property
    def source_key(self) -> str:
        return self.key or self.name


class ResourceSchema(BaseModel):
    """Static description of one resource type.

    Built once at startup and never mutated, so a single instance is shared by
    every request. Field name sets are computed on construction and queried by
    plain membership tests.
    """

    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1)
    id_attribute: str = "id"
    attributes: tuple[Attribute, ...] = ()
    relationships: tuple[Relationship, ...] = ()
    client_generated_ids: bool = False
    links: Optional[Callable[..., Any]] = None
    meta: Optional[Callable[..., Any]] = None

    _attributes: dict[str, Attribute] = PrivateAttr(default_factory=dict)
    _relationships: dict[str, Relationship] = PrivateAttr(default_factory=dict)
    _wire_names: dict[FieldCase, dict[str, str]] = PrivateAttr(default_factory=dict)

    @field_validator("attributes", mode="before")
    @classmethod
    def _coerce_attributes(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(
                Attribute(name=name, **(options or {}))
                for name, options in value.items()
            )
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
            return tuple(
                Attribute(name=item) if isinstance(item, str) else item
                for item in value
            )
        return value

    @field_validator("relationships", mode="before")
    @classmethod
    def _coerce_relationships(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(
                Relationship(name=name, **options) for name, options in value.items()
            )
        return value

    @model_validator(mode="after")
    def _check_field_names(self) -> "ResourceSchema":
        names = [attribute.name for attribute in self.attributes]
        names.extend(relationship.name for relationship in self.relationships)
        reserved = RESERVED_FIELD_NAMES.intersection(names)
        if reserved:
            raise ValueError(
                f"Illegal field name '{sorted(reserved)[0]}' for resource '{self.type}'"
            )
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(
                f"Duplicate field names {sorted(duplicates)} for resource '{self.type}'"
            )
        return self

    def model_post_init(self, __context: Any) -> None:
        self._attributes = {attribute.name: attribute for attribute in self.attributes}
        self._relationships = {
            relationship.name: relationship for relationship in self.relationships
        }
        names = [*self._attributes, *self._relationships]
        self._wire_names = {
            case: {recase(name, case): name for name in names} for case in FieldCase
        }

    @property
    def attribute_names(self) -> frozenset[str]:
        return frozenset(self._attributes)

    @property
    def relationship_names(self) -> frozenset[str]:
        return frozenset(self._relationships)

    def attribute(self, name: str) -> Attribute | None:
        return self._attributes.get(name)

    def relationship(self, name: str) -> Relationship | None:
        return self._relationships.get(name)

    def field_options(self, name: str) -> Attribute | Relationship | None:
        """Return the declaration for ``name``, or ``None`` when it is not declared."""
        return self._attributes.get(name) or self._relationships.get(name)

    def wire_name(self, name: str, case: FieldCase | str) -> str:
        """Return ``name`` as it appears on the wire under ``case``."""
        return recase(name, case)

    def resolve_field(self, wire_name: str, case: FieldCase | str) -> str:
        """Return the declared field name sent as ``wire_name`` under ``case``.

        Names that match no declared field are converted with :func:`underscore`.
        """
        name = self._wire_names[FieldCase(case)].get(wire_name)
        return underscore(wire_name) if name is None else name


class JSONAPIResource:
    """Declarative base producing a :class:`ResourceSchema` from an inner ``Meta``.

    Example::

        class ArticleResource(JSONAPIResource):
            class Meta:
                type_ = "articles"
                attributes = ["title", "body"]
                relationships = {"author": {"resource": "people"}}
    """

    class Meta:
        """Resource metadata (type, id attribute, fields)."""

        type_: str = ""
        id_attribute: str = "id"
        attributes: Any = ()
        relationships: Any = ()
        client_generated_ids: bool = False

    @classmethod
    def links(cls, data: Any) -> dict[str, Any] | None:
        """Return resource object links for ``data`` (override in subclasses)."""
        return None

    @classmethod
    def meta(cls, data: Any) -> dict[str, Any] | None:
        """Return resource object meta for ``data`` (override in subclasses)."""
        return None

    @classmethod
    def schema(cls) -> ResourceSchema:
        meta = cls.Meta
        return ResourceSchema(
            type=meta.type_,
            id_attribute=getattr(meta, "id_attribute", "id"),
            attributes=getattr(meta, "attributes", ()),
            relationships=getattr(meta, "relationships", ()),
            client_generated_ids=getattr(meta, "client_generated_ids", False),
            links=cls.links if _overrides(cls, "links") else None,
            meta=cls.meta if _overrides(cls, "meta") else None,
        )


def _overrides(cls: type[JSONAPIResource], hook: str) -> bool:
    default = getattr(JSONAPIResource, hook).__func__
    return getattr(getattr(cls, hook), "__func__", None) is not default

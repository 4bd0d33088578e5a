"""Inclusion of related resources: the ``include`` query parameter."""

from __future__ import annotations

import logging
from typing import Any

from jsonapi_core.config import FieldCase, JSONAPISettings
from jsonapi_core.exceptions import InvalidQuery
from jsonapi_core.resources.registry import ResourceRegistry
from jsonapi_core.resources.schema import ResourceSchema

from .params import split_csv
from .tree import IncludeTree, branch, merge_include_trees

logger = logging.getLogger(__name__)


def parse_include(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    include: Any,
    settings: JSONAPISettings | None = None,
) -> IncludeTree:
    """Parse ``include=author,comments.author`` into a validated include tree.

    Every path is walked against the declared relationships, one schema at a
    time. When ``settings.include_allowlist`` is set, each segment must also be
    present in the matching allow-list subtree.
    """
    if include is None:
        return {}
    if not isinstance(include, str):
        raise InvalidQuery(type=schema.type, param="include", value=include)

    allowlist = settings.include_allowlist if settings is not None else None
    case = (settings or JSONAPISettings()).case
    tree: IncludeTree = {}
    for path in split_csv(include):
        segments = [segment for segment in path.split(".") if segment]
        names = _resolve_path(schema, registry, segments, case, allowlist, path)
        tree = merge_include_trees(tree, branch(names))
    return tree


def _resolve_path(
    schema: ResourceSchema,
    registry: ResourceRegistry,
    segments: list[str],
    case: FieldCase,
    allowlist: IncludeTree | None,
    path: str,
) -> list[str]:
    current = schema
    allowed = allowlist
    names = []
    for segment in segments:
        name = current.resolve_field(segment, case)
        relationship = current.relationship(name)
        if relationship is None or (allowed is not None and name not in allowed):
            logger.debug("Rejecting include path %r at %s.%s", path, current.type, name)
            raise InvalidQuery(type=current.type, param="include", value=path)
        if allowed is not None:
            allowed = allowed[name] or {}
        names.append(name)
        current = registry.related(current, relationship)
    return names

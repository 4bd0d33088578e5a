"""Split a raw query-parameter map into JSON:API parameter families."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

FAMILIES = ("include", "fields", "sort", "page", "filter")

_BRACKETS = re.compile(r"^(?P<family>[a-z]+)(?P<path>(?:\[[^\[\]]+\])+)$")
_SEGMENT = re.compile(r"\[([^\[\]]+)\]")


def split_csv(value: str) -> list[str]:
    return [item for item in (part.strip() for part in value.split(",")) if item]


def _maybe_parse_json(value: Any) -> Any:
    """Parse a JSON object or array string, otherwise return the value as-is."""
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if not stripped or stripped[0] not in "[{":
        return value
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        return value


def _assign(target: dict[str, Any], path: list[str], value: Any) -> None:
    for segment in path[:-1]:
        nested = target.get(segment)
        if not isinstance(nested, dict):
            nested = {}
            target[segment] = nested
        target = nested
    target[path[-1]] = value


def split_query_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Group raw query parameters by family.

    Bracketed keys are nested, so ``fields[articles]=title`` becomes
    ``{"fields": {"articles": "title"}}`` and ``filter[age][gt]=3`` becomes
    ``{"filter": {"age": {"gt": "3"}}}``. Only families present in ``params``
    appear in the result, which lets parsers tell an absent parameter from an
    empty one. Values are otherwise left untouched, except that a plain
    ``filter`` holding a JSON object or array string is decoded.
    """
    families: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if key in FAMILIES:
            families[key] = _maybe_parse_json(value) if key == "filter" else value
            continue
        match = _BRACKETS.match(key)
        if match is None or match.group("family") not in FAMILIES:
            continue
        family = families.get(match.group("family"))
        if not isinstance(family, dict):
            family = {}
            families[match.group("family")] = family
        _assign(family, _SEGMENT.findall(match.group("path")), value)
    return families

"""Include trees: nested mappings of relationship names."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Sequence

IncludeTree = Dict[str, Any]


def branch(segments: Sequence[str]) -> IncludeTree:
    """Return the single-branch tree for one relationship path."""
    tree: IncludeTree = {}
    for segment in reversed(segments):
        tree = {segment: tree}
    return tree


def merge_include_trees(left: IncludeTree, right: IncludeTree) -> IncludeTree:
    """Recursively union two include trees without modifying either."""
    merged: IncludeTree = {
        name: merge_include_trees(subtree or {}, {}) for name, subtree in left.items()
    }
    for name, subtree in right.items():
        merged[name] = merge_include_trees(merged.get(name) or {}, subtree or {})
    return merged


def include_paths(tree: IncludeTree, prefix: str = "") -> Iterator[str]:
    """Yield the dotted path of every node in ``tree``."""
    for name, subtree in tree.items():
        path = f"{prefix}.{name}" if prefix else name
        yield path
        yield from include_paths(subtree or {}, path)

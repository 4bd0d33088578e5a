"""Query-parameter engine: fields, sort, include, filter and page."""

from .context import DEFAULT_QUERY_PARSERS, QueryContext, QueryParser, parse_query
from .fields import parse_fields
from .filter import parse_filter
from .include import parse_include
from .page import parse_page
from .params import split_query_params
from .sort import SortDirection, SortField, parse_sort
from .tree import IncludeTree, include_paths, merge_include_trees

__all__ = [
    "DEFAULT_QUERY_PARSERS",
    "IncludeTree",
    "QueryContext",
    "QueryParser",
    "SortDirection",
    "SortField",
    "include_paths",
    "merge_include_trees",
    "parse_fields",
    "parse_filter",
    "parse_include",
    "parse_page",
    "parse_query",
    "parse_sort",
    "split_query_params",
]

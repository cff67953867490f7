"""核心模块导出."""

from esfluent.core.constants import BoolClauses, QueryOptions, ScoreModes
from esfluent.core.query import (
    bool_query,
    has_child_query,
    has_parent_query,
    match_all_query,
    match_query,
    nested_query,
    simple_query_string_query,
    term_query,
    terms_query,
    wildcard_query,
)

__all__ = [
    "QueryOptions",
    "ScoreModes",
    "BoolClauses",
    "match_query",
    "term_query",
    "terms_query",
    "wildcard_query",
    "simple_query_string_query",
    "match_all_query",
    "bool_query",
    "nested_query",
    "has_child_query",
    "has_parent_query",
]

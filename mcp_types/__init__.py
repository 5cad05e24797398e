"""
Type definitions for the MCP Elasticsearch scroll server.
"""

from .primitives import (
    BOOL_GROUPS,
    BoolQuery,
    ClauseSpec,
    ClauseValue,
    Scalar,
    ScalarList,
    ScrollConfig,
    ScrollState,
    SearchRequest,
    TypedValue,
)

__all__ = [
    "BOOL_GROUPS",
    "BoolQuery",
    "ClauseSpec",
    "ClauseValue",
    "Scalar",
    "ScalarList",
    "ScrollConfig",
    "ScrollState",
    "SearchRequest",
    "TypedValue",
]

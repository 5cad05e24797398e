"""
Utility functions for the MCP Elasticsearch scroll server.
"""

from .connection import get_elasticsearch_client, get_http_client, test_connection
from .errors import CompilationAmbiguityError, ProtocolError, ScrollSearchError
from .validation import (
    validate_index_pattern,
    validate_indices,
    validate_size,
    validate_scroll_ttl,
    clamp_value,
)
from .query_builder import (
    clause_value,
    leaf_query_type,
    build_leaf_query,
    compile_clauses,
    build_bool_query,
    build_search_request,
)
from .response_parser import (
    parse_hits,
    parse_scroll_id,
    parse_total,
)

__all__ = [
    # Connection
    "get_elasticsearch_client",
    "get_http_client",
    "test_connection",
    # Errors
    "CompilationAmbiguityError",
    "ProtocolError",
    "ScrollSearchError",
    # Validation
    "validate_index_pattern",
    "validate_indices",
    "validate_size",
    "validate_scroll_ttl",
    "clamp_value",
    # Query building
    "clause_value",
    "leaf_query_type",
    "build_leaf_query",
    "compile_clauses",
    "build_bool_query",
    "build_search_request",
    # Response parsing
    "parse_hits",
    "parse_scroll_id",
    "parse_total",
]

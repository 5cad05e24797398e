"""
Query building utilities for Elasticsearch.

Turns shorthand clause specifications into Bool-query statements:

    {"status": "error"}      -> {"match": {"status": "error"}}
    {"message": "disk full"} -> {"match_phrase": {"message": "disk full"}}
    {"code": [500, 503]}     -> {"terms": {"code": [500, 503]}}
    {"host.name": {"Type": "wildcard", "Value": "web*"}}
                             -> {"wildcard": {"host.name": "web*"}}
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from mcp_types.primitives import (
    BoolQuery,
    ClauseSpec,
    ClauseValue,
    Scalar,
    ScalarList,
    SearchRequest,
    TypedValue,
)
from utils.errors import CompilationAmbiguityError


TYPE_KEY = "Type"
VALUE_KEY = "Value"

DEFAULT_QUERY_TYPE = "match"

_WHITESPACE = re.compile(r"\s")


def clause_value(field: str, raw: Any) -> ClauseValue:
    """
    Convert a shorthand clause value into a ClauseValue.

    Args:
        field: Field name the value belongs to (used in error messages)
        raw: Plain scalar, list of scalars, ``{"Type": ..., "Value": ...}``
            descriptor, or an existing ClauseValue

    Returns:
        Scalar, ScalarList or TypedValue

    Raises:
        CompilationAmbiguityError: If the value cannot be resolved
    """
    if isinstance(raw, (Scalar, ScalarList, TypedValue)):
        return raw

    if isinstance(raw, dict):
        if TYPE_KEY not in raw:
            raise CompilationAmbiguityError(
                field, f"mapping value has no '{TYPE_KEY}' key"
            )
        rest = {k: v for k, v in raw.items() if k != TYPE_KEY}
        query_type = raw[TYPE_KEY]
        if not isinstance(query_type, str) or not query_type:
            raise CompilationAmbiguityError(field, f"invalid query type {query_type!r}")
        if not rest:
            raise CompilationAmbiguityError(field, f"'{query_type}' descriptor has no value")
        # Only Value is read for now; other keys are passed through as the value
        value = rest[VALUE_KEY] if VALUE_KEY in rest else rest
        return TypedValue(query_type=query_type, value=value)

    if isinstance(raw, (list, tuple)):
        return ScalarList(values=list(raw))

    if raw is None:
        raise CompilationAmbiguityError(field, "value is missing")

    return Scalar(value=raw)


def leaf_query_type(value: ClauseValue, default_type: str = DEFAULT_QUERY_TYPE) -> str:
    """
    Resolve the leaf-query type of a clause value.

    Args:
        value: Compiled clause value
        default_type: Type for single values without whitespace

    Returns:
        Leaf-query type name
    """
    if isinstance(value, TypedValue):
        return value.query_type
    if isinstance(value, ScalarList):
        return "terms"
    if isinstance(value.value, str) and _WHITESPACE.search(value.value):
        return "match_phrase"
    return default_type


def _leaf_query_value(value: ClauseValue) -> Any:
    if isinstance(value, ScalarList):
        return list(value.values)
    return value.value


def build_leaf_query(
    field: str,
    raw: Any,
    default_type: str = DEFAULT_QUERY_TYPE,
) -> Dict[str, Any]:
    """
    Build a single-field leaf query statement.

    Args:
        field: Field name
        raw: Shorthand value or ClauseValue
        default_type: Type for single values without whitespace

    Returns:
        Statement of the form ``{type: {field: value}}``
    """
    if not field:
        raise CompilationAmbiguityError(field, "field name is empty")
    value = clause_value(field, raw)
    return {leaf_query_type(value, default_type): {field: _leaf_query_value(value)}}


def compile_clauses(
    specs: Optional[Iterable[ClauseSpec]],
    default_type: str = DEFAULT_QUERY_TYPE,
) -> List[Dict[str, Any]]:
    """
    Compile a list of clause specs into leaf query statements.

    Each field of each spec yields one statement, in input order.
    """
    statements = []
    for spec in specs or []:
        for field, raw in spec.items():
            statements.append(build_leaf_query(field, raw, default_type))
    return statements


def build_bool_query(
    must: Optional[Iterable[ClauseSpec]] = None,
    must_not: Optional[Iterable[ClauseSpec]] = None,
    should: Optional[Iterable[ClauseSpec]] = None,
    filter: Optional[Iterable[ClauseSpec]] = None,
    default_type: str = DEFAULT_QUERY_TYPE,
) -> BoolQuery:
    """
    Build a bool query combining multiple clause specs.

    Args:
        must: Clauses that must match
        must_not: Clauses that must not match
        should: Optional clauses (OR logic)
        filter: Filter context clauses (no scoring)
        default_type: Type for single values without whitespace

    Returns:
        BoolQuery; groups without clauses stay empty and are left out of
        the emitted document
    """
    return BoolQuery(
        must=compile_clauses(must, default_type),
        must_not=compile_clauses(must_not, default_type),
        should=compile_clauses(should, default_type),
        filter=compile_clauses(filter, default_type),
    )


def build_search_request(
    must: Optional[Iterable[ClauseSpec]] = None,
    must_not: Optional[Iterable[ClauseSpec]] = None,
    should: Optional[Iterable[ClauseSpec]] = None,
    filter: Optional[Iterable[ClauseSpec]] = None,
    size: int = 100,
    default_type: str = DEFAULT_QUERY_TYPE,
) -> SearchRequest:
    """Build the initial scroll search request from clause specs."""
    query = build_bool_query(
        must=must,
        must_not=must_not,
        should=should,
        filter=filter,
        default_type=default_type,
    )
    return SearchRequest(query=query, size=size)

"""
FastMCP Elasticsearch Scroll Server.

Tools:
- health: Check Elasticsearch connectivity and effective search defaults
- build_elastic_query: Compile shorthand clauses into a bool query body
- scroll_search_elastic: Compile clauses and fetch every matching hit via scroll
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP
from dotenv import load_dotenv

from config import (
    get_current_environment,
    get_environment_config,
    get_scroll_config,
)
from tools.primitives import scroll_search
from utils import build_search_request, test_connection, validate_size

# Load environment variables
load_dotenv()

logging.basicConfig(level=logging.INFO)

# Initialize MCP server
mcp = FastMCP("elastic-scroll-mcp")


@mcp.tool()
def health() -> Dict[str, Any]:
    """
    Check Elasticsearch connectivity and configuration.

    Returns status information about:
    - Elasticsearch connectivity
    - Environment name
    - Default scroll search settings
    """
    env = get_current_environment()
    config = get_environment_config()
    connected = test_connection()

    return {
        "overall_status": "healthy" if connected else "degraded",
        "environment": env,
        "services": {
            "elasticsearch": {
                "service": "elasticsearch",
                "connected": connected,
                "url": config["elasticsearch"]["url"],
            },
        },
        "defaults": {
            key: value
            for key, value in config["defaults"].items()
            if key != "max_page_size"
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@mcp.tool()
def build_elastic_query(
    must: Optional[List[Dict[str, Any]]] = None,
    must_not: Optional[List[Dict[str, Any]]] = None,
    should: Optional[List[Dict[str, Any]]] = None,
    filter: Optional[List[Dict[str, Any]]] = None,
    size: Optional[int] = None,
    default_query_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Compile shorthand clauses into an Elasticsearch search body without running it.

    Each clause is a mapping of field name to value:
    - "value"          -> default query type (match)
    - "two words"      -> match_phrase
    - ["a", "b"]       -> terms
    - {"Type": "wildcard", "Value": "web*"} -> explicit query type

    Args:
        must: Clauses that must match
        must_not: Clauses that must not match
        should: Optional clauses (OR logic)
        filter: Filter context clauses (no scoring)
        size: Hits per page (1-10000)
        default_query_type: Query type for single values without spaces

    Returns:
        Search request body
    """
    config = get_scroll_config(size=size, default_query_type=default_query_type)
    request = build_search_request(
        must=must,
        must_not=must_not,
        should=should,
        filter=filter,
        size=validate_size(config.size),
        default_type=config.default_query_type,
    )
    return request.to_dict()


@mcp.tool()
async def scroll_search_elastic(
    must: Optional[List[Dict[str, Any]]] = None,
    must_not: Optional[List[Dict[str, Any]]] = None,
    should: Optional[List[Dict[str, Any]]] = None,
    filter: Optional[List[Dict[str, Any]]] = None,
    indices: Optional[List[str]] = None,
    size: Optional[int] = None,
    scroll_minutes: Optional[int] = None,
    default_query_type: Optional[str] = None,
    keep_scrolls: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Fetch every document matching a bool query, paging with the scroll API.

    Clauses use the same shorthand as build_elastic_query. Unset arguments
    fall back to the ELASTIC_* environment settings.

    Args:
        must: Clauses that must match
        must_not: Clauses that must not match
        should: Optional clauses (OR logic)
        filter: Filter context clauses (no scoring)
        indices: Index patterns to search (all indices if empty)
        size: Hits per page (1-10000)
        scroll_minutes: How long the server keeps each scroll cursor alive
        default_query_type: Query type for single values without spaces
        keep_scrolls: Leave scroll contexts open instead of clearing them

    Returns:
        Dictionary with total and hits
    """
    config = get_scroll_config(
        indices=indices,
        size=size,
        scroll_minutes=scroll_minutes,
        default_query_type=default_query_type,
        keep_scrolls=keep_scrolls,
    )
    hits = await scroll_search(
        must=must,
        must_not=must_not,
        should=should,
        filter=filter,
        config=config,
    )
    return {
        "total": len(hits),
        "hits": hits,
    }


if __name__ == "__main__":
    mcp.run()

"""
Response parsing utilities for Elasticsearch.
"""

from typing import Dict, Any, List, Optional


def parse_hits(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Extract hits from search response.

    Args:
        response: Elasticsearch response

    Returns:
        List of hit documents
    """
    return (response.get("hits") or {}).get("hits") or []


def parse_scroll_id(response: Dict[str, Any]) -> Optional[str]:
    """
    Extract the scroll cursor id from a search or scroll response.

    Returns:
        Cursor id, or None if absent or empty
    """
    return response.get("_scroll_id") or None


def parse_total(response: Dict[str, Any]) -> Optional[int]:
    """Extract the total hit count, in either the 6.x or 7.x+ format."""
    total = (response.get("hits") or {}).get("total")
    if isinstance(total, dict):
        return total.get("value")
    return total

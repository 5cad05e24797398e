"""
Primitive tools for low-level Elasticsearch operations.
"""

from .search import ScrollExecutor, scroll_search, wait_for_background_cleanup

__all__ = [
    # Scroll operations
    "ScrollExecutor",
    "scroll_search",
    "wait_for_background_cleanup",
]

"""
Error types raised by query compilation and scroll execution.

Transport failures are not wrapped: ``httpx.HTTPError`` subclasses reach
the caller unmodified.
"""

from typing import Any, Dict, List, Optional


class ScrollSearchError(Exception):
    """Base class for errors raised by this package."""


class ProtocolError(ScrollSearchError):
    """
    A search or scroll response did not carry a scroll cursor id.

    Attributes:
        hits: Hits accumulated before the failure (empty when the initial
            search response was the one missing its cursor)
    """

    def __init__(self, message: str, hits: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.hits = hits or []


class CompilationAmbiguityError(ScrollSearchError, ValueError):
    """A clause value cannot be resolved to a leaf-query type."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Clause for field '{field}': {message}")
        self.field = field

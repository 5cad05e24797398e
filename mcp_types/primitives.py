"""
Primitive layer type definitions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union


ScalarType = Union[str, int, float, bool]

BOOL_GROUPS = ("must", "must_not", "should", "filter")


@dataclass(frozen=True)
class Scalar:
    """A single plain value; leaf type is inferred from its text."""
    value: ScalarType


@dataclass(frozen=True)
class ScalarList:
    """A list of plain values, always compiled to a ``terms`` query."""
    values: List[ScalarType]


@dataclass(frozen=True)
class TypedValue:
    """A value with an explicit leaf-query type (``term``, ``wildcard``, ...)."""
    query_type: str
    value: Any


ClauseValue = Union[Scalar, ScalarList, TypedValue]

# Field name -> shorthand value or an already constructed ClauseValue
ClauseSpec = Mapping[str, Any]


@dataclass
class BoolQuery:
    """Statements of a Bool query, grouped by clause name."""
    must: List[Dict[str, Any]] = field(default_factory=list)
    must_not: List[Dict[str, Any]] = field(default_factory=list)
    should: List[Dict[str, Any]] = field(default_factory=list)
    filter: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the body of a ``bool`` query, leaving out empty groups."""
        return {
            group: list(getattr(self, group))
            for group in BOOL_GROUPS
            if getattr(self, group)
        }


@dataclass
class SearchRequest:
    """Body of the initial scroll search."""
    query: BoolQuery
    size: int = 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Elasticsearch request body."""
        return {
            "size": self.size,
            "query": {"bool": self.query.to_dict()},
        }


@dataclass
class ScrollState:
    """The live scroll cursor and how long the server keeps it."""
    scroll_id: str
    scroll_minutes: int = 1

    @property
    def keep_alive(self) -> str:
        return f"{self.scroll_minutes}m"

    def to_dict(self) -> Dict[str, Any]:
        """Body of a scroll continuation request."""
        return {"scroll": self.keep_alive, "scroll_id": self.scroll_id}


@dataclass
class ScrollConfig:
    """
    Everything a scroll search needs besides the clauses themselves.

    Built explicitly by the caller, or from the environment with
    ``config.environments.get_scroll_config``.
    """
    base_url: str = "http://localhost:9200"
    indices: List[str] = field(default_factory=list)
    size: int = 100
    scroll_minutes: int = 1
    default_query_type: str = "match"
    keep_scrolls: bool = False
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None
    timeout_ms: int = 30000
    verify_certs: bool = True
    ca_certs: Optional[str] = None

    @property
    def keep_alive(self) -> str:
        return f"{self.scroll_minutes}m"

    @property
    def search_path(self) -> str:
        """Path of the initial search, relative to ``base_url``."""
        if self.indices:
            return f"/{','.join(self.indices)}/_search"
        return "/_search"

"""
Primitive scroll search operations for Elasticsearch.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

import httpx

from config.environments import get_scroll_config
from mcp_types.primitives import ClauseSpec, ScrollConfig, ScrollState, SearchRequest
from utils.connection import get_http_client
from utils.errors import ProtocolError
from utils.query_builder import build_search_request
from utils.response_parser import parse_hits, parse_scroll_id, parse_total
from utils.validation import validate_indices, validate_scroll_ttl, validate_size


logger = logging.getLogger(__name__)

SCROLL_PATH = "/_search/scroll"

# Background aclose() tasks of executors created by scroll_search
_closing_executors: Set[asyncio.Task] = set()


class ScrollExecutor:
    """
    Runs a search and follows its scroll cursor until every hit is fetched.

    Each ``execute()`` call owns its result list and the set of cursor ids it
    has seen. Cursors are released in a background task once the results are
    ready, so callers are never blocked on cleanup. Use the executor as an
    async context manager, or call ``aclose()``, to wait for pending cleanup
    and close the HTTP client.

    Usage:
        async with ScrollExecutor(config) as executor:
            hits = await executor.execute(request)
    """

    def __init__(
        self,
        config: ScrollConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        validate_indices(config.indices)
        validate_scroll_ttl(config.scroll_minutes)

        self.config = config
        self._client = client or get_http_client(config)
        self._owns_client = client is None
        self._cleanup_tasks: Set[asyncio.Task] = set()

    async def __aenter__(self) -> "ScrollExecutor":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def execute(self, request: SearchRequest) -> List[Dict[str, Any]]:
        """
        Run the search and collect the hits of every page.

        Args:
            request: Compiled search request

        Returns:
            All hits, in page order

        Raises:
            ProtocolError: If a response has no scroll id; ``hits`` on the
                error holds what was collected before it
            httpx.HTTPError: If a request fails
        """
        hits: List[Dict[str, Any]] = []
        # dict keeps first-seen order and drops repeated ids
        seen_scroll_ids: Dict[str, None] = {}

        try:
            response = await self._search(request)
            scroll_id = parse_scroll_id(response)
            if scroll_id is None:
                raise ProtocolError("Search response did not include a _scroll_id")

            state = ScrollState(scroll_id=scroll_id, scroll_minutes=self.config.scroll_minutes)
            seen_scroll_ids[state.scroll_id] = None
            page = parse_hits(response)
            total = parse_total(response)
            logger.debug("Search matched %s documents", total)

            while page:
                hits.extend(page)
                logger.debug("Scroll page with %d hits, %d collected", len(page), len(hits))

                response = await self._scroll(state)
                scroll_id = parse_scroll_id(response)
                if scroll_id is None:
                    raise ProtocolError(
                        "Scroll response did not include a _scroll_id",
                        hits=list(hits),
                    )

                state = ScrollState(scroll_id=scroll_id, scroll_minutes=self.config.scroll_minutes)
                seen_scroll_ids[state.scroll_id] = None
                page = parse_hits(response)
        finally:
            self._schedule_cleanup(list(seen_scroll_ids))

        logger.info("Scroll search finished with %d hits (server reported %s)", len(hits), total)
        return hits

    async def wait_for_cleanup(self) -> None:
        """Wait until every scheduled scroll cleanup has finished."""
        if self._cleanup_tasks:
            await asyncio.gather(*list(self._cleanup_tasks))

    async def aclose(self) -> None:
        """Wait for pending cleanup, then close the HTTP client if owned."""
        await self.wait_for_cleanup()
        if self._owns_client:
            await self._client.aclose()

    async def _search(self, request: SearchRequest) -> Dict[str, Any]:
        path = self.config.search_path
        logger.debug("POST %s?scroll=%s", path, self.config.keep_alive)
        response = await self._client.post(
            path,
            params={"scroll": self.config.keep_alive},
            json=request.to_dict(),
        )
        response.raise_for_status()
        return response.json()

    async def _scroll(self, state: ScrollState) -> Dict[str, Any]:
        logger.debug("POST %s", SCROLL_PATH)
        response = await self._client.post(SCROLL_PATH, json=state.to_dict())
        response.raise_for_status()
        return response.json()

    def _schedule_cleanup(self, scroll_ids: List[str]) -> None:
        if not scroll_ids:
            return
        if self.config.keep_scrolls:
            logger.debug("Keeping %d scroll context(s) open", len(scroll_ids))
            return

        task = asyncio.get_running_loop().create_task(self._clear_scrolls(scroll_ids))
        self._cleanup_tasks.add(task)
        task.add_done_callback(self._cleanup_tasks.discard)

    async def _clear_scrolls(self, scroll_ids: List[str]) -> None:
        """
        Release scroll contexts on the server.

        Best effort: the hits have already been handed back, so failures
        are only logged.
        """
        try:
            response = await self._client.request(
                "DELETE",
                SCROLL_PATH,
                json={"scroll_id": scroll_ids},
            )
            response.raise_for_status()
            logger.debug("Cleared %d scroll context(s)", len(scroll_ids))
        except httpx.HTTPError as e:
            logger.warning("Failed to clear %d scroll context(s): %s", len(scroll_ids), e)


async def scroll_search(
    must: Optional[Iterable[ClauseSpec]] = None,
    must_not: Optional[Iterable[ClauseSpec]] = None,
    should: Optional[Iterable[ClauseSpec]] = None,
    filter: Optional[Iterable[ClauseSpec]] = None,
    config: Optional[ScrollConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """
    Compile clause specs into a bool query and fetch every matching hit.

    The query is compiled before any request is sent, so clause errors
    never reach the cluster. Hits are returned as soon as the last page
    arrives; scroll cleanup and client shutdown continue in the background
    (see ``wait_for_background_cleanup``).

    Args:
        must: Clauses that must match
        must_not: Clauses that must not match
        should: Optional clauses (OR logic)
        filter: Filter context clauses (no scoring)
        config: Scroll configuration (built from the environment if omitted)
        client: HTTP client to use instead of creating one

    Returns:
        All matching hits

    Raises:
        CompilationAmbiguityError: If a clause value cannot be compiled
        ProtocolError: If a response has no scroll id
        httpx.HTTPError: If a request fails
    """
    if config is None:
        config = get_scroll_config()

    request = build_search_request(
        must=must,
        must_not=must_not,
        should=should,
        filter=filter,
        size=validate_size(config.size),
        default_type=config.default_query_type,
    )

    executor = ScrollExecutor(config, client=client)
    try:
        return await executor.execute(request)
    finally:
        # Hits go back to the caller now; cleanup and client shutdown finish later
        task = asyncio.get_running_loop().create_task(executor.aclose())
        _closing_executors.add(task)
        task.add_done_callback(_closing_executors.discard)


async def wait_for_background_cleanup() -> None:
    """Wait for the scroll cleanup started by earlier ``scroll_search`` calls."""
    if _closing_executors:
        await asyncio.gather(*list(_closing_executors))

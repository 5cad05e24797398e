"""
Pytest configuration and fixtures for MCP Elasticsearch scroll tests.
"""

import json
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, project_root)

from mcp_types.primitives import ScrollConfig  # noqa: E402


BASE_URL = "http://es.test:9200"


def make_page(count: int, scroll_id: Optional[str], start: int = 0) -> Dict[str, Any]:
    """Build a search/scroll response body with ``count`` hits."""
    page: Dict[str, Any] = {
        "took": 2,
        "timed_out": False,
        "hits": {
            "total": {"value": count, "relation": "eq"},
            "hits": [
                {
                    "_index": "logs-2024.01.15",
                    "_id": f"doc-{i}",
                    "_source": {"seq": i, "status": "error"},
                }
                for i in range(start, start + count)
            ],
        },
    }
    if scroll_id is not None:
        page["_scroll_id"] = scroll_id
    return page


@dataclass
class RecordedRequest:
    method: str
    path: str
    params: Dict[str, str]
    body: Any


class FakeElasticsearch:
    """
    Serves queued responses to the initial search and each scroll request.

    Queue entries are response bodies (dict) or bare status codes (int).
    DELETE /_search/scroll always answers with ``delete_status``.
    """

    def __init__(self, responses: List[Union[Dict[str, Any], int]], delete_status: int = 200):
        self.responses = list(responses)
        self.delete_status = delete_status
        self.requests: List[RecordedRequest] = []
        # Set to an asyncio.Event to hold requests until it is set
        self.scroll_gate = None
        self.delete_gate = None

    async def handler(self, request: httpx.Request) -> httpx.Response:
        content = await request.aread()
        body = json.loads(content) if content else None
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.url.path,
                params=dict(request.url.params),
                body=body,
            )
        )

        if request.method == "DELETE":
            if self.delete_gate is not None:
                await self.delete_gate.wait()
            return httpx.Response(
                self.delete_status,
                json={"succeeded": self.delete_status == 200, "num_freed": len(body["scroll_id"])},
            )

        if request.url.path == "/_search/scroll" and self.scroll_gate is not None:
            await self.scroll_gate.wait()

        response = self.responses.pop(0)
        if isinstance(response, int):
            return httpx.Response(response, json={"error": {"type": "search_phase_execution_exception"}})
        return httpx.Response(200, json=response)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))

    @property
    def searches(self) -> List[RecordedRequest]:
        return [r for r in self.requests if r.method == "POST" and r.path != "/_search/scroll"]

    @property
    def scrolls(self) -> List[RecordedRequest]:
        return [r for r in self.requests if r.method == "POST" and r.path == "/_search/scroll"]

    @property
    def deletes(self) -> List[RecordedRequest]:
        return [r for r in self.requests if r.method == "DELETE"]


@pytest.fixture
def page():
    """Factory for search/scroll response bodies."""
    return make_page


@pytest.fixture
def fake_es():
    """Factory for a fake Elasticsearch scroll endpoint."""
    return FakeElasticsearch


@pytest.fixture
def scroll_config():
    """Scroll configuration pointing at the fake endpoint."""
    return ScrollConfig(
        base_url=BASE_URL,
        indices=["logs-*"],
        size=100,
        scroll_minutes=1,
    )


@pytest.fixture
def sample_clauses():
    """Clause lists from the documented end-to-end example."""
    return {
        "must": [{"status": "error"}],
        "filter": [{"host.name": {"Type": "wildcard", "Value": "web*"}}],
    }


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove ELASTIC_* settings so defaults apply."""
    for name in list(os.environ):
        if name.startswith("ELASTIC"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ELASTIC_URL", BASE_URL)
    yield monkeypatch

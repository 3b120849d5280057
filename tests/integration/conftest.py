"""Integration test fixtures (mock Cohere HTTP API and prerequisites).

The Cohere SDK runs for real on top of an httpx MockTransport, so requests
are serialized and responses parsed exactly as in production. Live tests
are skipped unless CO_API_KEY is set.
"""

import json
import os
from typing import Callable, Dict, List

import httpx
import pytest

from cohere_processor.llm.cohere_client import CohereClient

MOCK_BASE_URL = "https://api.cohere.test"


class MockCohereAPI:
    """Records requests and answers them from per-path handlers."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def route(self, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = handler

    def json_bodies(self, path: str) -> List[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        return handler(request)


@pytest.fixture
def mock_api() -> MockCohereAPI:
    return MockCohereAPI()


@pytest.fixture
async def cohere_client(mock_api):
    """CohereClient backed by the real SDK and the mock transport."""
    client = CohereClient(
        api_key="test-key",
        base_url=MOCK_BASE_URL,
        timeout=5.0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(mock_api)),
    )
    yield client
    await client.close()


@pytest.fixture(scope="session")
def live_api_key() -> str:
    """Cohere API key for live tests; skips when not configured."""
    api_key = os.environ.get("CO_API_KEY")
    if not api_key:
        pytest.skip("CO_API_KEY not set, skipping live Cohere tests")
    return api_key

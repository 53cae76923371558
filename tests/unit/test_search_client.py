"""
Unit tests for the Brave Search client.

HTTP traffic is served by httpx.MockTransport; no network access is needed.
"""

import httpx
import pytest

from guideconnect.exceptions import SearchApiKeyMissingError, SearchServiceException
from guideconnect.services.search_client import BraveSearchClient, build_query

BRAVE_PAYLOAD = {
    "web": {
        "results": [
            {
                "title": "Everest Base Camp Trek",
                "url": "https://example.com/ebc",
                "description": "Twelve days in the Khumbu",
                "age": "2 days ago",
                "thumbnail": {"src": "https://example.com/ebc.jpg"},
            },
            {"title": "Annapurna Circuit", "url": "https://example.com/abc"},
        ]
    }
}


def make_client(handler, **kwargs) -> BraveSearchClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return BraveSearchClient(api_key="test-key", http_client=http_client, **kwargs)


class TestBuildQuery:
    @pytest.mark.parametrize(
        "query, search_type, expected",
        [
            ("Everest", "general", "Everest Nepal"),
            ("Everest", "destinations", "Everest destinations tourism travel Nepal"),
            ("Annapurna", "guides", "Annapurna travel guides tours trekking Nepal"),
            ("Kathmandu nepal food", "general", "Kathmandu nepal food"),
            ("festivals", "latest", "festivals Nepal"),
        ],
    )
    def test_scoped_to_nepal(self, query, search_type, expected):
        assert build_query(query, search_type) == expected


class TestSearch:
    async def test_normalizes_results(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["params"] = dict(request.url.params)
            seen["token"] = request.headers.get("X-Subscription-Token")
            return httpx.Response(200, json=BRAVE_PAYLOAD)

        async with make_client(handler) as client:
            response = await client.search("Everest", search_type="destinations", count=5)

        assert response.count == 2
        assert response.type == "destinations"
        assert response.query == "Everest destinations tourism travel Nepal"
        assert response.results[0].thumbnail == "https://example.com/ebc.jpg"
        assert response.results[1].description is None
        assert seen["params"]["count"] == "5"
        assert seen["token"] == "test-key"
        assert "freshness" not in seen["params"]

    async def test_latest_adds_freshness(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            return httpx.Response(200, json={"web": {"results": []}})

        async with make_client(handler) as client:
            response = await client.search("festivals", search_type="latest")

        assert response.results == []
        assert seen["freshness"] == "past1m"

    async def test_missing_web_section(self):
        async with make_client(lambda request: httpx.Response(200, json={})) as client:
            response = await client.search("Pokhara")

        assert response.count == 0

    async def test_retries_server_errors(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(503)
            return httpx.Response(200, json=BRAVE_PAYLOAD)

        async with make_client(handler, max_retries=2) as client:
            response = await client.search("Everest")

        assert len(calls) == 2
        assert response.count == 2

    async def test_client_error_is_not_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(401, text="bad token")

        async with make_client(handler, max_retries=3) as client:
            with pytest.raises(SearchServiceException) as exc_info:
                await client.search("Everest")

        assert len(calls) == 1
        assert exc_info.value.status_code == 401


def test_missing_api_key(monkeypatch):
    from guideconnect.config import settings

    monkeypatch.setattr(settings, "brave_search_api_key", None)

    with pytest.raises(SearchApiKeyMissingError):
        BraveSearchClient()

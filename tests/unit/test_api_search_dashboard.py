"""
Tests for the search proxy and dashboard routes.
"""

from unittest.mock import AsyncMock, patch

from guideconnect.api.schemas.search import SearchResponse, SearchResult
from guideconnect.config import settings
from conftest import make_destination, make_guide


class TestSearchRoute:
    def test_unconfigured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "brave_search_api_key", None)

        response = client.get("/api/v1/search", params={"q": "Everest"})

        assert response.status_code == 503
        assert response.json() == {"error": "Brave Search API key is not configured"}

    def test_results(self, client, monkeypatch):
        monkeypatch.setattr(settings, "brave_search_api_key", "test-key")
        canned = SearchResponse(
            query="Everest destinations tourism travel Nepal",
            type="destinations",
            results=[SearchResult(title="EBC", url="https://example.com/ebc")],
            count=1,
        )

        with patch(
            "guideconnect.services.search_client.BraveSearchClient.search",
            new_callable=AsyncMock,
            return_value=canned,
        ) as search:
            response = client.get("/api/v1/search", params={"q": "Everest", "type": "destinations", "count": 5})

        assert response.status_code == 200
        assert response.json()["results"][0]["title"] == "EBC"
        search.assert_awaited_once_with("Everest", search_type="destinations", count=5, offset=0)

    def test_invalid_type(self, client):
        response = client.get("/api/v1/search", params={"q": "Everest", "type": "hotels"})

        assert response.status_code == 400


class TestDashboardRoute:
    def test_requires_session(self, client):
        assert client.get("/api/v1/dashboard").status_code == 401

    def test_empty_database(self, client, user_headers):
        response = client.get("/api/v1/dashboard", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["bookings"]["total"] == 0
        assert data["revenue"]["total"] == 0
        assert len(data["charts"]["monthly_data"]) == 12

    def test_counts_catalogue(self, client, user_headers, seed):
        seed(make_destination(rating=4.6), make_guide(rating=4.2))

        data = client.get("/api/v1/dashboard", headers=user_headers).json()

        assert data["destinations"]["total"] == 1
        assert data["destinations"]["featured"] == 1
        assert data["guides"] == {"total": 1, "active": 1, "average_rating": 4.2}

    def test_cached_payload_is_served(self, client, user_headers, monkeypatch):
        from guideconnect import cache

        redis_mock = AsyncMock()
        redis_mock.get.return_value = None
        monkeypatch.setattr(cache, "redis_client", redis_mock)

        client.get("/api/v1/dashboard", headers=user_headers)

        redis_mock.get.assert_awaited_with("stats:dashboard")
        assert redis_mock.set.await_args.args[0] == "stats:dashboard"

"""
Tests for the destination routes.
"""

from unittest.mock import AsyncMock

import pytest

from conftest import make_destination, make_guide


@pytest.fixture
def catalogue(seed):
    return seed(
        make_destination(rating=4.8, review_count=12),
        make_destination(
            name="Chitwan Safari",
            region="Chitwan",
            difficulty="easy",
            featured=False,
            price_amount=400.0,
            activities=["wildlife", "canoeing"],
            seasons=["winter"],
            rating=4.3,
            review_count=5,
        ),
        make_destination(name="Tiger's Nest", country="Bhutan", region="Paro", price_amount=900.0),
    )


class TestPublicReads:
    def test_list_is_public(self, client, catalogue):
        response = client.get("/api/v1/destinations")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        first = data["destinations"][0]
        assert first["location"]["region"] == "Khumbu"
        assert first["price"] == {"amount": 1500.0, "currency": "USD", "period": "per person"}
        assert first["duration"] == {"min_days": 12, "max_days": 16}

    @pytest.mark.parametrize(
        "params, expected",
        [
            ({"difficulty": "easy"}, ["Chitwan Safari"]),
            ({"country": "Bhutan"}, ["Tiger's Nest"]),
            ({"activities": "canoeing,rafting"}, ["Chitwan Safari"]),
            ({"seasons": "winter"}, ["Chitwan Safari"]),
            ({"max_price": 500}, ["Chitwan Safari"]),
            ({"featured": "false"}, ["Chitwan Safari"]),
            ({"search": "paro"}, ["Tiger's Nest"]),
        ],
    )
    def test_filters(self, client, catalogue, params, expected):
        response = client.get("/api/v1/destinations", params=params)

        assert [d["name"] for d in response.json()["destinations"]] == expected

    def test_invalid_difficulty(self, client):
        response = client.get("/api/v1/destinations", params={"difficulty": "impossible"})

        assert response.status_code == 400

    def test_popular_and_countries(self, client, catalogue):
        popular = client.get("/api/v1/destinations/popular").json()
        countries = client.get("/api/v1/destinations/countries").json()

        assert [d["name"] for d in popular] == ["Everest Base Camp", "Chitwan Safari"]
        assert {"country": "Nepal", "count": 2} in countries
        assert {"country": "Bhutan", "count": 1} in countries

    def test_get_missing(self, client):
        response = client.get("/api/v1/destinations/404")

        assert response.status_code == 404
        assert response.json() == {"error": "Destination not found"}


class TestAdminWrites:
    def test_create_requires_admin(self, client, user_headers, destination_payload):
        assert client.post("/api/v1/destinations", json=destination_payload).status_code == 401

        response = client.post("/api/v1/destinations", json=destination_payload, headers=user_headers)
        assert response.status_code == 403

    def test_create(self, client, admin_headers, seed, destination_payload):
        guide = seed(make_guide())

        response = client.post(
            "/api/v1/destinations",
            json={**destination_payload, "available_guides": [guide.id]},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Annapurna Circuit"
        assert data["available_guides"] == [
            {"id": guide.id, "name": "Pemba Sherpa", "photo": "https://images.example.com/pemba.jpg"}
        ]

    @pytest.mark.parametrize(
        "override, field",
        [
            ({"price": {"amount": 0}}, "price"),
            ({"images": []}, "images"),
            ({"description": "Too short"}, "description"),
            ({"duration": {"min_days": 10, "max_days": 5}}, "duration"),
        ],
    )
    def test_create_validation(self, client, admin_headers, destination_payload, override, field):
        response = client.post(
            "/api/v1/destinations", json={**destination_payload, **override}, headers=admin_headers
        )

        assert response.status_code == 400
        assert any(d["loc"][:2] == ["body", field] for d in response.json()["details"])

    def test_update(self, client, admin_headers, catalogue):
        everest = catalogue[0]

        response = client.put(
            f"/api/v1/destinations/{everest.id}",
            json={"featured": False, "price": {"amount": 1650}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["featured"] is False
        assert data["price"]["amount"] == 1650
        assert data["name"] == "Everest Base Camp"

    def test_delete(self, client, admin_headers, catalogue):
        everest = catalogue[0]

        response = client.delete(f"/api/v1/destinations/{everest.id}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/api/v1/destinations/{everest.id}").status_code == 404

    def test_delete_clears_booking_stats_cache(self, client, admin_headers, catalogue, monkeypatch):
        from guideconnect import cache

        redis_mock = AsyncMock()
        monkeypatch.setattr(cache, "redis_client", redis_mock)

        response = client.delete(f"/api/v1/destinations/{catalogue[0].id}", headers=admin_headers)

        assert response.status_code == 204
        assert "stats:bookings" in redis_mock.delete.await_args.args
        assert "stats:dashboard" in redis_mock.delete.await_args.args

    def test_stats_require_admin(self, client, user_headers, admin_headers, catalogue):
        assert client.get("/api/v1/destinations/stats", headers=user_headers).status_code == 403

        response = client.get("/api/v1/destinations/stats", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_destinations"] == 3
        assert data["featured_count"] == 2
        assert data["difficulty_breakdown"] == {"challenging": 2, "easy": 1}

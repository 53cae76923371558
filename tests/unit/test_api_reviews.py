"""
Tests for the review routes.
"""

import pytest

from conftest import make_destination, make_guide


@pytest.fixture
def subjects(seed):
    return seed(make_destination(), make_guide())


def review_body(**fields):
    body = {
        "title": "Unforgettable trek",
        "content": "Great pacing, safe acclimatisation days and stunning views.",
        "rating": 5,
    }
    body.update(fields)
    return body


class TestReviews:
    def test_create_and_rating(self, client, user_headers, admin_headers, subjects):
        destination, _ = subjects

        response = client.post(
            "/api/v1/reviews", json=review_body(destination_id=destination.id), headers=user_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "destination"
        assert data["entity_name"] == "Everest Base Camp"
        assert data["author"]["name"] == "Tenzing Traveler"
        assert data["status"] == "pending"

        client.post(
            "/api/v1/reviews", json=review_body(destination_id=destination.id, rating=3), headers=admin_headers
        )
        detail = client.get(f"/api/v1/destinations/{destination.id}").json()
        assert detail["rating"] == 4.0
        assert detail["review_count"] == 2

    def test_duplicate(self, client, user_headers, subjects):
        _, guide = subjects
        client.post("/api/v1/reviews", json=review_body(guide_id=guide.id), headers=user_headers)

        response = client.post("/api/v1/reviews", json=review_body(guide_id=guide.id), headers=user_headers)

        assert response.status_code == 409

    def test_missing_subject(self, client, user_headers):
        response = client.post("/api/v1/reviews", json=review_body(), headers=user_headers)

        assert response.status_code == 400

    def test_list_update_delete(self, client, user_headers, subjects):
        _, guide = subjects
        review_id = client.post(
            "/api/v1/reviews", json=review_body(guide_id=guide.id), headers=user_headers
        ).json()["id"]

        listed = client.get("/api/v1/reviews", params={"type": "guides"}, headers=user_headers).json()
        assert [r["id"] for r in listed["reviews"]] == [review_id]

        updated = client.put(
            f"/api/v1/reviews/{review_id}", json={"response": "Thank you!"}, headers=user_headers
        ).json()
        assert updated["response"] == "Thank you!"
        assert updated["response_date"] is not None

        assert client.delete(f"/api/v1/reviews/{review_id}", headers=user_headers).json() == {"success": True}
        assert client.get(f"/api/v1/reviews/{review_id}", headers=user_headers).status_code == 404

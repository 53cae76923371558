"""
Tests for the booking routes.
"""

import pytest

from conftest import make_destination, make_guide


@pytest.fixture
def catalogue(seed):
    return seed(make_destination(), make_guide())


@pytest.fixture
def created(client, user_headers, catalogue, booking_payload):
    destination, guide = catalogue
    response = client.post(
        "/api/v1/bookings", json=booking_payload(destination.id, guide.id), headers=user_headers
    )
    assert response.status_code == 201
    return response.json()


class TestCreateBooking:
    def test_response_shape(self, created, catalogue):
        destination, guide = catalogue

        assert created["booking_number"].startswith("B-")
        assert created["status"] == "pending"
        assert created["customer"]["email"] == "anna@example.com"
        assert created["destination"] == {"id": destination.id, "name": "Everest Base Camp", "location": "Nepal"}
        assert created["guide"]["name"] == "Pemba Sherpa"
        assert created["duration"] == 13
        assert created["travelers"] == {"adults": 2, "children": 1, "infants": 0, "total": 3}
        assert created["payment"]["total_amount"] == 3200.0
        assert created["emergency"] is None

    def test_requires_session(self, client, catalogue, booking_payload):
        destination, _ = catalogue

        response = client.post("/api/v1/bookings", json=booking_payload(destination.id))

        assert response.status_code == 401

    def test_unknown_destination(self, client, user_headers, booking_payload):
        response = client.post("/api/v1/bookings", json=booking_payload(999), headers=user_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Destination not found"}

    def test_guide_double_booked(self, client, user_headers, created, catalogue, booking_payload):
        destination, guide = catalogue
        overlapping = booking_payload(
            destination.id,
            guide.id,
            customer={"name": "Ben Walker", "email": "ben@example.com"},
            dates={"start_date": "2026-11-10", "end_date": "2026-11-20"},
        )

        response = client.post("/api/v1/bookings", json=overlapping, headers=user_headers)

        assert response.status_code == 409

    def test_inverted_dates(self, client, user_headers, catalogue, booking_payload):
        destination, _ = catalogue
        payload = booking_payload(destination.id, dates={"start_date": "2026-11-14", "end_date": "2026-11-02"})

        response = client.post("/api/v1/bookings", json=payload, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_no_travelers(self, client, user_headers, catalogue, booking_payload):
        destination, _ = catalogue
        payload = booking_payload(destination.id, travelers={"adults": 0})

        response = client.post("/api/v1/bookings", json=payload, headers=user_headers)

        assert response.status_code == 400


class TestReadBookings:
    def test_list_and_filter(self, client, user_headers, created):
        response = client.get("/api/v1/bookings", headers=user_headers)
        assert response.json()["total"] == 1

        response = client.get("/api/v1/bookings", params={"status": "confirmed"}, headers=user_headers)
        assert response.json() == {"bookings": [], "total": 0}

        response = client.get("/api/v1/bookings", params={"search": "anna"}, headers=user_headers)
        assert [b["id"] for b in response.json()["bookings"]] == [created["id"]]

    def test_invalid_status_filter(self, client, user_headers):
        response = client.get("/api/v1/bookings", params={"status": "lost"}, headers=user_headers)

        assert response.status_code == 400

    def test_get_one(self, client, user_headers, created):
        response = client.get(f"/api/v1/bookings/{created['id']}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["booking_number"] == created["booking_number"]

    def test_recent(self, client, user_headers, created):
        response = client.get("/api/v1/bookings/recent", headers=user_headers)

        assert response.status_code == 200
        assert response.json()[0]["customer_name"] == "Anna Traveler"
        assert response.json()[0]["destination_name"] == "Everest Base Camp"

    def test_stats(self, client, user_headers, created):
        response = client.get("/api/v1/bookings/stats", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_bookings"] == 1
        assert data["status_counts"]["pending"] == 1
        assert data["total_travelers"] == 3
        assert data["top_destinations"][0]["name"] == "Everest Base Camp"


class TestUpdateAndDelete:
    def test_update_status_and_emergency(self, client, user_headers, created):
        response = client.put(
            f"/api/v1/bookings/{created['id']}",
            json={
                "status": "confirmed",
                "emergency": {"contact_name": "Max Traveler", "relationship": "Brother", "phone": "+49 170 000"},
            },
            headers=user_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "confirmed"
        assert data["emergency"]["contact_name"] == "Max Traveler"
        assert data["customer"]["email"] == "anna@example.com"

    def test_update_missing(self, client, user_headers):
        response = client.put("/api/v1/bookings/999", json={"status": "confirmed"}, headers=user_headers)

        assert response.status_code == 404

    def test_delete(self, client, user_headers, created):
        response = client.delete(f"/api/v1/bookings/{created['id']}", headers=user_headers)
        assert response.json() == {"success": True}

        response = client.get(f"/api/v1/bookings/{created['id']}", headers=user_headers)
        assert response.status_code == 404

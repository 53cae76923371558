"""
Integration tests for the booking lifecycle through the HTTP API.

An administrator builds the catalogue, a traveler registers and books, and
the administrator confirms the booking while notifications and statistics
follow along.
"""

import pytest


@pytest.mark.integration
class TestBookingFlow:
    """End-to-end booking lifecycle."""

    def test_catalogue_to_confirmed_booking(
        self, client, admin_headers, destination_payload, guide_payload, booking_payload
    ):
        guide = client.post("/api/v1/guides", json=guide_payload, headers=admin_headers)
        assert guide.status_code == 201
        guide_id = guide.json()["id"]

        destination = client.post(
            "/api/v1/destinations",
            json={**destination_payload, "available_guides": [guide_id]},
            headers=admin_headers,
        )
        assert destination.status_code == 201
        destination_id = destination.json()["id"]

        # Traveler signs up and books with the returned token
        register = client.post(
            "/api/v1/auth/register",
            json={"name": "Anna Traveler", "email": "anna@example.com", "password": "namaste-123"},
        )
        assert register.status_code == 201
        token = client.post(
            "/api/v1/auth/login", json={"email": "anna@example.com", "password": "namaste-123"}
        ).json()["token"]
        traveler_headers = {"Authorization": f"Bearer {token}"}

        booking = client.post(
            "/api/v1/bookings", json=booking_payload(destination_id, guide_id), headers=traveler_headers
        )
        assert booking.status_code == 201
        booking_id = booking.json()["id"]

        # Same guide, overlapping dates
        clash = client.post(
            "/api/v1/bookings",
            json=booking_payload(
                destination_id,
                guide_id,
                customer={"name": "Ben Walker", "email": "ben@example.com"},
                dates={"start_date": "2026-11-05", "end_date": "2026-11-08"},
            ),
            headers=traveler_headers,
        )
        assert clash.status_code == 409

        confirmed = client.put(
            f"/api/v1/bookings/{booking_id}",
            json={"status": "confirmed", "payment": {"total_amount": 3200.0, "status": "completed"}},
            headers=admin_headers,
        )
        assert confirmed.status_code == 200
        assert confirmed.json()["payment"]["status"] == "completed"

        titles = [
            n["title"]
            for n in client.get("/api/v1/notifications", params={"limit": 50}, headers=admin_headers).json()[
                "notifications"
            ]
        ]
        for expected in (
            "New Guide Added",
            "New Destination Added",
            "New Customer Registered",
            "New Booking Received",
            "Booking Confirmed",
        ):
            assert expected in titles

        stats = client.get("/api/v1/bookings/stats", headers=admin_headers).json()
        assert stats["total_bookings"] == 1
        assert stats["status_counts"]["confirmed"] == 1
        assert stats["total_revenue"] == 3200.0
        assert stats["top_guides"][0]["name"] == "Lakpa Dorje"

    def test_cancelling_frees_the_dates(self, client, admin_headers, seed, booking_payload):
        from conftest import make_destination

        destination = seed(make_destination())
        first = client.post("/api/v1/bookings", json=booking_payload(destination.id), headers=admin_headers).json()

        blocked = client.post(
            "/api/v1/bookings",
            json=booking_payload(destination.id, customer={"name": "Ben Walker", "email": "ben@example.com"}),
            headers=admin_headers,
        )
        assert blocked.status_code == 409

        client.put(f"/api/v1/bookings/{first['id']}", json={"status": "cancelled"}, headers=admin_headers)
        retry = client.post(
            "/api/v1/bookings",
            json=booking_payload(destination.id, customer={"name": "Ben Walker", "email": "ben@example.com"}),
            headers=admin_headers,
        )
        assert retry.status_code == 201

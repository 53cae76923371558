"""
Integration tests for the admin dashboard statistics.

Bookings are created through the API, so they all fall in the current month.
"""

import pytest

from conftest import make_destination, make_guide


@pytest.fixture
def booked(client, admin_headers, seed, booking_payload):
    everest, annapurna, guide = seed(
        make_destination(rating=4.8, review_count=10),
        make_destination(name="Annapurna Circuit", region="Gandaki", featured=False, rating=4.4, review_count=3),
        make_guide(rating=4.6),
    )
    bookings = [
        booking_payload(everest.id, guide.id),
        booking_payload(
            everest.id,
            customer={"name": "Ben Walker", "email": "ben@example.com"},
            dates={"start_date": "2026-12-01", "end_date": "2026-12-10"},
            travelers={"adults": 1},
            payment={"total_amount": 1500.0},
        ),
        booking_payload(
            annapurna.id,
            customer={"name": "Chen Li", "email": "chen@example.com"},
            travelers={"adults": 4},
            payment={"total_amount": 4000.0},
        ),
    ]
    created = []
    for body in bookings:
        response = client.post("/api/v1/bookings", json=body, headers=admin_headers)
        assert response.status_code == 201
        created.append(response.json())

    client.put(
        f"/api/v1/bookings/{created[0]['id']}",
        json={"status": "confirmed", "payment": {"total_amount": 3200.0, "status": "completed"}},
        headers=admin_headers,
    )
    client.put(f"/api/v1/bookings/{created[2]['id']}", json={"status": "cancelled"}, headers=admin_headers)
    return created


@pytest.mark.integration
class TestDashboardStats:
    def test_overview(self, client, admin_headers, booked):
        data = client.get("/api/v1/dashboard", headers=admin_headers).json()

        assert data["bookings"]["total"] == 3
        assert data["bookings"]["pending"] == 1
        assert data["bookings"]["confirmed"] == 1
        assert data["bookings"]["cancelled"] == 1
        assert data["bookings"]["this_month"] == 3
        assert data["bookings"]["last_month"] == 0
        assert data["bookings"]["growth"] == 100

        assert data["revenue"]["total"] == 3200.0
        assert data["revenue"]["this_month"] == 3200.0
        assert data["travelers"]["total"] == 8
        assert data["customers"]["total"] == 3

        assert data["destinations"]["total"] == 2
        assert data["destinations"]["featured"] == 1
        assert data["destinations"]["average_rating"] == 4.6

        top = data["charts"]["top_destinations"]
        assert [(d["name"], d["booking_count"]) for d in top] == [
            ("Everest Base Camp", 2),
            ("Annapurna Circuit", 1),
        ]
        distribution = {s["name"]: s["value"] for s in data["charts"]["status_distribution"]}
        assert distribution["pending"] == 1
        assert distribution["cancelled"] == 1

    def test_monthly_series_covers_the_year(self, client, admin_headers, booked):
        monthly = client.get("/api/v1/dashboard", headers=admin_headers).json()["charts"]["monthly_data"]

        assert [m["month"] for m in monthly] == list(range(1, 13))
        assert sum(m["bookings"] for m in monthly) == 3
        assert sum(m["revenue"] for m in monthly) == 3200.0

    def test_booking_stats_match_dashboard(self, client, admin_headers, booked):
        stats = client.get("/api/v1/bookings/stats", headers=admin_headers).json()

        assert stats["total_bookings"] == 3
        assert stats["bookings_this_month"] == 3
        assert stats["monthly_growth_rate"] == 100
        assert stats["total_travelers"] == 8
        assert stats["avg_travelers_per_booking"] == pytest.approx(2.7, abs=0.05)

    def test_destination_stats(self, client, admin_headers, booked):
        stats = client.get("/api/v1/destinations/stats", headers=admin_headers).json()

        assert stats["total_destinations"] == 2
        assert [d["name"] for d in stats["top_rated"]] == ["Everest Base Camp", "Annapurna Circuit"]

"""
Tests for the public site pages.
"""

from unittest.mock import AsyncMock, patch

from guideconnect.models import Notification
from conftest import make_destination, make_guide


class TestHomePage:
    def test_lists_featured_destinations_and_guides(self, client, seed):
        seed(
            make_destination(),
            make_destination(name="Hidden Valley", featured=False),
            make_guide(rating=4.8),
        )

        response = client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Everest Base Camp" in response.text
        assert "Hidden Valley" not in response.text
        assert "Pemba Sherpa" in response.text

    def test_empty_catalogue(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "No featured destinations yet." in response.text

    def test_database_error_shows_message(self, client):
        with patch(
            "guideconnect.services.destination_service.DestinationService.featured_destinations",
            new_callable=AsyncMock,
            side_effect=RuntimeError("db down"),
        ):
            response = client.get("/")

        assert response.status_code == 200
        assert "Content is temporarily unavailable." in response.text


class TestCataloguePages:
    def test_destinations_search(self, client, seed):
        seed(make_destination(), make_destination(name="Chitwan Safari", region="Chitwan", difficulty="easy"))

        response = client.get("/destinations", params={"difficulty": "easy"})

        assert response.status_code == 200
        assert "Chitwan Safari" in response.text
        assert "Everest Base Camp" not in response.text

    def test_destination_detail(self, client, seed):
        destination = seed(make_destination())

        response = client.get(f"/destinations/{destination.id}")

        assert response.status_code == 200
        assert "<h1>Everest Base Camp</h1>" in response.text

    def test_missing_destination(self, client):
        response = client.get("/destinations/404")

        assert response.status_code == 404
        assert "Destination not found" in response.text

    def test_guides_by_language(self, client, seed):
        seed(make_guide(), make_guide(name="Mingma Tamang", email="mingma@example.com", languages=["French"]))

        response = client.get("/guides", params={"language": "French"})

        assert response.status_code == 200
        assert "Mingma Tamang" in response.text
        assert "Pemba Sherpa" not in response.text

    def test_guide_detail(self, client, seed):
        guide = seed(make_guide())

        response = client.get(f"/guides/{guide.id}")

        assert response.status_code == 200
        assert "<h1>Pemba Sherpa</h1>" in response.text

    def test_missing_guide(self, client):
        response = client.get("/guides/404")

        assert response.status_code == 404
        assert "Guide not found" in response.text

    def test_community(self, client):
        assert client.get("/community").status_code == 200


class TestContactPage:
    def test_form(self, client):
        response = client.get("/contact")

        assert response.status_code == 200
        assert 'action="/contact"' in response.text

    def test_submit_creates_notification(self, client, database_file):
        from sqlalchemy import create_engine, select
        from sqlalchemy.orm import Session

        response = client.post(
            "/contact",
            data={
                "name": "Anna",
                "email": "anna@example.com",
                "subject": "Group trek in April",
                "message": "We are six friends looking for a guided trek in April.",
            },
        )

        assert response.status_code == 200
        assert "Thank you! Your message has been sent" in response.text

        engine = create_engine(f"sqlite:///{database_file}")
        with Session(engine) as session:
            titles = session.execute(select(Notification.title)).scalars().all()
        engine.dispose()
        assert titles == ["New Contact Message"]

    def test_submit_rejects_short_message(self, client):
        response = client.post(
            "/contact",
            data={"name": "Anna", "email": "anna@example.com", "subject": "Hi", "message": "Too short"},
        )

        assert response.status_code == 400
        assert "Please fill in every field" in response.text
        assert "Thank you!" not in response.text

"""
Tests for the exception hierarchy and informative error messages.
"""

import pytest

from guideconnect.exceptions import (
    ConfigurationException,
    ConflictError,
    DatabaseConnectionError,
    DatabaseException,
    GuideConnectException,
    InformativeException,
    InvalidInputError,
    NotFoundError,
    SearchApiKeyMissingError,
)


class TestDomainErrors:
    @pytest.mark.parametrize("entity", ["Booking", "Destination", "Guide", "Review", "Notification"])
    def test_not_found_message(self, entity):
        error = NotFoundError(entity, 42)

        assert error.message == f"{entity} not found"
        assert error.entity_id == 42
        assert isinstance(error, GuideConnectException)

    def test_conflict_and_invalid_input(self):
        assert ConflictError("Guide is already booked for these dates").message.startswith("Guide")
        assert InvalidInputError("end_date must not be before start_date", field="end_date").field == "end_date"


class TestInformativeExceptions:
    def test_sections(self):
        error = InformativeException(
            "Something broke", remediation="Fix it", details="Context", commands=["guideconnect version"]
        )

        text = str(error)
        assert "ERROR: Something broke" in text
        assert "HOW TO FIX:\nFix it" in text
        assert "DETAILS:\nContext" in text
        assert "$ guideconnect version" in text

    def test_search_key_missing_is_configuration_error(self):
        error = SearchApiKeyMissingError()

        assert isinstance(error, ConfigurationException)
        assert error.message == "Brave Search API key is not configured"
        assert "BRAVE_SEARCH_API_KEY" in error.remediation

    def test_database_connection_error(self):
        error = DatabaseConnectionError("localhost:5432/guideconnect")

        assert isinstance(error, DatabaseException)
        assert error.message == "Could not connect to the database at localhost:5432/guideconnect"
        assert "alembic upgrade head" in str(error)

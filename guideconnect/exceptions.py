"""
Custom exceptions for Nepal Guide Connect.

This module provides:
1. Base exception hierarchy for application-wide error handling
2. Domain errors that the API layer maps onto HTTP status codes
3. Informative exceptions with actionable guidance for operators
"""

from typing import Optional


# ============================================================================
# Base Exception Hierarchy (for application-wide error handling)
# ============================================================================


class GuideConnectException(Exception):
    """Base exception class for all Nepal Guide Connect exceptions."""

    pass


class ConfigurationException(GuideConnectException):
    """Exception raised for configuration errors."""

    pass


class DatabaseException(GuideConnectException):
    """Exception raised for database-related errors."""

    pass


class SearchServiceException(GuideConnectException):
    """Exception raised when the web search provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


# ============================================================================
# Domain errors (mapped to HTTP responses by the API layer)
# ============================================================================


class NotFoundError(GuideConnectException):
    """
    Raised when a requested record does not exist.

    Attributes:
        entity: Human readable entity name (e.g. "Booking")
        entity_id: Identifier that was looked up
    """

    def __init__(self, entity: str, entity_id: Optional[object] = None):
        self.entity = entity
        self.entity_id = entity_id
        self.message = f"{entity} not found"
        super().__init__(self.message)


class ConflictError(GuideConnectException):
    """Raised when a write conflicts with existing data (double booking, duplicate review)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputError(GuideConnectException):
    """Raised when a write passes schema validation but is inconsistent with stored data."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class AuthenticationError(GuideConnectException):
    """Raised when a request carries no valid session."""

    pass


class PermissionDeniedError(GuideConnectException):
    """Raised when the session user is not allowed to perform an action."""

    pass


# ============================================================================
# Informative Exceptions with Actionable Guidance
# ============================================================================


class InformativeException(GuideConnectException):
    """Base class for informative exceptions with actionable guidance."""

    def __init__(self, message: str, remediation: Optional[str] = None,
                 details: Optional[str] = None, commands: Optional[list[str]] = None):
        """
        Initialize an informative exception.

        Args:
            message: Clear explanation of what went wrong
            remediation: Specific remediation instructions
            details: Relevant configuration or context details
            commands: List of troubleshooting commands to try
        """
        self.message = message
        self.remediation = remediation
        self.details = details
        self.commands = commands or []

        full_message = f"\n{'=' * 80}\n"
        full_message += f"ERROR: {message}\n"

        if details:
            full_message += f"\nDETAILS:\n{details}\n"

        if remediation:
            full_message += f"\nHOW TO FIX:\n{remediation}\n"

        if commands:
            full_message += "\nTROUBLESHOOTING COMMANDS:\n"
            for cmd in commands:
                full_message += f"  $ {cmd}\n"

        full_message += f"{'=' * 80}\n"

        super().__init__(full_message)


class SearchApiKeyMissingError(InformativeException, ConfigurationException):
    """Raised when web search is requested without a Brave Search API key."""

    def __init__(self):
        super().__init__(
            message="Brave Search API key is not configured",
            remediation=(
                "Create a key at https://api.search.brave.com and set "
                "BRAVE_SEARCH_API_KEY in your .env file"
            ),
            details="Required by GET /api/v1/search",
            commands=["grep BRAVE_SEARCH_API_KEY .env"],
        )


class DatabaseConnectionError(InformativeException, DatabaseException):
    """Raised when the database cannot be reached at startup."""

    def __init__(self, target: str):
        super().__init__(
            message=f"Could not connect to the database at {target}",
            remediation=(
                "1. Ensure PostgreSQL is running\n"
                "2. Verify DATABASE_URL in your .env file\n"
                "3. Apply migrations with 'alembic upgrade head'"
            ),
            commands=["docker-compose up -d postgres", "guideconnect db init"],
        )

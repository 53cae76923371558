"""
Unit tests for account registration and sign-in.
"""

import pytest
from sqlalchemy import select

from guideconnect.exceptions import AuthenticationError, ConflictError
from guideconnect.models import Notification
from guideconnect.services.user_service import UserService


class TestRegister:
    async def test_register_normalizes_email_and_notifies(self, db_session):
        user = await UserService.register(db_session, "Tenzing", "Tenzing@Example.com", "namaste-123")

        assert user.email == "tenzing@example.com"
        assert user.password_hash != "namaste-123"
        titles = (await db_session.execute(select(Notification.title))).scalars().all()
        assert titles == ["New Customer Registered"]

    async def test_register_without_notification(self, db_session):
        await UserService.register(db_session, "Admin", "admin@example.com", "namaste-123", notify=False)

        titles = (await db_session.execute(select(Notification.title))).scalars().all()
        assert titles == []

    async def test_duplicate_email(self, db_session):
        await UserService.register(db_session, "Tenzing", "tenzing@example.com", "namaste-123")

        with pytest.raises(ConflictError, match="already exists"):
            await UserService.register(db_session, "Other", "TENZING@example.com", "another-pass")


class TestAuthenticate:
    async def test_valid_credentials(self, db_session):
        await UserService.register(db_session, "Tenzing", "tenzing@example.com", "namaste-123")

        user = await UserService.authenticate(db_session, "Tenzing@example.com", "namaste-123")

        assert user.name == "Tenzing"

    @pytest.mark.parametrize(
        "email, password",
        [("tenzing@example.com", "wrong-pass"), ("nobody@example.com", "namaste-123")],
    )
    async def test_invalid_credentials(self, db_session, email, password):
        await UserService.register(db_session, "Tenzing", "tenzing@example.com", "namaste-123")

        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            await UserService.authenticate(db_session, email, password)

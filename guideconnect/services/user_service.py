"""
User account service: registration and credential checks.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.exceptions import AuthenticationError, ConflictError
from guideconnect.models import User
from guideconnect.security import hash_password, verify_password
from guideconnect.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def register(db: AsyncSession, name: str, email: str, password: str, notify: bool = True) -> User:
        """
        Create an account.

        Raises:
            ConflictError: an account with this email already exists
        """
        if await UserService.get_by_email(db, email) is not None:
            raise ConflictError("An account with this email already exists")

        user = User(name=name, email=email.lower(), password_hash=hash_password(password))
        db.add(user)
        await db.flush()

        if notify:
            await NotificationService.notify_customer_registered(db, user.name, user.email)
        await db.commit()

        logger.info(f"User registered: {user.email}")
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> User:
        """Return the user for valid credentials, else raise AuthenticationError."""
        user = await UserService.get_by_email(db, email)
        if user is None or not verify_password(user.password_hash, password):
            logger.info(f"Failed sign-in for {email}")
            raise AuthenticationError("Invalid email or password")
        return user

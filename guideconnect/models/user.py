"""
User accounts for dashboard sign-in.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from guideconnect.models.base import Base, IdMixin, TimestampMixin


class User(Base, IdMixin, TimestampMixin):
    """
    Registered account.

    Passwords are stored as PBKDF2 hashes (see guideconnect.security).
    Admin rights are not stored here: they follow the ADMIN_EMAIL setting.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="passlib pbkdf2_sha256 hash"
    )
    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"

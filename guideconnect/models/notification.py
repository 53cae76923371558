"""
Dashboard notification model.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from guideconnect.models.base import Base, IdMixin, TimestampMixin


class Notification(Base, IdMixin, TimestampMixin):
    """
    In-app notification shown on the admin dashboard.

    A NULL recipient means the notification is addressed to administrators.
    """

    __tablename__ = "notifications"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="info", comment="success, info, warning or error"
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )

    action_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    action_label: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    related_entity_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    related_entity_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    related_entity_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    recipient_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, type='{self.type}', read={self.read})>"

"""
Review model for destination and guide reviews.
"""

import datetime as dt
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from guideconnect.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from guideconnect.models.destination import Destination
    from guideconnect.models.guide import Guide
    from guideconnect.models.user import User


class Review(Base, IdMixin, TimestampMixin):
    """
    A traveller's review of a destination and/or a guide.

    Moderation status is derived rather than stored: verified reviews are
    approved, reviews tagged "flagged" are flagged, everything else is pending.
    """

    __tablename__ = "reviews"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )

    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    author_name: Mapped[str] = mapped_column(String(100), nullable=False)

    destination_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("destinations.id", ondelete="CASCADE"), nullable=True, index=True
    )
    guide_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("guides.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Trip the review refers to
    trip_start_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    trip_end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    trip_duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    trip_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    photos: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    helpful_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    unhelpful_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    response_date: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    author: Mapped[Optional["User"]] = relationship("User")
    destination: Mapped[Optional["Destination"]] = relationship(
        "Destination", back_populates="reviews"
    )
    guide: Mapped[Optional["Guide"]] = relationship("Guide", back_populates="reviews")

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, rating={self.rating}, title='{self.title}')>"

    @property
    def moderation_status(self) -> str:
        if self.verified:
            return "approved"
        if "flagged" in (self.tags or []):
            return "flagged"
        return "pending"

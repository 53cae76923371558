"""
Guide models: licensed local guides, their certifications, availability
windows and scheduled tours.
"""

from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Date, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guideconnect.models.base import Base, IdMixin, TimestampMixin
from guideconnect.models.destination import guide_destinations

if TYPE_CHECKING:
    from guideconnect.models.booking import Booking
    from guideconnect.models.destination import Destination
    from guideconnect.models.review import Review


class Guide(Base, IdMixin, TimestampMixin):
    """
    A guide who can be assigned to bookings.

    ``availability`` drives the dashboard status mapping:
    available -> active, partially_available -> on leave, unavailable -> inactive.
    """

    __tablename__ = "guides"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    photo: Mapped[str] = mapped_column(String(500), nullable=False)

    # Location
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    languages: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    specialties: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    # Experience
    experience_years: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    experience_level: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="beginner, intermediate, expert or master"
    )
    expeditions: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    bio: Mapped[str] = mapped_column(Text, nullable=False)
    hourly_rate: Mapped[float] = mapped_column(Float, nullable=False)
    availability: Mapped[str] = mapped_column(
        String(30), nullable=False, default="available", index=True
    )

    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, index=True)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Social media handles
    instagram: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    facebook: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    twitter: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    linkedin: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    certifications: Mapped[List["GuideCertification"]] = relationship(
        "GuideCertification", back_populates="guide", cascade="all, delete-orphan"
    )
    available_dates: Mapped[List["GuideAvailableDate"]] = relationship(
        "GuideAvailableDate", back_populates="guide", cascade="all, delete-orphan"
    )
    schedules: Mapped[List["GuideSchedule"]] = relationship(
        "GuideSchedule", back_populates="guide", cascade="all, delete-orphan"
    )
    destinations: Mapped[List["Destination"]] = relationship(
        "Destination", secondary=guide_destinations, back_populates="guides"
    )
    bookings: Mapped[List["Booking"]] = relationship(
        "Booking", back_populates="guide", passive_deletes=True
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review", back_populates="guide", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Guide(id={self.id}, name='{self.name}', availability='{self.availability}')>"

    @property
    def location_label(self) -> str:
        return f"{self.region}, {self.country}"


class GuideCertification(Base, IdMixin):
    """Certification held by a guide (e.g. NMA trekking guide licence)."""

    __tablename__ = "guide_certifications"

    guide_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("guides.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    issued_by: Mapped[str] = mapped_column(String(200), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    expiry_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    guide: Mapped["Guide"] = relationship("Guide", back_populates="certifications")


class GuideAvailableDate(Base, IdMixin):
    """A date window in which the guide accepts bookings."""

    __tablename__ = "guide_available_dates"

    guide_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("guides.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date_from: Mapped[date] = mapped_column(Date, nullable=False)
    date_to: Mapped[date] = mapped_column(Date, nullable=False)

    guide: Mapped["Guide"] = relationship("Guide", back_populates="available_dates")


class GuideSchedule(Base, IdMixin, TimestampMixin):
    """A scheduled tour led by a guide."""

    __tablename__ = "guide_schedules"

    guide_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("guides.id", ondelete="CASCADE"), nullable=False, index=True
    )
    destination: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", comment="confirmed, pending, completed or cancelled"
    )
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False)
    itinerary: Mapped[str] = mapped_column(Text, nullable=False)

    guide: Mapped["Guide"] = relationship("Guide", back_populates="schedules")

    def __repr__(self) -> str:
        return f"<GuideSchedule(id={self.id}, guide_id={self.guide_id}, start_date={self.start_date})>"

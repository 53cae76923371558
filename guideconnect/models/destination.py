"""
Destination model for treks, tours and places offered on the site.
"""

from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import JSON, Boolean, Column, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guideconnect.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from guideconnect.models.booking import Booking
    from guideconnect.models.guide import Guide
    from guideconnect.models.review import Review


# Many-to-many link between guides and the destinations they lead
guide_destinations = Table(
    "guide_destinations",
    Base.metadata,
    Column(
        "guide_id",
        Integer,
        ForeignKey("guides.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "destination_id",
        Integer,
        ForeignKey("destinations.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Destination(Base, IdMixin, TimestampMixin):
    """
    A bookable destination (trek, region, city tour).

    List-valued attributes (images, activities, seasons, amenities) are stored
    as JSON arrays.
    """

    __tablename__ = "destinations"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Location
    country: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    # Ratings are recalculated from reviews
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0, index=True)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Pricing
    price_amount: Mapped[float] = mapped_column(Float, nullable=False)
    price_currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    price_period: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="per person",
        comment="'per day', 'per person', 'per group' or 'total'",
    )

    # Duration in days
    min_days: Mapped[int] = mapped_column(Integer, nullable=False)
    max_days: Mapped[int] = mapped_column(Integer, nullable=False)

    difficulty: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="easy, moderate, challenging, difficult or extreme",
    )
    activities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    seasons: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    amenities: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True, default=list)

    guides: Mapped[List["Guide"]] = relationship(
        "Guide", secondary=guide_destinations, back_populates="destinations"
    )
    bookings: Mapped[List["Booking"]] = relationship(
        "Booking", back_populates="destination", cascade="all, delete-orphan"
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review", back_populates="destination", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return (
            f"<Destination(id={self.id}, name='{self.name}', "
            f"country='{self.country}', rating={self.rating})>"
        )

    @property
    def cover_image(self) -> Optional[str]:
        """First image, used on cards and top-N lists."""
        return self.images[0] if self.images else None

    @property
    def location_label(self) -> str:
        """Human readable 'Region, Country'."""
        return f"{self.region}, {self.country}"

"""
Customer model: the traveller a booking is made for.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guideconnect.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from guideconnect.models.booking import Booking


class Customer(Base, IdMixin, TimestampMixin):
    """Customer contact details, upserted by email when a booking is created."""

    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    nationality: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Postal address
    street: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    bookings: Mapped[List["Booking"]] = relationship(
        "Booking", back_populates="customer", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, email='{self.email}')>"

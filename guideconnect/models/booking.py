"""
Booking model and the per-booking detail tables (accommodations, transport,
activities, equipment rental, payment transactions, documents, notes and the
emergency contact).
"""

import datetime as dt
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guideconnect.models.base import Base, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from guideconnect.models.customer import Customer
    from guideconnect.models.destination import Destination
    from guideconnect.models.guide import Guide

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled", "refunded")
PAYMENT_STATUSES = ("pending", "partial", "completed", "refunded")

# Bookings in these states hold their dates
BLOCKING_STATUSES = ("pending", "confirmed")

# Bookings in these states count towards revenue once fully paid
REVENUE_STATUSES = ("confirmed", "completed")
PAID_STATUS = "completed"


class Booking(Base, IdMixin, TimestampMixin):
    """
    A customer's booking of a destination, optionally with a guide.

    ``total_travelers`` is always adults + children + infants.
    """

    __tablename__ = "bookings"

    booking_number: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True, comment="B-YYYYMMDD-XXXX"
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)

    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    destination_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("destinations.id", ondelete="SET NULL"), nullable=True, index=True
    )
    guide_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("guides.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Trip dates
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, comment="Trip length in days")

    # Travelers
    adults_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    infants_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_travelers: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # Payment
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True
    )
    deposit_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    deposit_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    balance_due_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)

    special_requests: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="bookings")
    destination: Mapped[Optional["Destination"]] = relationship(
        "Destination", back_populates="bookings"
    )
    guide: Mapped[Optional["Guide"]] = relationship("Guide", back_populates="bookings")

    accommodations: Mapped[List["BookingAccommodation"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingAccommodation.id"
    )
    transportation: Mapped[List["BookingTransportation"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingTransportation.id"
    )
    activities: Mapped[List["BookingActivity"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingActivity.id"
    )
    equipment_rental: Mapped[List["BookingEquipmentRental"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingEquipmentRental.id"
    )
    transactions: Mapped[List["BookingTransaction"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingTransaction.id"
    )
    documents: Mapped[List["BookingDocument"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingDocument.id"
    )
    notes: Mapped[List["BookingNote"]] = relationship(
        cascade="all, delete-orphan", order_by="BookingNote.id"
    )
    emergency_contact: Mapped[Optional["BookingEmergencyContact"]] = relationship(
        cascade="all, delete-orphan", uselist=False
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, number='{self.booking_number}', "
            f"status='{self.status}', total_amount={self.total_amount})>"
        )


class BookingAccommodation(Base, IdMixin):
    __tablename__ = "booking_accommodations"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    check_in: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    check_out: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)


class BookingTransportation(Base, IdMixin):
    __tablename__ = "booking_transportation"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    departure_date: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    departure_location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    arrival_date: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    arrival_location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)


class BookingActivity(Base, IdMixin):
    __tablename__ = "booking_activities"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    included: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class BookingEquipmentRental(Base, IdMixin):
    __tablename__ = "booking_equipment_rentals"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_unit: Mapped[float] = mapped_column(Float, nullable=False)


class BookingTransaction(Base, IdMixin):
    """A payment made against a booking."""

    __tablename__ = "booking_transactions"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reference: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, comment="Payment provider reference"
    )
    date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    method: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="pending, completed, failed or refunded"
    )


class BookingDocument(Base, IdMixin):
    __tablename__ = "booking_documents"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    upload_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class BookingNote(Base, IdMixin):
    __tablename__ = "booking_notes"

    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    author: Mapped[str] = mapped_column(String(100), nullable=False)


class BookingEmergencyContact(Base, IdMixin):
    __tablename__ = "booking_emergency_contacts"

    booking_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    contact_name: Mapped[str] = mapped_column(String(100), nullable=False)
    relationship: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

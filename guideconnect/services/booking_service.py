"""
Booking service.

Creates, updates and queries bookings together with their customer, detail
rows (accommodations, transport, activities, equipment, payments, documents,
notes, emergency contact) and the admin notifications they trigger.
"""

import logging
import secrets
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_, select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from guideconnect.api.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    CustomerInput,
    RecentBooking,
)
from guideconnect.api.schemas.common import provided_fields
from guideconnect.exceptions import ConflictError, NotFoundError
from guideconnect.models import (
    Booking,
    BookingAccommodation,
    BookingActivity,
    BookingDocument,
    BookingEmergencyContact,
    BookingEquipmentRental,
    BookingNote,
    BookingTransaction,
    BookingTransportation,
    Customer,
    Destination,
    Guide,
)
from guideconnect.models.booking import BLOCKING_STATUSES
from guideconnect.services.notification_service import NotificationService
from guideconnect.utils.date_utils import utc_now

logger = logging.getLogger(__name__)

# Eager loads needed to render a BookingResponse without lazy IO
BOOKING_LOAD_OPTIONS = (
    selectinload(Booking.customer),
    selectinload(Booking.destination),
    selectinload(Booking.guide),
    selectinload(Booking.accommodations),
    selectinload(Booking.transportation),
    selectinload(Booking.activities),
    selectinload(Booking.equipment_rental),
    selectinload(Booking.transactions),
    selectinload(Booking.documents),
    selectinload(Booking.notes),
    selectinload(Booking.emergency_contact),
)

# Request field -> (relationship attribute, row class)
CHILD_COLLECTIONS = {
    "accommodations": ("accommodations", BookingAccommodation),
    "transportation": ("transportation", BookingTransportation),
    "activities": ("activities", BookingActivity),
    "equipment_rental": ("equipment_rental", BookingEquipmentRental),
    "documents": ("documents", BookingDocument),
    "notes": ("notes", BookingNote),
}


def generate_booking_number(today: Optional[date] = None) -> str:
    """
    Generate a booking reference like ``B-20261019-4821``.

    The suffix is four random digits; uniqueness is enforced by the database.
    """
    today = today or utc_now().date()
    return f"B-{today:%Y%m%d}-{secrets.randbelow(9000) + 1000}"


def _child_rows(model_cls, items: List[Any]) -> List[Any]:
    rows = []
    for item in items:
        values = item.model_dump(mode="python")
        # HttpUrl is stored as text
        if "url" in values and values["url"] is not None:
            values["url"] = str(values["url"])
        rows.append(model_cls(**values))
    return rows


class BookingService:
    """Booking queries and writes."""

    @staticmethod
    async def _load(db: AsyncSession, booking_id: int) -> Booking:
        result = await db.execute(
            select(Booking)
            .options(*BOOKING_LOAD_OPTIONS)
            .where(Booking.id == booking_id)
            .execution_options(populate_existing=True)
        )
        booking = result.scalar_one_or_none()
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking

    @staticmethod
    async def list_bookings(
        db: AsyncSession,
        search: Optional[str] = None,
        status: Optional[str] = None,
        destination_id: Optional[int] = None,
        guide_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Booking], int]:
        """
        List bookings, newest first.

        Args:
            search: Case-insensitive match on booking number, customer name or destination name
            status: Booking status
            destination_id: Only bookings for this destination
            guide_id: Only bookings with this guide
            start_date: Trips starting on or after this date
            end_date: Trips ending on or before this date
            limit: Page size
            offset: Rows to skip

        Returns:
            (bookings, total matching count)
        """
        query = (
            select(Booking)
            .join(Customer, Booking.customer_id == Customer.id)
            .outerjoin(Destination, Booking.destination_id == Destination.id)
        )

        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Booking.booking_number.ilike(pattern),
                    Customer.name.ilike(pattern),
                    Destination.name.ilike(pattern),
                )
            )
        if status:
            query = query.where(Booking.status == status)
        if destination_id is not None:
            query = query.where(Booking.destination_id == destination_id)
        if guide_id is not None:
            query = query.where(Booking.guide_id == guide_id)
        if start_date is not None:
            query = query.where(Booking.start_date >= start_date)
        if end_date is not None:
            query = query.where(Booking.end_date <= end_date)

        total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

        query = (
            query.options(*BOOKING_LOAD_OPTIONS)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await db.execute(query)
        return list(result.scalars().all()), total

    @staticmethod
    async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
        return await BookingService._load(db, booking_id)

    @staticmethod
    async def upsert_customer(db: AsyncSession, data: CustomerInput) -> Customer:
        """Find the customer by email and refresh their details, or create them."""
        result = await db.execute(select(Customer).where(Customer.email == data.email))
        customer = result.scalar_one_or_none()

        values: Dict[str, Any] = {
            "name": data.name,
            "phone": data.phone,
            "avatar": str(data.avatar) if data.avatar else None,
            "nationality": data.nationality,
        }
        if data.address is not None:
            values.update(data.address.model_dump())

        if customer is None:
            customer = Customer(email=data.email, **values)
            db.add(customer)
            await db.flush()
            logger.info(f"Created customer {customer.email}")
        else:
            for key, value in values.items():
                if value is not None:
                    setattr(customer, key, value)
        return customer

    @staticmethod
    async def _new_booking_number(db: AsyncSession) -> str:
        """A booking number not used by any existing booking."""
        while True:
            number = generate_booking_number()
            taken = await db.scalar(select(Booking.id).where(Booking.booking_number == number))
            if taken is None:
                return number

    @staticmethod
    async def _check_availability(
        db: AsyncSession,
        destination_id: Optional[int],
        guide_id: Optional[int],
        start_date: date,
        end_date: date,
        exclude_id: Optional[int] = None,
    ) -> None:
        """Raise ConflictError if a pending/confirmed booking overlaps the dates."""
        overlapping = [
            Booking.status.in_(BLOCKING_STATUSES),
            Booking.start_date <= end_date,
            Booking.end_date >= start_date,
        ]
        if exclude_id is not None:
            overlapping.append(Booking.id != exclude_id)

        if destination_id is not None:
            clash = await db.scalar(
                select(Booking.id).where(Booking.destination_id == destination_id, *overlapping).limit(1)
            )
            if clash is not None:
                raise ConflictError("Destination is already booked for these dates")

        if guide_id is not None:
            clash = await db.scalar(
                select(Booking.id).where(Booking.guide_id == guide_id, *overlapping).limit(1)
            )
            if clash is not None:
                raise ConflictError("Guide is already booked for these dates")

    @staticmethod
    async def create_booking(db: AsyncSession, data: BookingCreate) -> Booking:
        """
        Create a booking.

        Raises:
            NotFoundError: destination or guide does not exist
            ConflictError: the destination or guide is already booked for the dates
        """
        destination = await db.get(Destination, data.destination_id)
        if destination is None:
            raise NotFoundError("Destination", data.destination_id)

        if data.guide_id is not None and await db.get(Guide, data.guide_id) is None:
            raise NotFoundError("Guide", data.guide_id)

        await BookingService._check_availability(
            db, data.destination_id, data.guide_id, data.dates.start_date, data.dates.end_date
        )

        customer = await BookingService.upsert_customer(db, data.customer)

        booking = Booking(
            booking_number=await BookingService._new_booking_number(db),
            status=data.status,
            customer_id=customer.id,
            destination_id=data.destination_id,
            guide_id=data.guide_id,
            start_date=data.dates.start_date,
            end_date=data.dates.end_date,
            duration=data.trip_duration,
            adults_count=data.travelers.adults,
            children_count=data.travelers.children,
            infants_count=data.travelers.infants,
            total_travelers=data.travelers.total,
            total_amount=data.payment.total_amount,
            currency=data.payment.currency,
            payment_status=data.payment.status,
            deposit_amount=data.payment.deposit_amount,
            deposit_paid=data.payment.deposit_paid,
            balance_due_date=data.payment.balance_due_date,
            special_requests=list(data.special_requests),
            transactions=_child_rows(BookingTransaction, data.payment.transactions),
        )
        for field, (attr, model_cls) in CHILD_COLLECTIONS.items():
            setattr(booking, attr, _child_rows(model_cls, getattr(data, field)))
        if data.emergency is not None:
            booking.emergency_contact = BookingEmergencyContact(**data.emergency.model_dump())

        db.add(booking)
        await db.flush()

        await NotificationService.notify_booking_created(
            db, booking.id, booking.booking_number, customer.name, destination.name
        )
        await db.commit()

        logger.info(
            f"Booking {booking.booking_number} created for {customer.email} "
            f"({destination.name}, {booking.start_date} to {booking.end_date})"
        )
        return await BookingService._load(db, booking.id)

    @staticmethod
    async def update_booking(db: AsyncSession, booking_id: int, data: BookingUpdate) -> Booking:
        """
        Apply a partial update.

        Child lists present in the body replace the existing rows; an explicit
        ``emergency: null`` removes the emergency contact.
        """
        booking = await BookingService._load(db, booking_id)
        fields = provided_fields(data)
        old_status = booking.status

        if "destination_id" in fields and data.destination_id is not None:
            if await db.get(Destination, data.destination_id) is None:
                raise NotFoundError("Destination", data.destination_id)
            booking.destination_id = data.destination_id
        if "guide_id" in fields:
            if data.guide_id is not None and await db.get(Guide, data.guide_id) is None:
                raise NotFoundError("Guide", data.guide_id)
            booking.guide_id = data.guide_id

        if data.dates is not None:
            booking.start_date = data.dates.start_date
            booking.end_date = data.dates.end_date
            if data.duration is None:
                booking.duration = (data.dates.end_date - data.dates.start_date).days + 1
        if data.duration is not None:
            booking.duration = data.duration

        if data.status is not None:
            booking.status = data.status

        if booking.status in BLOCKING_STATUSES and (
            {"dates", "destination_id", "guide_id", "status"} & fields.keys()
        ):
            await BookingService._check_availability(
                db,
                booking.destination_id,
                booking.guide_id,
                booking.start_date,
                booking.end_date,
                exclude_id=booking.id,
            )

        if data.customer is not None:
            customer = await BookingService.upsert_customer(db, data.customer)
            booking.customer_id = customer.id

        if data.travelers is not None:
            booking.adults_count = data.travelers.adults
            booking.children_count = data.travelers.children
            booking.infants_count = data.travelers.infants
            booking.total_travelers = data.travelers.total

        if data.payment is not None:
            booking.total_amount = data.payment.total_amount
            booking.currency = data.payment.currency
            booking.payment_status = data.payment.status
            booking.deposit_amount = data.payment.deposit_amount
            booking.deposit_paid = data.payment.deposit_paid
            booking.balance_due_date = data.payment.balance_due_date
            booking.transactions = _child_rows(BookingTransaction, data.payment.transactions)

        for field, (attr, model_cls) in CHILD_COLLECTIONS.items():
            items = getattr(data, field)
            if field in fields and items is not None:
                setattr(booking, attr, _child_rows(model_cls, items))

        if data.special_requests is not None:
            booking.special_requests = list(data.special_requests)

        if "emergency" in fields:
            if data.emergency is None:
                booking.emergency_contact = None
            elif booking.emergency_contact is None:
                booking.emergency_contact = BookingEmergencyContact(**data.emergency.model_dump())
            else:
                for key, value in data.emergency.model_dump().items():
                    setattr(booking.emergency_contact, key, value)

        await db.flush()

        if booking.status != old_status:
            await NotificationService.notify_booking_status_changed(
                db, booking.id, booking.booking_number, old_status, booking.status
            )
            logger.info(f"Booking {booking.booking_number} status {old_status} -> {booking.status}")

        await db.commit()
        return await BookingService._load(db, booking.id)

    @staticmethod
    async def delete_booking(db: AsyncSession, booking_id: int) -> None:
        booking = await BookingService._load(db, booking_id)
        await db.delete(booking)
        await db.commit()
        logger.info(f"Booking {booking.booking_number} deleted")

    @staticmethod
    async def recent_bookings(db: AsyncSession, limit: int = 5) -> List[RecentBooking]:
        """Most recently created bookings in the compact dashboard shape."""
        result = await db.execute(
            select(Booking)
            .options(selectinload(Booking.customer), selectinload(Booking.destination))
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .limit(limit)
        )
        return [
            RecentBooking(
                id=b.id,
                booking_number=b.booking_number,
                customer_name=b.customer.name,
                customer_email=b.customer.email,
                customer_avatar=b.customer.avatar,
                destination_name=b.destination.name if b.destination else "Unknown Destination",
                start_date=b.start_date,
                end_date=b.end_date,
                status=b.status,
                total_amount=b.total_amount,
                currency=b.currency,
                created_at=b.created_at,
            )
            for b in result.scalars().all()
        ]

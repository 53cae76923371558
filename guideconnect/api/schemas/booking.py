"""
Pydantic schemas for booking endpoints.
"""

import datetime as dt
from datetime import date, datetime
from typing import TYPE_CHECKING, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, model_validator

if TYPE_CHECKING:
    from guideconnect.models import Booking

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled", "refunded"]
PaymentStatus = Literal["pending", "partial", "completed", "refunded"]
TransactionStatus = Literal["pending", "completed", "failed", "refunded"]


# ============================================================================
# Nested request parts
# ============================================================================


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: str


class CustomerInput(BaseModel):
    name: str = Field(min_length=2, description="Customer full name")
    email: EmailStr
    phone: Optional[str] = None
    avatar: Optional[HttpUrl] = None
    nationality: Optional[str] = None
    address: Optional[Address] = None


class TripDates(BaseModel):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_order(self) -> "TripDates":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class Travelers(BaseModel):
    adults: int = Field(ge=0)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.adults + self.children + self.infants

    @model_validator(mode="after")
    def check_total(self) -> "Travelers":
        if self.total <= 0:
            raise ValueError("A booking needs at least one traveler")
        return self


class AccommodationItem(BaseModel):
    type: str = Field(min_length=1)
    name: Optional[str] = None
    location: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None


class TransportationItem(BaseModel):
    type: str = Field(min_length=1)
    details: Optional[str] = None
    departure_date: Optional[datetime] = None
    departure_location: Optional[str] = None
    arrival_date: Optional[datetime] = None
    arrival_location: Optional[str] = None


class ActivityItem(BaseModel):
    name: str = Field(min_length=1)
    date: Optional[dt.date] = None
    duration: Optional[str] = None
    included: bool = True


class EquipmentItem(BaseModel):
    item: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    price_per_unit: float = Field(ge=0)


class TransactionItem(BaseModel):
    reference: Optional[str] = None
    date: datetime
    amount: float = Field(gt=0)
    method: str
    status: TransactionStatus


class DocumentItem(BaseModel):
    type: str
    name: str
    url: HttpUrl
    upload_date: datetime


class NoteItem(BaseModel):
    content: str = Field(min_length=1)
    date: datetime
    author: str


class EmergencyContact(BaseModel):
    contact_name: str
    relationship: str
    phone: str
    email: Optional[EmailStr] = None


class PaymentInput(BaseModel):
    total_amount: float = Field(gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    status: PaymentStatus = "pending"
    transactions: List[TransactionItem] = Field(default_factory=list)
    deposit_amount: Optional[float] = Field(default=None, ge=0)
    deposit_paid: bool = False
    balance_due_date: Optional[date] = None


# ============================================================================
# Requests
# ============================================================================


class BookingCreate(BaseModel):
    """Request body for POST /bookings."""

    status: BookingStatus = "pending"
    customer: CustomerInput
    destination_id: int
    guide_id: Optional[int] = None
    dates: TripDates
    duration: Optional[int] = Field(
        default=None, gt=0, description="Trip length in days (defaults to the date span)"
    )
    travelers: Travelers
    payment: PaymentInput
    accommodations: List[AccommodationItem] = Field(default_factory=list)
    transportation: List[TransportationItem] = Field(default_factory=list)
    activities: List[ActivityItem] = Field(default_factory=list)
    special_requests: List[str] = Field(default_factory=list)
    equipment_rental: List[EquipmentItem] = Field(default_factory=list)
    documents: List[DocumentItem] = Field(default_factory=list)
    notes: List[NoteItem] = Field(default_factory=list)
    emergency: Optional[EmergencyContact] = None

    @property
    def trip_duration(self) -> int:
        if self.duration is not None:
            return self.duration
        return (self.dates.end_date - self.dates.start_date).days + 1


class BookingUpdate(BaseModel):
    """
    Request body for PUT /bookings/{id}.

    Only the fields present in the body are changed. Child lists are replaced
    wholesale; ``"emergency": null`` removes the emergency contact.
    """

    status: Optional[BookingStatus] = None
    customer: Optional[CustomerInput] = None
    destination_id: Optional[int] = None
    guide_id: Optional[int] = None
    dates: Optional[TripDates] = None
    duration: Optional[int] = Field(default=None, gt=0)
    travelers: Optional[Travelers] = None
    payment: Optional[PaymentInput] = None
    accommodations: Optional[List[AccommodationItem]] = None
    transportation: Optional[List[TransportationItem]] = None
    activities: Optional[List[ActivityItem]] = None
    special_requests: Optional[List[str]] = None
    equipment_rental: Optional[List[EquipmentItem]] = None
    documents: Optional[List[DocumentItem]] = None
    notes: Optional[List[NoteItem]] = None
    emergency: Optional[EmergencyContact] = None


# ============================================================================
# Responses
# ============================================================================


class CustomerOut(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    nationality: Optional[str] = None
    address: Address | None = None


class EntityRef(BaseModel):
    id: Optional[int] = None
    name: str
    location: Optional[str] = None


class TravelersOut(BaseModel):
    adults: int
    children: int
    infants: int
    total: int


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reference: Optional[str] = None
    date: datetime
    amount: float
    method: str
    status: str


class PaymentOut(BaseModel):
    total_amount: float
    currency: str
    status: str
    transactions: List[TransactionOut]
    deposit_amount: Optional[float] = None
    deposit_paid: bool
    balance_due_date: Optional[date] = None


class AccommodationOut(AccommodationItem):
    model_config = ConfigDict(from_attributes=True)


class TransportationOut(TransportationItem):
    model_config = ConfigDict(from_attributes=True)


class ActivityOut(ActivityItem):
    model_config = ConfigDict(from_attributes=True)


class EquipmentOut(EquipmentItem):
    model_config = ConfigDict(from_attributes=True)


class DocumentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    name: str
    url: str
    upload_date: datetime


class NoteOut(NoteItem):
    model_config = ConfigDict(from_attributes=True)


class EmergencyContactOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    contact_name: str
    relationship: str
    phone: str
    email: Optional[str] = None


class BookingResponse(BaseModel):
    """Full booking with customer, trip, payment and detail lists."""

    id: int
    booking_number: str
    status: str
    customer: CustomerOut
    destination: EntityRef
    guide: Optional[EntityRef] = None
    dates: TripDates
    duration: int
    travelers: TravelersOut
    payment: PaymentOut
    accommodations: List[AccommodationOut]
    transportation: List[TransportationOut]
    activities: List[ActivityOut]
    special_requests: List[str]
    equipment_rental: List[EquipmentOut]
    documents: List[DocumentOut]
    notes: List[NoteOut]
    emergency: Optional[EmergencyContactOut] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, booking: "Booking") -> "BookingResponse":
        """Build the nested response from a Booking loaded with its relationships."""
        customer = booking.customer
        address = None
        if customer.country:
            address = Address(
                street=customer.street,
                city=customer.city,
                state=customer.state,
                postal_code=customer.postal_code,
                country=customer.country,
            )

        if booking.destination is not None:
            destination = EntityRef(
                id=booking.destination.id,
                name=booking.destination.name,
                location=booking.destination.country,
            )
        else:
            destination = EntityRef(id=booking.destination_id, name="Unknown Destination")

        return cls(
            id=booking.id,
            booking_number=booking.booking_number,
            status=booking.status,
            customer=CustomerOut(
                id=customer.id,
                name=customer.name,
                email=customer.email,
                phone=customer.phone,
                avatar=customer.avatar,
                nationality=customer.nationality,
                address=address,
            ),
            destination=destination,
            guide=EntityRef(id=booking.guide.id, name=booking.guide.name) if booking.guide else None,
            dates=TripDates(start_date=booking.start_date, end_date=booking.end_date),
            duration=booking.duration,
            travelers=TravelersOut(
                adults=booking.adults_count,
                children=booking.children_count,
                infants=booking.infants_count,
                total=booking.total_travelers,
            ),
            payment=PaymentOut(
                total_amount=booking.total_amount,
                currency=booking.currency,
                status=booking.payment_status,
                transactions=[TransactionOut.model_validate(t) for t in booking.transactions],
                deposit_amount=booking.deposit_amount,
                deposit_paid=booking.deposit_paid,
                balance_due_date=booking.balance_due_date,
            ),
            accommodations=[AccommodationOut.model_validate(a) for a in booking.accommodations],
            transportation=[TransportationOut.model_validate(t) for t in booking.transportation],
            activities=[ActivityOut.model_validate(a) for a in booking.activities],
            special_requests=list(booking.special_requests or []),
            equipment_rental=[EquipmentOut.model_validate(e) for e in booking.equipment_rental],
            documents=[DocumentOut.model_validate(d) for d in booking.documents],
            notes=[NoteOut.model_validate(n) for n in booking.notes],
            emergency=(
                EmergencyContactOut.model_validate(booking.emergency_contact)
                if booking.emergency_contact
                else None
            ),
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int = Field(description="Number of bookings matching the filters")


class RecentBooking(BaseModel):
    """Compact booking row for the dashboard's recent activity list."""

    id: int
    booking_number: str
    customer_name: str
    customer_email: str
    customer_avatar: Optional[str] = None
    destination_name: str
    start_date: date
    end_date: date
    status: str
    total_amount: float
    currency: str
    created_at: datetime

"""
SQLAlchemy models for Nepal Guide Connect.
Import all models here to ensure they are registered with SQLAlchemy.
"""

from guideconnect.models.base import Base, IdMixin, TimestampMixin
from guideconnect.models.booking import (
    Booking,
    BookingAccommodation,
    BookingActivity,
    BookingDocument,
    BookingEmergencyContact,
    BookingEquipmentRental,
    BookingNote,
    BookingTransaction,
    BookingTransportation,
)
from guideconnect.models.customer import Customer
from guideconnect.models.destination import Destination, guide_destinations
from guideconnect.models.guide import Guide, GuideAvailableDate, GuideCertification, GuideSchedule
from guideconnect.models.notification import Notification
from guideconnect.models.review import Review
from guideconnect.models.user import User

__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "User",
    "Customer",
    "Destination",
    "guide_destinations",
    "Guide",
    "GuideCertification",
    "GuideAvailableDate",
    "GuideSchedule",
    "Booking",
    "BookingAccommodation",
    "BookingTransportation",
    "BookingActivity",
    "BookingEquipmentRental",
    "BookingTransaction",
    "BookingDocument",
    "BookingNote",
    "BookingEmergencyContact",
    "Review",
    "Notification",
]

"""
Pydantic schemas for API request/response models.
"""

from guideconnect.api.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from guideconnect.api.schemas.destination import (
    DestinationCreate,
    DestinationResponse,
    DestinationUpdate,
)
from guideconnect.api.schemas.guide import GuideCreate, GuideResponse, GuideUpdate
from guideconnect.api.schemas.notification import NotificationCreate, NotificationResponse
from guideconnect.api.schemas.review import ReviewCreate, ReviewResponse, ReviewUpdate
from guideconnect.api.schemas.stats import BookingStatsResponse, DashboardResponse

__all__ = [
    "BookingCreate",
    "BookingUpdate",
    "BookingResponse",
    "DestinationCreate",
    "DestinationUpdate",
    "DestinationResponse",
    "GuideCreate",
    "GuideUpdate",
    "GuideResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "NotificationCreate",
    "NotificationResponse",
    "DashboardResponse",
    "BookingStatsResponse",
]

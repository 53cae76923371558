"""
Pydantic schemas for dashboard and booking statistics.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class TopDestination(BaseModel):
    """Destination ranked by number of bookings."""

    id: Optional[int] = None
    name: str
    location: str
    image: Optional[str] = None
    booking_count: int


class TopGuide(BaseModel):
    """Guide ranked by number of bookings."""

    id: Optional[int] = None
    name: str
    rating: float
    photo: Optional[str] = None
    booking_count: int


class RatedDestination(BaseModel):
    id: int
    name: str
    rating: float


class MonthlyPoint(BaseModel):
    name: str = Field(description="Short month name (Jan..Dec)")
    month: int = Field(ge=1, le=12)
    bookings: int
    revenue: float


class StatusSlice(BaseModel):
    name: str
    value: int


class BookingTotals(BaseModel):
    total: int
    pending: int
    confirmed: int
    completed: int
    cancelled: int
    this_month: int
    last_month: int
    growth: float = Field(description="Month-over-month growth in percent")


class DestinationTotals(BaseModel):
    total: int
    featured: int
    average_rating: float
    top_rated: List[RatedDestination]


class GuideTotals(BaseModel):
    total: int
    active: int
    average_rating: float


class CustomerTotals(BaseModel):
    total: int
    new_this_month: int
    growth: float


class RevenueTotals(BaseModel):
    total: float
    this_month: float
    growth: float


class TravelerTotals(BaseModel):
    total: int
    this_month: int
    growth: float


class DashboardCharts(BaseModel):
    monthly_data: List[MonthlyPoint] = Field(description="Always 12 entries, Jan to Dec")
    top_destinations: List[TopDestination]
    status_distribution: List[StatusSlice]


class DashboardResponse(BaseModel):
    """Everything the admin dashboard overview needs in one payload."""

    bookings: BookingTotals
    destinations: DestinationTotals
    guides: GuideTotals
    customers: CustomerTotals
    revenue: RevenueTotals
    travelers: TravelerTotals
    charts: DashboardCharts


class BookingStatsResponse(BaseModel):
    total_bookings: int
    status_counts: Dict[str, int] = Field(description="Count per booking status")
    bookings_this_month: int
    bookings_last_month: int
    monthly_growth_rate: float
    total_revenue: float
    average_booking_value: float
    total_travelers: int
    avg_travelers_per_booking: float
    top_destinations: List[TopDestination]
    top_guides: List[TopGuide]

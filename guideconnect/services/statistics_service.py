"""
Statistics aggregation for the admin dashboard.

Every figure is computed with aggregate queries (COUNT/SUM/AVG with GROUP BY)
rather than by loading rows. Growth rates compare the current calendar month
with the previous one, top-N lists tolerate bookings whose destination or guide
no longer exists, and monthly series always have twelve entries.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.schemas.destination import DestinationStatsResponse, RatedDestination
from guideconnect.api.schemas.guide import GuideStatsResponse
from guideconnect.api.schemas.stats import (
    BookingStatsResponse,
    BookingTotals,
    CustomerTotals,
    DashboardCharts,
    DashboardResponse,
    DestinationTotals,
    GuideTotals,
    MonthlyPoint,
    RatedDestination as DashboardRatedDestination,
    RevenueTotals,
    StatusSlice,
    TopDestination,
    TopGuide,
    TravelerTotals,
)
from guideconnect.models import Booking, Customer, Destination, Guide, GuideSchedule
from guideconnect.models.booking import BOOKING_STATUSES, PAID_STATUS, REVENUE_STATUSES
from guideconnect.utils.date_utils import MONTH_NAMES, month_window, utc_now

logger = logging.getLogger(__name__)

TOP_N = 5


def growth_rate(current: float, previous: float) -> float:
    """
    Percentage change from ``previous`` to ``current``.

    When the previous period is empty the change is reported as 100% if the
    current period has any activity and 0% otherwise.

    Examples:
        >>> growth_rate(15, 10)
        50.0
        >>> growth_rate(3, 0)
        100.0
        >>> growth_rate(0, 0)
        0.0
    """
    current = current or 0
    previous = previous or 0
    if previous > 0:
        return round((current - previous) / previous * 100, 1)
    return 100.0 if current > 0 else 0.0


def _revenue_filter():
    """WHERE clause for bookings that count as revenue."""
    return (Booking.status.in_(REVENUE_STATUSES), Booking.payment_status == PAID_STATUS)


async def _count_between(db: AsyncSession, column, start: datetime, end: datetime, *where) -> int:
    return await db.scalar(
        select(func.count()).select_from(column.class_).where(column >= start, column < end, *where)
    ) or 0


async def count_bookings_by_status(db: AsyncSession) -> Dict[str, int]:
    """Booking counts for every known status (missing statuses are 0)."""
    result = await db.execute(
        select(Booking.status, func.count().label("count")).group_by(Booking.status)
    )
    counts = {status: 0 for status in BOOKING_STATUSES}
    for row in result.all():
        counts[row.status] = row.count
    return counts


async def top_destinations(db: AsyncSession, limit: int = TOP_N) -> List[TopDestination]:
    """
    Destinations with the most bookings, descending.

    Ties keep ascending destination id order. Bookings pointing at a destination
    that no longer exists are reported as "Unknown".
    """
    grouped = await db.execute(
        select(Booking.destination_id, func.count().label("booking_count"))
        .group_by(Booking.destination_id)
        .order_by(func.count().desc(), Booking.destination_id)
        .limit(limit)
    )
    rows = grouped.all()

    ids = [row.destination_id for row in rows if row.destination_id is not None]
    lookup: Dict[int, Destination] = {}
    if ids:
        result = await db.execute(select(Destination).where(Destination.id.in_(ids)))
        lookup = {d.id: d for d in result.scalars().all()}

    top = []
    for row in rows:
        destination = lookup.get(row.destination_id)
        top.append(
            TopDestination(
                id=row.destination_id,
                name=destination.name if destination else "Unknown",
                location=destination.country if destination else "Unknown",
                image=destination.cover_image if destination else None,
                booking_count=row.booking_count,
            )
        )
    return top


async def top_guides(db: AsyncSession, limit: int = TOP_N) -> List[TopGuide]:
    """
    Guides with the most bookings, descending.

    Unassigned bookings are ignored. A guide id with no matching guide is
    reported as "Unknown".
    """
    grouped = await db.execute(
        select(Booking.guide_id, func.count().label("booking_count"))
        .where(Booking.guide_id.is_not(None))
        .group_by(Booking.guide_id)
        .order_by(func.count().desc(), Booking.guide_id)
        .limit(limit)
    )
    rows = grouped.all()

    lookup: Dict[int, Guide] = {}
    if rows:
        result = await db.execute(select(Guide).where(Guide.id.in_([r.guide_id for r in rows])))
        lookup = {g.id: g for g in result.scalars().all()}

    top = []
    for row in rows:
        guide = lookup.get(row.guide_id)
        top.append(
            TopGuide(
                id=row.guide_id,
                name=guide.name if guide else "Unknown",
                rating=guide.rating if guide else 0.0,
                photo=guide.photo if guide else None,
                booking_count=row.booking_count,
            )
        )
    return top


async def monthly_series(db: AsyncSession, year: int) -> List[MonthlyPoint]:
    """
    Bookings and revenue per calendar month of ``year``.

    Always returns twelve points (Jan..Dec); months without bookings are zero.
    """
    month_col = extract("month", Booking.created_at)
    year_col = extract("year", Booking.created_at)

    booking_rows = await db.execute(
        select(month_col.label("month"), func.count().label("count"))
        .where(year_col == year)
        .group_by(month_col)
    )
    revenue_rows = await db.execute(
        select(month_col.label("month"), func.sum(Booking.total_amount).label("revenue"))
        .where(year_col == year, *_revenue_filter())
        .group_by(month_col)
    )

    bookings_by_month = {int(row.month): row.count for row in booking_rows.all()}
    revenue_by_month = {int(row.month): float(row.revenue or 0) for row in revenue_rows.all()}

    return [
        MonthlyPoint(
            name=MONTH_NAMES[month - 1],
            month=month,
            bookings=bookings_by_month.get(month, 0),
            revenue=round(revenue_by_month.get(month, 0.0), 2),
        )
        for month in range(1, 13)
    ]


async def get_dashboard_stats(db: AsyncSession, now: Optional[datetime] = None) -> DashboardResponse:
    """
    Compute the admin dashboard overview.

    Args:
        db: Async database session
        now: Reference time for the month windows (defaults to now, UTC)

    Returns:
        DashboardResponse with booking, destination, guide, customer, revenue and
        traveler figures plus chart data.
    """
    now = now or utc_now()
    window = month_window(now)

    # Bookings
    status_counts = await count_bookings_by_status(db)
    total_bookings = sum(status_counts.values())
    bookings_this_month = await _count_between(
        db, Booking.created_at, window.this_month_start, window.next_month_start
    )
    bookings_last_month = await _count_between(
        db, Booking.created_at, window.last_month_start, window.this_month_start
    )

    # Destinations
    total_destinations = await db.scalar(select(func.count()).select_from(Destination)) or 0
    featured_destinations = await db.scalar(
        select(func.count()).select_from(Destination).where(Destination.featured.is_(True))
    ) or 0
    avg_destination_rating = await db.scalar(select(func.avg(Destination.rating))) or 0.0
    top_rated_result = await db.execute(
        select(Destination.id, Destination.name, Destination.rating)
        .where(Destination.rating > 0)
        .order_by(Destination.rating.desc(), Destination.id)
        .limit(TOP_N)
    )
    top_rated = [
        DashboardRatedDestination(id=row.id, name=row.name, rating=row.rating)
        for row in top_rated_result.all()
    ]

    # Guides
    total_guides = await db.scalar(select(func.count()).select_from(Guide)) or 0
    active_guides = await db.scalar(
        select(func.count()).select_from(Guide).where(Guide.availability == "available")
    ) or 0
    avg_guide_rating = await db.scalar(select(func.avg(Guide.rating))) or 0.0

    # Customers
    total_customers = await db.scalar(select(func.count()).select_from(Customer)) or 0
    customers_this_month = await _count_between(
        db, Customer.created_at, window.this_month_start, window.next_month_start
    )
    customers_last_month = await _count_between(
        db, Customer.created_at, window.last_month_start, window.this_month_start
    )

    # Revenue
    total_revenue = await db.scalar(
        select(func.sum(Booking.total_amount)).where(*_revenue_filter())
    ) or 0.0
    revenue_this_month = await db.scalar(
        select(func.sum(Booking.total_amount)).where(
            *_revenue_filter(),
            Booking.created_at >= window.this_month_start,
            Booking.created_at < window.next_month_start,
        )
    ) or 0.0
    revenue_last_month = await db.scalar(
        select(func.sum(Booking.total_amount)).where(
            *_revenue_filter(),
            Booking.created_at >= window.last_month_start,
            Booking.created_at < window.this_month_start,
        )
    ) or 0.0

    # Travelers
    total_travelers = await db.scalar(select(func.sum(Booking.total_travelers))) or 0
    travelers_this_month = await db.scalar(
        select(func.sum(Booking.total_travelers)).where(
            Booking.created_at >= window.this_month_start,
            Booking.created_at < window.next_month_start,
        )
    ) or 0
    travelers_last_month = await db.scalar(
        select(func.sum(Booking.total_travelers)).where(
            Booking.created_at >= window.last_month_start,
            Booking.created_at < window.this_month_start,
        )
    ) or 0

    # Charts
    monthly_data = await monthly_series(db, now.year)
    top_dests = await top_destinations(db)
    status_distribution = [
        StatusSlice(name=status, value=count) for status, count in status_counts.items()
    ]

    logger.debug(
        f"Dashboard stats computed: {total_bookings} bookings, "
        f"{total_destinations} destinations, {total_guides} guides"
    )

    return DashboardResponse(
        bookings=BookingTotals(
            total=total_bookings,
            pending=status_counts["pending"],
            confirmed=status_counts["confirmed"],
            completed=status_counts["completed"],
            cancelled=status_counts["cancelled"],
            this_month=bookings_this_month,
            last_month=bookings_last_month,
            growth=growth_rate(bookings_this_month, bookings_last_month),
        ),
        destinations=DestinationTotals(
            total=total_destinations,
            featured=featured_destinations,
            average_rating=round(float(avg_destination_rating), 1),
            top_rated=top_rated,
        ),
        guides=GuideTotals(
            total=total_guides,
            active=active_guides,
            average_rating=round(float(avg_guide_rating), 1),
        ),
        customers=CustomerTotals(
            total=total_customers,
            new_this_month=customers_this_month,
            growth=growth_rate(customers_this_month, customers_last_month),
        ),
        revenue=RevenueTotals(
            total=round(float(total_revenue), 2),
            this_month=round(float(revenue_this_month), 2),
            growth=growth_rate(float(revenue_this_month), float(revenue_last_month)),
        ),
        travelers=TravelerTotals(
            total=int(total_travelers),
            this_month=int(travelers_this_month),
            growth=growth_rate(travelers_this_month, travelers_last_month),
        ),
        charts=DashboardCharts(
            monthly_data=monthly_data,
            top_destinations=top_dests,
            status_distribution=status_distribution,
        ),
    )


async def get_booking_stats(db: AsyncSession, now: Optional[datetime] = None) -> BookingStatsResponse:
    """Booking-centric statistics for the bookings dashboard page."""
    window = month_window(now)

    status_counts = await count_bookings_by_status(db)
    total_bookings = sum(status_counts.values())

    bookings_this_month = await _count_between(
        db, Booking.created_at, window.this_month_start, window.next_month_start
    )
    bookings_last_month = await _count_between(
        db, Booking.created_at, window.last_month_start, window.this_month_start
    )

    total_revenue = await db.scalar(
        select(func.sum(Booking.total_amount)).where(*_revenue_filter())
    ) or 0.0
    paid_bookings = await db.scalar(
        select(func.count()).select_from(Booking).where(*_revenue_filter())
    ) or 0
    total_travelers = await db.scalar(select(func.sum(Booking.total_travelers))) or 0

    average_booking_value = float(total_revenue) / paid_bookings if paid_bookings else 0.0
    avg_travelers = float(total_travelers) / total_bookings if total_bookings else 0.0

    return BookingStatsResponse(
        total_bookings=total_bookings,
        status_counts=status_counts,
        bookings_this_month=bookings_this_month,
        bookings_last_month=bookings_last_month,
        monthly_growth_rate=growth_rate(bookings_this_month, bookings_last_month),
        total_revenue=round(float(total_revenue), 2),
        average_booking_value=round(average_booking_value, 2),
        total_travelers=int(total_travelers),
        avg_travelers_per_booking=round(avg_travelers, 1),
        top_destinations=await top_destinations(db),
        top_guides=await top_guides(db),
    )


async def get_destination_stats(db: AsyncSession) -> DestinationStatsResponse:
    """Catalogue statistics for the destinations admin page."""
    total = await db.scalar(select(func.count()).select_from(Destination)) or 0
    featured = await db.scalar(
        select(func.count()).select_from(Destination).where(Destination.featured.is_(True))
    ) or 0
    avg_rating = await db.scalar(select(func.avg(Destination.rating))) or 0.0

    top_rated_result = await db.execute(
        select(Destination)
        .where(Destination.rating > 0)
        .order_by(Destination.rating.desc(), Destination.id)
        .limit(TOP_N)
    )
    most_reviewed_result = await db.execute(
        select(Destination)
        .order_by(Destination.review_count.desc(), Destination.id)
        .limit(TOP_N)
    )
    difficulty_result = await db.execute(
        select(Destination.difficulty, func.count().label("count")).group_by(Destination.difficulty)
    )

    def rated(destination: Destination) -> RatedDestination:
        return RatedDestination(
            id=destination.id,
            name=destination.name,
            rating=destination.rating,
            review_count=destination.review_count,
            image=destination.cover_image,
        )

    return DestinationStatsResponse(
        total_destinations=total,
        featured_count=featured,
        average_rating=round(float(avg_rating), 1),
        top_rated=[rated(d) for d in top_rated_result.scalars().all()],
        most_reviewed=[rated(d) for d in most_reviewed_result.scalars().all()],
        difficulty_breakdown={row.difficulty: row.count for row in difficulty_result.all()},
    )


async def get_guide_stats(db: AsyncSession, now: Optional[datetime] = None) -> GuideStatsResponse:
    """Guide roster statistics; tour counts come from guide schedules."""
    window = month_window(now)

    availability_result = await db.execute(
        select(Guide.availability, func.count().label("count")).group_by(Guide.availability)
    )
    by_availability = {row.availability: row.count for row in availability_result.all()}

    avg_rating = await db.scalar(select(func.avg(Guide.rating))) or 0.0
    total_reviews = await db.scalar(select(func.sum(Guide.review_count))) or 0

    tours_this_month = await db.scalar(
        select(func.count()).select_from(GuideSchedule).where(
            GuideSchedule.start_date >= window.this_month_start.date(),
            GuideSchedule.start_date < window.next_month_start.date(),
        )
    ) or 0
    tours_last_month = await db.scalar(
        select(func.count()).select_from(GuideSchedule).where(
            GuideSchedule.start_date >= window.last_month_start.date(),
            GuideSchedule.start_date < window.this_month_start.date(),
        )
    ) or 0

    return GuideStatsResponse(
        total_guides=sum(by_availability.values()),
        active_guides=by_availability.get("available", 0),
        on_leave_guides=by_availability.get("partially_available", 0),
        inactive_guides=by_availability.get("unavailable", 0),
        average_rating=round(float(avg_rating), 1),
        total_reviews=int(total_reviews),
        tours_this_month=tours_this_month,
        change_from_last_month=growth_rate(tours_this_month, tours_last_month),
    )

"""
Dashboard notification service.

Stores in-app notifications and emits the standard admin notifications
raised by booking, guide, customer and contact-form events.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.schemas.notification import NotificationCreate
from guideconnect.exceptions import NotFoundError
from guideconnect.models import Notification
from guideconnect.utils.date_utils import utc_now

logger = logging.getLogger(__name__)


class NotificationService:
    """CRUD and bulk read/delete operations for notifications."""

    @staticmethod
    def _recipient_filter(recipient_id: Optional[int]):
        if recipient_id is None:
            return Notification.recipient_id.is_(None)
        return Notification.recipient_id == recipient_id

    @staticmethod
    async def list_notifications(
        db: AsyncSession,
        recipient_id: Optional[int] = None,
        type: Optional[str] = None,
        read: Optional[bool] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Notification], int]:
        """
        List notifications, newest first.

        Args:
            db: Database session
            recipient_id: User id, or None for administrator notifications
            type: success, info, warning or error
            read: Filter by read flag
            search: Case-insensitive match on title or description
            limit: Maximum number of rows
            offset: Rows to skip

        Returns:
            (notifications, total matching count)
        """
        query = select(Notification).where(NotificationService._recipient_filter(recipient_id))

        if type:
            query = query.where(Notification.type == type)
        if read is not None:
            query = query.where(Notification.read.is_(read))
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(Notification.title.ilike(pattern), Notification.description.ilike(pattern))
            )

        total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

        query = query.order_by(Notification.timestamp.desc(), Notification.id.desc())
        result = await db.execute(query.limit(limit).offset(offset))
        return list(result.scalars().all()), total

    @staticmethod
    async def create(db: AsyncSession, data: NotificationCreate, commit: bool = True) -> Notification:
        notification = Notification(**data.model_dump(), timestamp=utc_now())
        db.add(notification)
        if commit:
            await db.commit()
        else:
            await db.flush()
        logger.info(f"Notification created: '{notification.title}' ({notification.type})")
        return notification

    @staticmethod
    async def get(db: AsyncSession, notification_id: int) -> Notification:
        notification = await db.get(Notification, notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        return notification

    @staticmethod
    async def mark_as_read(db: AsyncSession, notification_id: int) -> Notification:
        notification = await NotificationService.get(db, notification_id)
        notification.read = True
        await db.commit()
        return notification

    @staticmethod
    async def mark_many_as_read(db: AsyncSession, ids: Sequence[int]) -> int:
        """Mark the given notifications as read. Returns the number of rows changed."""
        if not ids:
            return 0
        result = await db.execute(
            update(Notification).where(Notification.id.in_(ids)).values(read=True)
        )
        await db.commit()
        return result.rowcount or 0

    @staticmethod
    async def mark_all_as_read(db: AsyncSession, recipient_id: Optional[int] = None) -> int:
        result = await db.execute(
            update(Notification)
            .where(NotificationService._recipient_filter(recipient_id), Notification.read.is_(False))
            .values(read=True)
        )
        await db.commit()
        logger.info(f"Marked {result.rowcount} notifications as read")
        return result.rowcount or 0

    @staticmethod
    async def delete(db: AsyncSession, notification_id: int) -> None:
        notification = await NotificationService.get(db, notification_id)
        await db.delete(notification)
        await db.commit()

    @staticmethod
    async def delete_many(db: AsyncSession, ids: Sequence[int]) -> int:
        if not ids:
            return 0
        result = await db.execute(delete(Notification).where(Notification.id.in_(ids)))
        await db.commit()
        return result.rowcount or 0

    @staticmethod
    async def unread_count(db: AsyncSession, recipient_id: Optional[int] = None) -> int:
        return await db.scalar(
            select(func.count())
            .select_from(Notification)
            .where(NotificationService._recipient_filter(recipient_id), Notification.read.is_(False))
        ) or 0

    # ------------------------------------------------------------------
    # Event notifications (addressed to administrators)
    # ------------------------------------------------------------------

    @staticmethod
    async def notify_booking_created(
        db: AsyncSession, booking_id: int, booking_number: str, customer_name: str, destination_name: str
    ) -> Notification:
        return await NotificationService.create(
            db,
            NotificationCreate(
                title="New Booking Received",
                description=f"{customer_name} booked {destination_name} ({booking_number})",
                type="success",
                action_url=f"/dashboard/bookings/{booking_id}",
                action_label="View Booking",
                related_entity_type="booking",
                related_entity_id=str(booking_id),
                related_entity_name=booking_number,
            ),
            commit=False,
        )

    @staticmethod
    async def notify_booking_status_changed(
        db: AsyncSession, booking_id: int, booking_number: str, old_status: str, new_status: str
    ) -> Notification:
        notification_type = {"cancelled": "warning", "refunded": "warning", "confirmed": "success"}.get(
            new_status, "info"
        )
        return await NotificationService.create(
            db,
            NotificationCreate(
                title=f"Booking {new_status.capitalize()}",
                description=f"Booking {booking_number} changed from {old_status} to {new_status}",
                type=notification_type,
                action_url=f"/dashboard/bookings/{booking_id}",
                action_label="View Booking",
                related_entity_type="booking",
                related_entity_id=str(booking_id),
                related_entity_name=booking_number,
            ),
            commit=False,
        )

    @staticmethod
    async def notify_guide_added(db: AsyncSession, guide_id: int, guide_name: str) -> Notification:
        return await NotificationService.create(
            db,
            NotificationCreate(
                title="New Guide Added",
                description=f"{guide_name} joined the guide roster",
                type="info",
                action_url=f"/dashboard/guides/{guide_id}",
                action_label="View Guide",
                related_entity_type="guide",
                related_entity_id=str(guide_id),
                related_entity_name=guide_name,
            ),
            commit=False,
        )

    @staticmethod
    async def notify_destination_added(
        db: AsyncSession, destination_id: int, destination_name: str
    ) -> Notification:
        return await NotificationService.create(
            db,
            NotificationCreate(
                title="New Destination Added",
                description=f"{destination_name} is now listed",
                type="info",
                action_url=f"/dashboard/destinations/{destination_id}",
                action_label="View Destination",
                related_entity_type="destination",
                related_entity_id=str(destination_id),
                related_entity_name=destination_name,
            ),
            commit=False,
        )

    @staticmethod
    async def notify_customer_registered(db: AsyncSession, customer_name: str, email: str) -> Notification:
        return await NotificationService.create(
            db,
            NotificationCreate(
                title="New Customer Registered",
                description=f"{customer_name} ({email}) created an account",
                type="info",
                related_entity_type="customer",
                related_entity_name=customer_name,
            ),
            commit=False,
        )

    @staticmethod
    async def notify_contact_message(
        db: AsyncSession, name: str, email: str, subject: str
    ) -> Notification:
        return await NotificationService.create(
            db,
            NotificationCreate(
                title="New Contact Message",
                description=f"{name} ({email}): {subject}",
                type="info",
                related_entity_type="contact",
                related_entity_name=name,
            ),
        )

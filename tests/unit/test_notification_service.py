"""
Unit tests for NotificationService.
"""

import pytest

from guideconnect.api.schemas.notification import NotificationCreate
from guideconnect.exceptions import NotFoundError
from guideconnect.models import User
from guideconnect.services.notification_service import NotificationService


@pytest.fixture
async def notifications(db_session):
    created = []
    for title, type_ in [("Payment received", "success"), ("Trek delayed", "warning"), ("New review", "info")]:
        created.append(
            await NotificationService.create(
                db_session, NotificationCreate(title=title, description=f"{title} details", type=type_)
            )
        )
    return created


class TestQueries:
    async def test_newest_first(self, db_session, notifications):
        rows, total = await NotificationService.list_notifications(db_session)

        assert total == 3
        assert [n.title for n in rows] == ["New review", "Trek delayed", "Payment received"]

    async def test_filters(self, db_session, notifications):
        rows, _ = await NotificationService.list_notifications(db_session, type="warning")
        assert [n.title for n in rows] == ["Trek delayed"]

        rows, _ = await NotificationService.list_notifications(db_session, search="payment")
        assert [n.title for n in rows] == ["Payment received"]

        rows, total = await NotificationService.list_notifications(db_session, read=True)
        assert total == 0

    async def test_recipient_scoping(self, db_session, notifications):
        user = User(name="Tenzing", email="tenzing@example.com", password_hash="x")
        db_session.add(user)
        await db_session.commit()
        await NotificationService.create(
            db_session, NotificationCreate(title="Your trip", description="See you soon", recipient_id=user.id)
        )

        _, admin_total = await NotificationService.list_notifications(db_session)
        personal, personal_total = await NotificationService.list_notifications(db_session, recipient_id=user.id)

        assert admin_total == 3
        assert personal_total == 1
        assert personal[0].title == "Your trip"


class TestReadState:
    async def test_mark_as_read(self, db_session, notifications):
        notification = await NotificationService.mark_as_read(db_session, notifications[0].id)

        assert notification.read is True
        assert await NotificationService.unread_count(db_session) == 2

    async def test_mark_many(self, db_session, notifications):
        count = await NotificationService.mark_many_as_read(db_session, [n.id for n in notifications[:2]])

        assert count == 2
        assert await NotificationService.unread_count(db_session) == 1

    async def test_mark_all(self, db_session, notifications):
        assert await NotificationService.mark_all_as_read(db_session) == 3
        assert await NotificationService.unread_count(db_session) == 0
        assert await NotificationService.mark_all_as_read(db_session) == 0

    async def test_empty_selection(self, db_session, notifications):
        assert await NotificationService.mark_many_as_read(db_session, []) == 0
        assert await NotificationService.delete_many(db_session, []) == 0

    async def test_missing(self, db_session):
        with pytest.raises(NotFoundError, match="Notification not found"):
            await NotificationService.mark_as_read(db_session, 999)


class TestDelete:
    async def test_delete_one(self, db_session, notifications):
        await NotificationService.delete(db_session, notifications[1].id)

        rows, total = await NotificationService.list_notifications(db_session)
        assert total == 2
        assert "Trek delayed" not in [n.title for n in rows]

    async def test_delete_many(self, db_session, notifications):
        count = await NotificationService.delete_many(db_session, [n.id for n in notifications])

        assert count == 3
        assert await NotificationService.unread_count(db_session) == 0


class TestEventNotifications:
    @pytest.mark.parametrize(
        "new_status, expected_type",
        [("confirmed", "success"), ("cancelled", "warning"), ("refunded", "warning"), ("completed", "info")],
    )
    async def test_status_change_type(self, db_session, new_status, expected_type):
        notification = await NotificationService.notify_booking_status_changed(
            db_session, 1, "B-20261019-1000", "pending", new_status
        )

        assert notification.type == expected_type
        assert notification.title == f"Booking {new_status.capitalize()}"
        assert notification.related_entity_name == "B-20261019-1000"

    async def test_contact_message_is_committed(self, db_session):
        await NotificationService.notify_contact_message(db_session, "Anna", "anna@example.com", "Group trek")

        rows, total = await NotificationService.list_notifications(db_session, search="Group trek")
        assert total == 1
        assert rows[0].title == "New Contact Message"

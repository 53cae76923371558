"""
Dashboard notification routes (authenticated).

PATCH /notifications takes ``{"action": ..., "id": ..., "ids": [...]}`` where
action is one of markAsRead, markAllAsRead, markSelectedAsRead, delete or
deleteSelected.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from guideconnect.api.dependencies import require_session
from guideconnect.api.schemas.common import CountResponse
from guideconnect.api.schemas.notification import (
    NOTIFICATION_ACTIONS,
    NotificationActionRequest,
    NotificationCreate,
    NotificationListResponse,
    NotificationResponse,
    NotificationType,
)
from guideconnect.database import get_async_session
from guideconnect.exceptions import GuideConnectException
from guideconnect.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_session)])


@router.get("/notifications", response_model=NotificationListResponse)
async def list_notifications(
    recipient_id: Optional[int] = Query(None, description="User id; omit for administrator notifications"),
    type: Optional[NotificationType] = Query(None),
    read: Optional[bool] = Query(None),
    search: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_async_session),
) -> NotificationListResponse:
    try:
        notifications, total = await NotificationService.list_notifications(
            db,
            recipient_id=recipient_id,
            type=type,
            read=read,
            search=search,
            limit=limit,
            offset=offset,
        )
        return NotificationListResponse(
            notifications=[NotificationResponse.model_validate(n) for n in notifications],
            total=total,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching notifications: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notifications",
        )


@router.post("/notifications", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    body: NotificationCreate,
    db: AsyncSession = Depends(get_async_session),
) -> NotificationResponse:
    try:
        notification = await NotificationService.create(db, body)
        return NotificationResponse.model_validate(notification)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating notification: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create notification",
        )


@router.patch("/notifications")
async def update_notifications(
    body: NotificationActionRequest,
    db: AsyncSession = Depends(get_async_session),
) -> Dict[str, Any]:
    """Apply a read/delete action to one, several or all notifications."""
    if body.action not in NOTIFICATION_ACTIONS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")

    try:
        if body.action == "markAsRead":
            if body.id is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
            notification = await NotificationService.mark_as_read(db, body.id)
            return {
                "success": True,
                "notification": NotificationResponse.model_validate(notification).model_dump(mode="json"),
            }

        if body.action == "markAllAsRead":
            count = await NotificationService.mark_all_as_read(db)
            return {"success": True, "count": count}

        if body.action == "markSelectedAsRead":
            count = await NotificationService.mark_many_as_read(db, body.ids)
            return {"success": True, "count": count}

        if body.action == "delete":
            if body.id is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")
            await NotificationService.delete(db, body.id)
            return {"success": True}

        count = await NotificationService.delete_many(db, body.ids)
        return {"success": True, "count": count}

    except (HTTPException, GuideConnectException):
        raise
    except Exception as e:
        logger.error(f"Error applying notification action {body.action}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update notifications",
        )


@router.get("/notifications/unread-count", response_model=CountResponse)
async def unread_count(
    recipient_id: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_async_session),
) -> CountResponse:
    try:
        return CountResponse(count=await NotificationService.unread_count(db, recipient_id))
    except Exception as e:
        logger.error(f"Error counting unread notifications: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch unread count",
        )

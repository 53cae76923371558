"""
Pydantic schemas for notification endpoints.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal["success", "info", "warning", "error"]

NOTIFICATION_ACTIONS = (
    "markAsRead",
    "markAllAsRead",
    "markSelectedAsRead",
    "delete",
    "deleteSelected",
)


class NotificationCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: NotificationType = "info"
    read: bool = False
    action_url: Optional[str] = None
    action_label: Optional[str] = None
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None
    related_entity_name: Optional[str] = None
    recipient_id: Optional[int] = Field(
        default=None, description="User id; empty for administrator notifications"
    )


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    type: str
    read: bool
    timestamp: datetime
    action_url: Optional[str] = None
    action_label: Optional[str] = None
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None
    related_entity_name: Optional[str] = None
    recipient_id: Optional[int] = None


class NotificationListResponse(BaseModel):
    notifications: List[NotificationResponse]
    total: int


class NotificationActionRequest(BaseModel):
    """
    Body of PATCH /notifications.

    ``action`` is checked by the route so that unknown actions return
    "Invalid action" rather than a schema error.
    """

    action: str
    id: Optional[int] = None
    ids: List[int] = Field(default_factory=list)

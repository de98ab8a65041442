# =============================================================================
# core/models/notification.py - Notification Schemas
# =============================================================================
# Notifications are addressed to a single user (user_id), not to a wedding.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class Notification(BaseModel):
    id: UUID
    user_id: UUID
    title: str
    message: str | None = None
    is_read: bool = False
    created_at: datetime | None = None


class NotificationList(BaseModel):
    """Notifications for the current user, newest first."""

    items: list[Notification]
    unread_count: int = 0
    marked_read: int = 0

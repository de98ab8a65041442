# =============================================================================
# app/routers/notifications.py - Notification Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import CurrentUserDep
from core.models.notification import NotificationList
from core.services.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=NotificationList)
async def list_notifications(
    user: CurrentUserDep,
    mark_read: Annotated[bool, Query(description="Mark unread notifications as read")] = False,
):
    """Newest notifications first. unread_count is counted before marking."""
    return NotificationService.list_for_user(user.id, mark_read=mark_read)


@router.post("/read-all")
async def mark_all_read(user: CurrentUserDep):
    """Mark every unread notification as read."""
    marked = NotificationService.mark_all_read(user.id)
    return {"marked_read": marked}

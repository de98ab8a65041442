# =============================================================================
# core/services/notification_service.py - Per-User Notifications
# =============================================================================
# Notifications are addressed to a user, not a wedding, so they are filtered
# by user_id instead of going through ScopedRepository.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.notification import Notification, NotificationList
from app.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

NOTIFICATION_LIMIT = 50


class NotificationService:
    """Service for the notifications table."""

    @staticmethod
    def list_for_user(user_id: UUID | str, mark_read: bool = False) -> NotificationList:
        """
        Newest notifications for the user.

        Args:
            user_id: The authenticated user
            mark_read: Mark all unread notifications as read after loading

        Returns:
            NotificationList; unread_count reflects the state before marking
        """
        try:
            rows = SupabaseClient.select_rows(
                "notifications",
                filters={"user_id": str(user_id)},
                order=[("created_at", True, None)],
                limit=NOTIFICATION_LIMIT,
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to load notifications for user {user_id}: {e}")
            raise StorageUnavailableError("load notifications", str(e))

        items = [Notification(**row) for row in rows]
        unread = sum(1 for item in items if not item.is_read)

        marked = NotificationService.mark_all_read(user_id) if mark_read and unread else 0
        return NotificationList(items=items, unread_count=unread, marked_read=marked)

    @staticmethod
    def mark_all_read(user_id: UUID | str) -> int:
        """Mark every unread notification of the user as read. Returns the count."""
        try:
            rows = SupabaseClient.update_rows(
                "notifications",
                {"is_read": True},
                filters={"user_id": str(user_id), "is_read": False},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to mark notifications read for user {user_id}: {e}")
            raise StorageUnavailableError("update notifications", str(e))

        logger.info(f"Marked {len(rows)} notifications read for user {user_id}")
        return len(rows)

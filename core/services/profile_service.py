# =============================================================================
# core/services/profile_service.py - User Profile Operations
# =============================================================================
# Profiles are normally created by a database trigger when a user signs up.
# If the trigger hasn't run yet, reads fall back to an empty profile and
# writes create the row.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.profile import Profile, ProfileUpdate
from core.services.storage_service import AVATAR_BUCKET, StorageService
from app.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for reading and editing the profiles table."""

    @staticmethod
    def get_profile(user_id: UUID | str) -> Profile | None:
        """
        Fetch a user's profile.

        Returns:
            Profile, or None if the row doesn't exist yet

        Raises:
            StorageUnavailableError: If Supabase can't be reached
        """
        try:
            row = SupabaseClient.fetch_row("profiles", {"id": str(user_id)})
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch profile {user_id}: {e}")
            raise StorageUnavailableError("load the profile", str(e))

        return Profile(**row) if row else None

    @staticmethod
    def get_or_empty(user_id: UUID | str) -> Profile:
        """Like get_profile, but returns a bare Profile for missing rows."""
        return ProfileService.get_profile(user_id) or Profile(id=user_id)

    @staticmethod
    def update_profile(user_id: UUID | str, changes: ProfileUpdate) -> Profile:
        """
        Update the user's own profile, creating the row if needed.

        Returns:
            Updated Profile
        """
        update_data = changes.model_dump(exclude_unset=True, mode="json")
        if not update_data:
            return ProfileService.get_or_empty(user_id)

        return ProfileService._write(user_id, update_data)

    @staticmethod
    def upload_avatar(
        user_id: UUID | str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> Profile:
        """Store a new avatar image and point the profile at it."""
        url = StorageService.upload_image(AVATAR_BUCKET, user_id, filename, content, content_type)
        return ProfileService._write(user_id, {"avatar_url": url})

    @staticmethod
    def _write(user_id: UUID | str, data: dict) -> Profile:
        user_id_str = str(user_id)

        try:
            rows = SupabaseClient.update_rows("profiles", data, filters={"id": user_id_str})
            if rows:
                row = rows[0]
            else:
                row = SupabaseClient.insert_row("profiles", {"id": user_id_str, **data})
        except SupabaseClientError as e:
            logger.error(f"Failed to save profile {user_id_str}: {e}")
            raise StorageUnavailableError("save the profile", str(e))

        logger.info(f"Updated profile {user_id_str}: {sorted(data)}")
        return Profile(**row)

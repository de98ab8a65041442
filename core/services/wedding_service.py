# =============================================================================
# core/services/wedding_service.py - Wedding Aggregate Resolver
# =============================================================================
# Every authenticated request starts here: given the user id from the JWT,
# find the one wedding that user belongs to (as partner one or partner two)
# or auto-provision a solo wedding the first time.
#
# All scoped repositories take the wedding id returned by resolve(); nothing
# else in the app re-derives "the current wedding".
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid
from core.models.wedding import (
    InvitationLink,
    PublicWeddingDetails,
    Wedding,
    WeddingUpdate,
)
from app.config import settings
from app.exceptions import (
    DataIntegrityError,
    InvalidInputError,
    NotFoundError,
    StorageUnavailableError,
)
from app.websocket.broadcast import ChangeEvent, publish_change

logger = logging.getLogger(__name__)


class WeddingService:
    """
    Service for resolving and editing the wedding aggregate.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def resolve(user_id: UUID | str) -> Wedding:
        """
        Find or create the wedding the user belongs to.

        - No wedding: insert one with partner_one_id = user_id (the only
          place a wedding is created implicitly)
        - One wedding: return it
        - More than one: the one-wedding-per-user invariant is broken;
          raise instead of guessing

        Idempotent once the wedding exists: repeated calls do no writes.

        Args:
            user_id: The authenticated user's id

        Returns:
            The user's Wedding

        Raises:
            DataIntegrityError: If the user appears in several weddings
            StorageUnavailableError: If Supabase can't be reached
        """
        user_id_str = str(user_id)

        try:
            rows = SupabaseClient.fetch_weddings_for_user(user_id_str)
        except SupabaseClientError as e:
            logger.error(f"Failed to resolve wedding for user {user_id_str}: {e}")
            raise StorageUnavailableError("load your wedding", str(e))

        if len(rows) > 1:
            wedding_ids = [str(row["id"]) for row in rows]
            logger.error(f"User {user_id_str} belongs to {len(rows)} weddings: {wedding_ids}")
            raise DataIntegrityError(user_id_str, wedding_ids)

        if rows:
            return Wedding(**rows[0])

        try:
            row = SupabaseClient.insert_row("weddings", {"partner_one_id": user_id_str})
        except SupabaseClientError as e:
            logger.error(f"Failed to provision wedding for user {user_id_str}: {e}")
            raise StorageUnavailableError("create your wedding", str(e))

        logger.info(f"Provisioned wedding {row['id']} for user {user_id_str}")
        return Wedding(**row)

    @staticmethod
    def get_wedding(wedding_id: UUID | str) -> Wedding:
        """
        Get a wedding by id.

        Raises:
            InvalidInputError: If wedding_id isn't a UUID
            NotFoundError: If no wedding has this id
            StorageUnavailableError: If Supabase can't be reached
        """
        wedding_uuid = parse_uuid(wedding_id)
        if wedding_uuid is None:
            raise InvalidInputError(
                "Invalid wedding ID",
                field="wedding_id",
                suggestion="Check that the link or code was copied completely",
            )

        row = _fetch_wedding_row(wedding_uuid)
        if row is None:
            raise NotFoundError("Wedding", str(wedding_uuid))
        return Wedding(**row)

    @staticmethod
    def update_details(wedding: Wedding, changes: WeddingUpdate) -> Wedding:
        """
        Update date, venue or theme. Either partner may call this.

        Args:
            wedding: The resolved wedding
            changes: Fields to change (unset fields are left alone)

        Returns:
            Updated Wedding
        """
        update_data = changes.model_dump(exclude_unset=True, mode="json")
        if not update_data:
            return wedding  # Nothing to update

        try:
            rows = SupabaseClient.update_rows(
                "weddings",
                update_data,
                filters={"id": str(wedding.id)},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to update wedding {wedding.id}: {e}")
            raise StorageUnavailableError("save wedding details", str(e))

        if not rows:
            raise NotFoundError("Wedding", str(wedding.id))

        logger.info(f"Updated wedding {wedding.id}: {sorted(update_data)}")
        publish_change(wedding.id, "weddings", ChangeEvent.UPDATE, wedding.id)
        return Wedding(**rows[0])

    @staticmethod
    def invitation_link(wedding: Wedding) -> InvitationLink:
        """Build the shareable RSVP link and partner join code."""
        base_url = settings.INVITE_BASE_URL.rstrip("/")
        return InvitationLink(
            wedding_id=wedding.id,
            invite_url=f"{base_url}/invite/{wedding.id}",
            join_code=str(wedding.id),
        )

    @staticmethod
    def public_details(wedding_id: UUID | str) -> PublicWeddingDetails:
        """
        Details shown on the public invitation page.

        Only the date and venue leave the API; partner ids stay private.
        """
        wedding = WeddingService.get_wedding(wedding_id)
        return PublicWeddingDetails(
            wedding_id=wedding.id,
            wedding_date=wedding.wedding_date,
            venue=wedding.venue,
        )


def _fetch_wedding_row(wedding_id: UUID | str) -> dict[str, Any] | None:
    try:
        return SupabaseClient.fetch_wedding(str(wedding_id))
    except SupabaseClientError as e:
        logger.error(f"Failed to fetch wedding {wedding_id}: {e}")
        raise StorageUnavailableError("load the wedding", str(e))

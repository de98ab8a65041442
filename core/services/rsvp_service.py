# =============================================================================
# core/services/rsvp_service.py - Public RSVP Intake
# =============================================================================
# The only unauthenticated write path. A visitor opens the shared invitation
# link /invite/{wedding_id} and answers; the answer becomes a guest row with
# added_by = null.
#
# Trust boundary: knowing the wedding id is enough to RSVP. The id is
# unguessable, but anyone holding the link can add guests.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid
from core.models.guest import Guest, GuestCategory, GuestStatus, RsvpStatus
from core.services.wedding_service import WeddingService
from app.config import settings
from app.exceptions import InvalidInputError, StorageUnavailableError
from app.websocket.broadcast import ChangeEvent, publish_change

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


class RsvpService:
    """Service for anonymous invitation responses."""

    @staticmethod
    def submit_rsvp(
        wedding_id: UUID | str,
        name: str | None,
        pax: Any = 1,
        status: str | None = RsvpStatus.ATTENDING.value,
        message: str | None = None,
    ) -> Guest:
        """
        Record an RSVP as a new guest of the wedding.

        Args:
            wedding_id: Id from the invitation link
            name: Guest's name as typed
            pax: Number of people in the party (1..RSVP_MAX_PAX)
            status: "attending" or "declined"
            message: Optional wishes for the couple

        Returns:
            The created Guest (category Friend, added_by null)

        Raises:
            InvalidInputError: Malformed id, blank name, pax out of range,
                or unknown status
            NotFoundError: If the wedding doesn't exist
            StorageUnavailableError: If Supabase can't be reached
        """
        wedding_uuid = parse_uuid(wedding_id)
        if wedding_uuid is None:
            raise InvalidInputError(
                "This invitation link is invalid",
                field="wedding_id",
                suggestion="Ask the couple to send the invitation link again",
            )

        # Raises NotFoundError when absent
        wedding = WeddingService.get_wedding(wedding_uuid)

        clean_name = (name or "").strip()
        if not clean_name:
            raise InvalidInputError("Please enter your name", field="name")
        if len(clean_name) > MAX_NAME_LENGTH:
            raise InvalidInputError(
                f"Name must be at most {MAX_NAME_LENGTH} characters",
                field="name",
            )

        max_pax = settings.RSVP_MAX_PAX
        if isinstance(pax, bool) or not isinstance(pax, int) or not 1 <= pax <= max_pax:
            raise InvalidInputError(
                f"Number of guests must be between 1 and {max_pax}",
                field="pax",
            )

        try:
            rsvp_status = RsvpStatus((status or "").strip().lower())
        except ValueError:
            raise InvalidInputError(
                "Please choose whether you will attend",
                field="status",
                suggestion="Use 'attending' or 'declined'",
            )

        clean_message = (message or "").strip() or None

        try:
            row = SupabaseClient.insert_row("guests", {
                "wedding_id": str(wedding.id),
                "name": clean_name,
                "pax": pax,
                "status": GuestStatus(rsvp_status.value).value,
                "category": GuestCategory.FRIEND.value,
                "message": clean_message,
                "added_by": None,
            })
        except SupabaseClientError as e:
            logger.error(f"Failed to save RSVP for wedding {wedding.id}: {e}")
            raise StorageUnavailableError("save your RSVP", str(e))

        logger.info(f"RSVP received for wedding {wedding.id}: {rsvp_status.value}, pax={pax}")
        publish_change(wedding.id, "guests", ChangeEvent.INSERT, row["id"])
        return Guest(**row)

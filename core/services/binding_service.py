# =============================================================================
# core/services/binding_service.py - Partner Binding
# =============================================================================
# Joins a second user to an existing wedding using the wedding id as a code.
#
# Validation runs first and stops at the first failure, before any write:
#   1. code is not blank                       -> InvalidInputError
#   2. code is a UUID                          -> InvalidInputError
#   3. code is not the requester's own wedding -> SelfJoinError
#   4. target wedding exists                   -> NotFoundError
#   5. target has no second partner yet        -> AlreadyFullError
#   6. requester isn't already collaborating   -> AlreadyBoundError
#
# Then the effect phase:
#   a. delete the requester's solo placeholder wedding (best effort: a
#      failure is logged and the join continues)
#   b. set target.partner_two_id with a conditional update
#      (WHERE partner_two_id IS NULL) so concurrent joins can't both win
#
# Any other failure in the effect phase raises BindTransactionError. Calling
# bind() again is safe: validation re-reads the current state.
#
# Known weakness: (a) and (b) are separate requests, not one transaction.
# If (b) fails after (a) succeeded, the requester has no wedding until the
# next resolve() provisions a fresh one. If (a) fails and (b) succeeds, the
# requester belongs to two weddings and every resolve() raises
# DataIntegrityError until the orphaned placeholder is removed by hand.
# =============================================================================

import logging
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid
from core.models.wedding import BindResult, PartnerStatus, Wedding
from core.services.profile_service import ProfileService
from core.services.wedding_service import WeddingService
from app.exceptions import (
    AlreadyBoundError,
    AlreadyFullError,
    BindTransactionError,
    InvalidInputError,
    NotFoundError,
    SelfJoinError,
)
from app.websocket.broadcast import publish_partner_joined

logger = logging.getLogger(__name__)


class BindingService:
    """Service implementing the one-time partner join."""

    @staticmethod
    def bind(
        requesting_user_id: UUID | str,
        current_wedding: Wedding | None,
        target_code: str | None,
    ) -> BindResult:
        """
        Join the wedding identified by target_code as partner two.

        Args:
            requesting_user_id: The user who pasted the code
            current_wedding: The requester's wedding from WeddingService.resolve,
                or None if they have none
            target_code: The partner's wedding id, as typed

        Returns:
            BindResult with the joined wedding and the discarded placeholder id

        Raises:
            InvalidInputError: Blank or malformed code
            SelfJoinError: Code is the requester's own wedding
            NotFoundError: No wedding with this id
            AlreadyFullError: Target already has two partners
            AlreadyBoundError: Requester already shares a wedding with a partner
            BindTransactionError: Writing the join failed; retry the call
        """
        user_id = parse_uuid(requesting_user_id)
        code = (target_code or "").strip()

        if not code:
            raise InvalidInputError(
                "Please enter a valid Wedding ID",
                field="code",
                suggestion="Paste the Wedding ID your partner sent you",
            )

        target_id = parse_uuid(code)
        if target_id is None:
            raise InvalidInputError(
                "That doesn't look like a Wedding ID",
                field="code",
                suggestion="Wedding IDs look like 550e8400-e29b-41d4-a716-446655440000",
            )

        if current_wedding is not None and current_wedding.id == target_id:
            raise SelfJoinError(str(target_id))

        # Raises NotFoundError when absent
        target = WeddingService.get_wedding(target_id)

        if target.has_member(user_id):
            raise SelfJoinError(str(target_id))

        if target.partner_two_id is not None:
            raise AlreadyFullError(str(target_id))

        if current_wedding is not None and current_wedding.is_connected:
            raise AlreadyBoundError(str(current_wedding.id))

        # ---------------------------------------------------------------------
        # Effect phase
        # ---------------------------------------------------------------------
        discarded_id, cleanup_ok = BindingService._discard_placeholder(user_id, current_wedding)

        try:
            row = SupabaseClient.claim_partner_two(str(target_id), str(user_id))
        except SupabaseClientError as e:
            logger.error(f"Failed to join wedding {target_id} for user {user_id}: {e}")
            raise BindTransactionError(str(target_id), str(e))

        if row is None:
            # Lost a race between validation and the conditional update
            BindingService._raise_for_lost_claim(target_id)

        wedding = Wedding(**row)
        logger.info(f"User {user_id} joined wedding {target_id} as partner two")
        publish_partner_joined(wedding.id, user_id)

        return BindResult(
            wedding=wedding,
            discarded_wedding_id=discarded_id,
            cleanup_succeeded=cleanup_ok,
        )

    @staticmethod
    def _discard_placeholder(
        user_id: UUID,
        current_wedding: Wedding | None,
    ) -> tuple[UUID | None, bool]:
        """
        Delete the requester's auto-provisioned solo wedding.

        Only deletes while partner_two_id is still null. Never raises.

        Returns:
            (deleted wedding id or None, whether cleanup succeeded)
        """
        if current_wedding is None or not current_wedding.is_solo_owned_by(user_id):
            return None, True

        try:
            deleted = SupabaseClient.delete_rows(
                "weddings",
                filters={"id": str(current_wedding.id), "partner_two_id": None},
            )
        except SupabaseClientError as e:
            logger.warning(f"Could not delete placeholder wedding {current_wedding.id}: {e}")
            return None, False

        if not deleted:
            logger.warning(
                f"Placeholder wedding {current_wedding.id} was not deleted "
                f"(already gone or no longer solo)"
            )
            return None, False

        logger.info(f"Deleted placeholder wedding {current_wedding.id} of user {user_id}")
        return current_wedding.id, True

    @staticmethod
    def _raise_for_lost_claim(target_id: UUID) -> None:
        """Re-read the target after a failed conditional update and report why."""
        try:
            row = SupabaseClient.fetch_wedding(str(target_id))
        except SupabaseClientError as e:
            raise BindTransactionError(str(target_id), str(e))

        if row is None:
            raise NotFoundError("Wedding", str(target_id))

        logger.warning(f"Join race lost on wedding {target_id}: partner two already set")
        raise AlreadyFullError(str(target_id))

    @staticmethod
    def partner_status(user_id: UUID | str, wedding: Wedding) -> PartnerStatus:
        """Connection state plus the partner's profile, if joined."""
        partner_id = wedding.partner_of(parse_uuid(user_id))
        partner = ProfileService.get_or_empty(partner_id) if partner_id else None

        return PartnerStatus(
            wedding_id=wedding.id,
            is_connected=wedding.is_connected,
            partner=partner,
        )

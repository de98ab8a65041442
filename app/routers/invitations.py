# =============================================================================
# app/routers/invitations.py - Public Invitation Endpoints
# =============================================================================
# The only routes that work without a token. Mounted at the root so the
# shareable link is simply {INVITE_BASE_URL}/invite/{wedding_id}.
#
# Possession of the wedding id is the credential here: these routes never
# expose partner ids or planning data, only date, venue and the RSVP form.
# =============================================================================

import logging

from fastapi import APIRouter, status

from core.models.guest import RsvpConfirmation, RsvpRequest
from core.models.wedding import PublicWeddingDetails
from core.services.rsvp_service import RsvpService
from core.services.wedding_service import WeddingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/invite/{wedding_id}", response_model=PublicWeddingDetails)
async def get_invitation(wedding_id: str):
    """Wedding date and venue for the invitation page."""
    return WeddingService.public_details(wedding_id)


@router.post(
    "/invite/{wedding_id}/rsvp",
    response_model=RsvpConfirmation,
    status_code=status.HTTP_201_CREATED,
)
async def submit_rsvp(wedding_id: str, body: RsvpRequest):
    """
    Answer the invitation.

    Example:
        POST /invite/550e8400-e29b-41d4-a716-446655440000/rsvp
        {"name": "Jane", "pax": 2, "status": "attending", "message": "Congrats!"}
    """
    guest = RsvpService.submit_rsvp(
        wedding_id,
        name=body.name,
        pax=body.pax,
        status=body.status,
        message=body.message,
    )

    return RsvpConfirmation(
        guest_id=guest.id,
        wedding_id=guest.wedding_id,
        status=guest.status.value,
        pax=guest.pax or 1,
    )

# =============================================================================
# app/routers/weddings.py - Wedding & Partner Connection Endpoints
# =============================================================================
# "me" is always the wedding resolved for the caller; there is no endpoint
# that reads another wedding by id except the public invitation page.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CurrentUserDep, CurrentWeddingDep
from core.models.wedding import (
    BindResult,
    InvitationLink,
    JoinRequest,
    PartnerStatus,
    Wedding,
    WeddingUpdate,
)
from core.services.binding_service import BindingService
from core.services.wedding_service import WeddingService

router = APIRouter()


@router.get("/me", response_model=Wedding)
async def get_my_wedding(wedding: CurrentWeddingDep):
    """
    Get the caller's wedding, creating a solo one on first use.

    The id in the response is the code to send to the partner.
    """
    return wedding


@router.patch("/me", response_model=Wedding)
async def update_my_wedding(body: WeddingUpdate, wedding: CurrentWeddingDep):
    """Update date, venue or theme. Either partner may edit."""
    return WeddingService.update_details(wedding, body)


@router.get("/me/partner", response_model=PartnerStatus)
async def get_partner_status(user: CurrentUserDep, wedding: CurrentWeddingDep):
    """Whether a partner has joined, with their profile if so."""
    return BindingService.partner_status(user.id, wedding)


@router.get("/me/invitation", response_model=InvitationLink)
async def get_invitation_link(wedding: CurrentWeddingDep):
    """Shareable RSVP link for guests and the join code for the partner."""
    return WeddingService.invitation_link(wedding)


@router.post("/join", response_model=BindResult)
async def join_wedding(body: JoinRequest, user: CurrentUserDep, wedding: CurrentWeddingDep):
    """
    Join the partner's wedding with their wedding ID.

    The caller's own solo wedding (and anything planned in it) is
    discarded. Fails with 409 if the wedding already has two partners
    or the caller is already connected.

    Example:
        POST /api/v1/weddings/join
        {"code": "550e8400-e29b-41d4-a716-446655440000"}
    """
    return BindingService.bind(user.id, wedding, body.code)

# =============================================================================
# app/routers/guests.py - Guest List Endpoints
# =============================================================================
# Guests added here are attributed to the current partner. Anonymous RSVPs
# arrive through app/routers/invitations.py instead.
# =============================================================================

from app.routers.scoped import scoped_crud_router
from core.services.guest_service import GuestService

router = scoped_crud_router(GuestService)

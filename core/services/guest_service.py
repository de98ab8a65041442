# =============================================================================
# core/services/guest_service.py - Guest Repository
# =============================================================================
# Guests added by a partner carry added_by = that partner. Guests created by
# the public RSVP form go through RsvpService and have added_by = null.
# =============================================================================

from core.models.common import OrderBy
from core.models.guest import Guest, GuestCreate, GuestUpdate
from core.services.scoped_repository import ScopedRepository


class GuestService(ScopedRepository[Guest]):
    """Repository for the guests table, grouped by RSVP status then name."""

    table = "guests"
    resource_name = "Guest"
    record_model = Guest
    create_model = GuestCreate
    update_model = GuestUpdate
    attribution_field = "added_by"
    default_order = (
        OrderBy("status", descending=False),
        OrderBy("name", descending=False),
    )
    sortable_columns = frozenset({
        "name", "status", "category", "pax", "created_at", "updated_at",
    })

# =============================================================================
# core/models/wedding.py - Wedding Aggregate Schemas
# =============================================================================
# A wedding is the unit of collaboration: it binds one or two user accounts
# (partner one = creator, partner two = the partner who joined) and owns
# every planning record (tasks, guests, budget items, vendors, ...).
#
# The wedding id doubles as the code a partner pastes to join, and as the
# credential in the public invitation link.
# =============================================================================

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from .profile import Profile


class Wedding(BaseModel):
    """
    Schema for a wedding aggregate as stored in the weddings table.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "partner_one_id": "0b7c...",
            "partner_two_id": null,
            "wedding_date": "2026-06-20",
            "venue": "Garden Hall",
            "theme": "Rustic"
        }
    """

    id: UUID = Field(..., description="Wedding id, also the invitation code")

    # Creator of the wedding; never changes
    partner_one_id: UUID = Field(..., description="User who created the wedding")

    # Set once, when the second partner joins
    partner_two_id: UUID | None = Field(
        default=None,
        description="User who joined with the wedding code"
    )

    wedding_date: date | None = None
    venue: str | None = None
    theme: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @property
    def is_connected(self) -> bool:
        """True once both partners are bound to this wedding."""
        return self.partner_two_id is not None

    def is_solo_owned_by(self, user_id: UUID) -> bool:
        """True if user_id created this wedding and nobody has joined yet."""
        return self.partner_one_id == user_id and self.partner_two_id is None

    def has_member(self, user_id: UUID) -> bool:
        return user_id in (self.partner_one_id, self.partner_two_id)

    def partner_of(self, user_id: UUID) -> UUID | None:
        """Return the other partner's id, if there is one."""
        if user_id == self.partner_one_id:
            return self.partner_two_id
        if user_id == self.partner_two_id:
            return self.partner_one_id
        return None


class WeddingUpdate(BaseModel):
    """
    Planning attributes either partner may change.

    Partner ids are deliberately absent: they are only written by
    auto-provisioning and by joining.
    """

    wedding_date: date | None = None
    venue: str | None = Field(default=None, max_length=255)
    theme: str | None = Field(default=None, max_length=255)

    model_config = {"extra": "forbid"}


class JoinRequest(BaseModel):
    """Request body for joining a partner's wedding."""

    code: str = Field(
        ...,
        description="The partner's wedding ID",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )


class BindResult(BaseModel):
    """
    Outcome of a successful join.

    Example:
        {
            "wedding": {...},
            "discarded_wedding_id": "7f1c...",
            "message": "You are now connected with your partner"
        }
    """

    wedding: Wedding

    # The requester's auto-provisioned solo wedding that was removed, if any
    discarded_wedding_id: UUID | None = None

    # False when the placeholder delete failed and was skipped
    cleanup_succeeded: bool = True

    message: str = "You are now connected with your partner"


class PartnerStatus(BaseModel):
    """Connection state of the current user's wedding."""

    wedding_id: UUID
    is_connected: bool
    partner: Profile | None = None


class PublicWeddingDetails(BaseModel):
    """What an anonymous invitation visitor is allowed to see."""

    wedding_id: UUID
    wedding_date: date | None = None
    venue: str | None = None


class InvitationLink(BaseModel):
    """Shareable links for the current wedding."""

    wedding_id: UUID
    invite_url: str
    join_code: str

# =============================================================================
# core/models/guest.py - Guest and RSVP Schemas
# =============================================================================
# Guests are added by either partner or by anonymous visitors through the
# public invitation link (RSVP). Anonymous guests have added_by = null.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from .common import PartialUpdate


class GuestStatus(str, Enum):
    """RSVP state of a guest."""
    PENDING = "pending"
    ATTENDING = "attending"
    DECLINED = "declined"


class GuestCategory(str, Enum):
    """Which side of the couple's life the guest comes from."""
    FAMILY = "Family"
    FRIEND = "Friend"
    COLLEAGUE = "Colleague"
    OTHER = "Other"


class Guest(BaseModel):
    """Schema for a guest row."""

    id: UUID
    wedding_id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    category: GuestCategory | None = None
    status: GuestStatus = GuestStatus.PENDING
    pax: int | None = None
    message: str | None = None
    plus_one: bool | None = None
    dietary_restrictions: str | None = None
    # Null when the guest responded through the public invitation link
    added_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GuestCreate(BaseModel):
    """
    Schema for a partner adding a guest.

    Example:
        {"name": "Jane Doe", "email": "jane@example.com", "category": "Friend"}
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    category: GuestCategory | None = None
    status: GuestStatus = GuestStatus.PENDING
    pax: int | None = Field(default=1, ge=1, le=100)
    plus_one: bool | None = None
    dietary_restrictions: str | None = Field(default=None, max_length=500)

    model_config = {"extra": "forbid"}


class GuestUpdate(PartialUpdate):
    """Partial update for a guest."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    category: GuestCategory | None = None
    status: GuestStatus | None = None
    pax: int | None = Field(default=None, ge=1, le=100)
    plus_one: bool | None = None
    dietary_restrictions: str | None = Field(default=None, max_length=500)

    not_null = frozenset({"name", "status"})
    model_config = {"extra": "forbid"}


# =============================================================================
# Public RSVP
# =============================================================================

class RsvpStatus(str, Enum):
    """Answers an invitation visitor can give."""
    ATTENDING = "attending"
    DECLINED = "declined"


class RsvpRequest(BaseModel):
    """
    Body of the public RSVP form.

    pax is taken as sent: type and range checks live in RsvpService so the
    limit follows settings.RSVP_MAX_PAX and failures map to InvalidInputError.

    Example:
        {"name": "Jane", "pax": 2, "status": "attending", "message": "Congrats!"}
    """

    name: str
    pax: Any = 1
    status: str = RsvpStatus.ATTENDING.value
    message: str | None = Field(default=None, max_length=1000)


class RsvpConfirmation(BaseModel):
    """Response after a successful RSVP."""

    guest_id: UUID
    wedding_id: UUID
    status: RsvpStatus
    pax: int
    message: str = "Thank you! Your RSVP has been received."

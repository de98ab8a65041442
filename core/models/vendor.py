# =============================================================================
# core/models/vendor.py - Vendor Schemas
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from .common import PartialUpdate, PlanningCategory


class VendorStatus(str, Enum):
    """
    Where the couple stands with a vendor.

    Flow: contacted -> negotiating -> booked -> paid
    """
    CONTACTED = "contacted"
    NEGOTIATING = "negotiating"
    BOOKED = "booked"
    PAID = "paid"


class Vendor(BaseModel):
    """Schema for a vendors row."""

    id: UUID
    wedding_id: UUID
    name: str
    category: PlanningCategory
    status: VendorStatus = VendorStatus.CONTACTED
    contact_name: str | None = None
    contact_phone: str | None = None
    instagram: str | None = None
    email: str | None = None
    website: str | None = None
    price_range: str | None = None
    notes: str | None = None
    saved_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VendorCreate(BaseModel):
    """
    Schema for saving a vendor.

    Example:
        {"name": "Bloom Florist", "category": "Decoration", "instagram": "@bloom"}
    """

    name: str = Field(..., min_length=1, max_length=255)
    category: PlanningCategory = PlanningCategory.VENUE
    status: VendorStatus = VendorStatus.CONTACTED
    contact_name: str | None = Field(default=None, max_length=255)
    contact_phone: str | None = Field(default=None, max_length=40)
    instagram: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=500)
    price_range: str | None = Field(default=None, max_length=120)
    notes: str | None = Field(default=None, max_length=2000)

    model_config = {"extra": "forbid"}


class VendorUpdate(PartialUpdate):
    """Partial update for a vendor."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: PlanningCategory | None = None
    status: VendorStatus | None = None
    contact_name: str | None = Field(default=None, max_length=255)
    contact_phone: str | None = Field(default=None, max_length=40)
    instagram: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=500)
    price_range: str | None = Field(default=None, max_length=120)
    notes: str | None = Field(default=None, max_length=2000)

    not_null = frozenset({"name", "category", "status"})
    model_config = {"extra": "forbid"}

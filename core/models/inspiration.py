# =============================================================================
# core/models/inspiration.py - Mood Board Schemas
# =============================================================================
# An inspiration is an image in the moodboard bucket plus a category and a
# short note. The row stores the image's public URL.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from .common import PartialUpdate


class InspirationCategory(str, Enum):
    GENERAL = "General"
    DECORATION = "Decoration"
    ATTIRE = "Attire"
    VENUE = "Venue"
    FLOWERS = "Flowers"
    CAKE = "Cake"
    OTHER = "Other"


class Inspiration(BaseModel):
    """Schema for an inspirations row."""

    id: UUID
    wedding_id: UUID
    image_url: str
    category: InspirationCategory = InspirationCategory.GENERAL
    note: str | None = None
    saved_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class InspirationCreate(BaseModel):
    """Row written after the image upload succeeds."""

    image_url: str = Field(..., min_length=1)
    category: InspirationCategory = InspirationCategory.GENERAL
    note: str | None = Field(default=None, max_length=1000)

    model_config = {"extra": "forbid"}


class InspirationUpdate(PartialUpdate):
    """Only the caption fields can change; the image is immutable."""

    category: InspirationCategory | None = None
    note: str | None = Field(default=None, max_length=1000)

    not_null = frozenset({"category"})
    model_config = {"extra": "forbid"}

# =============================================================================
# core/models/profile.py - User Profile Schemas
# =============================================================================
# Profiles live in the public.profiles table, keyed by the Supabase Auth
# user id. They are the only table without a wedding_id.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Profile(BaseModel):
    """Display information for a user."""

    id: UUID
    full_name: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""

    full_name: str | None = Field(default=None, min_length=1, max_length=120)

    model_config = {"extra": "forbid"}

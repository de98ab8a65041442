# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, File, UploadFile

from app.dependencies import CurrentUserDep
from core.models.profile import Profile, ProfileUpdate
from core.services.profile_service import ProfileService

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(user: CurrentUserDep):
    """Get the caller's profile (empty fields if none saved yet)."""
    return ProfileService.get_or_empty(user.id)


@router.patch("", response_model=Profile)
async def update_profile(body: ProfileUpdate, user: CurrentUserDep):
    """Update the caller's display name."""
    return ProfileService.update_profile(user.id, body)


@router.post("/avatar", response_model=Profile)
async def upload_avatar(
    user: CurrentUserDep,
    file: Annotated[UploadFile, File(description="Image file (jpg, png, webp, gif)")],
):
    """Upload a new avatar image and set it on the profile."""
    content = await file.read()
    return ProfileService.upload_avatar(user.id, file.filename or "", content, file.content_type)

# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for the token user and the sign-up / login proxies.
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    Only what the token carries; the profile lives in the profiles table.
    """
    id: UUID
    email: Optional[str] = None

    model_config = {"frozen": True}


class UserResponse(BaseModel):
    """Current user with profile fields, returned by /auth/me."""
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    full_name: Optional[str] = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionTokens(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: Optional[int] = None
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    """
    Result of sign-up or login.

    session is null after sign-up when the project requires email
    confirmation.
    """
    user_id: Optional[UUID] = None
    email: Optional[str] = None
    session: Optional[SessionTokens] = None

# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Thin proxies over Supabase Auth (sign-up, login, logout) plus endpoints
# to inspect the current token. The mobile/web client may also talk to
# Supabase Auth directly; both paths produce the same JWTs.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from app.auth.dependencies import get_current_user, security
from app.auth.models import AuthResponse, AuthUser, LoginRequest, SignupRequest, UserResponse
from core.services.profile_service import ProfileService
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest) -> AuthResponse:
    """
    Create an account.

    The wedding is not created here; it is provisioned on the first
    authenticated request.
    """
    try:
        result = SupabaseClient.sign_up(body.email, body.password, body.full_name)
    except SupabaseClientError as e:
        logger.warning(f"Sign-up rejected for {body.email}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.suggestion or "Sign-up failed")

    logger.info(f"User signed up: {result['user_id']}")
    return AuthResponse(**result)


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    """Sign in with email and password."""
    try:
        result = SupabaseClient.sign_in(body.email, body.password)
    except SupabaseClientError as e:
        logger.warning(f"Login rejected for {body.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return AuthResponse(**result)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    user: AuthUser = Depends(get_current_user),
) -> None:
    """Revoke the current session's refresh tokens."""
    try:
        SupabaseClient.sign_out(credentials.credentials)
    except SupabaseClientError as e:
        logger.error(f"Logout failed for user {user.id}: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Logout failed")

    logger.info(f"User logged out: {user.id}")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current user with their profile.

    Falls back to the token fields when the profile row can't be loaded.
    """
    profile = ProfileService.get_or_empty(user.id)

    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=profile.full_name,
        avatar_url=profile.avatar_url,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Check that a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }

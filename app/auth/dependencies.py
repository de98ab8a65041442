# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Verifies Supabase-issued access tokens and yields the current user.
#
# Supports both signing schemes a Supabase project can use:
# - ES256 (asymmetric signing keys), public keys fetched from the project's
#   JWKS endpoint and cached for an hour
# - HS256 (legacy shared secret, SUPABASE_JWT_SECRET)
#
# decode_access_token() is shared with the WebSocket route, which receives
# the token as a query parameter instead of a header.
# =============================================================================

import logging
import time
from typing import Any
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError

from app.config import settings
from app.auth.models import AuthUser

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()

TOKEN_AUDIENCE = "authenticated"

# Cache for JWKS keys
_jwks_cache: dict[str, Any] = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


class InvalidTokenError(Exception):
    """Raised when an access token can't be verified. Message is client-safe."""


def _get_jwks_url() -> str:
    return f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict[str, Any]:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        response = httpx.get(_get_jwks_url(), timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug("Fetched JWKS for token verification")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        return _jwks_cache or {"keys": []}


# Asymmetric algorithms Supabase signing keys use
ASYMMETRIC_ALGORITHMS = frozenset({"ES256", "RS256"})


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Pick the verification key for a token from its header.

    The header's alg decides the scheme; there is no fallback between
    schemes, and HS256 is refused outright when no secret is configured.

    Returns:
        Tuple of (key, algorithm) to use for verification

    Raises:
        InvalidTokenError: No usable key for the token's algorithm
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        raise InvalidTokenError("Invalid token")

    alg = header.get("alg")
    kid = header.get("kid")

    if alg == "HS256":
        if not settings.SUPABASE_JWT_SECRET:
            logger.warning("Rejected HS256 token: SUPABASE_JWT_SECRET is not configured")
            raise InvalidTokenError("Invalid token")
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if alg in ASYMMETRIC_ALGORITHMS and kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"No signing key for alg={alg}, kid={kid}")
    raise InvalidTokenError("Invalid token")


def decode_access_token(token: str) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Args:
        token: Raw JWT string

    Returns:
        AuthUser with the token's subject and email

    Raises:
        InvalidTokenError: Expired, badly signed, or missing a valid subject
    """
    if not token:
        raise InvalidTokenError("Missing token")

    try:
        signing_key, algorithm = _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
    except ExpiredSignatureError:
        raise InvalidTokenError("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise InvalidTokenError("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise InvalidTokenError("Invalid token: malformed user ID")

    return AuthUser(id=user_uuid, email=payload.get("email"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    try:
        user = decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"Authenticated user: {user.id}")
    return user

# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for the authenticated user and wedding.
# These are injected into route handlers using Depends().
#
# get_current_wedding is the single place where "which wedding does this
# request act on" is decided. Every scoped router takes CurrentWeddingDep
# and passes wedding.id to its repository.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from core.models.wedding import Wedding
from core.services.wedding_service import WeddingService


def get_current_wedding(user: AuthUser = Depends(get_current_user)) -> Wedding:
    """
    Resolve the authenticated user's wedding, provisioning it on first use.

    Raises:
        DataIntegrityError: If the user belongs to several weddings
        StorageUnavailableError: If Supabase can't be reached
    """
    return WeddingService.resolve(user.id)


# Type aliases for dependency injection
CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]
CurrentWeddingDep = Annotated[Wedding, Depends(get_current_wedding)]

# =============================================================================
# app/routers/notes.py - Shared Notes Endpoints
# =============================================================================

from app.routers.scoped import scoped_crud_router
from core.services.message_service import NoteService

router = scoped_crud_router(NoteService)

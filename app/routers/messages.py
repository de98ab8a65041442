# =============================================================================
# app/routers/messages.py - Couple Chat Endpoints
# =============================================================================
# Messages list oldest first. New messages are pushed to the other partner
# through the change feed ("messages" table).
# =============================================================================

from fastapi import status

from app.dependencies import CurrentUserDep, CurrentWeddingDep
from app.routers.scoped import scoped_crud_router
from core.models.message import Message, MessageCreate
from core.services.message_service import MessageService

router = scoped_crud_router(MessageService, include_create=False)


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageCreate,
    wedding: CurrentWeddingDep,
    user: CurrentUserDep,
):
    """Send a chat message as the current partner."""
    return MessageService.send(wedding.id, user.id, body.content)

# =============================================================================
# core/services/message_service.py - Couple Chat and Shared Notes
# =============================================================================
# Messages read oldest first like a chat log; notes newest first like a
# notebook. Both belong to the wedding, so either partner can edit or delete
# either kind.
# =============================================================================

from __future__ import annotations

from uuid import UUID

from core.models.common import OrderBy
from core.models.message import (
    Message,
    MessageCreate,
    MessageUpdate,
    Note,
    NoteCreate,
    NoteUpdate,
)
from core.services.scoped_repository import ScopedRepository


class MessageService(ScopedRepository[Message]):
    """Repository for the messages table."""

    table = "messages"
    resource_name = "Message"
    record_model = Message
    create_model = MessageCreate
    update_model = MessageUpdate
    attribution_field = "sender_id"
    default_order = (OrderBy("created_at", descending=False),)

    @classmethod
    def send(cls, wedding_id: UUID | str, sender_id: UUID | str, content: str) -> Message:
        """
        Post a chat message. Content is trimmed; blank content is rejected.

        Raises:
            InvalidInputError: If content is empty after trimming
        """
        return cls.create(wedding_id, sender_id, {"content": content})


class NoteService(ScopedRepository[Note]):
    """Repository for the notes table."""

    table = "notes"
    resource_name = "Note"
    record_model = Note
    create_model = NoteCreate
    update_model = NoteUpdate
    attribution_field = "author_id"
    default_order = (OrderBy("created_at", descending=True),)

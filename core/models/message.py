# =============================================================================
# core/models/message.py - Couple Chat and Shared Notes Schemas
# =============================================================================
# Messages are the private chat between the two partners; notes are a
# shared scratchpad. Both are plain text scoped to the wedding.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import PartialUpdate


class Message(BaseModel):
    """Schema for a messages row."""

    id: UUID
    wedding_id: UUID
    sender_id: UUID | None = None
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageCreate(BaseModel):
    """
    Schema for sending a chat message.

    Example:
        {"content": "Did you call the caterer?"}
    """

    content: str = Field(..., max_length=4000)

    model_config = {"extra": "forbid"}

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value


class MessageUpdate(PartialUpdate):
    """Edit the text of a message."""

    content: str | None = Field(default=None, max_length=4000)

    not_null = frozenset({"content"})
    model_config = {"extra": "forbid"}

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value


class Note(BaseModel):
    """Schema for a notes row."""

    id: UUID
    wedding_id: UUID
    author_id: UUID | None = None
    content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=10000)

    model_config = {"extra": "forbid"}


class NoteUpdate(PartialUpdate):
    content: str | None = Field(default=None, min_length=1, max_length=10000)

    not_null = frozenset({"content"})
    model_config = {"extra": "forbid"}

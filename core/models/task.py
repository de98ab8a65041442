# =============================================================================
# core/models/task.py - Task Schemas
# =============================================================================
# Planning to-dos shared by both partners. A task is complete when its
# status is "completed"; completed_at records when that happened and drives
# the default ordering (incomplete first, then soonest due date).
# =============================================================================

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from .common import PartialUpdate, PlanningCategory


class TaskStatus(str, Enum):
    """
    Possible states for a task.

    Flow: pending -> in_progress -> completed (toggle can reopen to pending)
    """
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Task(BaseModel):
    """Schema for a task row."""

    id: UUID
    wedding_id: UUID
    title: str
    description: str | None = None
    category: PlanningCategory | None = None
    status: TaskStatus = TaskStatus.PENDING
    due_date: date | None = None
    assigned_to: UUID | None = None
    created_by: UUID | None = None
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskCreate(BaseModel):
    """
    Schema for creating a task.

    Example:
        {
            "title": "Book the photographer",
            "category": "Photography",
            "due_date": "2026-03-01"
        }
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    category: PlanningCategory | None = None
    status: TaskStatus = TaskStatus.PENDING
    due_date: date | None = None
    # Either partner's user id, or null for unassigned
    assigned_to: UUID | None = None

    model_config = {"extra": "forbid"}


class TaskUpdate(PartialUpdate):
    """Partial update for a task. Only provided fields are written."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    category: PlanningCategory | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    assigned_to: UUID | None = None

    not_null = frozenset({"title", "status"})
    model_config = {"extra": "forbid"}

# =============================================================================
# core/services/task_service.py - Task Repository
# =============================================================================
# Tasks are listed incomplete-first (completed_at null sorts first), then by
# soonest due date. completed_at is derived from status whenever the status
# changes so the two never disagree.
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from core.models.common import OrderBy
from core.models.task import Task, TaskCreate, TaskStatus, TaskUpdate
from core.services.scoped_repository import ScopedRepository

logger = logging.getLogger(__name__)


class TaskService(ScopedRepository[Task]):
    """Repository for the tasks table."""

    table = "tasks"
    resource_name = "Task"
    record_model = Task
    create_model = TaskCreate
    update_model = TaskUpdate
    attribution_field = "created_by"
    default_order = (
        OrderBy("completed_at", descending=False, nulls_first=True),
        OrderBy("due_date", descending=False),
    )
    sortable_columns = frozenset({
        "title", "status", "category", "due_date", "completed_at", "created_at", "updated_at",
    })

    @classmethod
    def toggle_task(cls, wedding_id: UUID | str, task_id: UUID | str) -> Task:
        """
        Flip a task between completed and pending.

        Clients show the new state immediately and reconcile with the next
        list call, so the result here is authoritative.

        Raises:
            NotFoundError: If the task isn't in this wedding
        """
        task = cls.get(wedding_id, task_id)
        new_status = TaskStatus.PENDING if task.is_completed else TaskStatus.COMPLETED

        logger.info(f"Toggling task {task.id}: {task.status.value} -> {new_status.value}")
        return cls.update(wedding_id, task.id, TaskUpdate(status=new_status))

    @classmethod
    def _prepare_create(cls, data: dict[str, Any]) -> dict[str, Any]:
        return _with_completed_at(data)

    @classmethod
    def _prepare_update(
        cls,
        wedding_id: UUID | str,
        item_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        if "status" not in data:
            return data

        # Re-sending the current status keeps the original completion time
        current = cls.get(wedding_id, item_id)
        if current.status.value == data["status"]:
            return data
        return _with_completed_at(data)


def _with_completed_at(data: dict[str, Any]) -> dict[str, Any]:
    if data.get("status") == TaskStatus.COMPLETED.value:
        data["completed_at"] = datetime.now(timezone.utc).isoformat()
    else:
        data["completed_at"] = None
    return data

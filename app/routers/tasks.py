# =============================================================================
# app/routers/tasks.py - Task Endpoints
# =============================================================================
# Standard CRUD plus the completion toggle used by the checklist screen.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import Path

from app.dependencies import CurrentWeddingDep
from app.routers.scoped import scoped_crud_router
from core.models.task import Task
from core.services.task_service import TaskService

router = scoped_crud_router(TaskService)


@router.post("/{item_id}/toggle", response_model=Task)
async def toggle_task(
    item_id: Annotated[UUID, Path(description="Task UUID")],
    wedding: CurrentWeddingDep,
):
    """
    Flip a task between completed and pending.

    The app updates the checkbox immediately and reconciles with this
    response (and the change feed) afterwards.
    """
    return TaskService.toggle_task(wedding.id, item_id)

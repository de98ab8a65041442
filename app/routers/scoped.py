# =============================================================================
# app/routers/scoped.py - CRUD Routes for Wedding-Scoped Entities
# =============================================================================
# Builds the list/get/create/update/delete endpoints shared by tasks, guests,
# budget items, vendors, inspirations, messages and notes.
#
# Every endpoint takes the current wedding from the resolver dependency and
# hands wedding.id to the entity's repository; nothing here filters rows.
#
#   GET    ""            list (degrades to items=[] plus warning)
#   POST   ""            create
#   GET    "/{item_id}"  get
#   PATCH  "/{item_id}"  update provided fields
#   DELETE "/{item_id}"  delete (204)
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, status
from pydantic import BaseModel

from app.dependencies import CurrentUserDep, CurrentWeddingDep
from app.exceptions import InvalidInputError
from core.models.common import ItemList, OrderBy
from core.services.scoped_repository import ScopedRepository


def parse_order(raw: str | None) -> list[OrderBy] | None:
    """
    Parse ?order=-due_date,title into OrderBy items.

    Returns None for a missing parameter (repository default order).
    """
    if raw is None or not raw.strip():
        return None

    order = [OrderBy.parse(part) for part in raw.split(",") if part.strip()]
    if any(not item.column for item in order):
        raise InvalidInputError("Invalid order parameter", field="order")
    return order


def scoped_crud_router(
    service: type[ScopedRepository],
    *,
    include_create: bool = True,
) -> APIRouter:
    """
    Create an APIRouter with the standard endpoints for one repository.

    Args:
        service: ScopedRepository subclass (e.g. TaskService)
        include_create: False when the router defines its own POST ""

    Returns:
        APIRouter to extend with entity-specific routes and mount in main.py
    """
    router = APIRouter()
    record_model: type[BaseModel] = service.record_model
    create_model: type[BaseModel] = service.create_model
    update_model: type[BaseModel] = service.update_model
    resource = service.resource_name.lower()

    @router.get("", response_model=ItemList[record_model])
    async def list_items(
        wedding: CurrentWeddingDep,
        order: Annotated[
            str | None,
            Query(description="Comma-separated columns; prefix with '-' for descending")
        ] = None,
    ):
        items, warning = service.list_or_warn(wedding.id, order=parse_order(order))
        return ItemList[record_model](items=items, total=len(items), warning=warning)

    if include_create:
        @router.post("", response_model=record_model, status_code=status.HTTP_201_CREATED)
        async def create_item(
            body: create_model,
            wedding: CurrentWeddingDep,
            user: CurrentUserDep,
        ):
            return service.create(wedding.id, user.id, body)

    @router.get("/{item_id}", response_model=record_model)
    async def get_item(
        item_id: Annotated[UUID, Path(description=f"{service.resource_name} UUID")],
        wedding: CurrentWeddingDep,
    ):
        return service.get(wedding.id, item_id)

    @router.patch("/{item_id}", response_model=record_model)
    async def update_item(
        item_id: Annotated[UUID, Path(description=f"{service.resource_name} UUID")],
        body: update_model,
        wedding: CurrentWeddingDep,
    ):
        return service.update(wedding.id, item_id, body)

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_item(
        item_id: Annotated[UUID, Path(description=f"{service.resource_name} UUID")],
        wedding: CurrentWeddingDep,
    ):
        service.delete(wedding.id, item_id)

    list_items.__doc__ = f"List the wedding's {resource} entries."
    get_item.__doc__ = f"Get one {resource}."
    update_item.__doc__ = f"Update a {resource}. Only provided fields change."
    delete_item.__doc__ = f"Permanently delete a {resource}."

    return router

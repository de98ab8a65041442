# =============================================================================
# core/models/budget.py - Budget Item Schemas
# =============================================================================
# Costs are Decimal end to end. Negative amounts are rejected here so the
# repositories never store them.
# =============================================================================

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from .common import PartialUpdate, PlanningCategory


class BudgetStatus(str, Enum):
    """
    Payment state of a budget line.

    Flow: planned -> booked -> paid
    """
    PLANNED = "planned"
    BOOKED = "booked"
    PAID = "paid"


class BudgetItem(BaseModel):
    """Schema for a budget_items row."""

    id: UUID
    wedding_id: UUID
    item_name: str
    category: PlanningCategory
    estimated_cost: Decimal | None = None
    actual_cost: Decimal | None = None
    status: BudgetStatus = BudgetStatus.PLANNED
    paid_by: UUID | None = None
    notes: str | None = None
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def effective_cost(self) -> Decimal:
        """Actual cost once known, otherwise the estimate."""
        if self.actual_cost is not None:
            return self.actual_cost
        return self.estimated_cost or Decimal("0")


class BudgetItemCreate(BaseModel):
    """
    Schema for adding a budget line.

    Example:
        {"item_name": "Venue deposit", "category": "Venue", "estimated_cost": "15000000"}
    """

    item_name: str = Field(..., min_length=1, max_length=255)
    category: PlanningCategory
    estimated_cost: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    actual_cost: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    status: BudgetStatus = BudgetStatus.PLANNED
    paid_by: UUID | None = None
    notes: str | None = Field(default=None, max_length=2000)

    model_config = {"extra": "forbid"}


class BudgetItemUpdate(PartialUpdate):
    """Partial update for a budget line."""

    item_name: str | None = Field(default=None, min_length=1, max_length=255)
    category: PlanningCategory | None = None
    estimated_cost: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    actual_cost: Decimal | None = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    status: BudgetStatus | None = None
    paid_by: UUID | None = None
    notes: str | None = Field(default=None, max_length=2000)

    not_null = frozenset({"item_name", "category", "status"})
    model_config = {"extra": "forbid"}

# =============================================================================
# core/models/dashboard.py - Dashboard Summary Schemas
# =============================================================================
# Read-only aggregate computed from the wedding's tasks, guests and budget.
# =============================================================================

from decimal import Decimal

from pydantic import BaseModel, Field

from .task import Task
from .wedding import Wedding


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    # Due today and not yet completed
    due_today: int = 0
    next_task: Task | None = Field(
        default=None,
        description="Incomplete task with the nearest due date"
    )


class GuestStats(BaseModel):
    # Number of guest rows (parties invited)
    invited: int = 0
    # Sum of pax over attending guests; a missing pax counts as one person
    attending_pax: int = 0


class BudgetStats(BaseModel):
    estimated_total: Decimal = Decimal("0")
    paid_total: Decimal = Decimal("0")


class DashboardSummary(BaseModel):
    """
    Everything the home screen shows in one response.

    Example:
        {
            "display_name": "Rina",
            "days_left": 120,
            "tasks": {"total": 12, "completed": 5, "due_today": 1, "next_task": {...}},
            "guests": {"invited": 80, "attending_pax": 143},
            "budget": {"estimated_total": "85000000", "paid_total": "20000000"}
        }
    """

    display_name: str | None = None
    wedding: Wedding
    days_left: int | None = Field(
        default=None,
        ge=0,
        description="Days until the wedding date; 0 once it has passed"
    )
    tasks: TaskStats = Field(default_factory=TaskStats)
    guests: GuestStats = Field(default_factory=GuestStats)
    budget: BudgetStats = Field(default_factory=BudgetStats)
    warnings: list[str] = Field(default_factory=list)

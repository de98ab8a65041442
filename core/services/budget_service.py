# =============================================================================
# core/services/budget_service.py - Budget Item Repository
# =============================================================================

from core.models.budget import BudgetItem, BudgetItemCreate, BudgetItemUpdate
from core.models.common import OrderBy
from core.services.scoped_repository import ScopedRepository


class BudgetService(ScopedRepository[BudgetItem]):
    """Repository for the budget_items table, newest first."""

    table = "budget_items"
    resource_name = "Budget item"
    record_model = BudgetItem
    create_model = BudgetItemCreate
    update_model = BudgetItemUpdate
    attribution_field = "created_by"
    default_order = (OrderBy("created_at", descending=True),)
    sortable_columns = frozenset({
        "item_name", "category", "status", "estimated_cost", "actual_cost",
        "created_at", "updated_at",
    })

# =============================================================================
# app/routers/budget.py - Budget Endpoints
# =============================================================================

from app.routers.scoped import scoped_crud_router
from core.services.budget_service import BudgetService

router = scoped_crud_router(BudgetService)

# =============================================================================
# app/routers/dashboard.py - Home Screen Endpoint
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CurrentUserDep, CurrentWeddingDep
from core.models.dashboard import DashboardSummary
from core.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(user: CurrentUserDep, wedding: CurrentWeddingDep):
    """
    Countdown, task progress, guest count and budget totals in one call.

    Sources that fail to load are reported in `warnings` and count as empty.
    """
    return DashboardService.summary(user.id, wedding)

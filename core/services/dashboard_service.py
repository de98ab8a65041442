# =============================================================================
# core/services/dashboard_service.py - Home Screen Summary
# =============================================================================
# Computes the dashboard numbers from the wedding's tasks, guests and budget
# in one call. Each source is read with list_or_warn, so one unreachable
# table shows as zeros plus a warning instead of failing the whole screen.
# =============================================================================

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from core.models.budget import BudgetItem, BudgetStatus
from core.models.dashboard import BudgetStats, DashboardSummary, GuestStats, TaskStats
from core.models.guest import Guest, GuestStatus
from core.models.task import Task
from core.models.wedding import Wedding
from core.services.budget_service import BudgetService
from core.services.guest_service import GuestService
from core.services.profile_service import ProfileService
from core.services.task_service import TaskService
from app.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class DashboardService:
    """Service building the DashboardSummary read model."""

    @staticmethod
    def summary(
        user_id: UUID | str,
        wedding: Wedding,
        today: date | None = None,
    ) -> DashboardSummary:
        """
        Build the dashboard for the current user.

        Args:
            user_id: The authenticated user (for the greeting)
            wedding: The resolved wedding
            today: Reference date, defaults to date.today()

        Returns:
            DashboardSummary with any degraded sources listed in warnings
        """
        today = today or date.today()
        warnings: list[str] = []

        display_name = None
        try:
            profile = ProfileService.get_profile(user_id)
            display_name = profile.full_name if profile else None
        except StorageUnavailableError as e:
            warnings.append(e.message)

        tasks, warning = TaskService.list_or_warn(wedding.id)
        if warning:
            warnings.append(warning)
        guests, warning = GuestService.list_or_warn(wedding.id)
        if warning:
            warnings.append(warning)
        budget_items, warning = BudgetService.list_or_warn(wedding.id)
        if warning:
            warnings.append(warning)

        return DashboardSummary(
            display_name=display_name,
            wedding=wedding,
            days_left=days_until(wedding.wedding_date, today),
            tasks=task_stats(tasks, today),
            guests=guest_stats(guests),
            budget=budget_stats(budget_items),
            warnings=warnings,
        )


def days_until(wedding_date: date | None, today: date) -> int | None:
    """Days from today to the wedding, clamped at 0. None if no date is set."""
    if wedding_date is None:
        return None
    return max((wedding_date - today).days, 0)


def task_stats(tasks: list[Task], today: date) -> TaskStats:
    open_tasks = [task for task in tasks if not task.is_completed]
    upcoming = sorted(
        (task for task in open_tasks if task.due_date is not None),
        key=lambda task: task.due_date,
    )

    return TaskStats(
        total=len(tasks),
        completed=len(tasks) - len(open_tasks),
        due_today=sum(1 for task in open_tasks if task.due_date == today),
        next_task=upcoming[0] if upcoming else None,
    )


def guest_stats(guests: list[Guest]) -> GuestStats:
    return GuestStats(
        invited=len(guests),
        attending_pax=sum(
            guest.pax or 1 for guest in guests if guest.status == GuestStatus.ATTENDING
        ),
    )


def budget_stats(items: list[BudgetItem]) -> BudgetStats:
    estimated = sum((item.estimated_cost or Decimal("0") for item in items), Decimal("0"))
    paid = sum(
        (item.effective_cost for item in items if item.status == BudgetStatus.PAID),
        Decimal("0"),
    )
    return BudgetStats(estimated_total=estimated, paid_total=paid)

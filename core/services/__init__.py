# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .wedding_service import WeddingService
from .binding_service import BindingService
from .profile_service import ProfileService
from .storage_service import StorageService
from .scoped_repository import ScopedRepository
from .task_service import TaskService
from .guest_service import GuestService
from .budget_service import BudgetService
from .vendor_service import VendorService
from .inspiration_service import InspirationService
from .message_service import MessageService, NoteService
from .rsvp_service import RsvpService
from .dashboard_service import DashboardService
from .notification_service import NotificationService

__all__ = [
    "WeddingService",
    "BindingService",
    "ProfileService",
    "StorageService",
    "ScopedRepository",
    "TaskService",
    "GuestService",
    "BudgetService",
    "VendorService",
    "InspirationService",
    "MessageService",
    "NoteService",
    "RsvpService",
    "DashboardService",
    "NotificationService",
]

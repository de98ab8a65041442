# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: shared enums, ordering and list envelope
# - wedding.py: Wedding aggregate, join request/result, invitation link
# - profile.py: User profile
# - task.py, guest.py, budget.py, vendor.py, inspiration.py, message.py:
#   wedding-scoped planning records (read model + create/update payloads)
# - notification.py: per-user notifications
# - dashboard.py: Home screen summary
#
# Create/update payloads forbid unknown fields and use closed enums, so bad
# input is rejected before it reaches the database.
# =============================================================================

# -----------------------------------------------------------------------------
# Shared
# -----------------------------------------------------------------------------
from .common import ItemList, OrderBy, PlanningCategory

# -----------------------------------------------------------------------------
# Wedding Aggregate & Profile
# -----------------------------------------------------------------------------
from .profile import Profile, ProfileUpdate
from .wedding import (
    BindResult,
    InvitationLink,
    JoinRequest,
    PartnerStatus,
    PublicWeddingDetails,
    Wedding,
    WeddingUpdate,
)

# -----------------------------------------------------------------------------
# Scoped Entities
# -----------------------------------------------------------------------------
from .task import Task, TaskCreate, TaskStatus, TaskUpdate
from .guest import (
    Guest,
    GuestCategory,
    GuestCreate,
    GuestStatus,
    GuestUpdate,
    RsvpConfirmation,
    RsvpRequest,
    RsvpStatus,
)
from .budget import BudgetItem, BudgetItemCreate, BudgetItemUpdate, BudgetStatus
from .vendor import Vendor, VendorCreate, VendorStatus, VendorUpdate
from .inspiration import (
    Inspiration,
    InspirationCategory,
    InspirationCreate,
    InspirationUpdate,
)
from .message import (
    Message,
    MessageCreate,
    MessageUpdate,
    Note,
    NoteCreate,
    NoteUpdate,
)

# -----------------------------------------------------------------------------
# Read Models
# -----------------------------------------------------------------------------
from .notification import Notification, NotificationList
from .dashboard import BudgetStats, DashboardSummary, GuestStats, TaskStats

__all__ = [
    # Shared
    "ItemList",
    "OrderBy",
    "PlanningCategory",
    # Wedding / Profile
    "BindResult",
    "InvitationLink",
    "JoinRequest",
    "PartnerStatus",
    "Profile",
    "ProfileUpdate",
    "PublicWeddingDetails",
    "Wedding",
    "WeddingUpdate",
    # Tasks
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
    # Guests / RSVP
    "Guest",
    "GuestCategory",
    "GuestCreate",
    "GuestStatus",
    "GuestUpdate",
    "RsvpConfirmation",
    "RsvpRequest",
    "RsvpStatus",
    # Budget
    "BudgetItem",
    "BudgetItemCreate",
    "BudgetItemUpdate",
    "BudgetStatus",
    # Vendors
    "Vendor",
    "VendorCreate",
    "VendorStatus",
    "VendorUpdate",
    # Mood board
    "Inspiration",
    "InspirationCategory",
    "InspirationCreate",
    "InspirationUpdate",
    # Chat / Notes
    "Message",
    "MessageCreate",
    "MessageUpdate",
    "Note",
    "NoteCreate",
    "NoteUpdate",
    # Read models
    "BudgetStats",
    "DashboardSummary",
    "GuestStats",
    "Notification",
    "NotificationList",
    "TaskStats",
]

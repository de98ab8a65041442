# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - weddings.py: Current wedding, partner status, join, invitation link
# - tasks.py, guests.py, budget.py, vendors.py, inspirations.py,
#   messages.py, notes.py: wedding-scoped CRUD (built by scoped.py)
# - dashboard.py: Home screen summary
# - profile.py: Profile and avatar
# - notifications.py: Per-user notifications
# - invitations.py: Public invitation page and RSVP (no auth)
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import weddings
from . import tasks
from . import guests
from . import budget
from . import vendors
from . import inspirations
from . import messages
from . import notes
from . import dashboard
from . import profile
from . import notifications
from . import invitations

__all__ = [
    "health",
    "weddings",
    "tasks",
    "guests",
    "budget",
    "vendors",
    "inspirations",
    "messages",
    "notes",
    "dashboard",
    "profile",
    "notifications",
    "invitations",
]

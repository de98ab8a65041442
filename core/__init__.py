# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the planning logic:
# - models/: Pydantic schemas for data validation
# - services/: Wedding resolution, partner binding, scoped repositories,
#   RSVP intake, dashboard and notifications
#
# Database access goes through lib.supabase_client; route handlers in app/
# only translate HTTP to service calls.
# =============================================================================

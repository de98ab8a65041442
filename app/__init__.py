# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, middleware setup, error handlers, Redis listener
# - config.py: Environment variable loading and settings
# - exceptions.py: Error taxonomy and JSON error responses
# - auth/: Supabase token verification and auth proxy endpoints
# - routers/: API endpoint definitions organized by feature
# - websocket/: Realtime change feed per wedding
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Wedding Planner API:
# - test_models.py: Pydantic model validation
# - test_wedding_service.py, test_binding_service.py: wedding resolution
#   and partner joining
# - test_repositories.py, test_rsvp.py, test_dashboard.py: scoped data
# - test_websocket_manager.py, test_auth.py: change feed and tokens
# - test_routes.py: HTTP endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================

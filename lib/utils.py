# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def parse_uuid(value: str | UUID | None) -> UUID | None:
    """
    Parse a value into a UUID, returning None when it isn't one.

    Wedding ids double as invitation codes that users paste by hand,
    so callers need a non-raising shape check.

    Example:
        parse_uuid(" 550e8400-e29b-41d4-a716-446655440000 ")  # UUID(...)
        parse_uuid("not-a-code")  # None
    """
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value.strip())
    except (ValueError, AttributeError):
        return None

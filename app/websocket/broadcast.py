# =============================================================================
# app/websocket/broadcast.py - Change Feed Publishing
# =============================================================================
# Services call publish_change() after every successful write. Events go to
# a Redis pub/sub channel so that every API process (not just the one that
# handled the write) can fan them out to its WebSocket subscribers.
#
# Events only say WHAT changed, never the new state: clients react by
# re-running the matching list call.
#
# Event shape:
#   {"wedding_id": "...", "type": "change", "table": "tasks",
#    "event": "update", "record_id": "..."}
# =============================================================================

import json
import logging
from enum import Enum
from typing import Any
from uuid import UUID

logger = logging.getLogger(__name__)

# Redis channel for change events
CHANGE_CHANNEL = "weddingplanner:changes"


class ChangeEvent(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


def get_redis_client():
    """Get a Redis client for pub/sub operations."""
    import redis
    from app.config import settings
    return redis.from_url(settings.REDIS_URL)


def publish_event(wedding_id: str | UUID, event_type: str, data: dict[str, Any]) -> bool:
    """
    Publish an event that will be broadcast to WebSocket subscribers.

    Failures are logged and reported through the return value; a missing
    notification must never fail the write that triggered it.

    Args:
        wedding_id: The wedding whose subscribers should be notified
        event_type: Event type (currently always "change")
        data: Event data to include

    Returns:
        bool: True if published successfully
    """
    try:
        client = get_redis_client()

        message = json.dumps({
            "wedding_id": str(wedding_id),
            "type": event_type,
            **data
        })

        client.publish(CHANGE_CHANNEL, message)

        logger.debug(f"Published {event_type} event for wedding {wedding_id}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish event: {e}")
        return False


def publish_change(
    wedding_id: str | UUID,
    table: str,
    event: ChangeEvent,
    record_id: str | UUID | None = None,
) -> bool:
    """
    Publish a row-level change for one of the wedding's tables.

    Called by the scoped repositories after insert/update/delete.
    """
    return publish_event(
        wedding_id=wedding_id,
        event_type="change",
        data={
            "table": table,
            "event": event.value,
            "record_id": str(record_id) if record_id else None,
        }
    )


def publish_partner_joined(wedding_id: str | UUID, partner_id: str | UUID) -> bool:
    """
    Publish the weddings-row change that follows a successful join.

    Clients of partner one use it to refresh the connection card.
    """
    return publish_event(
        wedding_id=wedding_id,
        event_type="change",
        data={
            "table": "weddings",
            "event": ChangeEvent.UPDATE.value,
            "record_id": str(wedding_id),
            "partner_id": str(partner_id),
        }
    )

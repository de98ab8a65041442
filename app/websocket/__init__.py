# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Realtime change feed for the planning screens.
#
# Usage:
#   # Publish after a write (from any service)
#   from app.websocket.broadcast import ChangeEvent, publish_change
#
#   publish_change(wedding_id, "tasks", ChangeEvent.UPDATE, task_id)
#
#   # Deliver to subscribers (from the Redis listener in main.py)
#   from app.websocket import websocket_manager
#
#   await websocket_manager.publish(event)
# =============================================================================

from app.websocket.manager import websocket_manager, ConnectionManager
from app.websocket.broadcast import (
    CHANGE_CHANNEL,
    ChangeEvent,
    publish_change,
    publish_event,
    publish_partner_joined,
)

__all__ = [
    "websocket_manager",
    "ConnectionManager",
    "CHANGE_CHANNEL",
    "ChangeEvent",
    "publish_change",
    "publish_event",
    "publish_partner_joined",
]

# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# WebSocket endpoint for the wedding change feed.
#
# Connect: ws://host/ws/weddings/{wedding_id}?token={jwt}&tables=tasks,guests
#
# Events:
#   - {"type": "connected", "wedding_id": "...", "tables": [...]}
#   - {"type": "change", "table": "tasks", "event": "update",
#      "record_id": "...", "coalesced": 2}
#
# Clients re-run the list call for the table named in a change event.
# =============================================================================

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Query

from app.auth.dependencies import InvalidTokenError, decode_access_token
from app.exceptions import WeddingPlannerException
from app.websocket.manager import websocket_manager
from core.services.wedding_service import WeddingService

logger = logging.getLogger(__name__)

router = APIRouter()

# Tables a client may subscribe to
SUBSCRIBABLE_TABLES = frozenset({
    "weddings",
    "tasks",
    "guests",
    "budget_items",
    "vendors",
    "inspirations",
    "messages",
    "notes",
})


def parse_tables(raw: str | None) -> list[str]:
    """
    Parse the comma-separated tables parameter.

    Empty means every subscribable table. Unknown names raise ValueError.
    """
    if not raw or not raw.strip():
        return sorted(SUBSCRIBABLE_TABLES)

    tables = sorted({name.strip() for name in raw.split(",") if name.strip()})
    unknown = [name for name in tables if name not in SUBSCRIBABLE_TABLES]
    if unknown:
        raise ValueError(f"Unknown tables: {', '.join(unknown)}")
    return tables


@router.websocket("/ws/weddings/{wedding_id}")
async def wedding_websocket(
    websocket: WebSocket,
    wedding_id: str,
    token: str = Query(..., description="JWT token for authentication"),
    tables: str | None = Query(default=None, description="Comma-separated table names"),
):
    """
    WebSocket endpoint for change events of one wedding.

    Authentication is required via the `token` query parameter.
    The user must be one of the wedding's partners.
    """
    # 1. Verify JWT token
    try:
        user = decode_access_token(token)
    except InvalidTokenError as e:
        logger.warning(f"WebSocket auth failed: {e}")
        await websocket.close(code=4001, reason=str(e))
        return

    try:
        topics = parse_tables(tables)
    except ValueError as e:
        await websocket.close(code=4000, reason=str(e))
        return

    # 2. Verify the user belongs to this wedding
    try:
        wedding = WeddingService.get_wedding(wedding_id)
    except WeddingPlannerException as e:
        logger.warning(f"WebSocket: wedding {wedding_id} unavailable: {e.message}")
        close_code = 4004 if e.status_code in (400, 404) else 4000
        await websocket.close(code=close_code, reason=e.message)
        return

    if not wedding.has_member(user.id):
        logger.warning(f"WebSocket access denied: user {user.id} is not a partner of wedding {wedding_id}")
        await websocket.close(code=4003, reason="Access denied")
        return

    wedding_key = str(wedding.id)

    # 3. Accept connection and subscribe
    await websocket_manager.connect(wedding_key, topics, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "wedding_id": wedding_key,
            "tables": topics,
        })

        while True:
            data = await websocket.receive_text()

            # Keepalive
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected from wedding {wedding_key}")
    finally:
        websocket_manager.disconnect(wedding_key, topics, websocket)


@router.get("/ws/status")
async def websocket_status():
    """Connection statistics for monitoring."""
    topics = websocket_manager.get_active_topics()
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "active_topics": [f"{table}:{wedding_id}" for table, wedding_id in topics],
        "topic_count": len(topics),
    }

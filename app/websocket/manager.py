# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Tracks WebSocket subscribers per topic and fans change events out to them.
#
# A topic is (table, wedding_id): a client watching the guest list of one
# wedding subscribes to ("guests", <wedding_id>). One connection may
# subscribe to several tables of its wedding.
#
# Change events for the same topic that arrive within the debounce window
# are coalesced into one message, so a burst of writes triggers one refetch
# on the client instead of many.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.connect(wedding_id, ["tasks", "guests"], websocket)
#   await websocket_manager.publish({"wedding_id": ..., "table": "tasks", ...})
#   websocket_manager.disconnect(wedding_id, ["tasks", "guests"], websocket)
# =============================================================================

import asyncio
import logging
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from fastapi import WebSocket

logger = logging.getLogger(__name__)

# (table, wedding_id)
Topic = Tuple[str, str]


class ConnectionManager:
    """
    Manages WebSocket connections organized by topic.

    Each topic can have multiple connected clients (both partners, several
    tabs). Events are delivered at most once per debounce window per topic.
    """

    def __init__(self, debounce_seconds: Optional[float] = None):
        # topic -> set of WebSocket connections
        self.connections: Dict[Topic, Set[WebSocket]] = {}
        self._debounce_seconds = debounce_seconds
        # topic -> (latest event, number of events coalesced into it)
        self._pending: Dict[Topic, Tuple[Dict[str, Any], int]] = {}
        self._flush_tasks: Dict[Topic, asyncio.Task] = {}

    @property
    def debounce_seconds(self) -> float:
        if self._debounce_seconds is None:
            from app.config import settings
            return settings.change_feed_debounce_seconds
        return self._debounce_seconds

    async def connect(self, wedding_id: str, tables: Iterable[str], websocket: WebSocket) -> None:
        """
        Accept a WebSocket connection and subscribe it to the given tables.

        Args:
            wedding_id: The wedding the connection watches
            tables: Table names to receive change events for
            websocket: The WebSocket connection
        """
        await websocket.accept()

        for table in tables:
            self.connections.setdefault((table, str(wedding_id)), set()).add(websocket)

        logger.info(
            f"WebSocket connected to wedding {wedding_id} ({', '.join(tables)}). "
            f"Total connections: {self.get_connection_count()}"
        )

    def disconnect(self, wedding_id: str, tables: Iterable[str], websocket: WebSocket) -> None:
        """Unsubscribe a connection from all of its topics."""
        for table in tables:
            self._discard((table, str(wedding_id)), websocket)

        logger.info(
            f"WebSocket disconnected from wedding {wedding_id}. "
            f"Total connections: {self.get_connection_count()}"
        )

    async def publish(self, event: Dict[str, Any]) -> None:
        """
        Queue a change event for delivery to its topic's subscribers.

        Events without a table or wedding_id are ignored. With a zero
        debounce window the event is delivered immediately.
        """
        table = event.get("table")
        wedding_id = event.get("wedding_id")
        if not table or not wedding_id:
            logger.debug(f"Ignoring event without topic: {event.get('type')}")
            return

        topic = (table, str(wedding_id))
        if topic not in self.connections:
            return

        if self.debounce_seconds <= 0:
            await self.broadcast(topic, event)
            return

        _, count = self._pending.get(topic, (event, 0))
        self._pending[topic] = (event, count + 1)

        if topic not in self._flush_tasks:
            self._flush_tasks[topic] = asyncio.create_task(self._flush_later(topic))

    async def _flush_later(self, topic: Topic) -> None:
        try:
            await asyncio.sleep(self.debounce_seconds)
        finally:
            self._flush_tasks.pop(topic, None)

        pending = self._pending.pop(topic, None)
        if pending is None:
            return

        event, count = pending
        await self.broadcast(topic, {**event, "coalesced": count})

    async def broadcast(self, topic: Topic, message: Dict[str, Any]) -> int:
        """
        Send a message to every connection subscribed to a topic.

        Args:
            topic: (table, wedding_id)
            message: The message dict to send (will be JSON encoded)

        Returns:
            int: Number of clients the message was sent to
        """
        if topic not in self.connections:
            logger.debug(f"No connections for topic {topic}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(self.connections[topic]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self._discard(topic, ws)

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead connections")

        logger.debug(f"Broadcast to {topic}: event={message.get('event')}, sent to {sent_count} clients")
        return sent_count

    async def close(self) -> None:
        """Cancel pending deliveries. Called on application shutdown."""
        tasks = list(self._flush_tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._flush_tasks.clear()
        self._pending.clear()

    def get_connection_count(self, topic: Optional[Topic] = None) -> int:
        """
        Number of active connections, for one topic or overall.

        A connection subscribed to several topics counts once overall.
        """
        if topic:
            return len(self.connections.get(topic, set()))
        return len(set().union(*self.connections.values())) if self.connections else 0

    def get_active_topics(self) -> list[Topic]:
        return list(self.connections.keys())

    def _discard(self, topic: Topic, websocket: WebSocket) -> None:
        subscribers = self.connections.get(topic)
        if subscribers is None:
            return
        subscribers.discard(websocket)
        if not subscribers:
            del self.connections[topic]


# Global singleton instance
websocket_manager = ConnectionManager()

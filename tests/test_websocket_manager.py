# =============================================================================
# tests/test_websocket_manager.py - Change Feed Fan-out Tests
# =============================================================================
# Run with: pytest tests/test_websocket_manager.py -v
# =============================================================================

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.websocket.manager import ConnectionManager
from app.websocket.routes import parse_tables


def make_websocket() -> MagicMock:
    websocket = MagicMock()
    websocket.accept = AsyncMock()
    websocket.send_json = AsyncMock()
    return websocket


def change(wedding_id: str, table: str = "tasks", record_id: str = "r1") -> dict:
    return {
        "wedding_id": wedding_id,
        "type": "change",
        "table": table,
        "event": "update",
        "record_id": record_id,
    }


class TestConnections:

    @pytest.mark.asyncio
    async def test_connect_subscribes_each_table(self):
        # Arrange
        manager = ConnectionManager(debounce_seconds=0)
        websocket = make_websocket()

        # Act
        await manager.connect("w1", ["tasks", "guests"], websocket)

        # Assert
        websocket.accept.assert_awaited_once()
        assert manager.get_connection_count(("tasks", "w1")) == 1
        assert manager.get_connection_count(("guests", "w1")) == 1
        assert manager.get_connection_count() == 1

    @pytest.mark.asyncio
    async def test_disconnect_removes_empty_topics(self):
        manager = ConnectionManager(debounce_seconds=0)
        websocket = make_websocket()
        await manager.connect("w1", ["tasks"], websocket)

        manager.disconnect("w1", ["tasks"], websocket)

        assert manager.get_active_topics() == []
        assert manager.get_connection_count() == 0


class TestPublish:
    """Events reach only the matching (table, wedding) topic."""

    @pytest.mark.asyncio
    async def test_immediate_delivery_without_debounce(self):
        # Arrange
        manager = ConnectionManager(debounce_seconds=0)
        watcher, other_table, other_wedding = make_websocket(), make_websocket(), make_websocket()
        await manager.connect("w1", ["tasks"], watcher)
        await manager.connect("w1", ["guests"], other_table)
        await manager.connect("w2", ["tasks"], other_wedding)

        # Act
        await manager.publish(change("w1"))

        # Assert
        watcher.send_json.assert_awaited_once()
        other_table.send_json.assert_not_awaited()
        other_wedding.send_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_burst_is_coalesced(self):
        # Arrange
        manager = ConnectionManager(debounce_seconds=0.05)
        websocket = make_websocket()
        await manager.connect("w1", ["tasks"], websocket)

        # Act
        for record_id in ("r1", "r2", "r3"):
            await manager.publish(change("w1", record_id=record_id))
        await asyncio.sleep(0.15)

        # Assert
        websocket.send_json.assert_awaited_once()
        message = websocket.send_json.await_args.args[0]
        assert message["record_id"] == "r3"
        assert message["coalesced"] == 3

    @pytest.mark.asyncio
    async def test_topics_debounce_independently(self):
        manager = ConnectionManager(debounce_seconds=0.05)
        websocket = make_websocket()
        await manager.connect("w1", ["tasks", "guests"], websocket)

        await manager.publish(change("w1", table="tasks"))
        await manager.publish(change("w1", table="guests"))
        await asyncio.sleep(0.15)

        assert websocket.send_json.await_count == 2

    @pytest.mark.asyncio
    async def test_dead_connection_is_dropped(self):
        # Arrange
        manager = ConnectionManager(debounce_seconds=0)
        dead = make_websocket()
        dead.send_json.side_effect = RuntimeError("closed")
        await manager.connect("w1", ["tasks"], dead)

        # Act
        sent = await manager.broadcast(("tasks", "w1"), change("w1"))

        # Assert
        assert sent == 0
        assert manager.get_active_topics() == []

    @pytest.mark.asyncio
    async def test_event_without_topic_is_ignored(self):
        manager = ConnectionManager(debounce_seconds=0)
        websocket = make_websocket()
        await manager.connect("w1", ["tasks"], websocket)

        await manager.publish({"type": "change", "wedding_id": "w1"})

        websocket.send_json.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_cancels_pending(self):
        manager = ConnectionManager(debounce_seconds=10)
        websocket = make_websocket()
        await manager.connect("w1", ["tasks"], websocket)
        await manager.publish(change("w1"))

        await manager.close()

        websocket.send_json.assert_not_awaited()


class TestParseTables:

    def test_default_is_all_tables(self):
        assert "tasks" in parse_tables(None)
        assert "messages" in parse_tables("")

    def test_explicit_tables(self):
        assert parse_tables("tasks, guests") == ["guests", "tasks"]

    def test_unknown_table(self):
        with pytest.raises(ValueError):
            parse_tables("tasks,profiles")

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-in for the Supabase tables (FakeSupabase), patched onto
#   SupabaseClient so the real services run unchanged
# - Redis publishing replaced by a MagicMock for every test
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("CHANGE_FEED_DEBOUNCE_MS", "0")

import copy
import json
from datetime import date, datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import UUID, uuid4

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeSupabase:
    """
    Minimal table store with the semantics the services rely on.

    - Equality filters; a None filter value means IS NULL
    - Ordering with Postgres null placement (ASC nulls last, DESC nulls first)
    - Inserts get an id and strictly increasing created_at/updated_at
    - fail_on: names of operations that raise SupabaseClientError
    """

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.uploads: dict[str, bytes] = {}
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _check(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        if operation in self.fail_on or f"{operation}:{table}" in self.fail_on:
            raise SupabaseClientError(f"{operation} failed", code="TEST_FAILURE")

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        for column, value in (filters or {}).items():
            current = row.get(column)
            if value is None:
                if current is not None:
                    return False
            elif current is None or str(current) != str(value):
                return False
        return True

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    def seed(self, table: str, **values: Any) -> dict[str, Any]:
        """Insert a row directly, bypassing fail_on and call tracking."""
        now = self._tick()
        row = {"id": str(uuid4()), "created_at": now, "updated_at": now, **values}
        row = {key: _as_stored(value) for key, value in row.items()}
        self.rows(table).append(row)
        return copy.deepcopy(row)

    # -------------------------------------------------------------------------
    # SupabaseClient surface
    # -------------------------------------------------------------------------

    def fetch_weddings_for_user(self, user_id):
        self._check("fetch_weddings_for_user", "weddings")
        user_id = str(user_id)
        return [
            copy.deepcopy(row) for row in self.rows("weddings")
            if str(row.get("partner_one_id")) == user_id or str(row.get("partner_two_id")) == user_id
        ]

    def select_rows(self, table, filters=None, order=None, columns="*", limit=None):
        self._check("select_rows", table)
        result = [copy.deepcopy(row) for row in self.rows(table) if self._matches(row, filters)]

        for column, descending, nulls_first in reversed(list(order or [])):
            if nulls_first is None:
                nulls_first = descending
            nulls = [row for row in result if row.get(column) is None]
            values = sorted(
                (row for row in result if row.get(column) is not None),
                key=lambda row: row[column],
                reverse=descending,
            )
            result = nulls + values if nulls_first else values + nulls

        return result[:limit] if limit is not None else result

    def insert_row(self, table, data):
        self._check("insert_row", table)
        now = self._tick()
        row = {"id": str(uuid4()), "created_at": now, "updated_at": now, **copy.deepcopy(data)}
        self.rows(table).append(row)
        return copy.deepcopy(row)

    def update_rows(self, table, data, filters):
        self._check("update_rows", table)
        updated = []
        for row in self.rows(table):
            if self._matches(row, filters):
                row.update(copy.deepcopy(data))
                row["updated_at"] = self._tick()
                updated.append(copy.deepcopy(row))
        return updated

    def delete_rows(self, table, filters):
        self._check("delete_rows", table)
        kept, deleted = [], []
        for row in self.rows(table):
            (deleted if self._matches(row, filters) else kept).append(row)
        self.tables[table] = kept
        return copy.deepcopy(deleted)

    def upload_object(self, bucket, path, content, content_type):
        self._check("upload_object", bucket)
        self.uploads[f"{bucket}/{path}"] = content
        return f"https://test-project.supabase.co/storage/v1/object/public/{bucket}/{path}"

    def ping_storage(self):
        self._check("ping_storage", "storage")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Patch SupabaseClient's primitives onto an in-memory FakeSupabase."""
    fake = FakeSupabase()
    with patch.multiple(
        SupabaseClient,
        fetch_weddings_for_user=fake.fetch_weddings_for_user,
        select_rows=fake.select_rows,
        insert_row=fake.insert_row,
        update_rows=fake.update_rows,
        delete_rows=fake.delete_rows,
        upload_object=fake.upload_object,
        ping_storage=fake.ping_storage,
    ):
        yield fake


@pytest.fixture(autouse=True)
def mock_redis():
    """Capture change-feed publishes instead of talking to Redis."""
    client = MagicMock()
    with patch("app.websocket.broadcast.get_redis_client", return_value=client):
        yield client


@pytest.fixture
def published_events(mock_redis):
    """Decoded events published during the test, in order."""
    def _events():
        return [json.loads(call.args[1]) for call in mock_redis.publish.call_args_list]
    return _events


@pytest.fixture
def alice():
    return uuid4()


@pytest.fixture
def bob():
    return uuid4()


@pytest.fixture
def carol():
    return uuid4()


def _as_stored(value: Any) -> Any:
    """Mimic PostgREST JSON: UUIDs and dates come back as strings."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value

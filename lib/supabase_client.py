# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides methods for:
# - Wedding aggregate lookups (by id, by partner)
# - Generic table reads/writes used by the scoped repositories
# - Object storage uploads (avatars, mood board images)
#
# The API talks to Supabase with the service_role key, so every query that
# touches a scoped table must carry its own wedding_id filter. The services
# in core/ are responsible for passing it.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   weddings = SupabaseClient.fetch_weddings_for_user(user_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Sequence
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# (column, descending, nulls_first) - nulls_first=None keeps the database default
OrderSpec = Sequence[tuple[str, bool, bool | None]]


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: errors should tell HOW to fix,
    not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Find the wedding a user belongs to
        weddings = SupabaseClient.fetch_weddings_for_user(user_id)

        # List a wedding's guests, ordered by name
        guests = SupabaseClient.select_rows(
            "guests",
            filters={"wedding_id": wedding_id},
            order=[("name", False, None)],
        )
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def create_anon_client(cls) -> Client:
        """
        Create a fresh client with the anon key.

        Used for sign-up / sign-in proxies: those calls store a user session
        on the client, so they must never touch the shared service client.
        """
        try:
            return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create anon Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    @classmethod
    def _apply_filters(cls, query: Any, filters: dict[str, Any] | None) -> Any:
        for column, value in (filters or {}).items():
            if value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, cls._normalize_uuid(value))
        return query

    # -------------------------------------------------------------------------
    # Wedding Aggregates
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_weddings_for_user(cls, user_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch every wedding where the user is partner one or partner two.

        More than one row means the one-wedding-per-user invariant is broken;
        callers decide how to report that.

        Args:
            user_id: The user UUID

        Returns:
            List of wedding dicts (normally zero or one)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = cls._normalize_uuid(user_id)

        try:
            response = (
                client.table("weddings")
                .select("*")
                .or_(f"partner_one_id.eq.{user_id_str},partner_two_id.eq.{user_id_str}")
                .execute()
            )
            weddings = response.data or []
            logger.debug(f"Found {len(weddings)} weddings for user {user_id_str}")
            return weddings

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch weddings for user: {e}",
                code="FETCH_WEDDINGS_FAILED",
                suggestion="Check that the weddings table is accessible",
                details={"user_id": user_id_str}
            )

    @classmethod
    def fetch_wedding(cls, wedding_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a wedding by ID.

        Args:
            wedding_id: The wedding UUID

        Returns:
            Wedding dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        return cls.fetch_row("weddings", {"id": wedding_id})

    @classmethod
    def claim_partner_two(
        cls,
        wedding_id: str | UUID,
        user_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Set partner_two_id only if the slot is still empty.

        Runs as a single conditional UPDATE (compare-and-swap on
        partner_two_id IS NULL), so two concurrent joins cannot both win.

        Args:
            wedding_id: The target wedding UUID
            user_id: The joining user UUID

        Returns:
            The updated wedding dict, or None if no row matched
            (wedding gone or already full)

        Raises:
            SupabaseClientError: If the update fails
        """
        rows = cls.update_rows(
            "weddings",
            {"partner_two_id": cls._normalize_uuid(user_id)},
            filters={"id": wedding_id, "partner_two_id": None},
        )
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Generic Table Operations
    # -------------------------------------------------------------------------

    @classmethod
    def select_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        order: OrderSpec | None = None,
        columns: str = "*",
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Select rows from a table.

        Args:
            table: Table name
            filters: Equality filters (None value means IS NULL)
            order: Sequence of (column, descending, nulls_first)
            columns: PostgREST select expression
            limit: Maximum number of rows

        Returns:
            List of row dicts (empty list if nothing matched)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).select(columns), filters)

            for column, descending, nulls_first in order or []:
                if nulls_first is None:
                    query = query.order(column, desc=descending)
                else:
                    query = query.order(column, desc=descending, nullsfirst=nulls_first)

            if limit is not None:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []
            logger.debug(f"Selected {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to select from {table}: {e}",
                code="SELECT_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, "filters": _stringify(filters)}
            )

    @classmethod
    def fetch_row(
        cls,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch the first row matching the filters.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        rows = cls.select_rows(table, filters=filters, columns=columns, limit=1)
        return rows[0] if rows else None

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated id and timestamps.

        Raises:
            SupabaseClientError: If insert fails or returns no data
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_rows(
        cls,
        table: str,
        data: dict[str, Any],
        filters: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """
        Update rows matching the filters.

        Returns:
            Updated rows (empty list if nothing matched)

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).update(data), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "filters": _stringify(filters)}
            )

    @classmethod
    def delete_rows(cls, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Delete rows matching the filters.

        Returns:
            Deleted rows (empty list if nothing matched)

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).delete(), filters)
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": _stringify(filters)}
            )

    # -------------------------------------------------------------------------
    # Object Storage
    # -------------------------------------------------------------------------

    @classmethod
    def upload_object(
        cls,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
    ) -> str:
        """
        Upload bytes to a storage bucket and return the public URL.

        Raises:
            SupabaseClientError: If upload fails
        """
        client = cls.get_client()

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "true"}
            )
            url = client.storage.from_(bucket).get_public_url(path)
            logger.info(f"Uploaded object to {bucket}/{path}")
            return url

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upload to {bucket}: {e}",
                code="UPLOAD_FAILED",
                suggestion="Check that the bucket exists and is public",
                details={"bucket": bucket, "path": path}
            )

    @classmethod
    def ping(cls, table: str = "weddings") -> None:
        """Run a trivial query; raises SupabaseClientError if the database is unreachable."""
        cls.select_rows(table, columns="id", limit=1)

    @classmethod
    def ping_storage(cls) -> None:
        """List buckets; raises SupabaseClientError if storage is unreachable."""
        try:
            cls.get_client().storage.list_buckets()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list storage buckets: {e}",
                code="STORAGE_UNREACHABLE",
            )

    # -------------------------------------------------------------------------
    # Auth Proxies
    # -------------------------------------------------------------------------

    @classmethod
    def sign_up(
        cls,
        email: str,
        password: str,
        full_name: str | None = None,
    ) -> dict[str, Any]:
        """
        Register a user with Supabase Auth.

        full_name is stored in the user metadata, where the profiles
        trigger picks it up.

        Returns:
            {"user_id", "email", "session"} - session is None when email
            confirmation is required

        Raises:
            SupabaseClientError: If Supabase rejects the sign-up
        """
        options = {"data": {"full_name": full_name}} if full_name else {}

        try:
            response = cls.create_anon_client().auth.sign_up({
                "email": email,
                "password": password,
                "options": options,
            })
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Sign-up failed: {e}",
                code="SIGNUP_FAILED",
                suggestion="Check the email address and use a stronger password",
            )

        return _auth_result(response)

    @classmethod
    def sign_in(cls, email: str, password: str) -> dict[str, Any]:
        """
        Sign in with email and password.

        Raises:
            SupabaseClientError: If the credentials are rejected
        """
        try:
            response = cls.create_anon_client().auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Login failed: {e}",
                code="LOGIN_FAILED",
                suggestion="Check your email and password",
            )

        return _auth_result(response)

    @classmethod
    def sign_out(cls, access_token: str) -> None:
        """
        Revoke the refresh tokens of the session behind access_token.

        Raises:
            SupabaseClientError: If Supabase rejects the request
        """
        try:
            cls.get_client().auth.admin.sign_out(access_token)
        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Logout failed: {e}",
                code="LOGOUT_FAILED",
            )


def _stringify(values: dict[str, Any] | None) -> dict[str, str]:
    if not values:
        return {}
    return {key: str(value) for key, value in values.items()}


def _auth_result(response: Any) -> dict[str, Any]:
    user = getattr(response, "user", None)
    session = getattr(response, "session", None)

    return {
        "user_id": str(user.id) if user else None,
        "email": getattr(user, "email", None),
        "session": {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "expires_in": session.expires_in,
        } if session else None,
    }

# =============================================================================
# core/services/scoped_repository.py - Wedding-Scoped Repository Base
# =============================================================================
# Shared list/get/create/update/delete for every table that belongs to a
# wedding (tasks, guests, budget_items, vendors, inspirations, messages,
# notes).
#
# Scoping rule: the API uses the service_role key, so the access check
# "only the two partners see this wedding's rows" is carried by the queries
# themselves. Every read, update and delete filters on BOTH the row id and
# the wedding_id from WeddingService.resolve(). A row id from another
# wedding therefore behaves exactly like a missing row (NotFoundError).
#
# Writes are validated against the entity's pydantic create/update models
# (closed enums, no unknown fields) and publish a change-feed event.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, Sequence, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid
from core.models.common import OrderBy
from app.exceptions import InvalidInputError, NotFoundError, StorageUnavailableError
from app.websocket.broadcast import ChangeEvent, publish_change

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class ScopedRepository(Generic[RecordT]):
    """
    Base class for wedding-scoped repositories.

    Subclasses only declare their table and models:

        class VendorService(ScopedRepository[Vendor]):
            table = "vendors"
            resource_name = "Vendor"
            record_model = Vendor
            create_model = VendorCreate
            update_model = VendorUpdate
            attribution_field = "saved_by"
            default_order = (OrderBy("created_at", descending=True),)

    All methods are class methods, like the other services.
    """

    table: ClassVar[str]
    resource_name: ClassVar[str]
    record_model: ClassVar[type[BaseModel]]
    create_model: ClassVar[type[BaseModel]]
    update_model: ClassVar[type[BaseModel]]
    attribution_field: ClassVar[str | None] = None
    default_order: ClassVar[tuple[OrderBy, ...]] = (OrderBy("created_at", descending=True),)
    sortable_columns: ClassVar[frozenset[str]] = frozenset({"created_at", "updated_at"})

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def list(
        cls,
        wedding_id: UUID | str,
        order: Sequence[OrderBy] | None = None,
    ) -> list[RecordT]:
        """
        List the wedding's rows in the requested (or default) order.

        Args:
            wedding_id: The resolved wedding id
            order: Override for default_order

        Raises:
            InvalidInputError: If order names a column that can't be sorted
            StorageUnavailableError: If Supabase can't be reached
        """
        order_spec = cls._validate_order(order) if order else cls.default_order

        try:
            rows = SupabaseClient.select_rows(
                cls.table,
                filters={"wedding_id": str(wedding_id)},
                order=[tuple(item) for item in order_spec],
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list {cls.table} for wedding {wedding_id}: {e}")
            raise StorageUnavailableError(f"load {cls.table.replace('_', ' ')}", str(e))

        return [cls.record_model(**row) for row in rows]

    @classmethod
    def list_or_warn(
        cls,
        wedding_id: UUID | str,
        order: Sequence[OrderBy] | None = None,
    ) -> tuple[list[RecordT], str | None]:
        """
        Like list(), but a storage failure degrades to ([], warning).

        Used by list endpoints so a screen shows an empty state with a
        notice instead of an error page.
        """
        try:
            return cls.list(wedding_id, order=order), None
        except StorageUnavailableError as e:
            logger.warning(f"Serving empty {cls.table} list for wedding {wedding_id}: {e.details}")
            return [], e.message

    @classmethod
    def get(cls, wedding_id: UUID | str, item_id: UUID | str) -> RecordT:
        """
        Get one row of this wedding by id.

        Raises:
            NotFoundError: If the id doesn't exist in this wedding
        """
        item_id_str = cls._require_id(item_id)

        try:
            row = SupabaseClient.fetch_row(
                cls.table,
                {"id": item_id_str, "wedding_id": str(wedding_id)},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch {cls.table} {item_id_str}: {e}")
            raise StorageUnavailableError(f"load the {cls.resource_name.lower()}", str(e))

        if row is None:
            raise NotFoundError(cls.resource_name, item_id_str)
        return cls.record_model(**row)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        wedding_id: UUID | str,
        user_id: UUID | str | None,
        fields: BaseModel | dict[str, Any],
    ) -> RecordT:
        """
        Insert a row into the wedding.

        Args:
            wedding_id: The resolved wedding id
            user_id: Author, stored in attribution_field (None = anonymous)
            fields: Create model instance or raw dict (validated here)

        Returns:
            The stored record, with server-assigned id and timestamps
        """
        payload = cls._validate(cls.create_model, fields)
        data = cls._prepare_create(payload.model_dump(mode="json"))
        data["wedding_id"] = str(wedding_id)
        if cls.attribution_field:
            data[cls.attribution_field] = str(user_id) if user_id else None

        try:
            row = SupabaseClient.insert_row(cls.table, data)
        except SupabaseClientError as e:
            logger.error(f"Failed to create {cls.table} row in wedding {wedding_id}: {e}")
            raise StorageUnavailableError(f"save the {cls.resource_name.lower()}", str(e))

        logger.info(f"Created {cls.table} {row['id']} in wedding {wedding_id}")
        publish_change(wedding_id, cls.table, ChangeEvent.INSERT, row["id"])
        return cls.record_model(**row)

    @classmethod
    def update(
        cls,
        wedding_id: UUID | str,
        item_id: UUID | str,
        fields: BaseModel | dict[str, Any],
    ) -> RecordT:
        """
        Update provided fields of one row. Last write wins.

        Raises:
            InvalidInputError: If fields fail validation
            NotFoundError: If the id doesn't exist in this wedding
        """
        item_id_str = cls._require_id(item_id)
        payload = cls._validate(cls.update_model, fields)
        data = payload.model_dump(exclude_unset=True, mode="json")

        if not data:
            return cls.get(wedding_id, item_id_str)  # Nothing to update

        data = cls._prepare_update(wedding_id, item_id_str, data)

        try:
            rows = SupabaseClient.update_rows(
                cls.table,
                data,
                filters={"id": item_id_str, "wedding_id": str(wedding_id)},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to update {cls.table} {item_id_str}: {e}")
            raise StorageUnavailableError(f"save the {cls.resource_name.lower()}", str(e))

        if not rows:
            raise NotFoundError(cls.resource_name, item_id_str)

        logger.info(f"Updated {cls.table} {item_id_str}: {sorted(data)}")
        publish_change(wedding_id, cls.table, ChangeEvent.UPDATE, item_id_str)
        return cls.record_model(**rows[0])

    @classmethod
    def delete(cls, wedding_id: UUID | str, item_id: UUID | str) -> None:
        """
        Permanently delete one row.

        Raises:
            NotFoundError: If the id doesn't exist in this wedding
        """
        item_id_str = cls._require_id(item_id)

        try:
            rows = SupabaseClient.delete_rows(
                cls.table,
                filters={"id": item_id_str, "wedding_id": str(wedding_id)},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to delete {cls.table} {item_id_str}: {e}")
            raise StorageUnavailableError(f"delete the {cls.resource_name.lower()}", str(e))

        if not rows:
            raise NotFoundError(cls.resource_name, item_id_str)

        logger.info(f"Deleted {cls.table} {item_id_str} from wedding {wedding_id}")
        publish_change(wedding_id, cls.table, ChangeEvent.DELETE, item_id_str)

    # -------------------------------------------------------------------------
    # Hooks & helpers
    # -------------------------------------------------------------------------

    @classmethod
    def _prepare_create(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Subclass hook to derive columns before insert."""
        return data

    @classmethod
    def _prepare_update(
        cls,
        wedding_id: UUID | str,
        item_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """Subclass hook to derive columns before update of an existing row."""
        return data

    @classmethod
    def _validate(cls, model: type[BaseModel], fields: BaseModel | dict[str, Any]) -> BaseModel:
        if isinstance(fields, model):
            return fields

        raw = fields.model_dump(exclude_unset=True) if isinstance(fields, BaseModel) else fields
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            raise InvalidInputError(
                f"Invalid {cls.resource_name.lower()}: {first.get('msg', 'invalid value')}",
                field=field,
            )

    @classmethod
    def _validate_order(cls, order: Sequence[OrderBy]) -> tuple[OrderBy, ...]:
        for item in order:
            if item.column not in cls.sortable_columns:
                raise InvalidInputError(
                    f"Cannot sort {cls.table.replace('_', ' ')} by '{item.column}'",
                    field="order",
                    suggestion=f"Sortable columns: {', '.join(sorted(cls.sortable_columns))}",
                )
        return tuple(order)

    @classmethod
    def _require_id(cls, item_id: UUID | str) -> str:
        parsed = parse_uuid(item_id)
        if parsed is None:
            # A malformed id can't exist in any wedding
            raise NotFoundError(cls.resource_name, str(item_id))
        return str(parsed)

# =============================================================================
# tests/test_repositories.py - Scoped Repository Tests
# =============================================================================
# Round trips, wedding scoping, ordering, validation and degraded reads for
# the wedding-scoped repositories.
#
# Run with: pytest tests/test_repositories.py -v
# =============================================================================

from decimal import Decimal
from uuid import uuid4

import pytest

from app.exceptions import (
    InvalidFileTypeError,
    InvalidInputError,
    NotFoundError,
    StorageUnavailableError,
)
from core.models.common import OrderBy
from core.models.task import TaskStatus
from core.services.budget_service import BudgetService
from core.services.guest_service import GuestService
from core.services.inspiration_service import InspirationService
from core.services.message_service import MessageService, NoteService
from core.services.task_service import TaskService
from core.services.vendor_service import VendorService
from core.services.wedding_service import WeddingService


@pytest.fixture
def wedding(fake_db, alice):
    return WeddingService.resolve(alice)


@pytest.fixture
def other_wedding(fake_db, carol):
    return WeddingService.resolve(carol)


# =============================================================================
# CRUD Round Trips
# =============================================================================

class TestCrud:
    """Create, read, update and delete through the shared base class."""

    def test_create_then_list_round_trips_fields(self, wedding, alice):
        # Arrange
        fields = {
            "title": "Book photographer",
            "description": "Ask for a second shooter",
            "category": "Photography",
            "due_date": "2026-03-01",
            "assigned_to": str(alice),
        }

        # Act
        created = TaskService.create(wedding.id, alice, fields)
        listed = TaskService.list(wedding.id)

        # Assert
        assert listed == [created]
        task = listed[0]
        assert task.title == "Book photographer"
        assert task.description == "Ask for a second shooter"
        assert task.category.value == "Photography"
        assert str(task.due_date) == "2026-03-01"
        assert task.assigned_to == alice
        assert task.created_by == alice
        assert task.wedding_id == wedding.id

    def test_budget_costs_round_trip_as_decimal(self, wedding, alice):
        created = BudgetService.create(wedding.id, alice, {
            "item_name": "Venue deposit",
            "category": "Venue",
            "estimated_cost": "15000000.50",
        })

        fetched = BudgetService.get(wedding.id, created.id)

        assert fetched.estimated_cost == Decimal("15000000.50")
        assert fetched.created_by == alice

    def test_update_changes_only_given_fields(self, wedding, alice):
        # Arrange
        vendor = VendorService.create(wedding.id, alice, {"name": "Bloom", "category": "Decoration"})

        # Act
        updated = VendorService.update(wedding.id, vendor.id, {"status": "negotiating"})

        # Assert
        assert updated.status.value == "negotiating"
        assert updated.name == "Bloom"
        assert updated.category.value == "Decoration"
        assert updated.saved_by == alice

    def test_delete_removes_row(self, wedding, alice):
        # Arrange
        note = NoteService.create(wedding.id, alice, {"content": "Call the caterer"})

        # Act
        NoteService.delete(wedding.id, note.id)

        # Assert
        assert NoteService.list(wedding.id) == []
        with pytest.raises(NotFoundError):
            NoteService.get(wedding.id, note.id)

    def test_delete_unknown_id(self, wedding):
        with pytest.raises(NotFoundError):
            GuestService.delete(wedding.id, uuid4())

    def test_mutations_publish_changes(self, wedding, alice, published_events):
        # Act
        guest = GuestService.create(wedding.id, alice, {"name": "Jane"})
        GuestService.update(wedding.id, guest.id, {"status": "attending"})
        GuestService.delete(wedding.id, guest.id)

        # Assert
        events = [(e["table"], e["event"], e["record_id"]) for e in published_events()]
        assert events == [
            ("guests", "insert", str(guest.id)),
            ("guests", "update", str(guest.id)),
            ("guests", "delete", str(guest.id)),
        ]


# =============================================================================
# Wedding Scoping
# =============================================================================

class TestScoping:
    """Rows of another wedding behave as if they didn't exist."""

    def test_list_only_returns_own_rows(self, wedding, other_wedding, alice, carol):
        GuestService.create(wedding.id, alice, {"name": "Jane"})
        GuestService.create(other_wedding.id, carol, {"name": "Mallory"})

        names = [guest.name for guest in GuestService.list(wedding.id)]

        assert names == ["Jane"]

    def test_cross_wedding_get_update_delete(self, wedding, other_wedding, carol):
        # Arrange
        foreign = TaskService.create(other_wedding.id, carol, {"title": "Carol's task"})

        # Act / Assert
        with pytest.raises(NotFoundError):
            TaskService.get(wedding.id, foreign.id)
        with pytest.raises(NotFoundError):
            TaskService.update(wedding.id, foreign.id, {"title": "Hijacked"})
        with pytest.raises(NotFoundError):
            TaskService.delete(wedding.id, foreign.id)

        assert TaskService.get(other_wedding.id, foreign.id).title == "Carol's task"

    def test_malformed_id_is_not_found(self, wedding):
        with pytest.raises(NotFoundError):
            TaskService.get(wedding.id, "nope")

    def test_wedding_id_cannot_be_reassigned(self, wedding, other_wedding, alice):
        task = TaskService.create(wedding.id, alice, {"title": "Mine"})

        with pytest.raises(InvalidInputError):
            TaskService.update(wedding.id, task.id, {"wedding_id": str(other_wedding.id)})


# =============================================================================
# Validation
# =============================================================================

class TestValidation:

    def test_unknown_enum_value(self, wedding, alice):
        with pytest.raises(InvalidInputError) as exc_info:
            TaskService.create(wedding.id, alice, {"title": "x", "status": "done"})

        assert exc_info.value.field == "status"

    def test_negative_cost(self, wedding, alice):
        with pytest.raises(InvalidInputError):
            BudgetService.create(wedding.id, alice, {
                "item_name": "Cake",
                "category": "Catering",
                "estimated_cost": "-5",
            })

    def test_unknown_field(self, wedding, alice):
        with pytest.raises(InvalidInputError):
            VendorService.create(wedding.id, alice, {"name": "Bloom", "rating": 5})

    def test_validation_happens_before_write(self, fake_db, wedding, alice):
        with pytest.raises(InvalidInputError):
            GuestService.create(wedding.id, alice, {"name": ""})

        assert ("insert_row", "guests") not in fake_db.calls

    @pytest.mark.parametrize("service, fields, column", [
        (TaskService, {"title": "Book venue"}, "title"),
        (TaskService, {"title": "Book venue"}, "status"),
        (GuestService, {"name": "Jane"}, "name"),
        (BudgetService, {"item_name": "Cake", "category": "Catering"}, "category"),
        (VendorService, {"name": "Bloom"}, "name"),
        (NoteService, {"content": "Ideas"}, "content"),
    ])
    def test_null_for_required_column_rejected(self, fake_db, wedding, alice, service, fields, column):
        # Arrange
        record = service.create(wedding.id, alice, fields)

        # Act
        with pytest.raises(InvalidInputError) as exc_info:
            service.update(wedding.id, record.id, {column: None})

        # Assert: nothing written, stored row intact
        assert exc_info.value.field == column
        assert ("update_rows", service.table) not in fake_db.calls
        assert getattr(service.get(wedding.id, record.id), column) is not None

    def test_null_for_optional_column_clears_it(self, wedding, alice):
        task = TaskService.create(wedding.id, alice, {"title": "Book venue", "description": "Garden"})

        updated = TaskService.update(wedding.id, task.id, {"description": None})

        assert updated.description is None
        assert updated.title == "Book venue"

    def test_unsortable_column(self, wedding):
        with pytest.raises(InvalidInputError):
            TaskService.list(wedding.id, order=[OrderBy("password")])


# =============================================================================
# Ordering
# =============================================================================

class TestOrdering:

    def test_tasks_incomplete_first_then_due_date(self, wedding, alice):
        # Arrange
        TaskService.create(wedding.id, alice, {"title": "done early", "due_date": "2026-01-10", "status": "completed"})
        TaskService.create(wedding.id, alice, {"title": "later", "due_date": "2026-05-01"})
        TaskService.create(wedding.id, alice, {"title": "sooner", "due_date": "2026-02-01"})

        # Act
        titles = [task.title for task in TaskService.list(wedding.id)]

        # Assert
        assert titles == ["sooner", "later", "done early"]

    def test_guests_by_status_then_name(self, wedding, alice):
        for name, status in [("Zed", "attending"), ("Amy", "pending"), ("Bea", "attending")]:
            GuestService.create(wedding.id, alice, {"name": name, "status": status})

        names = [guest.name for guest in GuestService.list(wedding.id)]

        assert names == ["Bea", "Zed", "Amy"]

    def test_notes_newest_first(self, wedding, alice):
        NoteService.create(wedding.id, alice, {"content": "first"})
        NoteService.create(wedding.id, alice, {"content": "second"})

        assert [note.content for note in NoteService.list(wedding.id)] == ["second", "first"]

    def test_messages_oldest_first(self, wedding, alice):
        MessageService.send(wedding.id, alice, "first")
        MessageService.send(wedding.id, alice, "second")

        assert [m.content for m in MessageService.list(wedding.id)] == ["first", "second"]

    def test_explicit_order(self, wedding, alice):
        GuestService.create(wedding.id, alice, {"name": "Amy"})
        GuestService.create(wedding.id, alice, {"name": "Zed"})

        names = [g.name for g in GuestService.list(wedding.id, order=[OrderBy("name", descending=True)])]

        assert names == ["Zed", "Amy"]


# =============================================================================
# Degraded Reads
# =============================================================================

class TestListOrWarn:

    def test_list_raises_when_storage_down(self, fake_db, wedding):
        fake_db.fail_on.add("select_rows:vendors")

        with pytest.raises(StorageUnavailableError):
            VendorService.list(wedding.id)

    def test_list_or_warn_degrades_to_empty(self, fake_db, wedding):
        fake_db.fail_on.add("select_rows:vendors")

        items, warning = VendorService.list_or_warn(wedding.id)

        assert items == []
        assert "Storage is unavailable" in warning

    def test_list_or_warn_without_failure(self, wedding, alice):
        VendorService.create(wedding.id, alice, {"name": "Bloom"})

        items, warning = VendorService.list_or_warn(wedding.id)

        assert len(items) == 1
        assert warning is None


# =============================================================================
# Entity-specific Operations
# =============================================================================

class TestToggleTask:

    def test_toggle_completes_and_reopens(self, wedding, alice):
        # Arrange
        task = TaskService.create(wedding.id, alice, {"title": "Send invites"})

        # Act
        completed = TaskService.toggle_task(wedding.id, task.id)
        reopened = TaskService.toggle_task(wedding.id, task.id)

        # Assert
        assert completed.status == TaskStatus.COMPLETED
        assert completed.completed_at is not None
        assert reopened.status == TaskStatus.PENDING
        assert reopened.completed_at is None

    def test_status_update_sets_completed_at(self, wedding, alice):
        task = TaskService.create(wedding.id, alice, {"title": "Send invites"})

        updated = TaskService.update(wedding.id, task.id, {"status": "completed"})

        assert updated.completed_at is not None

    def test_resending_completed_keeps_completed_at(self, fake_db, wedding):
        # Arrange
        row = fake_db.seed(
            "tasks",
            wedding_id=wedding.id,
            title="Send invites",
            status="completed",
            completed_at="2025-12-01T10:00:00+00:00",
        )

        # Act
        updated = TaskService.update(wedding.id, row["id"], {"status": "completed", "title": "Send all invites"})

        # Assert
        assert updated.title == "Send all invites"
        assert updated.completed_at.isoformat() == "2025-12-01T10:00:00+00:00"

    def test_toggle_foreign_task(self, wedding, other_wedding, carol):
        foreign = TaskService.create(other_wedding.id, carol, {"title": "Carol's"})

        with pytest.raises(NotFoundError):
            TaskService.toggle_task(wedding.id, foreign.id)


class TestMessages:

    def test_send_trims_content(self, wedding, alice):
        message = MessageService.send(wedding.id, alice, "  see you at 5  ")

        assert message.content == "see you at 5"
        assert message.sender_id == alice

    def test_send_blank_rejected(self, fake_db, wedding, alice):
        with pytest.raises(InvalidInputError):
            MessageService.send(wedding.id, alice, "   ")

        assert ("insert_row", "messages") not in fake_db.calls


class TestInspirationUpload:

    def test_upload_stores_image_and_row(self, fake_db, wedding, alice):
        # Act
        inspiration = InspirationService.upload(
            wedding.id,
            alice,
            filename="dress.JPG",
            content=b"\xff\xd8\xff",
            category="Attire",
            note="Love the sleeves",
        )

        # Assert
        [path] = fake_db.uploads
        assert path.startswith(f"moodboard/{wedding.id}/")
        assert path.endswith(".jpg")
        assert inspiration.image_url.endswith(path)
        assert inspiration.category.value == "Attire"
        assert inspiration.saved_by == alice

    def test_bad_extension_rejected_before_upload(self, fake_db, wedding, alice):
        with pytest.raises(InvalidFileTypeError):
            InspirationService.upload(wedding.id, alice, filename="notes.pdf", content=b"%PDF")

        assert fake_db.uploads == {}

    def test_bad_category_rejected_before_upload(self, fake_db, wedding, alice):
        with pytest.raises(InvalidInputError):
            InspirationService.upload(
                wedding.id, alice, filename="a.png", content=b"png", category="Fireworks"
            )

        assert fake_db.uploads == {}

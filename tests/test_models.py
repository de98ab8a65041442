# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the schemas in core.models:
# - Valid data is accepted and parsed correctly
# - Closed enums and unknown fields are rejected
# - Wedding membership helpers
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    BudgetItem,
    BudgetItemCreate,
    GuestCreate,
    MessageCreate,
    OrderBy,
    TaskCreate,
    TaskStatus,
    VendorCreate,
    Wedding,
    WeddingUpdate,
)


# =============================================================================
# Wedding Aggregate
# =============================================================================

class TestWedding:
    """Tests for the Wedding model and its membership helpers."""

    def test_solo_wedding(self):
        # Arrange
        owner = uuid4()
        wedding = Wedding(id=uuid4(), partner_one_id=owner)

        # Assert
        assert wedding.is_connected is False
        assert wedding.is_solo_owned_by(owner)
        assert wedding.has_member(owner)
        assert wedding.partner_of(owner) is None

    def test_connected_wedding(self):
        # Arrange
        one, two = uuid4(), uuid4()
        wedding = Wedding(id=uuid4(), partner_one_id=one, partner_two_id=two)

        # Assert
        assert wedding.is_connected is True
        assert not wedding.is_solo_owned_by(one)
        assert wedding.partner_of(one) == two
        assert wedding.partner_of(two) == one
        assert not wedding.has_member(uuid4())

    def test_update_rejects_partner_ids(self):
        """Partner ids can only change through joining."""
        with pytest.raises(ValidationError):
            WeddingUpdate(partner_two_id=str(uuid4()))

    def test_update_tracks_only_set_fields(self):
        update = WeddingUpdate(venue="Garden Hall")

        assert update.model_dump(exclude_unset=True) == {"venue": "Garden Hall"}


# =============================================================================
# Scoped Entity Payloads
# =============================================================================

class TestTaskCreate:
    """Tests for TaskCreate."""

    def test_defaults(self):
        task = TaskCreate(title="Book photographer")

        assert task.status == TaskStatus.PENDING
        assert task.assigned_to is None

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="Book photographer", status="done")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="Book photographer", category="Fireworks")

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="Book photographer", wedding_id=str(uuid4()))


class TestGuestCreate:

    def test_valid_guest(self):
        guest = GuestCreate(name="Jane Doe", email="jane@example.com", category="Friend")

        assert guest.category.value == "Friend"
        assert guest.pax == 1

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            GuestCreate(name="Jane Doe", email="not-an-email")

    def test_zero_pax_rejected(self):
        with pytest.raises(ValidationError):
            GuestCreate(name="Jane Doe", pax=0)


class TestBudget:
    """Tests for budget payloads and effective cost."""

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            BudgetItemCreate(item_name="Venue", category="Venue", estimated_cost=Decimal("-1"))

    def test_effective_cost_prefers_actual(self):
        # Arrange
        item = BudgetItem(
            id=uuid4(),
            wedding_id=uuid4(),
            item_name="Venue",
            category="Venue",
            estimated_cost=Decimal("100"),
            actual_cost=Decimal("120"),
        )

        # Assert
        assert item.effective_cost == Decimal("120")

    def test_effective_cost_falls_back_to_estimate(self):
        item = BudgetItem(
            id=uuid4(),
            wedding_id=uuid4(),
            item_name="Venue",
            category="Venue",
            estimated_cost=Decimal("100"),
        )

        assert item.effective_cost == Decimal("100")


class TestVendorAndMessage:

    def test_vendor_defaults(self):
        vendor = VendorCreate(name="Bloom Florist")

        assert vendor.category.value == "Venue"
        assert vendor.status.value == "contacted"

    def test_message_is_trimmed(self):
        assert MessageCreate(content="  hello  ").content == "hello"

    def test_blank_message_rejected(self):
        with pytest.raises(ValidationError):
            MessageCreate(content="   ")


# =============================================================================
# Ordering
# =============================================================================

class TestOrderBy:

    def test_parse_ascending(self):
        assert OrderBy.parse("due_date") == OrderBy("due_date", False)

    def test_parse_descending(self):
        assert OrderBy.parse(" -created_at ") == OrderBy("created_at", True)

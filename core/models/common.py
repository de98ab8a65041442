# =============================================================================
# core/models/common.py - Shared Schema Pieces
# =============================================================================
# Building blocks reused by every scoped entity:
# - PlanningCategory: closed category set shared by tasks, budget, vendors
# - OrderBy: one column of a list ordering
# - ItemList: list envelope with an optional degraded-read warning
# - PartialUpdate: base for PATCH payloads that protects NOT NULL columns
# =============================================================================

from enum import Enum
from typing import Any, ClassVar, Generic, NamedTuple, TypeVar

from pydantic import BaseModel, Field, ValidationInfo, field_validator

T = TypeVar("T")


class PlanningCategory(str, Enum):
    """Categories shared by tasks, budget items and vendors."""
    VENUE = "Venue"
    CATERING = "Catering"
    PHOTOGRAPHY = "Photography"
    DECORATION = "Decoration"
    ATTIRE = "Attire"
    MAKEUP = "Makeup"
    ENTERTAINMENT = "Entertainment"
    INVITATION = "Invitation"
    GENERAL = "General"
    OTHER = "Other"


class OrderBy(NamedTuple):
    """
    One ordering column for a list query.

    nulls_first=None keeps the database default
    (ascending -> nulls last, descending -> nulls first).
    """
    column: str
    descending: bool = False
    nulls_first: bool | None = None

    @classmethod
    def parse(cls, value: str) -> "OrderBy":
        """
        Parse "column" or "-column" (descending) from a query parameter.

        Example:
            OrderBy.parse("-created_at")  # OrderBy("created_at", True)
        """
        value = value.strip()
        if value.startswith("-"):
            return cls(value[1:], True)
        return cls(value, False)


class ItemList(BaseModel, Generic[T]):
    """
    List response for scoped entities.

    When the backend is unreachable, items is empty and warning explains
    why, so screens render an empty state instead of failing.
    """
    items: list[T] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    warning: str | None = Field(
        default=None,
        description="Set when the list could not be loaded"
    )


class PartialUpdate(BaseModel):
    """
    Base for PATCH payloads.

    Every field is optional so clients can send only what changed, but
    columns named in not_null may be omitted, not set to null. Without this
    an explicit null would pass exclude_unset and be written.
    """

    not_null: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null_for_required_columns(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name in cls.not_null:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

"""Domain records supplied by the budgeting service.

These models mirror the shapes returned by the budgeting API for a bounded
date window. All of them are frozen: the analysis engine reads them but
never mutates them, and a new snapshot replaces the old one when another
period is loaded.

Monetary values are integer cents. A transaction's sign carries its
direction: positive for revenue, negative for expense.
"""

import datetime as dt
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


DEFAULT_CATEGORY_COLOR = "#8B5CF6"


class CategoryType(str, Enum):
    """Advisory category kind; classification always uses the amount's sign."""

    EXPENSE = "expense"
    REVENUE = "revenue"


class AccountType(str, Enum):
    """Kinds of bank account exposed by the budgeting service."""

    CHECKING = "checking"
    SAVINGS = "savings"
    OTHER = "other"


def _to_utc_date(value):
    """Reduce datetimes to a UTC calendar date; leave plain dates alone."""
    # anything longer than YYYY-MM-DD carries a time part
    if isinstance(value, str) and len(value.strip()) > 10:
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


class Transaction(BaseModel):
    """A single revenue or expense entry.

    Expenses may reference an account, a credit card, or both; the engine
    does not rely on either.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": 1001,
                    "description": "Supermarket",
                    "date": "2024-05-15",
                    "amount_cents": -15420,
                    "category_id": 12,
                    "account_id": 3,
                }
            ]
        },
    )

    id: int = Field(description="Identifier assigned by the budgeting service")
    description: str = Field(default="", description="Free-text description")
    date: dt.date = Field(
        description="Calendar date of the transaction; datetimes are reduced to their UTC date"
    )
    amount_cents: int = Field(
        description="Signed amount in cents. Positive for revenue, negative for expense"
    )
    category_id: int = Field(description="Category this transaction belongs to")
    account_id: Optional[int] = Field(default=None, description="Bank account, if any")
    credit_card_id: Optional[int] = Field(default=None, description="Credit card, if any")
    paid: bool = Field(default=True, description="Whether the transaction was settled")
    recurring: bool = Field(default=False, description="Whether the transaction repeats")
    installment: int = Field(default=1, ge=1, description="Installment number")
    total_installments: int = Field(default=1, ge=1, description="Total installments")
    notes: Optional[str] = Field(default=None, description="User notes")
    tags: tuple[str, ...] = Field(default=(), description="User tags")

    @computed_field
    @property
    def is_expense(self) -> bool:
        """Returns True if money left the user's accounts."""
        return self.amount_cents < 0

    @computed_field
    @property
    def is_revenue(self) -> bool:
        """Returns True if money entered the user's accounts."""
        return self.amount_cents > 0

    @computed_field
    @property
    def abs_amount_cents(self) -> int:
        """Returns the absolute value of the amount."""
        return abs(self.amount_cents)

    @computed_field
    @property
    def month_key(self) -> str:
        """Calendar month bucket in ``YYYY-MM`` form."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v):
        """Anchor timestamps to UTC before taking the calendar date."""
        return _to_utc_date(v)

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, v):
        """Accept tags as a list or as the API's list of ``{"name": ...}`` objects."""
        if v is None:
            return ()
        return tuple(t["name"] if isinstance(t, dict) else t for t in v)


class Category(BaseModel):
    """A spending or income category.

    ``parent_id`` forms a tree, but aggregation treats every category as a
    flat leaf unless subcategories are explicitly rolled up.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, description="Display colour hint")
    parent_id: Optional[int] = Field(default=None, description="Parent category, if any")
    is_default: bool = False
    type: CategoryType = Field(default=CategoryType.EXPENSE)

    @field_validator("color", mode="before")
    @classmethod
    def default_color(cls, v):
        """Fall back to the default colour for blank values."""
        return v or DEFAULT_CATEGORY_COLOR


class Account(BaseModel):
    """A bank account. Archived accounts stop contributing after ``updated_at``."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: Optional[str] = None
    archived: bool = False
    default: bool = False
    type: AccountType = AccountType.CHECKING
    updated_at: Optional[date] = Field(
        default=None, description="Last update; the archive date for archived accounts"
    )

    @field_validator("updated_at", mode="before")
    @classmethod
    def normalize_updated_at(cls, v):
        return _to_utc_date(v)


class CreditCard(BaseModel):
    """A credit card. Archived cards stop contributing after ``updated_at``."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: Optional[str] = None
    archived: bool = False
    default: bool = False
    limit_cents: int = Field(default=0, ge=0, description="Credit limit in cents")
    closing_day: int = Field(default=1, ge=1, le=31)
    due_day: int = Field(default=10, ge=1, le=31)
    updated_at: Optional[date] = Field(
        default=None, description="Last update; the archive date for archived cards"
    )

    @field_validator("updated_at", mode="before")
    @classmethod
    def normalize_updated_at(cls, v):
        return _to_utc_date(v)

"""Analysis windows: presets, the comparison period, and window filtering.

The dashboard analyses a caller-chosen ``[start, end]`` window and compares
it with the window of equal length that ends the day before it starts.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Account, CreditCard, Transaction


class DateRange(BaseModel):
    """An inclusive calendar-date window."""

    model_config = ConfigDict(frozen=True)

    start: date = Field(description="First day of the window (inclusive)")
    end: date = Field(description="Last day of the window (inclusive)")
    label: Optional[str] = Field(default=None, description="Display label, e.g. 'Current month'")

    @field_validator("end")
    @classmethod
    def end_not_before_start(cls, v, info):
        """Validate that end is not before start."""
        if "start" in info.data and v < info.data["start"]:
            raise ValueError("end must be on or after start")
        return v

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        """Length of the window in days."""
        return (self.end - self.start).days + 1

    def describe(self) -> str:
        """The label if set, otherwise ``YYYY-MM-DD to YYYY-MM-DD``."""
        return self.label or f"{self.start.isoformat()} to {self.end.isoformat()}"


def _last_day(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _is_month_end(day: date) -> bool:
    return day.day == _last_day(day.year, day.month)


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the target month's length."""
    index = day.year * 12 + day.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, _last_day(year, month)))


def month_range(year: int, month: int, label: Optional[str] = None) -> DateRange:
    """The full calendar month."""
    return DateRange(
        start=date(year, month, 1),
        end=date(year, month, _last_day(year, month)),
        label=label,
    )


def preset_ranges(today: date) -> list[DateRange]:
    """Quick-pick windows offered next to the date picker.

    Current month, last 3 months, last 6 months and current year, each
    ending at the end of a month.
    """
    current = month_range(today.year, today.month)
    return [
        current.model_copy(update={"label": "Current month"}),
        DateRange(
            start=shift_months(current.start, -2),
            end=current.end,
            label="Last 3 months",
        ),
        DateRange(
            start=shift_months(current.start, -5),
            end=current.end,
            label="Last 6 months",
        ),
        DateRange(
            start=date(today.year, 1, 1),
            end=date(today.year, 12, 31),
            label="Current year",
        ),
    ]


def previous_period(period: DateRange) -> DateRange:
    """The comparison window of equal length immediately before ``period``.

    Windows made of whole calendar months map to the same number of whole
    months (May maps to April, the last 3 months to the 3 months before
    them). Any other window maps to the same number of days.
    """
    end = period.start - timedelta(days=1)
    if period.start.day == 1 and _is_month_end(period.end):
        span = (period.end.year * 12 + period.end.month) - (
            period.start.year * 12 + period.start.month
        ) + 1
        return DateRange(start=shift_months(period.start, -span), end=end)
    return DateRange(start=period.start - timedelta(days=period.days), end=end)


def is_card_active_in_period(card: Union[CreditCard, Account], period: DateRange) -> bool:
    """Archived cards only count if they were archived after the window ended."""
    if not card.archived or card.updated_at is None:
        return True
    return card.updated_at > period.end


def filter_transactions(
    transactions: Iterable[Transaction],
    period: DateRange,
    accounts: Sequence[Account] = (),
    credit_cards: Sequence[CreditCard] = (),
) -> list[Transaction]:
    """Transactions inside ``period`` whose account and card were still active.

    A transaction dated on or after the archive date of its archived account
    or credit card is dropped.
    """
    archived_accounts = {
        a.id: a.updated_at for a in accounts if a.archived and a.updated_at is not None
    }
    archived_cards = {
        c.id: c.updated_at for c in credit_cards if c.archived and c.updated_at is not None
    }

    kept = []
    for t in transactions:
        if not period.contains(t.date):
            continue
        if t.account_id in archived_accounts and t.date >= archived_accounts[t.account_id]:
            continue
        if t.credit_card_id in archived_cards and t.date >= archived_cards[t.credit_card_id]:
            continue
        kept.append(t)
    return kept

"""Tests for analysis windows."""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from ledgerlens_core.models import Account, CreditCard, Transaction
from ledgerlens_core.periods import (
    DateRange,
    filter_transactions,
    is_card_active_in_period,
    month_range,
    preset_ranges,
    previous_period,
    shift_months,
)


def txn(id: int, day: date, account_id=None, credit_card_id=None) -> Transaction:
    return Transaction(
        id=id,
        date=day,
        amount_cents=-1000,
        category_id=1,
        account_id=account_id,
        credit_card_id=credit_card_id,
    )


class TestDateRange:
    def test_end_before_start_rejected(self):
        with pytest.raises(PydanticValidationError):
            DateRange(start=date(2024, 5, 10), end=date(2024, 5, 1))

    def test_contains_is_inclusive(self):
        window = DateRange(start=date(2024, 5, 1), end=date(2024, 5, 31))
        assert window.contains(date(2024, 5, 1))
        assert window.contains(date(2024, 5, 31))
        assert not window.contains(date(2024, 6, 1))

    def test_days(self):
        assert month_range(2024, 2).days == 29

    def test_describe(self):
        window = DateRange(start=date(2024, 5, 1), end=date(2024, 5, 31))
        assert window.describe() == "2024-05-01 to 2024-05-31"
        assert month_range(2024, 5, label="May").describe() == "May"


class TestShiftMonths:
    def test_clamps_day(self):
        assert shift_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_crosses_year(self):
        assert shift_months(date(2024, 1, 15), -1) == date(2023, 12, 15)
        assert shift_months(date(2023, 12, 15), 1) == date(2024, 1, 15)

    def test_month_end_is_not_preserved(self):
        assert shift_months(date(2024, 4, 30), -1) == date(2024, 3, 30)


class TestPresets:
    def test_preset_ranges(self):
        presets = {p.label: p for p in preset_ranges(date(2024, 5, 17))}

        assert presets["Current month"].start == date(2024, 5, 1)
        assert presets["Current month"].end == date(2024, 5, 31)
        assert presets["Last 3 months"].start == date(2024, 3, 1)
        assert presets["Last 6 months"].start == date(2023, 12, 1)
        assert presets["Last 6 months"].end == date(2024, 5, 31)
        assert presets["Current year"].start == date(2024, 1, 1)
        assert presets["Current year"].end == date(2024, 12, 31)


class TestPreviousPeriod:
    def test_full_month_maps_to_full_previous_month(self):
        previous = previous_period(month_range(2024, 5))
        assert previous.start == date(2024, 4, 1)
        assert previous.end == date(2024, 4, 30)

    def test_short_month_maps_to_long_month_end(self):
        previous = previous_period(month_range(2024, 4))
        assert previous.end == date(2024, 3, 31)

    def test_january_maps_to_december(self):
        previous = previous_period(month_range(2024, 1))
        assert previous.start == date(2023, 12, 1)
        assert previous.end == date(2023, 12, 31)

    def test_partial_window_maps_to_equal_days(self):
        previous = previous_period(DateRange(start=date(2024, 5, 10), end=date(2024, 5, 20)))
        assert previous.start == date(2024, 4, 29)
        assert previous.end == date(2024, 5, 9)
        assert previous.days == 11

    def test_last_three_months_does_not_overlap(self):
        three = {p.label: p for p in preset_ranges(date(2024, 5, 10))}["Last 3 months"]

        previous = previous_period(three)

        assert previous.start == date(2023, 12, 1)
        assert previous.end == date(2024, 2, 29)
        assert previous.end < three.start

    def test_last_six_months_crosses_year(self):
        six = {p.label: p for p in preset_ranges(date(2024, 5, 10))}["Last 6 months"]

        previous = previous_period(six)

        assert previous.start == date(2023, 6, 1)
        assert previous.end == date(2023, 11, 30)

    def test_current_year_maps_to_previous_year(self):
        year = {p.label: p for p in preset_ranges(date(2024, 5, 10))}["Current year"]

        previous = previous_period(year)

        assert previous.start == date(2023, 1, 1)
        assert previous.end == date(2023, 12, 31)


class TestFilterTransactions:
    """Tests for window and archive filtering."""

    @pytest.fixture
    def may(self) -> DateRange:
        return month_range(2024, 5)

    def test_outside_window_dropped(self, may):
        transactions = [txn(1, date(2024, 4, 30)), txn(2, date(2024, 5, 1)), txn(3, date(2024, 6, 1))]
        assert [t.id for t in filter_transactions(transactions, may)] == [2]

    def test_archived_account_cuts_off(self, may):
        accounts = [Account(id=7, name="Old", archived=True, updated_at=date(2024, 5, 15))]
        transactions = [
            txn(1, date(2024, 5, 14), account_id=7),
            txn(2, date(2024, 5, 15), account_id=7),
            txn(3, date(2024, 5, 20), account_id=8),
        ]
        kept = filter_transactions(transactions, may, accounts=accounts)
        assert [t.id for t in kept] == [1, 3]

    def test_archived_card_cuts_off(self, may):
        cards = [CreditCard(id=4, name="Visa", archived=True, updated_at=date(2024, 5, 10))]
        transactions = [
            txn(1, date(2024, 5, 9), credit_card_id=4),
            txn(2, date(2024, 5, 11), credit_card_id=4),
        ]
        kept = filter_transactions(transactions, may, credit_cards=cards)
        assert [t.id for t in kept] == [1]

    def test_active_account_keeps_all(self, may):
        accounts = [Account(id=7, name="Main", archived=False, updated_at=date(2024, 5, 2))]
        transactions = [txn(1, date(2024, 5, 20), account_id=7)]
        assert len(filter_transactions(transactions, may, accounts=accounts)) == 1


class TestCardActivity:
    def test_unarchived_card_active(self):
        card = CreditCard(id=1, name="Visa")
        assert is_card_active_in_period(card, month_range(2024, 5))

    def test_archived_after_window_active(self):
        card = CreditCard(id=1, name="Visa", archived=True, updated_at=date(2024, 6, 2))
        assert is_card_active_in_period(card, month_range(2024, 5))

    def test_archived_inside_window_inactive(self):
        card = CreditCard(id=1, name="Visa", archived=True, updated_at=date(2024, 5, 20))
        assert not is_card_active_in_period(card, month_range(2024, 5))

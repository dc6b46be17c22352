"""Tests for the trend analyzer."""

from datetime import date
from itertools import count

import pytest

from ledgerlens_core.models import Category, CategoryTotal, Transaction, TrendDirection
from ledgerlens_core.trends import compare_categories, compute_trends, percent_change

_ids = count(1)


def txn(amount_cents: int, day: date, category_id: int = 1) -> Transaction:
    return Transaction(
        id=next(_ids), date=day, amount_cents=amount_cents, category_id=category_id
    )


@pytest.fixture
def categories() -> list[Category]:
    return [
        Category(id=1, name="Food"),
        Category(id=2, name="Housing"),
        Category(id=9, name="Salary", type="revenue"),
    ]


class TestPercentChange:
    def test_increase(self):
        assert percent_change(11000, 10000) == pytest.approx(10.0)

    def test_decrease(self):
        assert percent_change(5000, 10000) == pytest.approx(-50.0)

    def test_zero_previous(self):
        assert percent_change(5000, 0) == 0.0


class TestComputeTrends:
    """Tests for compute_trends."""

    def test_empty(self):
        assert compute_trends([]) == []

    def test_one_entry_per_month_ascending(self):
        trends = compute_trends(
            [
                txn(-100, date(2024, 6, 1)),
                txn(-100, date(2024, 5, 15)),
            ]
        )
        assert [t.period for t in trends] == ["2024-05", "2024-06"]

    def test_totals_and_balance(self):
        trends = compute_trends(
            [
                txn(450000, date(2024, 5, 1), category_id=9),
                txn(-360000, date(2024, 5, 2)),
            ]
        )
        assert len(trends) == 1
        assert trends[0].revenues == 450000
        assert trends[0].expenses == 360000
        assert trends[0].balance == 90000

    def test_growth_rate_against_previous_entry(self):
        trends = compute_trends(
            [
                txn(100000, date(2024, 4, 1), category_id=9),
                txn(120000, date(2024, 5, 1), category_id=9),
                txn(90000, date(2024, 6, 1), category_id=9),
            ]
        )
        assert trends[0].growth_rate == 0.0
        assert trends[1].growth_rate == pytest.approx(20.0)
        assert trends[2].growth_rate == pytest.approx(-25.0)

    def test_growth_rate_zero_after_month_without_revenue(self):
        trends = compute_trends(
            [
                txn(-5000, date(2024, 4, 1)),
                txn(100000, date(2024, 5, 1), category_id=9),
            ]
        )
        assert trends[1].growth_rate == 0.0

    def test_no_category_breakdown_without_categories(self):
        trends = compute_trends([txn(-100, date(2024, 5, 1))])
        assert trends[0].category_breakdown == []

    def test_category_breakdown_compares_months(self, categories):
        trends = compute_trends(
            [
                txn(-10000, date(2024, 5, 3), category_id=1),
                txn(-50000, date(2024, 5, 4), category_id=2),
                txn(-15000, date(2024, 6, 3), category_id=1),
                txn(-50000, date(2024, 6, 4), category_id=2),
            ],
            categories,
        )

        may = {c.category_id: c for c in trends[0].category_breakdown}
        assert may[1].previous_amount == 0
        assert may[1].trend_direction == TrendDirection.UP

        june = {c.category_id: c for c in trends[1].category_breakdown}
        assert june[1].change_percentage == pytest.approx(50.0)
        assert june[1].trend_direction == TrendDirection.UP
        assert june[2].trend_direction == TrendDirection.STABLE
        assert june[2].category_name == "Housing"


class TestCompareCategories:
    """Tests for compare_categories."""

    def test_directions(self, categories):
        current = {
            1: CategoryTotal(total_amount=10300, transaction_count=2),
            2: CategoryTotal(total_amount=5000, transaction_count=1),
        }
        previous = {
            1: CategoryTotal(total_amount=10000, transaction_count=2),
            2: CategoryTotal(total_amount=8000, transaction_count=1),
            3: CategoryTotal(total_amount=2000, transaction_count=1),
        }

        trends = {t.category_id: t for t in compare_categories(current, previous, categories)}

        assert trends[1].trend_direction == TrendDirection.STABLE
        assert trends[2].trend_direction == TrendDirection.DOWN
        assert trends[2].change_percentage == pytest.approx(-37.5)
        assert trends[3].current_amount == 0
        assert trends[3].trend_direction == TrendDirection.DOWN
        assert trends[3].category_name == "Unknown category"

    def test_sorted_by_current_amount(self, categories):
        current = {
            1: CategoryTotal(total_amount=100, transaction_count=1),
            2: CategoryTotal(total_amount=900, transaction_count=1),
        }
        trends = compare_categories(current, {}, categories)
        assert [t.category_id for t in trends] == [2, 1]

    def test_custom_stable_band(self, categories):
        current = {1: CategoryTotal(total_amount=10800, transaction_count=1)}
        previous = {1: CategoryTotal(total_amount=10000, transaction_count=1)}

        narrow = compare_categories(current, previous, categories, stable_threshold=5.0)
        wide = compare_categories(current, previous, categories, stable_threshold=10.0)

        assert narrow[0].trend_direction == TrendDirection.UP
        assert wide[0].trend_direction == TrendDirection.STABLE

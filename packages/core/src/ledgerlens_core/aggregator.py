"""Grouping of transactions by category, month and direction.

Pure functions over in-memory snapshots. Amounts are accumulated as absolute
cents, so expense totals are non-negative and ``balance`` is always
``revenues - expenses``.
"""

from collections import defaultdict
from typing import Iterable, Optional, Sequence

import structlog

from .models import (
    Category,
    CategoryExpense,
    CategoryTotal,
    FinancialSummary,
    MonthlyTotals,
    Transaction,
    TransactionKind,
)
from .thresholds import MONTHLY_CHART_WINDOW, TOP_CATEGORIES_LIMIT

logger = structlog.get_logger()


def split_totals(transactions: Iterable[Transaction]) -> tuple[int, int]:
    """Return ``(revenues, expenses)`` as absolute cents."""
    revenues = 0
    expenses = 0
    for t in transactions:
        if t.amount_cents > 0:
            revenues += t.amount_cents
        elif t.amount_cents < 0:
            expenses -= t.amount_cents
    return revenues, expenses


def summarize(transactions: Sequence[Transaction]) -> FinancialSummary:
    """Headline revenue, expense and count figures for a transaction set."""
    revenues, expenses = split_totals(transactions)
    return FinancialSummary(
        total_revenues=revenues,
        total_expenses=expenses,
        transaction_count=len(transactions),
    )


def group_by_category(
    transactions: Iterable[Transaction],
    categories: Optional[Iterable[Category]] = None,
    kind: TransactionKind = TransactionKind.EXPENSE,
) -> dict[int, CategoryTotal]:
    """Total the transactions of one direction per category.

    Args:
        transactions: Transactions to group.
        categories: When given, transactions in categories outside this set
            are ignored. When None, every matching transaction counts.
        kind: Which sign to include; amounts are accumulated as absolute values.

    Returns:
        Mapping of category id to its total, in first-encounter order.
        Categories without matching transactions are absent.
    """
    known = None if categories is None else {c.id for c in categories}
    sums: dict[int, list[int]] = {}

    for t in transactions:
        if not kind.matches(t.amount_cents):
            continue
        if known is not None and t.category_id not in known:
            continue
        entry = sums.setdefault(t.category_id, [0, 0])
        entry[0] += abs(t.amount_cents)
        entry[1] += 1

    return {
        category_id: CategoryTotal(total_amount=total, transaction_count=count)
        for category_id, (total, count) in sums.items()
    }


def rank_categories(
    totals: dict[int, CategoryTotal], limit: Optional[int] = None
) -> list[tuple[int, CategoryTotal]]:
    """Sort category totals descending, keeping first-encounter order for ties."""
    ranked = sorted(totals.items(), key=lambda item: item[1].total_amount, reverse=True)
    return ranked if limit is None else ranked[:limit]


def category_breakdown(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    kind: TransactionKind = TransactionKind.EXPENSE,
    limit: int = TOP_CATEGORIES_LIMIT,
) -> list[CategoryExpense]:
    """Top categories for a chart, with each slice's share of the shown total.

    Percentages are relative to the categories kept after truncation, so the
    slices of the chart always add up to 100%.
    """
    by_id = {c.id: c for c in categories}
    top = rank_categories(group_by_category(transactions, categories, kind), limit)
    shown_total = sum(total.total_amount for _, total in top)

    breakdown = []
    for category_id, total in top:
        category = by_id[category_id]
        breakdown.append(
            CategoryExpense(
                category_id=category_id,
                category_name=category.name,
                color=category.color,
                total_amount=total.total_amount,
                transaction_count=total.transaction_count,
                percentage=total.total_amount * 100 / shown_total if shown_total else 0.0,
            )
        )
    return breakdown


def roll_up_categories(
    totals: dict[int, CategoryTotal], categories: Iterable[Category]
) -> dict[int, CategoryTotal]:
    """Fold subcategory totals into their root category.

    Not applied by any analysis by default; aggregation treats subcategories
    as independent leaves unless a caller opts in here.
    """
    parents = {c.id: c.parent_id for c in categories}

    def root_of(category_id: int) -> int:
        seen = {category_id}
        while parents.get(category_id) is not None:
            parent = parents[category_id]
            if parent in seen:
                logger.warning("category_cycle_detected", category_id=category_id)
                break
            seen.add(parent)
            category_id = parent
        return category_id

    sums: dict[int, list[int]] = {}
    for category_id, total in totals.items():
        entry = sums.setdefault(root_of(category_id), [0, 0])
        entry[0] += total.total_amount
        entry[1] += total.transaction_count

    return {
        category_id: CategoryTotal(total_amount=total, transaction_count=count)
        for category_id, (total, count) in sums.items()
    }


def group_by_month(transactions: Iterable[Transaction]) -> dict[str, MonthlyTotals]:
    """Revenue and expense totals per ``YYYY-MM`` month, ascending by month.

    Month keys come from each transaction's calendar date, which the domain
    model has already anchored to UTC.
    """
    sums: dict[str, list[int]] = defaultdict(lambda: [0, 0])
    for t in transactions:
        entry = sums[t.month_key]
        if t.amount_cents > 0:
            entry[0] += t.amount_cents
        elif t.amount_cents < 0:
            entry[1] -= t.amount_cents

    return {
        month: MonthlyTotals(revenues=revenues, expenses=expenses)
        for month, (revenues, expenses) in sorted(sums.items())
    }


def recent_months(
    transactions: Iterable[Transaction], months: int = MONTHLY_CHART_WINDOW
) -> dict[str, MonthlyTotals]:
    """The most recent ``months`` buckets of :func:`group_by_month`."""
    if months <= 0:
        return {}
    monthly = group_by_month(transactions)
    return dict(list(monthly.items())[-months:])

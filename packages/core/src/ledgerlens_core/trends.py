"""Month-by-month trend series and category comparisons."""

from typing import Iterable, Optional, Sequence

import structlog

from .aggregator import group_by_category, group_by_month
from .models import (
    Category,
    CategoryTotal,
    CategoryTrend,
    Transaction,
    TransactionKind,
    TrendAnalysis,
    TrendDirection,
)
from .thresholds import CATEGORY_STABLE_THRESHOLD

logger = structlog.get_logger()


def percent_change(current: int, previous: int) -> float:
    """Change from ``previous`` to ``current`` in percent; 0 when previous is 0."""
    if previous == 0:
        return 0.0
    return (current - previous) * 100 / previous


def compare_categories(
    current: dict[int, CategoryTotal],
    previous: dict[int, CategoryTotal],
    categories: Sequence[Category],
    stable_threshold: float = CATEGORY_STABLE_THRESHOLD,
) -> list[CategoryTrend]:
    """Compare two periods' category totals.

    Every category present on either side gets an entry, largest current
    total first. A change within ``stable_threshold`` percent is stable
    only when both periods had spending; appearing or vanishing categories
    are always up or down.
    """
    names = {c.id: c.name for c in categories}
    ids = list(current)
    ids.extend(category_id for category_id in previous if category_id not in current)

    trends = []
    for category_id in ids:
        now = current[category_id].total_amount if category_id in current else 0
        before = previous[category_id].total_amount if category_id in previous else 0
        change = percent_change(now, before)

        if now and before and abs(change) <= stable_threshold:
            direction = TrendDirection.STABLE
        elif now > before:
            direction = TrendDirection.UP
        elif now < before:
            direction = TrendDirection.DOWN
        else:
            direction = TrendDirection.STABLE

        trends.append(
            CategoryTrend(
                category_id=category_id,
                category_name=names.get(category_id, "Unknown category"),
                current_amount=now,
                previous_amount=before,
                change_percentage=change,
                trend_direction=direction,
            )
        )

    trends.sort(key=lambda t: t.current_amount, reverse=True)
    return trends


def compute_trends(
    transactions: Iterable[Transaction],
    categories: Optional[Sequence[Category]] = None,
    stable_threshold: float = CATEGORY_STABLE_THRESHOLD,
) -> list[TrendAnalysis]:
    """One :class:`TrendAnalysis` per month present, ascending by month.

    ``growth_rate`` is the revenue change against the preceding entry of the
    series (0 for the first entry and after a month without revenue). When
    ``categories`` is given, each entry also carries the expense category
    comparison against the preceding entry.
    """
    transactions = list(transactions)
    monthly = group_by_month(transactions)

    by_month: dict[str, list[Transaction]] = {month: [] for month in monthly}
    if categories is not None:
        for t in transactions:
            by_month[t.month_key].append(t)

    trends = []
    previous_revenues: Optional[int] = None
    previous_totals: dict[int, CategoryTotal] = {}

    for month, totals in monthly.items():
        growth = 0.0
        if previous_revenues is not None:
            growth = percent_change(totals.revenues, previous_revenues)

        breakdown: list[CategoryTrend] = []
        if categories is not None:
            month_totals = group_by_category(by_month[month], None, TransactionKind.EXPENSE)
            breakdown = compare_categories(
                month_totals, previous_totals, categories, stable_threshold
            )
            previous_totals = month_totals

        trends.append(
            TrendAnalysis(
                period=month,
                revenues=totals.revenues,
                expenses=totals.expenses,
                balance=totals.balance,
                growth_rate=growth,
                category_breakdown=breakdown,
            )
        )
        previous_revenues = totals.revenues

    logger.debug("trends_computed", months=len(trends))
    return trends

"""Heuristic insights over the current and previous period.

Rules run in a fixed order and each emits at most one insight:

1. Expense trend against the previous period
2. Revenue trend against the previous period
3. Dominant expense category
4. Anomalously large expenses
5. Savings-rate health

Insight ids are derived from the rule (and, for the dominant category, the
category id), so they are unique within a call and stable across calls.
"""

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

import structlog

from .aggregator import group_by_category, split_totals
from .config import InsightThresholds
from .models import (
    Category,
    Insight,
    InsightType,
    Severity,
    Transaction,
    TransactionKind,
)

logger = structlog.get_logger()

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class InsightGenerator:
    """
    Apply the insight rules to a period's transactions.

    The generator holds only its thresholds and clock, so one instance can
    serve any number of concurrent calls.
    """

    def __init__(
        self,
        thresholds: Optional[InsightThresholds] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            thresholds: Rule cut-offs (default: values from ``thresholds.py``)
            clock: Source of the ``created_at`` timestamp (default: UTC now)
        """
        self.thresholds = thresholds or InsightThresholds()
        self.clock = clock or _utc_now

    def generate(
        self,
        current: Sequence[Transaction],
        categories: Sequence[Category],
        previous: Sequence[Transaction] = (),
    ) -> list[Insight]:
        """
        Generate insights for the current period.

        Args:
            current: Transactions of the period being analysed
            categories: Categories used to name the dominant category
            previous: Transactions of the preceding period of equal length

        Returns:
            Insights newest first; all share one timestamp, so rule order is kept
        """
        created_at = self.clock()
        rules = (
            self._expense_trend(current, previous, created_at),
            self._revenue_trend(current, previous, created_at),
            self._dominant_category(current, categories, created_at),
            self._anomalies(current, created_at),
            self._savings_health(current, created_at),
        )
        insights = [insight for insight in rules if insight is not None]

        logger.info(
            "insights_generated",
            count=len(insights),
            ids=[i.id for i in insights],
            transactions=len(current),
            previous_transactions=len(previous),
        )
        return sorted(insights, key=lambda i: i.created_at, reverse=True)

    def _expense_trend(
        self,
        current: Sequence[Transaction],
        previous: Sequence[Transaction],
        created_at: datetime,
    ) -> Optional[Insight]:
        if not previous:
            return None

        _, current_expenses = split_totals(current)
        _, previous_expenses = split_totals(previous)
        if previous_expenses == 0:
            return None

        change = (current_expenses - previous_expenses) * 100 / previous_expenses
        if abs(change) <= self.thresholds.expense_change_threshold:
            return None

        rising = change > 0
        return Insight(
            id="trend-expenses",
            type=InsightType.ALERT if rising else InsightType.ACHIEVEMENT,
            title="Spending Increased" if rising else "Spending Decreased",
            description=(
                f"Your expenses {'increased' if rising else 'decreased'} "
                f"{abs(change):.1f}% compared to the previous period"
            ),
            value=current_expenses,
            change=change,
            severity=(
                Severity.HIGH
                if abs(change) > self.thresholds.expense_change_high
                else Severity.MEDIUM
            ),
            period="monthly",
            created_at=created_at,
        )

    def _revenue_trend(
        self,
        current: Sequence[Transaction],
        previous: Sequence[Transaction],
        created_at: datetime,
    ) -> Optional[Insight]:
        if not previous:
            return None

        current_revenues, _ = split_totals(current)
        previous_revenues, _ = split_totals(previous)
        if previous_revenues <= 0:
            return None

        change = (current_revenues - previous_revenues) * 100 / previous_revenues
        if abs(change) <= self.thresholds.revenue_change_threshold:
            return None

        rising = change > 0
        return Insight(
            id="trend-revenues",
            type=InsightType.ACHIEVEMENT if rising else InsightType.ALERT,
            title="Income Increased" if rising else "Income Decreased",
            description=(
                f"Your income {'increased' if rising else 'decreased'} "
                f"{abs(change):.1f}% compared to the previous period"
            ),
            value=current_revenues,
            change=change,
            severity=(
                Severity.HIGH
                if abs(change) > self.thresholds.revenue_change_high
                else Severity.MEDIUM
            ),
            period="monthly",
            created_at=created_at,
        )

    def _dominant_category(
        self,
        current: Sequence[Transaction],
        categories: Sequence[Category],
        created_at: datetime,
    ) -> Optional[Insight]:
        totals = group_by_category(current, None, TransactionKind.EXPENSE)
        if not totals:
            return None

        total_expenses = sum(t.total_amount for t in totals.values())
        max_category_id = None
        max_amount = 0
        for category_id, total in totals.items():
            if total.total_amount > max_amount:
                max_category_id = category_id
                max_amount = total.total_amount

        if max_category_id is None:
            return None

        percentage = max_amount * 100 / total_expenses
        if percentage <= self.thresholds.dominant_category_threshold:
            return None

        category = next((c for c in categories if c.id == max_category_id), None)
        if category is None:
            logger.warning("dominant_category_unknown", category_id=max_category_id)

        return Insight(
            id=f"category-dominant-{max_category_id}",
            type=InsightType.ALERT,
            title="Dominant Category",
            description=(
                f"{percentage:.1f}% of your spending is concentrated in "
                f"{category.name if category else 'an unknown category'}"
            ),
            value=max_amount,
            severity=(
                Severity.HIGH
                if percentage > self.thresholds.dominant_category_high
                else Severity.MEDIUM
            ),
            category=category.name if category else None,
            period="current",
            created_at=created_at,
        )

    def _anomalies(
        self, current: Sequence[Transaction], created_at: datetime
    ) -> Optional[Insight]:
        amounts = [abs(t.amount_cents) for t in current if t.amount_cents < 0]
        if len(amounts) < self.thresholds.anomaly_min_expenses:
            return None

        average = sum(amounts) / len(amounts)
        threshold = average * self.thresholds.anomaly_multiplier
        anomalous = [amount for amount in amounts if amount > threshold]
        if not anomalous:
            return None

        return Insight(
            id="anomaly-high-spending",
            type=InsightType.ALERT,
            title="Unusual Expenses Detected",
            description=(
                f"{len(anomalous)} transaction(s) well above your usual spending"
            ),
            value=sum(anomalous),
            severity=Severity.MEDIUM,
            period="current",
            created_at=created_at,
        )

    def _savings_health(
        self, current: Sequence[Transaction], created_at: datetime
    ) -> Optional[Insight]:
        revenues, expenses = split_totals(current)
        if revenues <= 0:
            return None

        net = revenues - expenses
        savings_rate = net * 100 / revenues

        if savings_rate > self.thresholds.savings_good:
            return Insight(
                id="health-good-savings",
                type=InsightType.ACHIEVEMENT,
                title="Great Savings Rate",
                description=f"You are saving {savings_rate:.1f}% of your income. Well done!",
                value=abs(net),
                severity=Severity.LOW,
                period="current",
                created_at=created_at,
            )

        if savings_rate < self.thresholds.savings_low:
            return Insight(
                id="health-low-savings",
                type=InsightType.RECOMMENDATION,
                title="Low Savings Rate",
                description=(
                    f"You are saving only {savings_rate:.1f}% of your income. "
                    "Consider reviewing your expenses."
                ),
                value=abs(net),
                severity=Severity.HIGH if savings_rate < 0 else Severity.MEDIUM,
                period="current",
                created_at=created_at,
            )

        return None


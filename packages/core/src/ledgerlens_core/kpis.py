"""Scalar indicators for a transaction set."""

from typing import Sequence

from .aggregator import split_totals
from .models import KPI, KPITrend, KPIUnit, Transaction
from .thresholds import SAVINGS_RATE_TARGET


def calculate_kpis(
    transactions: Sequence[Transaction],
    savings_rate_target: float = SAVINGS_RATE_TARGET,
) -> list[KPI]:
    """Savings rate, transaction count and average expense ticket.

    An empty set yields three zero-valued KPIs. The trend of the savings-rate
    and average-ticket KPIs follows the sign of the balance; the count is
    always neutral.
    """
    revenues, expenses = split_totals(transactions)
    balance = revenues - expenses
    expense_count = sum(1 for t in transactions if t.amount_cents < 0)
    trend = KPITrend.POSITIVE if balance > 0 else KPITrend.NEGATIVE

    return [
        KPI(
            key="savings_rate",
            name="Savings Rate",
            value=balance * 100 / revenues if revenues > 0 else 0.0,
            unit=KPIUnit.PERCENTAGE,
            target=savings_rate_target,
            trend=trend,
            description="Share of income left after expenses",
        ),
        KPI(
            key="transaction_count",
            name="Transactions",
            value=len(transactions),
            unit=KPIUnit.COUNT,
            trend=KPITrend.NEUTRAL,
            description="Number of transactions in the period",
        ),
        KPI(
            key="average_expense_ticket",
            name="Average Expense",
            value=expenses / expense_count if expense_count else 0.0,
            unit=KPIUnit.CURRENCY,
            trend=trend,
            description="Average amount per expense transaction, in cents",
        ),
    ]

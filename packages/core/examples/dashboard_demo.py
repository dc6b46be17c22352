#!/usr/bin/env python3
"""
Dashboard Analysis Demonstration

This script walks through the analysis a dashboard runs for one month:
1. Parse budgeting-API payloads into domain models
2. Filter the current and previous windows
3. Build KPIs, breakdowns, trends and insights

Run: python packages/core/examples/dashboard_demo.py
"""

from datetime import date

from ledgerlens_core import (
    FinancialAnalysisService,
    configure_logging,
    filter_transactions,
    load_config,
    month_range,
    previous_period,
)
from ledgerlens_core.data_mapper import (
    parse_accounts,
    parse_categories,
    parse_transactions,
    validate_category_references,
)


CATEGORIES = [
    {"id": 1, "name": "Groceries", "color": "#22C55E", "type": "expense"},
    {"id": 2, "name": "Rent", "color": "#3B82F6", "type": "expense"},
    {"id": 3, "name": "Transport", "color": "#F59E0B", "type": "expense"},
    {"id": 4, "name": "Dining out", "color": "#EF4444", "type": "expense"},
    {"id": 10, "name": "Salary", "color": "#10B981", "type": "revenue"},
]

ACCOUNTS = [
    {"id": 1, "name": "Checking", "type": "checking", "archived": False},
]


def create_sample_transactions() -> list[dict]:
    """Two months of activity as the budgeting API would return it."""
    rows = [
        # April
        ("2024-04-05", 520000, 10, "Salary"),
        ("2024-04-06", -180000, 2, "Rent"),
        ("2024-04-09", -42000, 1, "Supermarket"),
        ("2024-04-16", -38500, 1, "Supermarket"),
        ("2024-04-20", -12000, 3, "Metro card"),
        ("2024-04-26", -9800, 4, "Pizza"),
        # May
        ("2024-05-05", 520000, 10, "Salary"),
        ("2024-05-06", -180000, 2, "Rent"),
        ("2024-05-08", -45500, 1, "Supermarket"),
        ("2024-05-14", -8900, 4, "Lunch"),
        ("2024-05-18", -12000, 3, "Metro card"),
        ("2024-05-22", -96000, 4, "Anniversary dinner"),
        ("2024-05-29", -41000, 1, "Supermarket"),
    ]
    return [
        {
            "id": index,
            "date": day,
            "amount_cents": amount,
            "category_id": category_id,
            "description": description,
            "account_id": 1,
            "paid": True,
        }
        for index, (day, amount, category_id, description) in enumerate(rows, start=1)
    ]


def cents(value: int) -> str:
    return f"${value / 100:,.2f}"


def main():
    """Run the demo."""
    print("=" * 70)
    print("LEDGERLENS - Dashboard Analysis Demo")
    print("=" * 70)
    print()

    config = load_config()
    configure_logging(config)

    # Step 1: Parse payloads
    print("Step 1: Parsing budgeting-API payloads...")
    categories = parse_categories(CATEGORIES)
    accounts = parse_accounts(ACCOUNTS)
    transactions = parse_transactions(create_sample_transactions())
    validate_category_references(transactions, categories)
    print(f"  - Categories: {len(categories)}")
    print(f"  - Transactions: {len(transactions)}")
    print()

    # Step 2: Windows
    print("Step 2: Selecting the current and previous windows...")
    period = month_range(2024, 5, label="May 2024")
    comparison = previous_period(period)
    current = filter_transactions(transactions, period, accounts=accounts)
    previous = filter_transactions(transactions, comparison, accounts=accounts)
    print(f"  - Current: {period.describe()} ({len(current)} transactions)")
    print(f"  - Previous: {comparison.describe()} ({len(previous)} transactions)")
    print()

    # Step 3: Analysis
    print("Step 3: Building the dashboard...")
    service = FinancialAnalysisService(config=config)
    analysis = service.analyze(current, categories, previous, period=period)

    summary = analysis.summary
    print(f"  - Revenues: {cents(summary.total_revenues)}")
    print(f"  - Expenses: {cents(summary.total_expenses)}")
    print(f"  - Balance: {cents(summary.balance)}")
    print()

    print("KPIs:")
    for kpi in analysis.kpis:
        print(f"  - {kpi.name}: {kpi.value:,.1f} ({kpi.unit.value}, {kpi.trend.value})")
    print()

    print("Expense breakdown:")
    for slice_ in analysis.expense_breakdown:
        print(f"  - {slice_.category_name}: {cents(slice_.total_amount)} ({slice_.percentage:.1f}%)")
    print()

    print("Category changes:")
    for change in analysis.category_changes:
        print(
            f"  - {change.category_name}: {change.change_percentage:+.1f}% "
            f"({change.trend_direction.value})"
        )
    print()

    print("Insights:")
    for insight in analysis.insights:
        print(f"  [{insight.severity.value.upper()}] {insight.title}")
        print(f"      {insight.description}")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()

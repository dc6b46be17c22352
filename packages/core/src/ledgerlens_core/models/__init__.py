"""Data models for ledgerlens-core.

This package provides:
- Domain records from the budgeting service (domain.py)
- Derived analysis records returned to the dashboard (analysis.py)
"""

from ledgerlens_core.models.domain import (
    Account,
    AccountType,
    Category,
    CategoryType,
    CreditCard,
    Transaction,
)
from ledgerlens_core.models.analysis import (
    KPI,
    CategoryExpense,
    CategoryTotal,
    CategoryTrend,
    DashboardAnalysis,
    FinancialSummary,
    Insight,
    InsightType,
    KPITrend,
    KPIUnit,
    MonthlyTotals,
    Severity,
    TransactionKind,
    TrendAnalysis,
    TrendDirection,
)

__all__ = [
    # Domain
    "Account",
    "AccountType",
    "Category",
    "CategoryType",
    "CreditCard",
    "Transaction",
    # Enumerations
    "InsightType",
    "KPITrend",
    "KPIUnit",
    "Severity",
    "TransactionKind",
    "TrendDirection",
    # Derived records
    "KPI",
    "CategoryExpense",
    "CategoryTotal",
    "CategoryTrend",
    "DashboardAnalysis",
    "FinancialSummary",
    "Insight",
    "MonthlyTotals",
    "TrendAnalysis",
]

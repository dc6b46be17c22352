"""LedgerLens Core - Financial analysis for a personal budgeting dashboard."""

__version__ = "0.1.0"

from .aggregator import (
    category_breakdown,
    group_by_category,
    group_by_month,
    recent_months,
    roll_up_categories,
    summarize,
)
from .config import AnalysisConfig, InsightThresholds, LedgerLensConfig, configure_logging, load_config
from .exceptions import ConfigurationError, LedgerLensError, ValidationError
from .insights import InsightGenerator
from .models import (
    KPI,
    Account,
    Category,
    CategoryTrend,
    CreditCard,
    DashboardAnalysis,
    Insight,
    InsightType,
    Severity,
    Transaction,
    TransactionKind,
    TrendAnalysis,
)
from .periods import DateRange, filter_transactions, month_range, preset_ranges, previous_period
from .service import (
    FinancialAnalysisService,
    calculate_kpis,
    generate_insights,
    generate_trend_analysis,
)
from .trends import compare_categories, compute_trends

__all__ = [
    # Service
    "FinancialAnalysisService",
    "InsightGenerator",
    "generate_insights",
    "calculate_kpis",
    "generate_trend_analysis",
    # Aggregation and trends
    "group_by_category",
    "group_by_month",
    "category_breakdown",
    "recent_months",
    "roll_up_categories",
    "summarize",
    "compute_trends",
    "compare_categories",
    # Periods
    "DateRange",
    "filter_transactions",
    "month_range",
    "preset_ranges",
    "previous_period",
    # Models
    "Account",
    "Category",
    "CreditCard",
    "Transaction",
    "TransactionKind",
    "Insight",
    "InsightType",
    "Severity",
    "KPI",
    "TrendAnalysis",
    "CategoryTrend",
    "DashboardAnalysis",
    # Configuration
    "AnalysisConfig",
    "InsightThresholds",
    "LedgerLensConfig",
    "configure_logging",
    "load_config",
    # Errors
    "LedgerLensError",
    "ValidationError",
    "ConfigurationError",
]

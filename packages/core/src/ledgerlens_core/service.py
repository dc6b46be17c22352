"""Financial analysis facade consumed by the dashboard.

``FinancialAnalysisService`` bundles the aggregator, trend analyzer, KPI
calculator and insight generator behind the operations the presentation
layer calls. It holds configuration only; every method is a pure function
of its arguments apart from reading the clock for insight timestamps.
"""

from typing import Optional, Sequence

import structlog

from . import aggregator, trends
from .config import LedgerLensConfig
from .insights import Clock, InsightGenerator
from .kpis import calculate_kpis as _calculate_kpis
from .models import (
    KPI,
    Category,
    CategoryTotal,
    DashboardAnalysis,
    Insight,
    MonthlyTotals,
    Transaction,
    TransactionKind,
    TrendAnalysis,
)
from .periods import DateRange

logger = structlog.get_logger()


class FinancialAnalysisService:
    """
    Turn a period's transactions into KPIs, trends, breakdowns and insights.

    Safe to share between concurrent callers: no state is kept across calls.
    """

    def __init__(
        self,
        config: Optional[LedgerLensConfig] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            config: Thresholds and display settings (default: loaded from environment)
            clock: Source of insight timestamps (default: UTC now)
        """
        self.config = config or LedgerLensConfig()
        self._insights = InsightGenerator(thresholds=self.config.insights, clock=clock)

    def generate_insights(
        self,
        current: Sequence[Transaction],
        categories: Sequence[Category],
        previous: Sequence[Transaction] = (),
    ) -> list[Insight]:
        """Heuristic insights for ``current``, compared with ``previous``."""
        return self._insights.generate(current, categories, previous)

    def calculate_kpis(self, transactions: Sequence[Transaction]) -> list[KPI]:
        """Savings rate, transaction count and average expense ticket."""
        return _calculate_kpis(
            transactions, savings_rate_target=self.config.analysis.savings_rate_target
        )

    def generate_trend_analysis(
        self, transactions: Sequence[Transaction], categories: Sequence[Category]
    ) -> list[TrendAnalysis]:
        """Per-month series with revenue growth and category comparisons."""
        return trends.compute_trends(
            transactions,
            categories,
            stable_threshold=self.config.analysis.category_stable_threshold,
        )

    def group_by_category(
        self,
        transactions: Sequence[Transaction],
        categories: Optional[Sequence[Category]] = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
    ) -> dict[int, CategoryTotal]:
        return aggregator.group_by_category(transactions, categories, kind)

    def group_by_month(self, transactions: Sequence[Transaction]) -> dict[str, MonthlyTotals]:
        return aggregator.group_by_month(transactions)

    def analyze(
        self,
        current: Sequence[Transaction],
        categories: Sequence[Category],
        previous: Sequence[Transaction] = (),
        period: Optional[DateRange] = None,
    ) -> DashboardAnalysis:
        """
        Build everything the dashboard shows for one period.

        Args:
            current: Transactions already filtered to the selected window
            categories: All categories known to the budgeting service
            previous: Transactions of the comparison window (may be empty)
            period: The selected window, used only for its label

        Returns:
            DashboardAnalysis with summary, KPIs, insights, trends and breakdowns
        """
        settings = self.config.analysis

        summary = aggregator.summarize(current)
        category_changes = trends.compare_categories(
            aggregator.group_by_category(current, None, TransactionKind.EXPENSE),
            aggregator.group_by_category(previous, None, TransactionKind.EXPENSE),
            categories,
            stable_threshold=settings.category_stable_threshold,
        )

        analysis = DashboardAnalysis(
            period_label=period.describe() if period else None,
            summary=summary,
            kpis=self.calculate_kpis(current),
            insights=self.generate_insights(current, categories, previous),
            trends=self.generate_trend_analysis(current, categories),
            monthly=aggregator.recent_months(current, settings.monthly_window),
            expense_breakdown=aggregator.category_breakdown(
                current, categories, TransactionKind.EXPENSE, settings.top_categories_limit
            ),
            revenue_breakdown=aggregator.category_breakdown(
                current, categories, TransactionKind.REVENUE, settings.top_categories_limit
            ),
            category_changes=category_changes if previous else [],
        )

        logger.info(
            "dashboard_analysis_built",
            period=analysis.period_label,
            transactions=summary.transaction_count,
            balance=summary.balance,
            insights=len(analysis.insights),
            months=len(analysis.trends),
        )
        return analysis


def generate_insights(
    current: Sequence[Transaction],
    categories: Sequence[Category],
    previous: Sequence[Transaction] = (),
) -> list[Insight]:
    """Shortcut using configuration loaded from the environment."""
    return FinancialAnalysisService().generate_insights(current, categories, previous)


def calculate_kpis(transactions: Sequence[Transaction]) -> list[KPI]:
    """Shortcut using configuration loaded from the environment."""
    return FinancialAnalysisService().calculate_kpis(transactions)


def generate_trend_analysis(
    transactions: Sequence[Transaction], categories: Sequence[Category]
) -> list[TrendAnalysis]:
    """Shortcut using configuration loaded from the environment."""
    return FinancialAnalysisService().generate_trend_analysis(transactions, categories)

"""Derived records produced by the analysis engine.

Everything here is created fresh by each call and owned by the caller once
returned. Amounts are integer cents; percentages are floats in the 0-100
range (or beyond, for growth).
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class TransactionKind(str, Enum):
    """Direction used to select transactions by sign."""

    EXPENSE = "expense"
    REVENUE = "revenue"

    def matches(self, amount_cents: int) -> bool:
        """Return True if an amount of this sign belongs to this kind."""
        if self is TransactionKind.EXPENSE:
            return amount_cents < 0
        return amount_cents > 0


class InsightType(str, Enum):
    TREND = "trend"
    ALERT = "alert"
    RECOMMENDATION = "recommendation"
    ACHIEVEMENT = "achievement"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class KPIUnit(str, Enum):
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    COUNT = "count"


class KPITrend(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Insight(BaseModel):
    """A human-readable observation about the current period."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier, unique within one generation call")
    type: InsightType
    title: str
    description: str
    value: Optional[int] = Field(
        default=None, ge=0, description="Most relevant monetary magnitude, in cents"
    )
    change: Optional[float] = Field(
        default=None, description="Signed period-over-period change (%)"
    )
    severity: Severity
    category: Optional[str] = Field(default=None, description="Category name, if any")
    period: str = Field(description="Period label such as 'monthly' or 'current'")
    created_at: datetime = Field(description="Generation timestamp, used for ordering")


class KPI(BaseModel):
    """A scalar indicator with its unit and optional target."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Stable identifier for lookups")
    name: str
    value: float
    unit: KPIUnit
    target: Optional[float] = None
    trend: KPITrend
    description: str


class CategoryTotal(BaseModel):
    """Absolute total and count of matching transactions in one category."""

    model_config = ConfigDict(frozen=True)

    total_amount: int = Field(default=0, ge=0)
    transaction_count: int = Field(default=0, ge=0)


class MonthlyTotals(BaseModel):
    """Revenue and expense totals for one calendar month."""

    model_config = ConfigDict(frozen=True)

    revenues: int = Field(default=0, ge=0)
    expenses: int = Field(default=0, ge=0)

    @computed_field
    @property
    def balance(self) -> int:
        """Revenues minus expenses."""
        return self.revenues - self.expenses


class CategoryExpense(BaseModel):
    """One slice of a category breakdown chart."""

    model_config = ConfigDict(frozen=True)

    category_id: int
    category_name: str
    color: str
    total_amount: int = Field(ge=0)
    transaction_count: int = Field(ge=0)
    percentage: float = Field(ge=0.0, le=100.0)


class CategoryTrend(BaseModel):
    """Change in one category's spending between two periods."""

    model_config = ConfigDict(frozen=True)

    category_id: int
    category_name: str
    current_amount: int = Field(ge=0)
    previous_amount: int = Field(ge=0)
    change_percentage: float
    trend_direction: TrendDirection


class TrendAnalysis(BaseModel):
    """Per-month summary, one per month present in the input."""

    model_config = ConfigDict(frozen=True)

    period: str = Field(description="Month key in YYYY-MM form")
    revenues: int = Field(ge=0)
    expenses: int = Field(ge=0)
    balance: int
    growth_rate: float = Field(
        default=0.0, description="Revenue growth (%) against the preceding entry"
    )
    category_breakdown: list[CategoryTrend] = Field(default_factory=list)


class FinancialSummary(BaseModel):
    """Headline totals for a transaction set."""

    model_config = ConfigDict(frozen=True)

    total_revenues: int = Field(default=0, ge=0)
    total_expenses: int = Field(default=0, ge=0)
    transaction_count: int = Field(default=0, ge=0)

    @computed_field
    @property
    def balance(self) -> int:
        """Revenues minus expenses."""
        return self.total_revenues - self.total_expenses

    @computed_field
    @property
    def savings_rate(self) -> float:
        """Balance as a percentage of revenues; 0 without revenue."""
        if self.total_revenues <= 0:
            return 0.0
        return self.balance * 100 / self.total_revenues


class DashboardAnalysis(BaseModel):
    """Everything the dashboard renders for one period."""

    model_config = ConfigDict(frozen=True)

    period_label: Optional[str] = None
    summary: FinancialSummary
    kpis: list[KPI] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)
    trends: list[TrendAnalysis] = Field(default_factory=list)
    monthly: dict[str, MonthlyTotals] = Field(default_factory=dict)
    expense_breakdown: list[CategoryExpense] = Field(default_factory=list)
    revenue_breakdown: list[CategoryExpense] = Field(default_factory=list)
    category_changes: list[CategoryTrend] = Field(default_factory=list)

"""Heuristic thresholds used by the analysis engine.

Every cut-off applied by the insight rules, KPI targets and chart windows
lives here as a named constant. The values are the defaults for the
pydantic-settings models in ``config.py``; override them there (or through
``LEDGERLENS_*`` environment variables) rather than editing this module.

All percentage thresholds are compared with strict inequalities: a change of
exactly 10% does not trigger the expense-trend rule.
"""

# =============================================================================
# PERIOD-OVER-PERIOD TRENDS
# =============================================================================

# Expense change (%) needed before a trend insight is emitted, and the level
# above which it becomes high severity.
EXPENSE_CHANGE_THRESHOLD = 10.0
EXPENSE_CHANGE_HIGH_SEVERITY = 20.0

# Revenue is more stable than spending, so smaller swings are reported.
REVENUE_CHANGE_THRESHOLD = 5.0
REVENUE_CHANGE_HIGH_SEVERITY = 15.0


# =============================================================================
# CATEGORY CONCENTRATION
# =============================================================================

# Share (%) of total expenses a single category must exceed to be reported
# as dominant, and the share above which the alert is high severity.
DOMINANT_CATEGORY_THRESHOLD = 30.0
DOMINANT_CATEGORY_HIGH_SEVERITY = 50.0


# =============================================================================
# ANOMALOUS TRANSACTIONS
# =============================================================================

# Fewer expenses than this give a meaningless average.
ANOMALY_MIN_EXPENSES = 5

# An expense is anomalous when its magnitude exceeds this multiple of the
# mean expense magnitude.
ANOMALY_MULTIPLIER = 2.0


# =============================================================================
# SAVINGS RATE
# =============================================================================

SAVINGS_RATE_GOOD = 20.0
SAVINGS_RATE_LOW = 10.0

# Display-only target carried on the savings-rate KPI.
SAVINGS_RATE_TARGET = 20.0


# =============================================================================
# DISPLAY WINDOWS
# =============================================================================

TOP_CATEGORIES_LIMIT = 8
MONTHLY_CHART_WINDOW = 12

# Category month-over-month changes within this band (%) count as stable.
CATEGORY_STABLE_THRESHOLD = 5.0

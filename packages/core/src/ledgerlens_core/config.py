"""Configuration system for LedgerLens.

This module provides Pydantic Settings-based configuration with environment
variable support. Defaults come from ``thresholds.py``.

Usage:
    from ledgerlens_core.config import LedgerLensConfig

    # Load from environment variables and .env file
    config = LedgerLensConfig()

    # Tune a rule without code changes
    print(config.insights.expense_change_threshold)
"""

import logging
from typing import Any

import structlog
from pydantic import Field, ValidationError as PydanticValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import thresholds
from .exceptions import ConfigurationError


class InsightThresholds(BaseSettings):
    """Cut-offs used by the insight rules.

    Environment Variables:
        LEDGERLENS_INSIGHTS_EXPENSE_CHANGE_THRESHOLD: Minimum |expense change| (%)
        LEDGERLENS_INSIGHTS_EXPENSE_CHANGE_HIGH: |expense change| (%) for high severity
        LEDGERLENS_INSIGHTS_REVENUE_CHANGE_THRESHOLD: Minimum |revenue change| (%)
        LEDGERLENS_INSIGHTS_REVENUE_CHANGE_HIGH: |revenue change| (%) for high severity
        LEDGERLENS_INSIGHTS_DOMINANT_CATEGORY_THRESHOLD: Minimum category share (%)
        LEDGERLENS_INSIGHTS_DOMINANT_CATEGORY_HIGH: Category share (%) for high severity
        LEDGERLENS_INSIGHTS_ANOMALY_MIN_EXPENSES: Expenses needed for anomaly detection
        LEDGERLENS_INSIGHTS_ANOMALY_MULTIPLIER: Multiple of the mean flagged as anomalous
        LEDGERLENS_INSIGHTS_SAVINGS_GOOD: Savings rate (%) praised as healthy
        LEDGERLENS_INSIGHTS_SAVINGS_LOW: Savings rate (%) flagged as low
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERLENS_INSIGHTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    expense_change_threshold: float = Field(
        default=thresholds.EXPENSE_CHANGE_THRESHOLD,
        ge=0.0,
        description="Minimum absolute expense change (%) that produces a trend insight",
    )
    expense_change_high: float = Field(
        default=thresholds.EXPENSE_CHANGE_HIGH_SEVERITY,
        ge=0.0,
        description="Absolute expense change (%) above which severity is high",
    )
    revenue_change_threshold: float = Field(
        default=thresholds.REVENUE_CHANGE_THRESHOLD,
        ge=0.0,
        description="Minimum absolute revenue change (%) that produces a trend insight",
    )
    revenue_change_high: float = Field(
        default=thresholds.REVENUE_CHANGE_HIGH_SEVERITY,
        ge=0.0,
        description="Absolute revenue change (%) above which severity is high",
    )
    dominant_category_threshold: float = Field(
        default=thresholds.DOMINANT_CATEGORY_THRESHOLD,
        ge=0.0,
        le=100.0,
        description="Share of total expenses (%) a category must exceed to be dominant",
    )
    dominant_category_high: float = Field(
        default=thresholds.DOMINANT_CATEGORY_HIGH_SEVERITY,
        ge=0.0,
        le=100.0,
        description="Share of total expenses (%) above which the alert is high severity",
    )
    anomaly_min_expenses: int = Field(
        default=thresholds.ANOMALY_MIN_EXPENSES,
        ge=1,
        description="Minimum number of expenses before anomaly detection runs",
    )
    anomaly_multiplier: float = Field(
        default=thresholds.ANOMALY_MULTIPLIER,
        gt=0.0,
        description="Multiple of the mean expense above which an expense is anomalous",
    )
    savings_good: float = Field(
        default=thresholds.SAVINGS_RATE_GOOD,
        description="Savings rate (%) above which an achievement is emitted",
    )
    savings_low: float = Field(
        default=thresholds.SAVINGS_RATE_LOW,
        description="Savings rate (%) below which a recommendation is emitted",
    )

    @model_validator(mode="after")
    def check_ordering(self) -> "InsightThresholds":
        """High-severity cut-offs must not sit below their trigger level."""
        pairs = (
            ("expense_change_threshold", "expense_change_high"),
            ("revenue_change_threshold", "revenue_change_high"),
            ("dominant_category_threshold", "dominant_category_high"),
            ("savings_low", "savings_good"),
        )
        for low_name, high_name in pairs:
            if getattr(self, low_name) > getattr(self, high_name):
                raise ValueError(f"{low_name} must not exceed {high_name}")
        return self


class AnalysisConfig(BaseSettings):
    """Display and KPI settings.

    Environment Variables:
        LEDGERLENS_ANALYSIS_TOP_CATEGORIES_LIMIT: Categories kept in a breakdown
        LEDGERLENS_ANALYSIS_MONTHLY_WINDOW: Months kept in the monthly series
        LEDGERLENS_ANALYSIS_SAVINGS_RATE_TARGET: Target shown on the savings KPI
        LEDGERLENS_ANALYSIS_CATEGORY_STABLE_THRESHOLD: Band (%) treated as stable
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERLENS_ANALYSIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    top_categories_limit: int = Field(
        default=thresholds.TOP_CATEGORIES_LIMIT,
        gt=0,
        description="Number of categories kept in a category breakdown",
    )
    monthly_window: int = Field(
        default=thresholds.MONTHLY_CHART_WINDOW,
        gt=0,
        description="Number of most recent months kept in the monthly series",
    )
    savings_rate_target: float = Field(
        default=thresholds.SAVINGS_RATE_TARGET,
        description="Display-only target for the savings-rate KPI",
    )
    category_stable_threshold: float = Field(
        default=thresholds.CATEGORY_STABLE_THRESHOLD,
        ge=0.0,
        description="Month-over-month category change (%) treated as stable",
    )


class LedgerLensConfig(BaseSettings):
    """Root configuration for LedgerLens.

    Environment Variables:
        LEDGERLENS_ENV: Environment name (development, staging, production, test)
        LEDGERLENS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        config = LedgerLensConfig(
            insights=InsightThresholds(expense_change_threshold=15.0),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    insights: InsightThresholds = Field(default_factory=InsightThresholds)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def load_config(**overrides: Any) -> LedgerLensConfig:
    """Load configuration, reporting invalid settings as ConfigurationError.

    Args:
        **overrides: Explicit values taking precedence over the environment.

    Raises:
        ConfigurationError: If any setting fails validation.
    """
    try:
        return LedgerLensConfig(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg', str(e))}",
            config_key=key,
            actual=first.get("input") if key else None,
            details={"error_count": e.error_count()},
        ) from e


def configure_logging(config: LedgerLensConfig) -> None:
    """Route structlog output through a logger filtered at the configured level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level)
        ),
    )

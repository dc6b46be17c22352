"""Custom exceptions for LedgerLens.

The analysis engine itself never raises for well-formed input: degenerate
data (empty periods, zero denominators) is handled by returning empty or
zero-valued results. These exceptions guard the boundaries instead, where
raw records from the budgeting API are turned into domain models and where
configuration is loaded.

Example:
    try:
        transactions = parse_transactions(payload)
    except ValidationError as e:
        logger.warning("invalid_payload", field=e.field, error=str(e))
        raise
    except LedgerLensError as e:
        # Handle any LedgerLens-related error
        logger.error("load_failed", error=str(e))
"""

from typing import Any, Optional


class LedgerLensError(Exception):
    """Base exception for all LedgerLens errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise LedgerLensError("Something went wrong", details={"code": 500})
        LedgerLensError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize LedgerLensError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the error is potentially recoverable through
                retry or corrected input. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ValidationError(LedgerLensError):
    """Error raised when an input record fails validation.

    Raised at the data boundary when a record from the budgeting service is
    malformed (non-numeric amount, missing date) or references a category
    that is not part of the loaded category set.

    Attributes:
        field: The field that failed validation.
        value: The invalid value (if safe to include).
        constraint: The validation constraint that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Unknown category reference",
        ...     field="category_id",
        ...     value=42,
        ...     constraint="Must reference a loaded category",
        ... )
        ValidationError: Unknown category reference
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = True,
    ) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error description.
            field: The name of the field that failed validation.
            value: The invalid value.
            constraint: Description of the validation rule violated.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed by correcting the
                input. Defaults to True.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(LedgerLensError):
    """Error raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).

    Example:
        >>> raise ConfigurationError(
        ...     "Low savings threshold must not exceed the good threshold",
        ...     config_key="savings_low",
        ...     expected="<= savings_good",
        ...     actual=25.0,
        ... )
        ConfigurationError: Low savings threshold must not exceed the good threshold
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error description.
            config_key: The name of the configuration key that is problematic.
            expected: Description of what value was expected.
            actual: The actual value found.
            details: Optional dictionary with additional context.
            recoverable: Whether the error can be fixed at runtime.
                Defaults to False.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "LedgerLensError",
    "ValidationError",
    "ConfigurationError",
]

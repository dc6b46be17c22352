"""Map budgeting-API payloads onto domain models.

The analysis engine trusts its inputs. This module is the boundary where
that trust is earned: raw dictionaries as returned by the budgeting service
are validated into frozen models, and any malformed record is reported as
a :class:`~ledgerlens_core.exceptions.ValidationError` naming the offending
record and field.
"""

from typing import Any, Iterable, Mapping, Optional, Sequence, TypeVar

import structlog
from pydantic import BaseModel, ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import Account, Category, CreditCard, Transaction

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)

# API field name -> model field name
CREDIT_CARD_FIELD_MAP = {"limit": "limit_cents"}


def _parse_records(
    model: type[ModelT],
    records: Iterable[Mapping[str, Any]],
    field_map: Optional[Mapping[str, str]] = None,
) -> list[ModelT]:
    field_map = field_map or {}
    parsed = []
    for index, record in enumerate(records):
        data = {field_map.get(key, key): value for key, value in record.items()}
        try:
            parsed.append(model.model_validate(data))
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            logger.warning(
                "record_validation_failed",
                model=model.__name__,
                index=index,
                record_id=record.get("id"),
                field=field,
                error=first.get("msg"),
            )
            raise ValidationError(
                f"Invalid {model.__name__} record at index {index}: {first.get('msg')}",
                field=field,
                value=first.get("input") if field else None,
                constraint=first.get("type"),
                details={"index": index, "record_id": record.get("id")},
            ) from e

    logger.debug("records_parsed", model=model.__name__, count=len(parsed))
    return parsed


def parse_transactions(records: Iterable[Mapping[str, Any]]) -> list[Transaction]:
    """Build transactions from API records."""
    return _parse_records(Transaction, records)


def parse_categories(records: Iterable[Mapping[str, Any]]) -> list[Category]:
    """Build categories from API records."""
    return _parse_records(Category, records)


def parse_accounts(records: Iterable[Mapping[str, Any]]) -> list[Account]:
    """Build bank accounts from API records."""
    return _parse_records(Account, records)


def parse_credit_cards(records: Iterable[Mapping[str, Any]]) -> list[CreditCard]:
    """Build credit cards from API records; the API's ``limit`` is in cents."""
    return _parse_records(CreditCard, records, CREDIT_CARD_FIELD_MAP)


def validate_category_references(
    transactions: Sequence[Transaction], categories: Sequence[Category]
) -> None:
    """Fail fast if any transaction points at a category that was not loaded.

    Raises:
        ValidationError: For the first transaction with an unknown category.
    """
    known = {c.id for c in categories}
    for t in transactions:
        if t.category_id not in known:
            raise ValidationError(
                f"Transaction {t.id} references unknown category {t.category_id}",
                field="category_id",
                value=t.category_id,
                constraint="Must reference a loaded category",
                details={"transaction_id": t.id},
            )

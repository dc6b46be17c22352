"""Tests for mapping budgeting-API payloads onto models."""

from datetime import date

import pytest

from ledgerlens_core.data_mapper import (
    parse_accounts,
    parse_categories,
    parse_credit_cards,
    parse_transactions,
    validate_category_references,
)
from ledgerlens_core.exceptions import LedgerLensError, ValidationError
from ledgerlens_core.models import AccountType, CategoryType


@pytest.fixture
def transaction_payload() -> list[dict]:
    """Transactions as the budgeting API returns them."""
    return [
        {
            "id": 501,
            "description": "Salary",
            "date": "2024-05-05",
            "paid": True,
            "amount_cents": 520000,
            "total_installments": 1,
            "installment": 1,
            "recurring": True,
            "account_id": 3,
            "category_id": 10,
            "contact_id": None,
            "credit_card_id": None,
            "credit_card_invoice_id": None,
            "created_at": "2024-05-05T09:00:00-03:00",
            "updated_at": "2024-05-05T09:00:00-03:00",
            "attachments_count": 0,
            "notes": None,
            "tags": [],
        },
        {
            "id": 502,
            "description": "Groceries",
            "date": "2024-05-07",
            "paid": True,
            "amount_cents": -23450,
            "total_installments": 1,
            "installment": 1,
            "recurring": False,
            "account_id": None,
            "category_id": 1,
            "credit_card_id": 4,
            "notes": "weekly",
            "tags": [{"name": "home"}],
        },
    ]


class TestParseTransactions:
    def test_parses_api_records(self, transaction_payload):
        transactions = parse_transactions(transaction_payload)

        assert [t.id for t in transactions] == [501, 502]
        assert transactions[0].date == date(2024, 5, 5)
        assert transactions[0].recurring is True
        assert transactions[1].credit_card_id == 4
        assert transactions[1].tags == ("home",)

    def test_non_numeric_amount(self, transaction_payload):
        transaction_payload[1]["amount_cents"] = "lots"

        with pytest.raises(ValidationError) as exc_info:
            parse_transactions(transaction_payload)

        error = exc_info.value
        assert error.field == "amount_cents"
        assert error.value == "lots"
        assert error.details["index"] == 1
        assert error.details["record_id"] == 502
        assert error.recoverable is True

    def test_missing_category(self, transaction_payload):
        del transaction_payload[0]["category_id"]

        with pytest.raises(ValidationError) as exc_info:
            parse_transactions(transaction_payload)

        assert exc_info.value.field == "category_id"

    def test_is_ledgerlens_error(self, transaction_payload):
        transaction_payload[0]["date"] = "not a date"

        with pytest.raises(LedgerLensError):
            parse_transactions(transaction_payload)

    def test_empty(self):
        assert parse_transactions([]) == []


class TestParseReferenceData:
    def test_categories(self):
        categories = parse_categories(
            [
                {"id": 1, "name": "Food", "color": "00ff00", "parent_id": None, "is_default": True, "type": "expense"},
                {"id": 10, "name": "Salary", "color": None, "parent_id": None, "is_default": False, "type": "revenue"},
            ]
        )
        assert categories[0].color == "00ff00"
        assert categories[1].type == CategoryType.REVENUE
        assert categories[1].color == "#8B5CF6"

    def test_invalid_category_type(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_categories([{"id": 1, "name": "Food", "type": "transfer"}])
        assert exc_info.value.field == "type"

    def test_accounts(self):
        accounts = parse_accounts(
            [
                {
                    "id": 3,
                    "name": "Checking",
                    "description": None,
                    "archived": True,
                    "created_at": "2020-01-01T00:00:00Z",
                    "updated_at": "2024-02-01T10:00:00Z",
                    "default": True,
                    "type": "checking",
                }
            ]
        )
        assert accounts[0].type == AccountType.CHECKING
        assert accounts[0].updated_at == date(2024, 2, 1)

    def test_credit_cards_map_limit(self):
        cards = parse_credit_cards(
            [
                {
                    "id": 4,
                    "name": "Visa",
                    "archived": False,
                    "default": False,
                    "limit": 800000,
                    "closing_day": 3,
                    "due_day": 10,
                }
            ]
        )
        assert cards[0].limit_cents == 800000


class TestValidateCategoryReferences:
    def test_known_categories_pass(self, transaction_payload):
        transactions = parse_transactions(transaction_payload)
        categories = parse_categories([{"id": 1, "name": "Food"}, {"id": 10, "name": "Salary"}])

        validate_category_references(transactions, categories)

    def test_unknown_category_fails_fast(self, transaction_payload):
        transactions = parse_transactions(transaction_payload)
        categories = parse_categories([{"id": 10, "name": "Salary"}])

        with pytest.raises(ValidationError) as exc_info:
            validate_category_references(transactions, categories)

        assert exc_info.value.field == "category_id"
        assert exc_info.value.value == 1
        assert exc_info.value.details["transaction_id"] == 502

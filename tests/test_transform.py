"""Tests for row transformation."""

from datetime import datetime, UTC
from decimal import Decimal

import pytest

from brokermap.domain.entities import (
    Account,
    ActivityType,
    CsvDataset,
    ImportField,
    ImportMapping,
)
from brokermap.domain.transform import transform_dataset, transform_row
from brokermap.domain.validation import candidate_errors

HEADERS = ["Trade Date", "Ticker", "Side", "Qty", "Price", "Fee"]
CASH_HEADERS = ["Date", "Ticker", "Type", "Qty", "Price", "Amount", "Currency"]


@pytest.fixture
def accounts():
    return [
        Account(id=1, name="Broker", currency="USD", created_at=datetime.now(UTC)),
        Account(id=2, name="Euro Broker", currency="EUR", created_at=datetime.now(UTC)),
    ]


@pytest.fixture
def cash_mapping():
    return ImportMapping(
        account_id=2,
        field_mappings={
            ImportField.DATE: "Date",
            ImportField.SYMBOL: "Ticker",
            ImportField.ACTIVITY_TYPE: "Type",
            ImportField.QUANTITY: "Qty",
            ImportField.UNIT_PRICE: "Price",
            ImportField.AMOUNT: "Amount",
            ImportField.CURRENCY: "Currency",
        },
        activity_mappings=(
            (ActivityType.DEPOSIT, ("DEPOSIT",)),
            (ActivityType.DIVIDEND, ("DIV",)),
            (ActivityType.SELL, ("SELL",)),
        ),
    )


def test_trade_row(trade_mapping, accounts):
    """A buy row keeps its own quantity, price and fee."""
    mapping = trade_mapping.with_account(1)
    row = ["2024-01-05", "AAPL", "BUY", "10", "150.00", "1.00"]

    candidate = transform_row(row, mapping, HEADERS, accounts)

    assert candidate.date == "2024-01-05"
    assert candidate.symbol == "AAPL"
    assert candidate.asset_id == "AAPL"
    assert candidate.activity_type == "BUY"
    assert candidate.quantity == Decimal("10")
    assert candidate.unit_price == Decimal("150.00")
    assert candidate.fee == Decimal("1.00")
    assert candidate.amount is None
    assert candidate.currency == "USD"
    assert candidate.account_id == 1
    assert candidate.is_valid is False
    assert candidate.is_draft is True
    assert candidate.comment == ""


def test_unmapped_activity_falls_back_and_parses_as_position(trade_mapping, accounts):
    """An unmapped activity value passes through and keeps quantity and price."""
    row = ["2024-01-05", "AAPL", "div", "10", "150.00", "1.00"]

    candidate = transform_row(row, trade_mapping.with_account(1), HEADERS, accounts)

    assert candidate.activity_type == "DIV"
    assert candidate.quantity == Decimal("10")
    assert candidate.unit_price == Decimal("150.00")


def test_cash_row_with_amount(accounts):
    """Quantity and price columns are ignored when the amount is given."""
    mapping = ImportMapping(
        account_id=1,
        field_mappings={
            ImportField.DATE: "Date",
            ImportField.SYMBOL: "Ticker",
            ImportField.ACTIVITY_TYPE: "Type",
            ImportField.AMOUNT: "Amount",
        },
        activity_mappings=((ActivityType.DEPOSIT, ("DEPOSIT",)),),
    )
    headers = ["Date", "Ticker", "Type", "Amount"]

    candidate = transform_row(["2024-02-01", "$CASH", "DEPOSIT", "500.00"], mapping, headers, accounts)

    assert candidate.quantity == Decimal(1)
    assert candidate.unit_price == Decimal("500.00")
    assert candidate.amount == Decimal("500.00")


def test_cash_row_amount_overrides_quantity_and_price(cash_mapping, accounts):
    row = ["2024-03-01", "AAPL", "DIV", "10", "0.24", "2.40", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.activity_type == "DIVIDEND"
    assert candidate.quantity == 1
    assert candidate.unit_price == Decimal("2.40")
    assert candidate.amount == Decimal("2.40")


def test_cash_row_derives_amount(cash_mapping, accounts):
    row = ["2024-03-01", "AAPL", "DIV", "10", "0.24", "", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.amount == Decimal("2.40")
    assert candidate.quantity == 1
    assert candidate.unit_price == Decimal("2.40")


def test_cash_row_derivation_defaults(cash_mapping, accounts):
    """Missing quantity counts as 1 and missing price as 0."""
    only_price = transform_row(
        ["2024-03-01", "$CASH", "DEPOSIT", "", "250", "n/a", "USD"], cash_mapping, CASH_HEADERS, accounts
    )
    nothing = transform_row(
        ["2024-03-01", "$CASH", "DEPOSIT", "", "", "", "USD"], cash_mapping, CASH_HEADERS, accounts
    )

    assert only_price.amount == Decimal("250")
    assert only_price.unit_price == Decimal("250")
    assert nothing.amount == 0
    assert nothing.quantity == 1
    assert nothing.unit_price == 0


def test_position_row_keeps_nan(cash_mapping, accounts):
    """Unparsable quantity or price is left for validation."""
    row = ["2024-03-01", "AAPL", "SELL", "ten", "", "", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.quantity.is_nan()
    assert candidate.unit_price.is_nan()


def test_position_row_does_not_default(cash_mapping, accounts):
    row = ["2024-03-01", "AAPL", "SELL", "0", "0", "", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.quantity == 0
    assert candidate.unit_price == 0


def test_currency_from_csv_wins(cash_mapping, accounts):
    row = ["2024-03-01", "AAPL", "SELL", "1", "10", "", "GBP"]

    assert transform_row(row, cash_mapping, CASH_HEADERS, accounts).currency == "GBP"


def test_currency_falls_back_to_account(cash_mapping, accounts):
    row = ["2024-03-01", "AAPL", "SELL", "1", "10", "", ""]

    assert transform_row(row, cash_mapping, CASH_HEADERS, accounts).currency == "EUR"


def test_currency_unknown_account_is_none(cash_mapping, accounts):
    row = ["2024-03-01", "AAPL", "SELL", "1", "10", "", ""]
    mapping = cash_mapping.with_account(99)

    assert transform_row(row, mapping, CASH_HEADERS, accounts).currency is None


def test_symbol_is_trimmed_and_remapped(trade_mapping, accounts):
    mapping = trade_mapping.with_account(1).with_symbol("APPL", "AAPL")

    remapped = transform_row(["2024-01-05", " APPL ", "BUY", "1", "1", "0"], mapping, HEADERS, accounts)
    untouched = transform_row(["2024-01-05", " MSFT ", "BUY", "1", "1", "0"], mapping, HEADERS, accounts)

    assert remapped.symbol == "AAPL"
    assert remapped.asset_id == "AAPL"
    assert untouched.symbol == "MSFT"


def test_fee_defaults_to_zero(trade_mapping, accounts):
    row = ["2024-01-05", "AAPL", "BUY", "1", "1", "-"]

    assert transform_row(row, trade_mapping.with_account(1), HEADERS, accounts).fee == 0


def test_short_row_degrades_to_missing_values(trade_mapping, accounts):
    candidate = transform_row(["2024-01-05", "AAPL", "BUY"], trade_mapping.with_account(1), HEADERS, accounts)

    assert candidate.symbol == "AAPL"
    assert candidate.quantity.is_nan()
    assert candidate.fee == 0


def test_transform_dataset_skips_header_and_keeps_order(trade_mapping, trade_dataset, accounts):
    candidates = transform_dataset(trade_dataset, trade_mapping.with_account(1), accounts)

    assert [c.symbol for c in candidates] == ["AAPL", "MSFT"]
    assert [c.activity_type for c in candidates] == ["BUY", "BUY"]


def test_transform_dataset_empty_file(trade_mapping, accounts):
    assert transform_dataset(CsvDataset.from_rows([]), trade_mapping, accounts) == []


def test_cash_row_infinite_quantity_counts_as_missing(cash_mapping, accounts):
    row = ["2024-03-01", "$CASH", "DEPOSIT", "inf", "", "", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.quantity == 1
    assert candidate.amount == 0
    assert candidate.unit_price == 0


def test_cash_row_derived_amount_overflow_is_nan(cash_mapping, accounts):
    """A product too large to represent is reported by validation, not raised."""
    row = ["2024-03-01", "$CASH", "DEPOSIT", "1e999999", "10", "", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.quantity == 1
    assert candidate.amount.is_nan()
    assert candidate.unit_price.is_nan()
    assert candidate_errors(candidate) == ["unit price is not a number", "amount is not a number"]


@pytest.mark.parametrize("value", ["inf", "-Infinity", "NaN"])
def test_position_row_non_finite_is_nan(cash_mapping, accounts, value):
    row = ["2024-03-01", "AAPL", "SELL", value, value, "", "USD"]

    candidate = transform_row(row, cash_mapping, CASH_HEADERS, accounts)

    assert candidate.quantity.is_nan()
    assert candidate.unit_price.is_nan()


def test_infinite_fee_defaults_to_zero(trade_mapping, accounts):
    row = ["2024-01-05", "AAPL", "BUY", "1", "1", "Infinity"]

    assert transform_row(row, trade_mapping.with_account(1), HEADERS, accounts).fee == 0

"""Row transformation from raw CSV cells to import candidates."""

from decimal import Decimal, Overflow, localcontext
from typing import Optional, Sequence

from brokermap.domain.classifier import is_cash_activity
from brokermap.domain.entities import (
    Account,
    CsvDataset,
    ImportCandidate,
    ImportField,
    ImportMapping,
)
from brokermap.domain.resolution import match_activity_type, resolve_field
from brokermap.utils.number_parser import NAN, parse_number, parse_number_or, parse_optional_number


def _account_currency(accounts: Sequence[Account], account_id: Optional[int]) -> Optional[str]:
    for account in accounts:
        if account.id == account_id:
            return account.currency
    return None


def transform_row(
    row: Sequence[str],
    mapping: ImportMapping,
    headers: Sequence[str],
    accounts: Sequence[Account],
) -> ImportCandidate:
    """Turn one data row into an import candidate.

    Cash-style activities are always represented as one unit priced at the
    amount. When the amount column is missing or not a number, the amount is
    derived from quantity (default 1) times unit price (default 0). A product
    too large to represent becomes NaN.

    Position-style activities take quantity and unit price straight from
    their columns; values that are not numbers stay NaN for validation.

    Args:
        row: Data row
        mapping: Import mapping
        headers: Header row of the current file
        accounts: Known accounts, used for the default currency

    Returns:
        Draft import candidate
    """

    def value(import_field: ImportField) -> str:
        return resolve_field(row, import_field, mapping, headers)

    activity_type = match_activity_type(value(ImportField.ACTIVITY_TYPE), mapping.activity_mappings)
    amount = parse_optional_number(value(ImportField.AMOUNT))

    if is_cash_activity(activity_type):
        if amount is None:
            quantity = parse_number_or(value(ImportField.QUANTITY), Decimal(1))
            unit_price = parse_number_or(value(ImportField.UNIT_PRICE), Decimal(0))
            with localcontext() as ctx:
                ctx.traps[Overflow] = False
                amount = quantity * unit_price
            if not amount.is_finite():
                amount = NAN
        quantity = Decimal(1)
        unit_price = amount or Decimal(0)
    else:
        quantity = parse_number(value(ImportField.QUANTITY))
        unit_price = parse_number(value(ImportField.UNIT_PRICE))

    currency = value(ImportField.CURRENCY) or _account_currency(accounts, mapping.account_id)

    raw_symbol = value(ImportField.SYMBOL).strip()
    symbol = mapping.symbol_mappings.get(raw_symbol) or raw_symbol

    return ImportCandidate(
        date=value(ImportField.DATE),
        asset_id=symbol,
        symbol=symbol,
        activity_type=activity_type,
        quantity=quantity,
        unit_price=unit_price,
        currency=currency,
        fee=parse_number_or(value(ImportField.FEE), Decimal(0)),
        amount=amount,
        account_id=mapping.account_id,
        is_valid=False,
        is_draft=True,
        comment="",
    )


def transform_dataset(
    dataset: CsvDataset, mapping: ImportMapping, accounts: Sequence[Account]
) -> list[ImportCandidate]:
    """Transform every data row of ``dataset``, in row order."""
    return [transform_row(row, mapping, dataset.headers, accounts) for row in dataset.data_rows]

"""Domain model entities for brokermap.

These are pure data classes representing business concepts, independent of
database schema. Import mappings are immutable: every edit returns a new
mapping so transformation and validation stay pure functions of
(mapping, dataset).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, Sequence


class ImportField(str, Enum):
    """Logical fields a CSV column can be mapped to."""

    DATE = "date"
    SYMBOL = "symbol"
    ACTIVITY_TYPE = "activity_type"
    QUANTITY = "quantity"
    UNIT_PRICE = "unit_price"
    CURRENCY = "currency"
    FEE = "fee"
    AMOUNT = "amount"


class ActivityType(str, Enum):
    """Internal activity types."""

    BUY = "BUY"
    SELL = "SELL"
    DIVIDEND = "DIVIDEND"
    INTEREST = "INTEREST"
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    ADD_HOLDING = "ADD_HOLDING"
    REMOVE_HOLDING = "REMOVE_HOLDING"
    TRANSFER_IN = "TRANSFER_IN"
    TRANSFER_OUT = "TRANSFER_OUT"
    FEE = "FEE"
    TAX = "TAX"
    SPLIT = "SPLIT"
    CONVERSION_IN = "CONVERSION_IN"
    CONVERSION_OUT = "CONVERSION_OUT"


ActivityMappings = tuple[tuple[ActivityType, tuple[str, ...]], ...]

# Source row index (header row is 0) -> error messages
ValidationReport = dict[int, list[str]]


@dataclass(frozen=True)
class Account:
    """Brokerage account domain entity."""

    id: int
    name: str
    currency: str
    created_at: datetime


@dataclass(frozen=True)
class ImportMapping:
    """Per-account CSV import mapping.

    ``activity_mappings`` is an ordered sequence of (activity type, raw
    patterns) pairs. Order only matters when two equally long patterns match
    the same value.
    """

    account_id: Optional[int] = None
    field_mappings: Mapping[ImportField, str] = field(default_factory=dict)
    activity_mappings: ActivityMappings = ()
    symbol_mappings: Mapping[str, str] = field(default_factory=dict)

    def with_account(self, account_id: Optional[int]) -> "ImportMapping":
        """Return a copy bound to another account."""
        return replace(self, account_id=account_id)

    def with_field(self, import_field: ImportField, header: Optional[str]) -> "ImportMapping":
        """Return a copy with ``import_field`` mapped to ``header``.

        An empty or None header removes the mapping.
        """
        field_mappings = dict(self.field_mappings)
        if header:
            field_mappings[import_field] = header
        else:
            field_mappings.pop(import_field, None)
        return replace(self, field_mappings=field_mappings)

    def with_activity_type(self, csv_value: str, activity_type: ActivityType) -> "ImportMapping":
        """Return a copy where ``csv_value`` maps to ``activity_type`` only.

        The value is removed from every other activity type so the configured
        patterns stay disjoint.
        """
        key = csv_value.strip().upper()
        updated = []
        seen = False
        for mapped_type, patterns in self.activity_mappings:
            kept = tuple(p for p in patterns if p.strip().upper() != key)
            if mapped_type == activity_type:
                kept = kept + (csv_value.strip(),)
                seen = True
            if kept:
                updated.append((mapped_type, kept))
        if not seen:
            updated.append((activity_type, (csv_value.strip(),)))
        return replace(self, activity_mappings=tuple(updated))

    def with_symbol(self, csv_symbol: str, symbol: Optional[str]) -> "ImportMapping":
        """Return a copy where ``csv_symbol`` is replaced by ``symbol``.

        An empty or None symbol removes the mapping.
        """
        symbol_mappings = dict(self.symbol_mappings)
        if symbol:
            symbol_mappings[csv_symbol.strip()] = symbol.strip()
        else:
            symbol_mappings.pop(csv_symbol.strip(), None)
        return replace(self, symbol_mappings=symbol_mappings)

    def patterns_for(self, activity_type: ActivityType) -> tuple[str, ...]:
        """Return the raw patterns configured for ``activity_type``."""
        for mapped_type, patterns in self.activity_mappings:
            if mapped_type == activity_type:
                return patterns
        return ()


@dataclass(frozen=True)
class CsvDataset:
    """Parsed CSV file. ``rows[0]`` is the header row."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]]) -> "CsvDataset":
        """Build a dataset whose headers are taken from the first row."""
        frozen = tuple(tuple(row) for row in rows)
        headers = frozen[0] if frozen else ()
        return cls(headers=headers, rows=frozen)

    @property
    def data_rows(self) -> tuple[tuple[str, ...], ...]:
        return self.rows[1:]


@dataclass(frozen=True)
class ImportCandidate:
    """Activity record derived from one CSV row, not yet persisted."""

    date: str
    asset_id: str
    symbol: str
    activity_type: str
    quantity: Decimal
    unit_price: Decimal
    currency: Optional[str]
    fee: Decimal
    amount: Optional[Decimal]
    account_id: Optional[int]
    is_valid: bool = False
    is_draft: bool = True
    comment: str = ""


@dataclass(frozen=True)
class Activity:
    """Imported activity domain entity."""

    id: int
    account_id: int
    date: str
    symbol: str
    activity_type: str
    quantity: Decimal
    unit_price: Decimal
    currency: str
    fee: Decimal
    amount: Optional[Decimal]
    comment: Optional[str]
    imported_at: datetime

"""Mapping completeness check that gates an import."""

from dataclasses import dataclass, field
from typing import Sequence

from brokermap.domain.classifier import is_cash_activity
from brokermap.domain.entities import CsvDataset, ImportField, ImportMapping
from brokermap.domain.resolution import find_activity_type, normalize_activity_value, resolve_field

ALWAYS_REQUIRED_FIELDS = (ImportField.DATE, ImportField.SYMBOL, ImportField.ACTIVITY_TYPE)
POSITION_FIELDS = (ImportField.QUANTITY, ImportField.UNIT_PRICE)


@dataclass(frozen=True)
class MappingGaps:
    """What keeps a mapping from being usable for a dataset."""

    account_missing: bool = False
    missing_fields: list[ImportField] = field(default_factory=list)
    unmapped_activity_types: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.account_missing or self.missing_fields or self.unmapped_activity_types)

    def describe(self) -> str:
        """Return a corrective message for the user."""
        parts = []
        if self.account_missing:
            parts.append("select an account")
        if self.missing_fields:
            parts.append("map columns for: " + ", ".join(f.value for f in self.missing_fields))
        if self.unmapped_activity_types:
            values = [value or "(blank)" for value in self.unmapped_activity_types]
            parts.append("map activity types: " + ", ".join(values))
        if not parts:
            return "Mapping is complete."
        return "Please " + "; ".join(parts) + " before importing."


def find_mapping_gaps(
    headers: Sequence[str], mapping: ImportMapping, dataset: CsvDataset
) -> MappingGaps:
    """Find required fields and activity values the mapping does not cover.

    Date, Symbol and ActivityType are always required. Quantity and UnitPrice
    may be left unmapped only when Amount is mapped and every activity in the
    file is cash-style.

    Each distinct raw activity value is matched once, so the cost grows with
    the number of distinct values rather than the number of rows.
    """
    header_set = set(headers)

    def is_mapped(import_field: ImportField) -> bool:
        header = mapping.field_mappings.get(import_field)
        return bool(header) and header in header_set

    raw_types = {
        normalize_activity_value(resolve_field(row, ImportField.ACTIVITY_TYPE, mapping, headers))
        for row in dataset.data_rows
    }

    unmapped = []
    all_cash = True
    for raw_type in sorted(raw_types):
        activity_type = find_activity_type(raw_type, mapping.activity_mappings)
        if activity_type is None:
            unmapped.append(raw_type)
            all_cash = False
        elif not is_cash_activity(activity_type):
            all_cash = False

    required = list(ALWAYS_REQUIRED_FIELDS)
    if not (all_cash and is_mapped(ImportField.AMOUNT)):
        required.extend(POSITION_FIELDS)

    return MappingGaps(
        account_missing=mapping.account_id is None,
        missing_fields=[f for f in required if not is_mapped(f)],
        unmapped_activity_types=unmapped,
    )


def is_mapping_complete(
    headers: Sequence[str], mapping: ImportMapping, dataset: CsvDataset
) -> bool:
    """Return True if ``mapping`` can transform every row of ``dataset``."""
    return find_mapping_gaps(headers, mapping, dataset).is_empty

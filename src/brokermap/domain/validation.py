"""Batch validation of import candidates."""

from typing import Sequence

from brokermap.domain.classifier import is_cash_activity
from brokermap.domain.entities import ActivityType, ImportCandidate, ValidationReport
from brokermap.utils.date_parser import parse_date

KNOWN_ACTIVITY_TYPES = frozenset(t.value for t in ActivityType)


def candidate_errors(candidate: ImportCandidate) -> list[str]:
    """Return the validation errors for one candidate, in rule order."""
    errors = []

    if not candidate.date.strip():
        errors.append("date missing")
    else:
        try:
            parse_date(candidate.date)
        except ValueError:
            errors.append(f"invalid date '{candidate.date}'")

    if candidate.activity_type not in KNOWN_ACTIVITY_TYPES:
        errors.append(f"unknown activity type '{candidate.activity_type}'")

    if not candidate.symbol:
        errors.append("symbol missing")

    if not candidate.quantity.is_finite():
        errors.append("quantity is not a number")

    if not candidate.unit_price.is_finite():
        errors.append("unit price is not a number")

    if not candidate.fee.is_finite():
        errors.append("fee is not a number")

    if not candidate.currency:
        errors.append("currency missing")

    if candidate.amount is None:
        if is_cash_activity(candidate.activity_type):
            errors.append("amount missing")
    elif not candidate.amount.is_finite():
        errors.append("amount is not a number")

    return errors


def validate_candidates(candidates: Sequence[ImportCandidate], start: int = 1) -> ValidationReport:
    """Validate a batch of candidates.

    Args:
        candidates: Candidates in source row order
        start: Row index of the first candidate (1 when the header row is 0)

    Returns:
        Errors keyed by row index. Rows without errors are left out, so an
        empty report means the batch can be imported.
    """
    report: ValidationReport = {}
    for row_index, candidate in enumerate(candidates, start=start):
        errors = candidate_errors(candidate)
        if errors:
            report[row_index] = errors
    return report

"""Activity import domain service."""

import logging
from dataclasses import dataclass, field, replace
from typing import Sequence

from brokermap.database.base import Database
from brokermap.domain.account import AccountService
from brokermap.domain.completeness import MappingGaps, find_mapping_gaps
from brokermap.domain.entities import CsvDataset, ImportCandidate, ImportMapping, ValidationReport
from brokermap.domain.errors import NotFoundError, ValidationError, account_not_found
from brokermap.domain.transform import transform_dataset
from brokermap.domain.validation import candidate_errors, validate_candidates

logger = logging.getLogger(__name__)

DUPLICATE_COMMENT = "duplicate activity"


@dataclass(frozen=True)
class ImportPreview:
    """Result of running a mapping over a dataset without saving anything.

    ``candidates`` and ``report`` are empty when the mapping has gaps.
    """

    gaps: MappingGaps
    candidates: list[ImportCandidate] = field(default_factory=list)
    report: ValidationReport = field(default_factory=dict)

    @property
    def is_importable(self) -> bool:
        return self.gaps.is_empty and not self.report


class ActivityImportService:
    """Service for previewing, checking and creating imported activities."""

    def __init__(self, db: Database):
        """Initialize activity import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)

    def preview(self, dataset: CsvDataset, mapping: ImportMapping) -> ImportPreview:
        """Transform and validate a dataset with a mapping.

        Rows are only transformed once the mapping covers every required
        field and every activity value in the file.
        """
        gaps = find_mapping_gaps(dataset.headers, mapping, dataset)
        if not gaps.is_empty:
            return ImportPreview(gaps=gaps)

        candidates = transform_dataset(dataset, mapping, self.account_service.list_accounts())
        report = validate_candidates(candidates)
        logger.debug(
            "Previewed %d rows for account %s, %d with errors",
            len(candidates),
            mapping.account_id,
            len(report),
        )
        return ImportPreview(gaps=gaps, candidates=candidates, report=report)

    def check_import(
        self, account_id: int, activities: Sequence[ImportCandidate]
    ) -> list[ImportCandidate]:
        """Check candidates against stored data.

        Each candidate comes back with ``is_valid`` set and any problems in
        ``comment``. Candidates identical to an already imported activity, or
        to an earlier valid candidate in the same batch, are marked as
        duplicates.

        Args:
            account_id: Account the activities belong to
            activities: Candidates to check

        Returns:
            Checked candidates, in input order

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.account_service.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        checked = []
        seen = set()
        for activity in activities:
            errors = candidate_errors(activity)
            key = (
                activity.date,
                activity.symbol,
                activity.activity_type,
                activity.quantity,
                activity.unit_price,
            )
            if not errors and key in seen:
                errors.append(DUPLICATE_COMMENT)
            elif not errors and self.db.activity_exists(
                account_id=account_id,
                date=activity.date,
                symbol=activity.symbol,
                activity_type=activity.activity_type,
                quantity=activity.quantity,
                unit_price=activity.unit_price,
            ):
                errors.append(DUPLICATE_COMMENT)
            if not errors:
                seen.add(key)
            checked.append(
                replace(
                    activity,
                    account_id=account_id,
                    is_valid=not errors,
                    comment="; ".join(errors),
                )
            )

        invalid = sum(1 for a in checked if not a.is_valid)
        logger.info(
            "Checked %d activities for account %s (%d invalid)", len(checked), account_id, invalid
        )
        return checked

    def create_activities(self, activities: Sequence[ImportCandidate]) -> int:
        """Persist checked activities.

        Only activities marked valid by :meth:`check_import` are created.

        Returns:
            Number of activities created

        Raises:
            ValidationError: If an activity has no account
        """
        created = 0
        for activity in activities:
            if not activity.is_valid:
                continue
            if activity.account_id is None:
                raise ValidationError("Activity has no account")
            self.db.create_activity(
                account_id=activity.account_id,
                date=activity.date,
                symbol=activity.symbol,
                activity_type=activity.activity_type,
                quantity=activity.quantity,
                unit_price=activity.unit_price,
                currency=activity.currency,
                fee=activity.fee,
                amount=activity.amount,
                comment=activity.comment or None,
            )
            created += 1
        logger.info("Created %d activities", created)
        return created

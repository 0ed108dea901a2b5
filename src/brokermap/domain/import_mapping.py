"""Import mapping domain service."""

import logging
from typing import Optional

from brokermap.database.base import Database
from brokermap.domain.entities import ActivityType, ImportField, ImportMapping
from brokermap.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    ambiguous_activity_pattern,
)
from brokermap.domain.resolution import normalize_activity_value

logger = logging.getLogger(__name__)


def check_unambiguous(mapping: ImportMapping) -> None:
    """Reject mappings that assign the same raw value to two activity types.

    Raises:
        ValidationError: If a normalized pattern appears under two types
    """
    owners: dict[str, ActivityType] = {}
    for activity_type, patterns in mapping.activity_mappings:
        for pattern in patterns:
            key = normalize_activity_value(pattern)
            if not key:
                continue
            owner = owners.setdefault(key, activity_type)
            if owner != activity_type:
                raise ValidationError(
                    ambiguous_activity_pattern(key, owner.value, activity_type.value)
                )


class ImportMappingService:
    """Service for loading, editing and saving per-account import mappings.

    Loaded mappings are cached per account until invalidated.
    """

    def __init__(self, db: Database):
        """Initialize import mapping service.

        Args:
            db: Database instance
        """
        self.db = db
        self._cache: dict[int, ImportMapping] = {}

    def get_mapping(self, account_id: int) -> ImportMapping:
        """Get the import mapping for an account.

        Args:
            account_id: Account ID

        Returns:
            Saved mapping, or an empty mapping bound to the account on first use

        Raises:
            NotFoundError: If account doesn't exist
        """
        cached = self._cache.get(account_id)
        if cached is not None:
            return cached

        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        mapping = self.db.get_import_mapping(account_id)
        if mapping is None:
            logger.debug("No saved import mapping for account %s", account_id)
            mapping = ImportMapping(account_id=account_id)
        self._cache[account_id] = mapping
        return mapping

    def save_mapping(self, mapping: ImportMapping) -> None:
        """Save a mapping, replacing any previous mapping for its account.

        Args:
            mapping: Mapping to save

        Raises:
            ValidationError: If no account is selected or patterns are ambiguous
            NotFoundError: If account doesn't exist
        """
        if mapping.account_id is None:
            raise ValidationError("Import mapping has no account")
        if self.db.get_account(mapping.account_id) is None:
            raise NotFoundError(account_not_found(mapping.account_id))
        check_unambiguous(mapping)

        self.db.save_import_mapping(mapping)
        self._cache[mapping.account_id] = mapping
        logger.info("Saved import mapping for account %s", mapping.account_id)

    def invalidate(self, account_id: Optional[int]) -> None:
        """Drop the cached mapping for an account."""
        self._cache.pop(account_id, None)

    def map_field(self, account_id: int, import_field: ImportField, header: Optional[str]) -> ImportMapping:
        """Map a CSV column to a field (or unmap it when header is empty) and save."""
        mapping = self.get_mapping(account_id).with_field(import_field, header)
        self.save_mapping(mapping)
        return mapping

    def map_activity_type(
        self, account_id: int, csv_value: str, activity_type: ActivityType
    ) -> ImportMapping:
        """Map a raw CSV activity value to an activity type and save."""
        if not csv_value.strip():
            raise ValidationError("CSV activity value cannot be empty")
        mapping = self.get_mapping(account_id).with_activity_type(csv_value, activity_type)
        self.save_mapping(mapping)
        return mapping

    def map_symbol(self, account_id: int, csv_symbol: str, symbol: Optional[str]) -> ImportMapping:
        """Map a raw CSV ticker to a canonical ticker (or remove the mapping) and save."""
        if not csv_symbol.strip():
            raise ValidationError("CSV symbol cannot be empty")
        mapping = self.get_mapping(account_id).with_symbol(csv_symbol, symbol)
        self.save_mapping(mapping)
        return mapping

"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the JSON layout used to
store import mappings.
"""

from typing import Any

from brokermap.domain import entities as domain
from brokermap.database.models import (
    Account as ORMAccount,
    Activity as ORMActivity,
    ImportMapping as ORMImportMapping,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        currency=orm_account.currency,
        created_at=orm_account.created_at,
    )


def activity_to_domain(orm_activity: ORMActivity) -> domain.Activity:
    """Convert SQLAlchemy Activity model to domain Activity entity."""
    return domain.Activity(
        id=orm_activity.id,
        account_id=orm_activity.account_id,
        date=orm_activity.date,
        symbol=orm_activity.symbol,
        activity_type=orm_activity.activity_type,
        quantity=orm_activity.quantity,
        unit_price=orm_activity.unit_price,
        currency=orm_activity.currency,
        fee=orm_activity.fee,
        amount=orm_activity.amount,
        comment=orm_activity.comment,
        imported_at=orm_activity.imported_at,
    )


def import_mapping_to_domain(orm_mapping: ORMImportMapping) -> domain.ImportMapping:
    """Convert SQLAlchemy ImportMapping model to domain ImportMapping entity.

    Keys outside the known field and activity enumerations are dropped.
    """
    known_fields = {f.value for f in domain.ImportField}
    known_types = {t.value for t in domain.ActivityType}

    field_mappings = {
        domain.ImportField(name): header
        for name, header in (orm_mapping.field_mappings or {}).items()
        if name in known_fields and header
    }
    activity_mappings = tuple(
        (domain.ActivityType(type_name), tuple(patterns))
        for type_name, patterns in (orm_mapping.activity_mappings or [])
        if type_name in known_types and patterns
    )
    return domain.ImportMapping(
        account_id=orm_mapping.account_id,
        field_mappings=field_mappings,
        activity_mappings=activity_mappings,
        symbol_mappings=dict(orm_mapping.symbol_mappings or {}),
    )


def import_mapping_to_columns(mapping: domain.ImportMapping) -> dict[str, Any]:
    """Convert a domain ImportMapping into JSON column values."""
    return {
        "field_mappings": {f.value: header for f, header in mapping.field_mappings.items()},
        "activity_mappings": [
            [activity_type.value, list(patterns)]
            for activity_type, patterns in mapping.activity_mappings
        ],
        "symbol_mappings": dict(mapping.symbol_mappings),
    }

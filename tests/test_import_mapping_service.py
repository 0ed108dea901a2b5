"""Domain tests for import mapping service."""

import pytest

from brokermap.domain.entities import ActivityType, ImportField, ImportMapping
from brokermap.domain.errors import NotFoundError, ValidationError
from brokermap.domain.import_mapping import ImportMappingService


def test_first_use_returns_empty_mapping(mapping_service, sample_account):
    mapping = mapping_service.get_mapping(sample_account.id)

    assert mapping == ImportMapping(account_id=sample_account.id)


def test_save_then_get_round_trip(temp_db, sample_account, trade_mapping):
    """A saved mapping reads back equal from a fresh service."""
    mapping = (
        trade_mapping.with_account(sample_account.id)
        .with_activity_type("SELL", ActivityType.SELL)
        .with_activity_type("DIV", ActivityType.DIVIDEND)
        .with_symbol("APPL", "AAPL")
    )
    ImportMappingService(temp_db).save_mapping(mapping)

    loaded = ImportMappingService(temp_db).get_mapping(sample_account.id)

    assert loaded == mapping
    assert [t for t, _ in loaded.activity_mappings] == [
        ActivityType.BUY,
        ActivityType.SELL,
        ActivityType.DIVIDEND,
    ]


def test_save_replaces_previous_mapping(temp_db, sample_mapping):
    service = ImportMappingService(temp_db)
    updated = sample_mapping.with_field(ImportField.FEE, None)

    service.save_mapping(updated)
    service.save_mapping(updated)

    assert ImportMappingService(temp_db).get_mapping(sample_mapping.account_id) == updated


def test_get_unknown_account(mapping_service):
    with pytest.raises(NotFoundError):
        mapping_service.get_mapping(999)


def test_save_without_account(mapping_service, trade_mapping):
    with pytest.raises(ValidationError) as excinfo:
        mapping_service.save_mapping(trade_mapping)

    assert "no account" in str(excinfo.value)


def test_save_unknown_account(mapping_service, trade_mapping):
    with pytest.raises(NotFoundError):
        mapping_service.save_mapping(trade_mapping.with_account(999))


def test_save_rejects_ambiguous_patterns(mapping_service, sample_account):
    mapping = ImportMapping(
        account_id=sample_account.id,
        activity_mappings=(
            (ActivityType.BUY, ("Buy",)),
            (ActivityType.ADD_HOLDING, (" BUY ",)),
        ),
    )

    with pytest.raises(ValidationError) as excinfo:
        mapping_service.save_mapping(mapping)

    assert "mapped to both BUY and ADD_HOLDING" in str(excinfo.value)


def test_cached_mapping_until_invalidated(temp_db, mapping_service, sample_mapping):
    first = mapping_service.get_mapping(sample_mapping.account_id)
    # Written behind the service's back
    temp_db.save_import_mapping(sample_mapping.with_symbol("X", "Y"))

    assert mapping_service.get_mapping(sample_mapping.account_id) is first

    mapping_service.invalidate(sample_mapping.account_id)
    assert mapping_service.get_mapping(sample_mapping.account_id).symbol_mappings == {"X": "Y"}


def test_edit_helpers_save(temp_db, mapping_service, sample_account):
    account_id = sample_account.id
    mapping_service.map_field(account_id, ImportField.DATE, "Trade Date")
    mapping_service.map_activity_type(account_id, "Purchase", ActivityType.BUY)
    mapping_service.map_activity_type(account_id, "purchase", ActivityType.ADD_HOLDING)
    mapping_service.map_symbol(account_id, "APPL", "AAPL")

    loaded = ImportMappingService(temp_db).get_mapping(account_id)

    assert loaded.field_mappings == {ImportField.DATE: "Trade Date"}
    assert loaded.activity_mappings == ((ActivityType.ADD_HOLDING, ("purchase",)),)
    assert loaded.symbol_mappings == {"APPL": "AAPL"}


def test_edit_helpers_remove(mapping_service, sample_mapping):
    account_id = sample_mapping.account_id
    mapping_service.map_field(account_id, ImportField.FEE, None)
    mapping_service.map_symbol(account_id, "APPL", "AAPL")
    mapping = mapping_service.map_symbol(account_id, "APPL", None)

    assert ImportField.FEE not in mapping.field_mappings
    assert mapping.symbol_mappings == {}


def test_empty_activity_value_rejected(mapping_service, sample_account):
    with pytest.raises(ValidationError):
        mapping_service.map_activity_type(sample_account.id, "  ", ActivityType.BUY)

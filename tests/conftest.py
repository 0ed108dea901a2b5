"""Shared pytest fixtures for brokermap tests."""

import tempfile
import os
import pytest

from brokermap.database.factories import create_sqlite_database
from brokermap.domain.account import AccountService
from brokermap.domain.activity_import import ActivityImportService
from brokermap.domain.entities import (
    ActivityType,
    CsvDataset,
    ImportField,
    ImportMapping,
)
from brokermap.domain.import_mapping import ImportMappingService

TRADE_HEADERS = ["Trade Date", "Ticker", "Side", "Qty", "Price", "Fee"]


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def mapping_service(temp_db):
    """Create an ImportMappingService with a temporary database."""
    return ImportMappingService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create an ActivityImportService with a temporary database."""
    return ActivityImportService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Test Broker", currency="USD")
    return account_service.get_account(account_id)


@pytest.fixture
def trade_mapping():
    """Mapping for the trade export layout, not bound to an account."""
    return ImportMapping(
        field_mappings={
            ImportField.DATE: "Trade Date",
            ImportField.SYMBOL: "Ticker",
            ImportField.ACTIVITY_TYPE: "Side",
            ImportField.QUANTITY: "Qty",
            ImportField.UNIT_PRICE: "Price",
            ImportField.FEE: "Fee",
        },
        activity_mappings=((ActivityType.BUY, ("BUY",)),),
    )


@pytest.fixture
def sample_mapping(mapping_service, sample_account, trade_mapping):
    """Save the trade mapping for the sample account."""
    mapping = trade_mapping.with_account(sample_account.id)
    mapping_service.save_mapping(mapping)
    return mapping


@pytest.fixture
def trade_dataset():
    """Small trade export with a header row."""
    return CsvDataset.from_rows(
        [
            TRADE_HEADERS,
            ["2024-01-05", "AAPL", "BUY", "10", "150.00", "1.00"],
            ["2024-01-06", "MSFT", "BUY - MARKET", "5", "370.50", "0.50"],
        ]
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()

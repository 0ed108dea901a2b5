"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from brokermap.domain.entities import Account, Activity, ImportMapping


class Database(ABC):
    """Abstract database interface for brokermap."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, currency: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Import mapping operations
    @abstractmethod
    def get_import_mapping(self, account_id: int) -> Optional[ImportMapping]:
        """Get the saved import mapping for an account."""
        pass

    @abstractmethod
    def save_import_mapping(self, mapping: ImportMapping) -> None:
        """Insert or replace the import mapping for ``mapping.account_id``."""
        pass

    # Activity operations
    @abstractmethod
    def create_activity(
        self,
        account_id: int,
        date: str,
        symbol: str,
        activity_type: str,
        quantity: Decimal,
        unit_price: Decimal,
        currency: str,
        fee: Decimal,
        amount: Optional[Decimal] = None,
        comment: Optional[str] = None,
    ) -> int:
        """Create an activity. Returns activity ID."""
        pass

    @abstractmethod
    def activity_exists(
        self,
        account_id: int,
        date: str,
        symbol: str,
        activity_type: str,
        quantity: Decimal,
        unit_price: Decimal,
    ) -> bool:
        """Check if an identical activity was already imported for the account."""
        pass

    @abstractmethod
    def list_activities(self, account_id: Optional[int] = None) -> list[Activity]:
        """List activities, optionally filtered by account."""
        pass

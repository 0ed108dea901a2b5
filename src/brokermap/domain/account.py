"""Account domain service."""

import logging
from typing import Optional
from brokermap.database.base import Database
from brokermap.domain.entities import Account as AccountEntity
from brokermap.domain.errors import ConflictError, ValidationError, duplicate_account_name

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, currency: str) -> int:
        """Create a new account.

        Args:
            name: Account name
            currency: Default currency code for activities without one (e.g. USD)

        Returns:
            Account ID

        Raises:
            ValidationError: If currency is not a three-letter code
            ConflictError: If account name already exists
        """
        currency = currency.strip().upper()
        if len(currency) != 3 or not currency.isalpha():
            raise ValidationError(f"Invalid currency code '{currency}'")

        # Check if account with same name exists
        accounts = self.db.list_accounts()
        for acc in accounts:
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        account_id = self.db.create_account(name=name, currency=currency)
        logger.info("Created account %s (%s, %s)", account_id, name, currency)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

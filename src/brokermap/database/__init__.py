"""Database layer for brokermap application."""

from brokermap.database.base import Database
from brokermap.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]

"""Database layer for fincontrol application."""

from fincontrol.database.base import Database
from fincontrol.database.factories import create_database, create_sqlite_database
from fincontrol.database.memory import InMemoryDatabase

__all__ = ["Database", "InMemoryDatabase", "create_database", "create_sqlite_database"]

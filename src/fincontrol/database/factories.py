"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from fincontrol.database.base import Database
from fincontrol.database.memory import InMemoryDatabase
from fincontrol.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DATABASE_URL_ENV = "FINCONTROL_DATABASE_URL"
MEMORY_URL = "memory://"


def default_database_url() -> str:
    """Return the SQLite URL under ~/.fincontrol, creating the directory."""
    db_dir = Path.home() / ".fincontrol"
    db_dir.mkdir(exist_ok=True)
    return f"sqlite:///{db_dir / 'fincontrol.db'}"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, defaults to
            ~/.fincontrol/fincontrol.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        return SQLAlchemyDatabase(default_database_url())
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_database(database_url: Optional[str] = None) -> Database:
    """Create the database selected by URL.

    Args:
        database_url: ``memory://`` for the in-memory store, any other value is
            handed to SQLAlchemy. If None, checks FINCONTROL_DATABASE_URL
            environment variable, then defaults to ~/.fincontrol/fincontrol.db

    Returns:
        Database instance
    """
    if database_url is None:
        database_url = os.environ.get(DATABASE_URL_ENV)

    if database_url is None:
        database_url = default_database_url()

    if database_url == MEMORY_URL:
        logger.debug("Using in-memory database")
        return InMemoryDatabase()

    logger.debug(f"Using SQLAlchemy database at {database_url}")
    return SQLAlchemyDatabase(database_url)

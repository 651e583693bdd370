"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from digiledger.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "DIGILEDGER_DB_PATH"


def default_database_path() -> Path:
    """Return the ledger file used when no path is configured."""
    return Path.home() / ".digiledger" / "digiledger.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    The path is taken from the argument, then from DIGILEDGER_DB_PATH, then
    from default_database_path(). A leading "~" is expanded and missing
    parent directories are created.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = Path(database_path or os.environ.get(DB_PATH_ENV) or default_database_path())
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")

"""Persistence for users, accounts and transactions."""

from digiledger.database.base import Database
from digiledger.database.factories import create_sqlite_database, default_database_path
from digiledger.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_sqlite_database", "default_database_path"]

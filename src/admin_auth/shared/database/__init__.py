"""Database utilities package."""

from .connection import DatabasePool, DatabaseSettings, db_pool, get_db_connection
from .query import Condition, Eq, In, Never, Or, QueryBuilder

__all__ = [
    "Condition",
    "DatabasePool",
    "DatabaseSettings",
    "Eq",
    "In",
    "Never",
    "Or",
    "QueryBuilder",
    "db_pool",
    "get_db_connection",
]

"""Shared utilities package."""

from .sql_loader import SQLLoader, create_sql_loader

__all__ = ["SQLLoader", "create_sql_loader"]

"""Configuration service for standard-table.

This module provides configuration management and database connection utilities
for the standard-table application. It centralizes environment variable handling
and database engine creation.
"""

from __future__ import annotations

import os

import sqlalchemy as sa

from standard_table.schema_tools.constants import Constants

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _int_from_env(name: str, default: int, minimum: int) -> int:
    val = os.getenv(name, str(default))
    try:
        n = int(val)
    except ValueError:
        n = default
    return max(minimum, n)


class ConfigService:
    """Service for managing configuration and database connections."""

    @staticmethod
    def get_database_url() -> str:
        """Get database URL from environment variable.

        Returns:
            Database URL string

        Raises:
            ValueError: If STANDARD_TABLE_DATABASE_URL environment variable is not set
        """
        database_url = os.getenv("STANDARD_TABLE_DATABASE_URL")
        if not database_url:
            error_msg = "STANDARD_TABLE_DATABASE_URL environment variable not set"
            raise ValueError(error_msg)
        return database_url

    @staticmethod
    def create_database_engine(url: str) -> sa.Engine:
        """Create SQLAlchemy database engine.

        Args:
            url: Database connection URL

        Returns:
            SQLAlchemy Engine instance
        """
        return sa.create_engine(url, pool_pre_ping=True)

    # ---- Result size budgets ---------------------------------------------
    @staticmethod
    def result_row_limit() -> int:
        """Maximum number of rows to return in results."""
        return _int_from_env("STANDARD_TABLE_ROW_LIMIT", Constants.DEFAULT_ROW_LIMIT, 1)

    @staticmethod
    def result_max_cell_chars() -> int:
        """Maximum characters per cell value in results."""
        return _int_from_env(
            "STANDARD_TABLE_MAX_CELL_CHARS", Constants.DEFAULT_MAX_CELL_CHARS, 10
        )

    # ---- Join policy -----------------------------------------------------
    @staticmethod
    def default_join_enabled() -> bool:
        """Whether the owner join is applied ahead of configured joins."""
        val = os.getenv("STANDARD_TABLE_DEFAULT_JOIN", "1")
        return val.strip().lower() not in _FALSE_VALUES

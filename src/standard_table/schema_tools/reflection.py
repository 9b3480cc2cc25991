"""Database schema introspection.

This module defines the narrow introspection interface the table builder
depends on and its SQLAlchemy implementation.

Classes:
- SchemaIntrospector: Protocol consumed by the resolver and join planner
- SqlAlchemySchemaIntrospector: Inspector-backed implementation
"""

from __future__ import annotations

from typing import Any, Protocol

from fastmcp.utilities.logging import get_logger
import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.engine.reflection import Inspector
from sqlalchemy.exc import CompileError, NoSuchTableError, SQLAlchemyError

from .exceptions import ReflectionError
from .models import SchemaColumn

_logger = get_logger(__name__)


class SchemaIntrospector(Protocol):
    """Schema lookups needed to resolve columns and plan joins."""

    def describe_columns(self, table: str) -> list[SchemaColumn]:
        """Describe every column of ``table`` in definition order."""
        ...

    def has_column(self, table: str, field: str) -> bool:
        """Return True when ``table`` exists and has a column named ``field``."""
        ...

    def list_columns(self, table: str) -> list[str]:
        """Return the column names of ``table`` in definition order."""
        ...


class SqlAlchemySchemaIntrospector:
    """Schema introspection using SQLAlchemy's inspector.

    Column descriptions are cached per table for the lifetime of the
    instance, which is expected to be a single table build.

    Attributes:
        engine: SQLAlchemy engine for database connections
        schema: Optional database schema the tables live in
    """

    def __init__(self, engine: Engine, schema: str | None = None) -> None:
        self.engine = engine
        self.schema = schema
        self._inspector: Inspector | None = None
        self._columns: dict[str, list[SchemaColumn]] = {}

    @property
    def inspector(self) -> Inspector:
        if self._inspector is None:
            self._inspector = sa.inspect(self.engine)
        return self._inspector

    def describe_columns(self, table: str) -> list[SchemaColumn]:
        """Describe the columns of ``table``.

        Raises:
            ReflectionError: If the table does not exist or cannot be reflected
        """
        cached = self._columns.get(table)
        if cached is not None:
            return cached

        try:
            columns_metadata = self.inspector.get_columns(table, schema=self.schema)
        except NoSuchTableError as e:
            error_msg = f"Table {table!r} does not exist"
            raise ReflectionError(error_msg) from e
        except SQLAlchemyError as e:
            error_msg = f"Failed to describe table {table!r}: {e}"
            raise ReflectionError(error_msg) from e

        described = [
            SchemaColumn(field=col["name"], raw_type=self._type_string(col["type"]))
            for col in columns_metadata
        ]
        _logger.debug("Described %s: %d columns", table, len(described))
        self._columns[table] = described
        return described

    def has_column(self, table: str, field: str) -> bool:
        try:
            columns = self.describe_columns(table)
        except ReflectionError as e:
            _logger.debug("Treating %s.%s as missing: %s", table, field, e)
            return False
        return any(col.field == field for col in columns)

    def list_columns(self, table: str) -> list[str]:
        return [col.field for col in self.describe_columns(table)]

    # ---- internals ---------------------------------------------------------
    def _type_string(self, col_type: Any) -> str:
        """Render a reflected type in the engine's dialect, lowercased."""
        try:
            rendered = col_type.compile(dialect=self.engine.dialect)
        except CompileError:
            # Unrecognized types (NullType) have no DDL rendering
            rendered = type(col_type).__name__
        return str(rendered).lower()

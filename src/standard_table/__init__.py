"""standard-table package for data grid table endpoints.

Describes a database table's columns for a data grid (title, render type,
filter type, visibility, order) and builds the filtered, joined and sorted
query over it, returning column metadata and rows in a single call.
"""

from standard_table.models import BuildResult
from standard_table.schema_tools import (
    ColumnConfig,
    ColumnMetadata,
    ConfigurationError,
    ExecutionError,
    JoinSpec,
    QueryPlan,
    ReflectionError,
    SortSpec,
    StandardTableError,
    TableSettings,
    TypeColumn,
    TypeFilterColumn,
)
from standard_table.services import ConfigService, TableBuildService

__all__ = [  # noqa: RUF022
    # Core models
    "BuildResult",
    "ColumnConfig",
    "ColumnMetadata",
    "JoinSpec",
    "QueryPlan",
    "SortSpec",
    "TableSettings",
    "TypeColumn",
    "TypeFilterColumn",
    # Errors
    "ConfigurationError",
    "ExecutionError",
    "ReflectionError",
    "StandardTableError",
    # Services
    "ConfigService",
    "TableBuildService",
]

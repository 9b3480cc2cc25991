"""Custom exception hierarchy for table structure building.

Exception Categories:
- Configuration errors for malformed table settings
- Reflection errors for schema introspection failures
- Execution errors for query compilation or execution failures

Missing columns and join fields are not represented here: those are skipped
silently by the resolver and the join planner.
"""

from __future__ import annotations


class StandardTableError(Exception):
    """Base exception for table structure operations.

    This is the root exception class for all errors raised by the package.
    The table service converts every subclass into an error result.
    """


class ConfigurationError(StandardTableError):
    """Raised when table settings are malformed.

    This exception is raised when, for example:
    - The table name is missing or empty
    - The page length is not a positive integer
    - A column condition uses an unsupported operator
    - The service is asked to build before being configured
    """


class ReflectionError(StandardTableError):
    """Raised when the schema of a table cannot be described.

    This exception is raised when the base table does not exist or the
    database refuses metadata access.
    """


class ExecutionError(StandardTableError):
    """Raised when compiling or executing the table query fails.

    This exception is raised when:
    - The sort field does not resolve to a selected table column
    - The database rejects the statement
    - The connection fails while fetching rows
    """

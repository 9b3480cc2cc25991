"""Table build service.

Orchestrates one grid table build: describe the base table, resolve column
metadata, assemble the query plan, execute it and package the result. The
public ``build`` call never raises; every failure is logged and returned as
an error result.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from typing import Any

from fastmcp.utilities.logging import get_logger
import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError

from standard_table.execute.runner import (
    ExecutionLimits,
    Mutator,
    QueryExecutor,
    SqlAlchemyQueryExecutor,
)
from standard_table.models import BuildResult
from standard_table.schema_tools.exceptions import ConfigurationError, StandardTableError
from standard_table.schema_tools.joins import JoinPlanner, default_join
from standard_table.schema_tools.models import QueryPlan
from standard_table.schema_tools.plan import assemble_plan
from standard_table.schema_tools.reflection import (
    SchemaIntrospector,
    SqlAlchemySchemaIntrospector,
)
from standard_table.schema_tools.resolver import resolve_columns
from standard_table.schema_tools.table_config import ColumnMetadata, JoinSpec, TableSettings


class TableBuildService:
    """Build grid column metadata and rows for a single table.

    A service instance serves one request: ``configure`` it once, then call
    ``build`` once.

    Attributes:
        introspector: Schema lookups for the base and related tables
        executor: Runs the assembled query plan
        default_joins: Joins applied ahead of the configured ones
    """

    def __init__(
        self,
        introspector: SchemaIntrospector,
        executor: QueryExecutor,
        *,
        default_joins: Sequence[JoinSpec] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.introspector = introspector
        self.executor = executor
        self.default_joins = (
            tuple(default_joins) if default_joins is not None else (default_join(),)
        )
        self._logger = logger or get_logger(__name__)
        self._settings: TableSettings | None = None
        self._config_error: ConfigurationError | None = None

    @classmethod
    def from_engine(
        cls,
        engine: sa.Engine,
        *,
        limits: ExecutionLimits | None = None,
        schema: str | None = None,
        include_default_join: bool = True,
        logger: logging.Logger | None = None,
    ) -> TableBuildService:
        """Create a service backed by SQLAlchemy introspection and execution."""
        return cls(
            SqlAlchemySchemaIntrospector(engine, schema=schema),
            SqlAlchemyQueryExecutor(engine, limits=limits, schema=schema),
            default_joins=None if include_default_join else (),
            logger=logger,
        )

    @property
    def settings(self) -> TableSettings | None:
        return self._settings

    def configure(self, settings: TableSettings | Mapping[str, Any]) -> None:
        """Set the table settings for the next build.

        Invalid settings are logged and reported by ``build`` as an error
        result instead of being raised here.
        """
        self._settings = None
        self._config_error = None
        try:
            self._settings = (
                settings
                if isinstance(settings, TableSettings)
                else TableSettings.from_config(settings)
            )
        except ConfigurationError as exc:
            self._logger.error("Error setting settings: %s", exc)
            self._config_error = exc

    def _require_settings(self) -> TableSettings:
        if self._config_error is not None:
            raise self._config_error
        if self._settings is None:
            msg = "Table settings have not been configured"
            raise ConfigurationError(msg)
        return self._settings

    def build_plan(self) -> tuple[list[ColumnMetadata], QueryPlan]:
        """Resolve column metadata and the query plan without executing it.

        Raises:
            ConfigurationError: If the service is not (validly) configured
            ReflectionError: If the base table cannot be described
        """
        settings = self._require_settings()
        schema_columns = self.introspector.describe_columns(settings.table)
        if settings.selected_columns is None:
            all_fields = self.introspector.list_columns(settings.table)
            settings = settings.with_selected_columns(all_fields)

        columns = resolve_columns(schema_columns, settings)
        plan = assemble_plan(
            settings, schema_columns, JoinPlanner(self.introspector), self.default_joins
        )
        self._logger.info(
            "Planned %s: %d columns, %d joins, %d predicates",
            settings.table,
            len(columns),
            len(plan.joins),
            len(plan.predicates),
        )
        return columns, plan

    def build(self, mutator: Mutator | None = None) -> BuildResult:
        """Build the table structure and data.

        Args:
            mutator: Optional callable receiving the compiled ``Select``
                before the sort is applied and returning the statement to run

        Returns:
            BuildResult with columns, data and page length, or an error result
        """
        try:
            columns, plan = self.build_plan()
            outcome = self.executor.execute(plan, mutator)
        except StandardTableError as exc:
            self._logger.error("Error getting table structure: %s", exc)
            return BuildResult.failure(str(exc))
        except SQLAlchemyError as exc:
            self._logger.exception("Database error while building table")
            return BuildResult.failure(str(exc))
        except Exception as exc:  # noqa: BLE001 - build reports every failure as a result
            self._logger.exception("Unexpected error while building table")
            return BuildResult.failure(str(exc))

        return BuildResult(
            columns=columns,
            data=outcome.rows,
            page_length=plan.page_length,
            truncated=outcome.truncated,
        )

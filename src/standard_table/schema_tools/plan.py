"""Query plan assembly for a table build.

Combines table settings, the described base schema and the join planner
into a single immutable ``QueryPlan``. Nothing here touches the database
except through the introspector used by the join planner.
"""

from __future__ import annotations

from collections.abc import Sequence

from fastmcp.utilities.logging import get_logger

from .joins import JoinPlanner
from .models import Predicate, QueryPlan, SchemaColumn, SelectColumn
from .table_config import ColumnConfig, JoinSpec, TableSettings

_logger = get_logger(__name__)


def _existing(
    configs: Sequence[ColumnConfig], schema_columns: Sequence[SchemaColumn]
) -> list[ColumnConfig]:
    fields = {col.field for col in schema_columns}
    kept = [config for config in configs if config.field in fields]
    if len(kept) != len(configs):
        missing = [config.field for config in configs if config.field not in fields]
        _logger.debug("Ignoring selected columns missing from schema: %s", ", ".join(missing))
    return kept


def base_select_columns(table: str, configs: Sequence[ColumnConfig]) -> tuple[SelectColumn, ...]:
    """Qualified base table columns in selected-column order, first occurrence only."""
    fields = dict.fromkeys(config.field for config in configs)
    return tuple(SelectColumn(table=table, column=field) for field in fields)


def column_predicates(table: str, configs: Sequence[ColumnConfig]) -> tuple[Predicate, ...]:
    """Declared conditions in column order, then condition order."""
    return tuple(
        Predicate(
            boolean=condition.boolean,
            table=table,
            column=config.field,
            operator=condition.operator,
            value=condition.value,
        )
        for config in configs
        for condition in config.conditions
    )


def assemble_plan(
    settings: TableSettings,
    schema_columns: Sequence[SchemaColumn],
    planner: JoinPlanner,
    default_joins: Sequence[JoinSpec] = (),
) -> QueryPlan:
    """Build the query plan for ``settings``.

    Args:
        settings: Table settings with ``selected_columns`` already populated
        schema_columns: Described columns of the base table
        planner: Join planner bound to a schema introspector
        default_joins: Joins applied before ``settings.column_join``

    Returns:
        QueryPlan holding joins, selects, predicates, sort and page length
    """
    table = settings.table
    configs = _existing(settings.selected_columns or (), schema_columns)

    join_specs = list(settings.column_join)
    if settings.include_default_join:
        join_specs = [*default_joins, *join_specs]
    joins, selects = planner.plan_joins(table, join_specs, base_select_columns(table, configs))

    return (
        QueryPlan(base_table=table, page_length=settings.page_length)
        .with_joins(joins)
        .with_selects(selects)
        .with_predicates(column_predicates(table, configs))
        .with_sort(settings.sorting)
    )

"""Join planning against described schemas.

Joins are validated fail-open: a join whose local or related field does not
exist is dropped without affecting the rest of the query.
"""

from __future__ import annotations

from collections.abc import Sequence

from fastmcp.utilities.logging import get_logger

from .constants import Constants
from .models import JoinClause, SelectColumn
from .reflection import SchemaIntrospector
from .table_config import JoinSpec

_logger = get_logger(__name__)


def default_join() -> JoinSpec:
    """The owner join applied before any configured join."""
    return JoinSpec.model_validate(Constants.DEFAULT_JOIN)


class JoinPlanner:
    """Expand join specs into join clauses and related select columns."""

    def __init__(self, introspector: SchemaIntrospector) -> None:
        self.introspector = introspector

    def plan_joins(
        self,
        base_table: str,
        join_specs: Sequence[JoinSpec],
        selected_columns: Sequence[SelectColumn],
    ) -> tuple[tuple[JoinClause, ...], tuple[SelectColumn, ...]]:
        """Validate ``join_specs`` in order and extend the select list.

        Returns:
            The applicable join clauses and a new select list made of
            ``selected_columns`` followed by the requested related columns
        """
        joins: list[JoinClause] = []
        selects = list(selected_columns)

        for spec in join_specs:
            clause = self.join_clause(base_table, spec)
            if clause is None:
                continue
            joins.append(clause)
            selects.extend(self.related_selects(spec))

        return tuple(joins), tuple(selects)

    def join_clause(self, base_table: str, spec: JoinSpec) -> JoinClause | None:
        """Build the join clause for ``spec``, or None when a join field is missing."""
        if not self.introspector.has_column(base_table, spec.field):
            _logger.debug(
                "Skipping join to %s: %s.%s not found", spec.related_table, base_table, spec.field
            )
            return None
        if not self.introspector.has_column(spec.related_table, spec.related_field):
            _logger.debug(
                "Skipping join to %s: %s.%s not found",
                spec.related_table,
                spec.related_table,
                spec.related_field,
            )
            return None
        return JoinClause(
            table=spec.related_table,
            kind=spec.kind,
            local_table=base_table,
            local_field=spec.field,
            related_field=spec.related_field,
        )

    def related_selects(self, spec: JoinSpec) -> list[SelectColumn]:
        """Related columns requested by ``spec`` that exist.

        A wildcard entry selects the whole related table and ends the list.
        Concrete columns are aliased as ``table.column`` so joined tables
        sharing a column name stay distinguishable.
        """
        table = spec.related_table
        selects: list[SelectColumn] = []
        for column in spec.select:
            if column == Constants.WILDCARD:
                selects.append(SelectColumn(table=table, column=Constants.WILDCARD))
                break
            if self.introspector.has_column(table, column):
                selects.append(SelectColumn(table=table, column=column, alias=f"{table}.{column}"))
        return selects

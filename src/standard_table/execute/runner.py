"""Execution of table query plans.

This module provides a small, dependency-injected runner that:
- Reflects the tables a plan touches
- Compiles the plan into a SQLAlchemy Core ``Select``
- Lets the caller adjust the statement before the sort is applied
- Executes with row and cell truncation safeguards
- Returns JSON-safe rows
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
import operator
from typing import Any, Protocol

from fastmcp.utilities.logging import get_logger
import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError

from standard_table.schema_tools.constants import Constants
from standard_table.schema_tools.exceptions import ExecutionError
from standard_table.schema_tools.models import Predicate, QueryPlan
from standard_table.schema_tools.table_config import SortSpec

_logger = get_logger(__name__)

Cell = str | int | float | bool | None
Row = dict[str, Cell]
Mutator = Callable[[sa.Select], sa.Select]

_COMPARATORS: dict[str, Callable[[sa.ColumnElement[Any], Any], sa.ColumnElement[bool]]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "like": lambda col, value: col.like(value),
    "not like": lambda col, value: col.not_like(value),
    "in": lambda col, value: col.in_(value),
    "not in": lambda col, value: col.not_in(value),
}


@dataclass(slots=True)
class ExecutionLimits:
    """Execution limits used to bound row count and cell size."""

    row_limit: int = Constants.DEFAULT_ROW_LIMIT
    # None leaves cell text whole; the MCP tool sets a cap from the environment
    max_cell_chars: int | None = None


@dataclass(slots=True)
class ExecutionOutcome:
    """Rows fetched for a plan and whether the row limit cut them short."""

    rows: list[Row]
    truncated: bool = False


class QueryExecutor(Protocol):
    """Runs a query plan and returns its rows."""

    def execute(self, plan: QueryPlan, mutator: Mutator | None = None) -> ExecutionOutcome:
        """Execute ``plan``; raise ExecutionError on failure."""
        ...


def _lookup(tables: Mapping[str, sa.Table], table: str, column: str) -> sa.Column[Any]:
    try:
        return tables[table].c[column]
    except KeyError as exc:
        msg = f"Unknown column {table}.{column}"
        raise ExecutionError(msg) from exc


def _predicate_expression(
    predicate: Predicate, tables: Mapping[str, sa.Table]
) -> sa.ColumnElement[bool]:
    column = _lookup(tables, predicate.table, predicate.column)
    return _COMPARATORS[predicate.operator](column, predicate.value)


def fold_predicates(
    predicates: Sequence[Predicate], tables: Mapping[str, sa.Table]
) -> sa.ColumnElement[bool] | None:
    """Combine predicates the way a flat ``a AND b OR c AND d`` chain reads.

    Consecutive ``where`` predicates form one AND group, each ``orWhere``
    opens a new group, and the groups are OR-ed together.
    """
    groups: list[list[sa.ColumnElement[bool]]] = []
    for predicate in predicates:
        expression = _predicate_expression(predicate, tables)
        if groups and predicate.boolean != "orWhere":
            groups[-1].append(expression)
        else:
            groups.append([expression])
    if not groups:
        return None
    return sa.or_(*(sa.and_(*group) for group in groups))


def _sort_expression(
    sort: SortSpec, base_table: str, tables: Mapping[str, sa.Table]
) -> sa.ColumnElement[Any]:
    table, _, column = sort.field.rpartition(".")
    col = _lookup(tables, table or base_table, column)
    return col.desc() if sort.direction == "desc" else col.asc()


def compile_query(
    plan: QueryPlan, tables: Mapping[str, sa.Table], mutator: Mutator | None = None
) -> sa.Select[Any]:
    """Compile ``plan`` into a ``Select`` over the reflected ``tables``.

    Order of application: select list, joins, predicates, ``mutator``, sort.
    Right joins are expressed as the equivalent left outer join with the
    operands swapped. Wildcard selects expand to every column of the table,
    labelled ``table.column``.

    Raises:
        ExecutionError: If the plan references a column missing from ``tables``
    """
    base = tables[plan.base_table]

    columns: list[sa.ColumnElement[Any]] = []
    for select in plan.selects:
        if select.is_wildcard:
            related = tables[select.table]
            columns.extend(col.label(f"{related.name}.{col.name}") for col in related.columns)
            continue
        col = _lookup(tables, select.table, select.column)
        columns.append(col.label(select.alias) if select.alias else col)
    if not columns:
        columns = list(base.columns)

    from_clause: sa.FromClause = base
    for join in plan.joins:
        related = tables[join.table]
        onclause = _lookup(tables, join.local_table, join.local_field) == _lookup(
            tables, join.table, join.related_field
        )
        if join.kind == "right":
            from_clause = sa.join(related, from_clause, onclause, isouter=True)
        else:
            from_clause = sa.join(from_clause, related, onclause, isouter=join.kind == "left")

    stmt = sa.select(*columns).select_from(from_clause)

    where = fold_predicates(plan.predicates, tables)
    if where is not None:
        stmt = stmt.where(where)

    if mutator is not None:
        stmt = mutator(stmt)

    if plan.sort is not None:
        stmt = stmt.order_by(_sort_expression(plan.sort, plan.base_table, tables))

    return stmt


def _truncate_value(val: object, max_chars: int | None) -> Cell:
    """Truncate a single cell value to a safe representation."""
    if val is None:
        return None
    if isinstance(val, int | float | bool):
        return val
    s = str(val)
    if max_chars is not None and len(s) > max_chars:
        return s[: max_chars - 1] + "…"
    return s


def _truncate_rows(
    rows: Iterable[sa.RowMapping],
    columns: list[str],
    max_rows: int,
    max_chars: int | None,
) -> list[Row]:
    """Convert rows to JSON-safe dicts with truncation and row limit."""
    out: list[Row] = []
    for i, row in enumerate(rows):
        if i >= max_rows:
            break
        out.append({col: _truncate_value(row[col], max_chars) for col in columns})
    return out


class SqlAlchemyQueryExecutor:
    """Execute query plans through a SQLAlchemy engine."""

    def __init__(
        self,
        engine: sa.Engine,
        limits: ExecutionLimits | None = None,
        schema: str | None = None,
    ) -> None:
        self.engine = engine
        self.limits = limits or ExecutionLimits()
        self.schema = schema
        self._metadata = sa.MetaData(schema=schema)

    def reflect_tables(self, plan: QueryPlan) -> dict[str, sa.Table]:
        """Reflect the base and joined tables of ``plan``."""
        return {
            name: sa.Table(name, self._metadata, autoload_with=self.engine)
            for name in plan.tables
        }

    def execute(self, plan: QueryPlan, mutator: Mutator | None = None) -> ExecutionOutcome:
        """Compile and run ``plan``.

        Raises:
            ExecutionError: If reflection, compilation or execution fails
        """
        limits = self.limits
        try:
            stmt = compile_query(plan, self.reflect_tables(plan), mutator)
            _logger.debug("SQL to execute: %s", stmt.compile(self.engine))
            with self.engine.connect() as conn:
                result = conn.execute(stmt)
                cols = list(result.keys())
                raw_rows = result.mappings().fetchmany(limits.row_limit + 1)
        except SQLAlchemyError as exc:
            _logger.warning("Execution error: %s", exc)
            raise ExecutionError(str(exc)) from exc

        truncated = len(raw_rows) > limits.row_limit
        rows = _truncate_rows(raw_rows, cols, limits.row_limit, limits.max_cell_chars)
        _logger.info(
            "Execution finished (table=%s, rows_returned=%d, truncated=%s)",
            plan.base_table,
            len(rows),
            truncated,
        )
        return ExecutionOutcome(rows=rows, truncated=truncated)

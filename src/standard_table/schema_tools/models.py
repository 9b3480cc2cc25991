"""Data models for schema descriptions and query plans.

Models:
- SchemaColumn: One column of a described table
- JoinClause: A validated join from the base table to a related table
- SelectColumn: A qualified, optionally aliased, select entry
- Predicate: A where/orWhere predicate on a base table column
- QueryPlan: Immutable accumulation of everything needed to run a table query
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .constants import ConditionBoolean, Constants, JoinKind
from .table_config import SortSpec


@dataclass(frozen=True)
class SchemaColumn:
    """A described table column.

    Attributes:
        field: Column name as defined in the database
        raw_type: SQL data type string (normalized to lowercase)
    """

    field: str
    raw_type: str


@dataclass(frozen=True)
class JoinClause:
    """Join of ``table`` on ``local_table.local_field = table.related_field``."""

    table: str
    kind: JoinKind
    local_table: str
    local_field: str
    related_field: str

    @property
    def left(self) -> str:
        return f"{self.local_table}.{self.local_field}"

    @property
    def right(self) -> str:
        return f"{self.table}.{self.related_field}"


@dataclass(frozen=True)
class SelectColumn:
    """A select list entry qualified by its table."""

    table: str
    column: str
    alias: str | None = None

    @property
    def is_wildcard(self) -> bool:
        return self.column == Constants.WILDCARD

    @property
    def expression(self) -> str:
        qualified = f"{self.table}.{self.column}"
        return f"{qualified} as {self.alias}" if self.alias else qualified


@dataclass(frozen=True)
class Predicate:
    """A declared column condition bound to its base table."""

    boolean: ConditionBoolean
    table: str
    column: str
    operator: str
    value: Any


@dataclass(frozen=True)
class QueryPlan:
    """Not-yet-executed description of one table query.

    Every ``with_*`` method returns a new plan; plans are never mutated.

    Attributes:
        base_table: Table the query selects from
        joins: Join clauses in application order
        selects: Select list in output order
        predicates: Where/orWhere predicates in declaration order
        sort: Optional sort applied last
        page_length: Pagination hint for the grid (not applied as a LIMIT)
    """

    base_table: str
    joins: tuple[JoinClause, ...] = ()
    selects: tuple[SelectColumn, ...] = ()
    predicates: tuple[Predicate, ...] = ()
    sort: SortSpec | None = None
    page_length: int = Constants.DEFAULT_PAGE_LENGTH

    def with_joins(self, joins: tuple[JoinClause, ...]) -> QueryPlan:
        return replace(self, joins=self.joins + joins)

    def with_selects(self, selects: tuple[SelectColumn, ...]) -> QueryPlan:
        return replace(self, selects=selects)

    def with_predicates(self, predicates: tuple[Predicate, ...]) -> QueryPlan:
        return replace(self, predicates=self.predicates + predicates)

    def with_sort(self, sort: SortSpec | None) -> QueryPlan:
        return replace(self, sort=sort)

    @property
    def tables(self) -> tuple[str, ...]:
        """Base table followed by joined tables, without duplicates."""
        names = [self.base_table]
        for join in self.joins:
            if join.table not in names:
                names.append(join.table)
        return tuple(names)

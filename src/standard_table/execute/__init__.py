"""Execute package for running table query plans.

Exports the SQLAlchemy executor and its limits. The FastMCP registration
helper lives in `standard_table.execute.mcp_tools`.
"""

from __future__ import annotations

from .runner import (
    ExecutionLimits,
    ExecutionOutcome,
    Mutator,
    QueryExecutor,
    SqlAlchemyQueryExecutor,
    compile_query,
    fold_predicates,
)

__all__ = [
    "ExecutionLimits",
    "ExecutionOutcome",
    "Mutator",
    "QueryExecutor",
    "SqlAlchemyQueryExecutor",
    "compile_query",
    "fold_predicates",
]

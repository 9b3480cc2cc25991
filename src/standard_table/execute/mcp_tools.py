"""MCP tool registration for table builds (build_table).

Provides a single tool `build_table(settings: dict)` that resolves grid column
metadata for a table, runs the filtered/joined/sorted query and returns the
grid payload (`columns`, `data`, `pageLength`) or an `error` message.
"""

from __future__ import annotations

import asyncio
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from fastmcp.utilities.logging import get_logger
from pydantic import Field

from standard_table.execute.runner import ExecutionLimits
from standard_table.services.config_service import ConfigService
from standard_table.services.engine_manager import EngineManager
from standard_table.services.table_service import TableBuildService

_logger = get_logger(__name__)


def register_build_table_tool(mcp: FastMCP, *, manager: EngineManager | None = None) -> None:
    """Register the table build tool.

    Each call configures a fresh TableBuildService, runs the synchronous
    build in a worker thread and returns the grid payload.
    """

    mgr = manager or EngineManager.get_instance()

    @mcp.tool
    async def build_table(
        ctx: Context,
        settings: Annotated[
            dict[str, Any],
            Field(
                description=(
                    "Table settings. Required: 'table'. Optional: 'pageLength', "
                    "'rename_columns' [[field, title]], 'column_types' [[field, type]], "
                    "'column_filters' [[field, filter]], 'selected_columns' "
                    "[{data, visible, order, conditions: [[where|orWhere, op, value]]}], "
                    "'column_join' [{field, joinType, relatedTable, relatedField, select}], "
                    "'sorting' [field, asc|desc], 'include_default_join'."
                )
            ),
        ],
    ) -> dict[str, Any]:  # pyright: ignore[reportUnusedFunction]
        """Describe a table's columns for a data grid and return its filtered rows.

        On error the payload holds only an 'error' message; fix the settings and retry.
        """

        _logger.info("build_table: %s", settings.get("table"))

        try:
            engine = mgr.get_engine()
        except ValueError as exc:
            await ctx.error(f"Database not configured: {exc}")
            raise

        service = TableBuildService.from_engine(
            engine,
            limits=ExecutionLimits(
                row_limit=ConfigService.result_row_limit(),
                max_cell_chars=ConfigService.result_max_cell_chars(),
            ),
            include_default_join=ConfigService.default_join_enabled(),
        )
        service.configure(settings)
        result = await asyncio.to_thread(service.build)
        if not result.ok:
            await ctx.warning(f"build_table failed: {result.error}")
        return result.to_payload()

    _ = build_table

"""FastMCP server implementation for standard-table."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import dotenv
from fastmcp import FastMCP
from fastmcp.utilities.logging import get_logger
from starlette.requests import Request
from starlette.responses import JSONResponse

from standard_table.execute.mcp_tools import register_build_table_tool
from standard_table.services.engine_manager import EngineManager

# Load environment variables
dotenv.load_dotenv()

# Configure a module-level logger for local server logs.
_logger = get_logger(__name__)


# -- Context Manager for engine lifecycle -----------------------------------
@asynccontextmanager
async def lifespan(_mcp_instance: FastMCP) -> AsyncGenerator[None]:
    """FastMCP lifespan context manager disposing the shared engine on shutdown."""
    manager = EngineManager.get_instance()
    try:
        yield
    finally:
        _logger.info("Shutting down database engine during lifespan shutdown")
        manager.dispose()


# Create the main MCP server instance with lifespan
mcp = FastMCP(
    instructions=(
        "This provides a data grid table builder that describes a database "
        "table's columns (title, render type, filter type, visibility, order) "
        "and returns its filtered, joined and sorted rows."
    ),
    lifespan=lifespan,
)

# -- Tool Registration -------------------------------------------------------
register_build_table_tool(mcp)


# -- Health Check ----------------------------------------------------------
@mcp.custom_route("/health", methods=["GET"])
async def health_check(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "service": "standard-table"})

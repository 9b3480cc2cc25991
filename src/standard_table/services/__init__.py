"""Services package for standard-table.

This package contains service classes that handle orchestration and
configuration for the standard-table application.

Main Components:
- ConfigService: Configuration and database connection management
- EngineManager: Process-wide engine for the MCP server
- TableBuildService: Table structure and data build orchestration
"""

from .config_service import ConfigService
from .engine_manager import EngineManager
from .table_service import TableBuildService

__all__ = [
    "ConfigService",
    "EngineManager",
    "TableBuildService",
]

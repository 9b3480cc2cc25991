"""Engine manager for standard-table.

Provides a process-wide SQLAlchemy engine for the MCP server. The engine is
created lazily from configuration on first use and disposed during FastMCP
lifespan shutdown.
"""

from __future__ import annotations

import threading
from typing import ClassVar

from fastmcp.utilities.logging import get_logger
import sqlalchemy as sa

from standard_table.services.config_service import ConfigService


class EngineManager:
    """Singleton holder of the server's database engine."""

    _instance: ClassVar[EngineManager | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        """Initialize the engine manager."""
        self._engine: sa.Engine | None = None
        self._engine_lock = threading.Lock()
        self._logger = get_logger(__name__)

    @classmethod
    def get_instance(cls) -> EngineManager:
        """Get the singleton instance of EngineManager.

        Returns:
            EngineManager: The singleton instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton, disposing its engine (used by tests)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.dispose()
            cls._instance = None

    def get_engine(self) -> sa.Engine:
        """Return the shared engine, creating it on first use.

        Raises:
            ValueError: If the database URL is not configured
        """
        if self._engine is None:
            with self._engine_lock:
                if self._engine is None:
                    url = ConfigService.get_database_url()
                    self._engine = ConfigService.create_database_engine(url)
                    self._logger.info(
                        "Created database engine (dialect=%s)", self._engine.dialect.name
                    )
        return self._engine

    def set_engine(self, engine: sa.Engine) -> None:
        """Use an externally created engine instead of the configured URL."""
        with self._engine_lock:
            self._engine = engine

    def dispose(self) -> None:
        """Dispose the engine's connection pool, if one was created."""
        with self._engine_lock:
            if self._engine is not None:
                self._logger.info("Disposing database engine")
                self._engine.dispose()
                self._engine = None

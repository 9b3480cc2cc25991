"""`standard-table` console script: serve the table build tool over MCP."""

from __future__ import annotations

import sys

from fastmcp.utilities.logging import get_logger

from standard_table.server import mcp

_logger = get_logger(__name__)


def main() -> None:
    """Run the server until interrupted; exit non-zero if it fails to start or crashes."""
    try:
        mcp.run()
    except KeyboardInterrupt:
        _logger.info("standard-table server stopped")
    except Exception:
        _logger.exception("standard-table server terminated with an error")
        sys.exit(1)


if __name__ == "__main__":
    main()

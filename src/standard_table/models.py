"""Pydantic models for table build results.

Minimal, task-focused models returned by the table service and the MCP tool.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from standard_table.schema_tools.table_config import ColumnMetadata

CellValue = str | int | float | bool | None


class BuildResult(BaseModel):
    """Outcome of one table build.

    On success the grid receives ``columns``, ``data`` and ``pageLength``;
    on failure only ``error`` is meaningful.
    """

    status: Literal["ok", "error"] = Field(default="ok", description="Overall status of the call")
    columns: list[ColumnMetadata] = Field(
        default_factory=list, description="Resolved column metadata in schema order"
    )
    data: list[dict[str, CellValue]] = Field(
        default_factory=list, description="Row data keyed by column or 'table.column' alias"
    )
    page_length: int | None = Field(default=None, description="Page size hint for the grid")
    truncated: bool = Field(default=False, description="True when the row limit cut rows off")
    error: str | None = Field(default=None, description="Error message when status is 'error'")

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def failure(cls, message: str) -> BuildResult:
        return cls(status="error", error=message)

    def to_payload(self) -> dict[str, Any]:
        """Render the grid endpoint payload."""
        if not self.ok:
            return {"error": self.error}
        return {
            "columns": [column.model_dump(mode="json") for column in self.columns],
            "data": self.data,
            "pageLength": self.page_length,
            "truncated": self.truncated,
        }

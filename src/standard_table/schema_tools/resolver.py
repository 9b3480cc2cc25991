"""Column configuration resolution.

Merges the caller's column settings (whitelist, titles, type overrides,
visibility and ordering) with types derived from the described schema to
produce the grid's column metadata.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

from fastmcp.utilities.logging import get_logger

from .constants import TypeColumn, TypeFilterColumn
from .models import SchemaColumn
from .table_config import ColumnConfig, ColumnMetadata, TableSettings
from .type_mapper import map_column_type

_logger = get_logger(__name__)

_V = TypeVar("_V")


def humanize_field(field: str) -> str:
    """Turn a column name into a display title.

    Underscores become spaces and the first letter of each word is
    upper-cased; the remaining letters are left untouched.

    Example:
        >>> humanize_field("created_at")
        'Created At'
        >>> humanize_field("vatID")
        'VatID'
    """
    return " ".join(word[:1].upper() + word[1:] for word in field.replace("_", " ").split(" "))


def _first_match(pairs: Iterable[tuple[str, _V]], field: str) -> _V | None:
    for name, value in pairs:
        if name == field:
            return value
    return None


def _smallest_unused(used: set[int]) -> int:
    candidate = 1
    while candidate in used:
        candidate += 1
    return candidate


class ColumnConfigResolver:
    """Resolve per-column grid metadata for one table build."""

    def __init__(self, settings: TableSettings) -> None:
        self.settings = settings

    def column_config(self, field: str) -> ColumnConfig | None:
        """Return the first selected-column config for ``field``, if any."""
        for config in self.settings.selected_columns or ():
            if config.field == field:
                return config
        return None

    def title(self, field: str) -> str:
        renamed = _first_match(self.settings.rename_columns, field)
        return renamed if renamed is not None else humanize_field(field)

    def render_type(self, column: SchemaColumn) -> TypeColumn:
        override = _first_match(self.settings.column_types, column.field)
        return override if override is not None else map_column_type(column.raw_type)[0]

    def filter_type(self, column: SchemaColumn) -> TypeFilterColumn:
        override = _first_match(self.settings.column_filters, column.field)
        return override if override is not None else map_column_type(column.raw_type)[1]

    def resolve(self, schema_columns: Sequence[SchemaColumn]) -> list[ColumnMetadata]:
        """Resolve metadata for every whitelisted column, in schema order.

        Orders are unique: a column without an explicit order takes the next
        counter value, and any order already in use is replaced by the
        smallest unused positive integer.
        """
        resolved: list[ColumnMetadata] = []
        used_orders: set[int] = set()
        counter = 0

        for column in schema_columns:
            config = self.column_config(column.field)
            if config is None:
                continue

            if config.order is not None:
                order = config.order
            else:
                order = counter
                counter += 1

            if order in used_orders:
                reassigned = _smallest_unused(used_orders)
                _logger.debug(
                    "Order %d of column %s already taken; using %d", order, column.field, reassigned
                )
                order = reassigned
            used_orders.add(order)

            resolved.append(
                ColumnMetadata(
                    title=self.title(column.field),
                    data=column.field,
                    visible=config.visible,
                    type=self.render_type(column),
                    typefilter=self.filter_type(column),
                    order=order,
                )
            )

        return resolved


def resolve_columns(
    schema_columns: Sequence[SchemaColumn], settings: TableSettings
) -> list[ColumnMetadata]:
    """Resolve grid column metadata for ``settings`` against a described schema."""
    return ColumnConfigResolver(settings).resolve(schema_columns)

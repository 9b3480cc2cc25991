"""Mapping of raw database type strings to grid render and filter types."""

from __future__ import annotations

from typing import Final

from .constants import TypeColumn, TypeFilterColumn

TypePair = tuple[TypeColumn, TypeFilterColumn]

DEFAULT_TYPES: Final[TypePair] = (TypeColumn.TEXT, TypeFilterColumn.TEXT)

# Evaluated top to bottom, first substring hit wins. "int" precedes the
# boolean rule and "time" precedes "timestamp", so tinyint(1) maps to number
# and timestamp maps to time.
TYPE_RULES: Final[tuple[tuple[tuple[str, ...], TypePair], ...]] = (
    (("int",), (TypeColumn.NUMBER, TypeFilterColumn.NUMBER)),
    (("varchar", "text"), (TypeColumn.TEXT, TypeFilterColumn.TEXT)),
    (("datetime",), (TypeColumn.DATETIME, TypeFilterColumn.DATETIME)),
    (("date",), (TypeColumn.DATE, TypeFilterColumn.DATE)),
    (("time",), (TypeColumn.TIME, TypeFilterColumn.TIME)),
    (("timestamp",), (TypeColumn.DATETIME, TypeFilterColumn.DATETIME)),
    (("decimal", "float", "double"), (TypeColumn.NUMBER, TypeFilterColumn.NUMBER)),
    (("boolean", "tinyint(1)"), (TypeColumn.BOOLEAN, TypeFilterColumn.TEXT)),
    (("enum",), (TypeColumn.SELECT, TypeFilterColumn.MULTI_SELECT)),
    (("json",), (TypeColumn.JSON, TypeFilterColumn.TEXT)),
)


def map_column_type(db_type: str) -> TypePair:
    """Map a raw database column type to a (render type, filter type) pair.

    Matching is case-sensitive and substring-based. Unrecognized types fall
    back to plain text.

    Example:
        >>> map_column_type("decimal(10,2)")
        (<TypeColumn.NUMBER: 'number'>, <TypeFilterColumn.NUMBER: 'number'>)
        >>> map_column_type("geometry")
        (<TypeColumn.TEXT: 'text'>, <TypeFilterColumn.TEXT: 'text'>)
    """
    for needles, pair in TYPE_RULES:
        if any(needle in db_type for needle in needles):
            return pair
    return DEFAULT_TYPES

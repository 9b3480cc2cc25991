"""Constants and enums for table structure building.

This module contains the render/filter type enumerations exposed to grid
front-ends, the default owner join and the literals accepted in column
conditions and join declarations.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal


class TypeColumn(str, Enum):
    """Render types understood by the grid front-end."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    SELECT = "select"
    JSON = "json"
    TIME = "time"
    PHONE = "phone"
    LINK = "link"


class TypeFilterColumn(str, Enum):
    """Filter controls understood by the grid front-end."""

    TEXT = "text"
    DATE = "date"
    DATETIME = "datetime"
    DATE_RANGE = "daterange"
    DATETIME_RANGE = "datetimerange"
    NUMBER = "number"
    TIME = "time"
    MULTI_SELECT = "multiselect"


JoinKind = Literal["inner", "left", "right"]
ConditionBoolean = Literal["where", "orWhere"]
SortDirection = Literal["asc", "desc"]


class Constants:
    """Configuration constants for table building."""

    DEFAULT_PAGE_LENGTH: Final[int] = 10
    DEFAULT_ROW_LIMIT: Final[int] = 10_000
    DEFAULT_MAX_CELL_CHARS: Final[int] = 2_000

    WILDCARD: Final[str] = "*"

    # Comparison operators accepted in column conditions
    CONDITION_OPERATORS: Final[frozenset[str]] = frozenset(
        {"=", "!=", "<>", "<", "<=", ">", ">=", "like", "not like", "in", "not in"}
    )

    # Records owned by a user row: owner_id -> users.rec_id
    DEFAULT_JOIN: Final[dict[str, object]] = {
        "field": "owner_id",
        "joinType": "inner",
        "relatedTable": "users",
        "relatedField": "rec_id",
        "select": ["display_name", "email"],
    }


__all__ = [
    "ConditionBoolean",
    "Constants",
    "JoinKind",
    "SortDirection",
    "TypeColumn",
    "TypeFilterColumn",
]

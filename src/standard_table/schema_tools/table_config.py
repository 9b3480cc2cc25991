"""Typed table settings and column metadata.

These pydantic models replace the free-form settings mapping used by grid
endpoints. They accept the camelCase keys front-ends already send
(``pageLength``, ``data``, ``joinType``, ``relatedTable``, ``relatedField``)
as well as the snake_case field names, and validate everything up front so
the build pipeline only ever sees well-formed settings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import (
    ConditionBoolean,
    Constants,
    JoinKind,
    SortDirection,
    TypeColumn,
    TypeFilterColumn,
)
from .exceptions import ConfigurationError


class Condition(BaseModel):
    """A single ``where``/``orWhere`` predicate declared on a column."""

    model_config = ConfigDict(frozen=True)

    boolean: ConditionBoolean = Field(default="where", description="Chaining boolean")
    operator: str = Field(default="=", description="Comparison operator")
    value: Any = Field(default=None, description="Bound comparison value")

    @model_validator(mode="before")
    @classmethod
    def _from_triple(cls, data: Any) -> Any:
        # ["where", "=", 1]
        if isinstance(data, list | tuple):
            if len(data) != 3:
                msg = f"Condition must be a (boolean, operator, value) triple, got {data!r}"
                raise ValueError(msg)
            return {"boolean": data[0], "operator": data[1], "value": data[2]}
        return data

    @field_validator("operator")
    @classmethod
    def _check_operator(cls, value: str) -> str:
        op = value.strip().lower()
        if op not in Constants.CONDITION_OPERATORS:
            msg = f"Unsupported condition operator: {value!r}"
            raise ValueError(msg)
        return op

    @model_validator(mode="after")
    def _check_membership_value(self) -> Condition:
        if self.operator in {"in", "not in"} and not isinstance(self.value, list | tuple):
            msg = f"Operator {self.operator!r} requires a list value"
            raise ValueError(msg)
        return self


class ColumnConfig(BaseModel):
    """Per-column selection and display configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str = Field(alias="data", min_length=1, description="Base table column name")
    visible: bool = Field(default=True, description="Whether the grid shows the column")
    order: int | None = Field(default=None, ge=0, description="Requested display order")
    conditions: tuple[Condition, ...] = Field(default=(), description="Declared predicates")

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"data": data}
        return data


class JoinSpec(BaseModel):
    """Declarative join from the base table to a related table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field: str = Field(description="Join column on the base table")
    join_type: str | None = Field(default="inner", alias="joinType")
    related_table: str = Field(alias="relatedTable")
    related_field: str = Field(alias="relatedField")
    select: tuple[str, ...] = Field(
        default=(), description="Related columns to select; '*' selects all of them"
    )

    @property
    def kind(self) -> JoinKind:
        """Effective join kind: left/right pass through, anything else is inner."""
        if self.join_type == "left":
            return "left"
        if self.join_type == "right":
            return "right"
        return "inner"


class SortSpec(BaseModel):
    """Sort applied after the caller's query mutator."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(min_length=1, description="Column, optionally qualified as table.column")
    direction: SortDirection = "asc"

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, list | tuple):
            if not 1 <= len(data) <= 2:
                msg = f"Sorting must be a (field, direction) pair, got {data!r}"
                raise ValueError(msg)
            return {"field": data[0], "direction": data[1] if len(data) == 2 else "asc"}
        return data

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class TableSettings(BaseModel):
    """Settings for one table build.

    Attributes:
        table: Base table name
        page_length: Page size hint returned to the grid
        rename_columns: Ordered (field, title) pairs; first match wins
        column_types: Ordered (field, render type) overrides
        column_filters: Ordered (field, filter type) overrides
        selected_columns: Column whitelist and configuration; None selects
            every column of the base table
        column_join: Joins applied after the default owner join
        sorting: Optional sort
        include_default_join: Apply the default owner join first
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    table: str = Field(min_length=1)
    page_length: int = Field(default=Constants.DEFAULT_PAGE_LENGTH, gt=0, alias="pageLength")
    rename_columns: tuple[tuple[str, str], ...] = ()
    column_types: tuple[tuple[str, TypeColumn], ...] = ()
    column_filters: tuple[tuple[str, TypeFilterColumn], ...] = ()
    selected_columns: tuple[ColumnConfig, ...] | None = None
    column_join: tuple[JoinSpec, ...] = ()
    sorting: SortSpec | None = None
    include_default_join: bool = True

    @field_validator("table")
    @classmethod
    def _strip_table(cls, value: str) -> str:
        name = value.strip()
        if not name:
            msg = "Table name must not be blank"
            raise ValueError(msg)
        return name

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TableSettings:
        """Validate a settings mapping.

        Raises:
            ConfigurationError: If the mapping is not valid table settings
        """
        if not isinstance(config, Mapping):
            msg = f"Invalid table settings: expected a mapping, got {type(config).__name__}"
            raise ConfigurationError(msg)
        try:
            return cls.model_validate(dict(config))
        except ValidationError as exc:
            msg = f"Invalid table settings: {exc}"
            raise ConfigurationError(msg) from exc

    def with_selected_columns(self, fields: list[str]) -> TableSettings:
        """Return a copy selecting the given fields with default configuration."""
        return self.model_copy(
            update={"selected_columns": tuple(ColumnConfig(field=f) for f in fields)}
        )


class ColumnMetadata(BaseModel):
    """Resolved grid column description."""

    model_config = ConfigDict(frozen=True)

    title: str
    data: str
    visible: bool = True
    type: TypeColumn
    typefilter: TypeFilterColumn
    order: int

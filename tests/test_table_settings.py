from __future__ import annotations

import pytest

from standard_table.schema_tools import (
    ColumnConfig,
    Condition,
    ConfigurationError,
    SortSpec,
    TableSettings,
    TypeColumn,
    TypeFilterColumn,
)


def test_from_config_accepts_grid_keys() -> None:
    settings = TableSettings.from_config(
        {
            "table": "orders",
            "pageLength": 50,
            "rename_columns": [["status", "Order Status"]],
            "column_types": [["total", "number"]],
            "column_filters": [["created_at", "datetimerange"]],
            "selected_columns": [
                {"data": "id", "visible": False, "order": "2"},
                {"data": "status", "conditions": [["where", "=", "open"]]},
            ],
            "column_join": [
                {"field": "shop_id", "relatedTable": "shops", "relatedField": "id"},
            ],
            "sorting": ["orders.id", "desc"],
        }
    )

    assert settings.table == "orders"
    assert settings.page_length == 50
    assert settings.rename_columns == (("status", "Order Status"),)
    assert settings.column_types == (("total", TypeColumn.NUMBER),)
    assert settings.column_filters == (("created_at", TypeFilterColumn.DATETIME_RANGE),)
    assert settings.selected_columns is not None
    first, second = settings.selected_columns
    assert (first.field, first.visible, first.order) == ("id", False, 2)
    assert second.conditions == (Condition(boolean="where", operator="=", value="open"),)
    (join,) = settings.column_join
    assert (join.field, join.related_table, join.related_field, join.kind) == (
        "shop_id",
        "shops",
        "id",
        "inner",
    )
    assert join.select == ()
    assert settings.sorting == SortSpec(field="orders.id", direction="desc")


def test_defaults() -> None:
    settings = TableSettings(table="orders")
    assert settings.page_length == 10
    assert settings.selected_columns is None
    assert settings.column_join == ()
    assert settings.sorting is None
    assert settings.include_default_join is True


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"table": ""},
        {"table": "   "},
        {"table": "orders", "pageLength": 0},
        {"table": "orders", "column_types": [["id", "integer"]]},
        {"table": "orders", "selected_columns": [{"visible": True}]},
        {"table": "orders", "selected_columns": [{"data": "id", "order": -1}]},
        {"table": "orders", "sorting": ["id", "sideways"]},
        {"table": "orders", "column_join": [{"field": "owner_id"}]},
    ],
)
def test_invalid_settings_raise_configuration_error(config: dict[str, object]) -> None:
    with pytest.raises(ConfigurationError, match="Invalid table settings"):
        TableSettings.from_config(config)


def test_condition_operator_is_normalized() -> None:
    condition = Condition.model_validate(["orWhere", " LIKE ", "%a%"])
    assert (condition.boolean, condition.operator, condition.value) == ("orWhere", "like", "%a%")


@pytest.mark.parametrize(
    "raw",
    [
        ["where", "=", 1, 2],
        ["sometimes", "=", 1],
        ["where", "~", 1],
        ["where", "in", 1],
    ],
)
def test_invalid_conditions(raw: list[object]) -> None:
    with pytest.raises(ValueError):
        Condition.model_validate(raw)


def test_column_config_from_name() -> None:
    assert ColumnConfig.model_validate("email") == ColumnConfig(field="email")


def test_sort_direction_defaults_to_ascending() -> None:
    assert SortSpec.model_validate(["id"]).direction == "asc"


def test_with_selected_columns_returns_copy() -> None:
    settings = TableSettings(table="orders")
    selected = settings.with_selected_columns(["id", "total"])
    assert settings.selected_columns is None
    assert selected.selected_columns is not None
    assert [c.field for c in selected.selected_columns] == ["id", "total"]


def test_from_config_rejects_non_mapping() -> None:
    with pytest.raises(ConfigurationError, match="expected a mapping, got str"):
        TableSettings.from_config("orders")  # type: ignore[arg-type]

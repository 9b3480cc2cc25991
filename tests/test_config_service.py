from __future__ import annotations

from collections.abc import Iterator

import pytest
import sqlalchemy as sa

from standard_table.schema_tools.constants import Constants
from standard_table.services import ConfigService, EngineManager


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "STANDARD_TABLE_DATABASE_URL",
        "STANDARD_TABLE_ROW_LIMIT",
        "STANDARD_TABLE_MAX_CELL_CHARS",
        "STANDARD_TABLE_DEFAULT_JOIN",
    ):
        monkeypatch.delenv(name, raising=False)
    EngineManager.reset_instance()
    yield
    EngineManager.reset_instance()


def test_database_url_required() -> None:
    with pytest.raises(ValueError, match="STANDARD_TABLE_DATABASE_URL"):
        ConfigService.get_database_url()


def test_database_url_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STANDARD_TABLE_DATABASE_URL", "sqlite+pysqlite:///:memory:")
    assert ConfigService.get_database_url() == "sqlite+pysqlite:///:memory:"


def test_limits_default() -> None:
    assert ConfigService.result_row_limit() == Constants.DEFAULT_ROW_LIMIT
    assert ConfigService.result_max_cell_chars() == Constants.DEFAULT_MAX_CELL_CHARS


@pytest.mark.parametrize(
    "raw,expected",
    [("250", 250), ("0", 1), ("-5", 1), ("lots", Constants.DEFAULT_ROW_LIMIT)],
)
def test_row_limit_parsing(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
    monkeypatch.setenv("STANDARD_TABLE_ROW_LIMIT", raw)
    assert ConfigService.result_row_limit() == expected


@pytest.mark.parametrize(
    "raw,expected",
    [("500", 500), ("3", 10), ("", Constants.DEFAULT_MAX_CELL_CHARS)],
)
def test_max_cell_chars_parsing(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    monkeypatch.setenv("STANDARD_TABLE_MAX_CELL_CHARS", raw)
    assert ConfigService.result_max_cell_chars() == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, True),
        ("1", True),
        ("yes", True),
        ("0", False),
        ("false", False),
        (" OFF ", False),
        ("no", False),
    ],
)
def test_default_join_enabled(
    monkeypatch: pytest.MonkeyPatch, raw: str | None, expected: bool
) -> None:
    if raw is not None:
        monkeypatch.setenv("STANDARD_TABLE_DEFAULT_JOIN", raw)
    assert ConfigService.default_join_enabled() is expected


def test_engine_manager_is_singleton() -> None:
    assert EngineManager.get_instance() is EngineManager.get_instance()


def test_engine_manager_creates_engine_lazily(monkeypatch: pytest.MonkeyPatch) -> None:
    manager = EngineManager.get_instance()
    with pytest.raises(ValueError):
        manager.get_engine()

    monkeypatch.setenv("STANDARD_TABLE_DATABASE_URL", "sqlite+pysqlite:///:memory:")
    engine = manager.get_engine()

    assert engine.dialect.name == "sqlite"
    assert manager.get_engine() is engine


def test_engine_manager_set_engine_and_dispose() -> None:
    manager = EngineManager.get_instance()
    engine = sa.create_engine("sqlite+pysqlite:///:memory:")
    manager.set_engine(engine)
    assert manager.get_engine() is engine

    manager.dispose()

    with pytest.raises(ValueError):
        manager.get_engine()

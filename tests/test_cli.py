from __future__ import annotations

import pytest

from standard_table import cli


class _Server:
    def __init__(self, exc: BaseException | None = None) -> None:
        self.exc = exc
        self.runs = 0

    def run(self) -> None:
        self.runs += 1
        if self.exc is not None:
            raise self.exc


def test_main_runs_server(monkeypatch: pytest.MonkeyPatch) -> None:
    server = _Server()
    monkeypatch.setattr(cli, "mcp", server)
    cli.main()
    assert server.runs == 1


def test_main_exits_cleanly_on_interrupt(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "mcp", _Server(KeyboardInterrupt()))
    cli.main()


def test_main_exits_non_zero_on_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "mcp", _Server(RuntimeError("bind failed")))
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1

import logging
from pathlib import Path

import httpx
import pytest

from diamondstats.cli import main
from diamondstats.persistence import StatsStore


def _records() -> list[dict]:
    return [
        {"Player name": "Cli One", "position": "LF", "Games": "10", "Hits": "12"},
        {"Player name": "Cli Two", "position": "P", "Games": "5"},
    ]


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "cli.sqlite"
    monkeypatch.setenv("DIAMONDSTATS_DB_PATH", str(path))
    monkeypatch.setenv("DIAMONDSTATS_API_URL", "https://stats.example.test/players")
    return path


def _serve(monkeypatch: pytest.MonkeyPatch, response: httpx.Response) -> list[str]:
    seen: list[str] = []

    def fake_get(url, timeout):
        seen.append(url)
        return response

    monkeypatch.setattr(httpx, "get", fake_get)
    return seen


def _counts(path: Path) -> dict[str, int]:
    with StatsStore(path).session() as repo:
        return repo.counts()


def test_import_command_succeeds(db_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    seen = _serve(monkeypatch, httpx.Response(200, json=_records()))

    assert main(["import"]) == 0

    assert seen == ["https://stats.example.test/players"]
    assert _counts(db_path) == {"players": 2, "positions": 2, "player_statistics": 2}
    assert "Successfully imported 2 players!" in capsys.readouterr().out


def test_import_command_fresh(db_path: Path, monkeypatch: pytest.MonkeyPatch):
    _serve(monkeypatch, httpx.Response(200, json=_records()))
    assert main(["import"]) == 0

    _serve(monkeypatch, httpx.Response(200, json=_records()[:1]))
    assert main(["import", "--fresh"]) == 0

    assert _counts(db_path) == {"players": 1, "positions": 1, "player_statistics": 1}


def test_import_command_reports_upstream_failure(db_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    _serve(monkeypatch, httpx.Response(502))

    assert main(["import", "--fresh"]) == 1

    assert "Status: 502" in capsys.readouterr().err
    assert _counts(db_path)["players"] == 0


def test_import_command_reports_empty_payload(db_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    _serve(monkeypatch, httpx.Response(200, json=[]))

    assert main(["import"]) == 1
    assert "No player data received from API." in capsys.readouterr().err


def test_import_command_reports_rollback(db_path: Path, monkeypatch: pytest.MonkeyPatch, capsys):
    _serve(monkeypatch, httpx.Response(200, json=_records() + [{"Games": "3"}]))

    assert main(["import"]) == 1
    assert "Error importing data" in capsys.readouterr().err
    assert _counts(db_path)["players"] == 0


def test_command_is_required():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_import_command_logs_fetch_once(db_path: Path, monkeypatch: pytest.MonkeyPatch, capsys, caplog):
    _serve(monkeypatch, httpx.Response(200, json=_records()))

    with caplog.at_level(logging.INFO, logger="diamondstats.ingest.baseball"):
        assert main(["import"]) == 0

    assert "Fetching baseball data" not in capsys.readouterr().out
    fetch_logs = [r for r in caplog.records if r.getMessage().startswith("Fetching baseball data")]
    assert len(fetch_logs) == 1

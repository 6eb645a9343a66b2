from __future__ import annotations

import pytest
import typer

import golive.cli as cli


class _Settings:
    GOLIVE_PING_URL = "https://google.com"
    GOLIVE_PING_TIMEOUT = 1.5


def test_screens_prints_tree(capsys):
    cli.screens()
    out = capsys.readouterr().out
    assert "Home" in out
    assert "Go Live" in out
    assert "To Production" in out
    assert "action:ping" in out


def test_ping_ok_uses_configured_url(monkeypatch, capsys):
    seen = {}

    def _ping(url, timeout):
        seen.update(url=url, timeout=timeout)
        return True

    monkeypatch.setattr(cli, "load_settings", lambda: _Settings())
    monkeypatch.setattr("golive.tui.actions.ping_url", _ping)

    cli.ping(url=None, timeout=None)
    assert seen == {"url": "https://google.com", "timeout": 1.5}
    assert "ping:ok" in capsys.readouterr().out


def test_ping_err_exits_nonzero(monkeypatch, capsys):
    monkeypatch.setattr(cli, "load_settings", lambda: _Settings())
    monkeypatch.setattr("golive.tui.actions.ping_url", lambda url, timeout: False)

    with pytest.raises(typer.Exit) as excinfo:
        cli.ping(url="http://localhost:1", timeout=0.1)
    assert excinfo.value.exit_code == 1
    assert "ping:err" in capsys.readouterr().out


def test_launch_reports_invalid_registry(monkeypatch, tmp_path, capsys):
    from golive.tui.errors import UnknownScreenKey

    def _bad_router(console, settings):
        raise UnknownScreenKey("screen 'utils' has no entries")

    class _S:
        GOLIVE_LOG_DIR = tmp_path
        GOLIVE_LOG_FILE = "golive.log"
        GOLIVE_LOG_LEVEL = "INFO"
        GOLIVE_LOG_BACKUP_COUNT = 1

    monkeypatch.setattr(cli, "load_settings", lambda: _S())
    monkeypatch.setattr(cli, "setup_logging", lambda s: tmp_path / "golive.log")
    monkeypatch.setattr("golive.tui.router.create_router", _bad_router)

    with pytest.raises(typer.Exit) as excinfo:
        cli._launch()
    assert excinfo.value.exit_code == 1
    assert "Screen registry is invalid" in capsys.readouterr().out

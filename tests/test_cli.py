"""CLI - argument parsing and settings overrides for ``python -m valkey_rest``."""

import pytest

import valkey_rest.__main__ as cli


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--version"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == "1.0.0"


def test_overrides_host_and_port(monkeypatch):
    captured = {}

    def fake_run(settings):
        captured["settings"] = settings
        return 0

    monkeypatch.setattr(cli, "run", fake_run)
    monkeypatch.setattr(cli, "setup_logging", lambda level, fmt: None)

    assert cli.main(["--host", "127.0.0.1", "--port", "9999"]) == 0
    assert captured["settings"].host == "127.0.0.1"
    assert captured["settings"].port == 9999


def test_exit_code_propagates(monkeypatch):
    monkeypatch.setattr(cli, "run", lambda settings: 1)
    monkeypatch.setattr(cli, "setup_logging", lambda level, fmt: None)
    assert cli.main([]) == 1

"""Tests for the entry point."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from dotenv import dotenv_values

from ghostbook import main as main_module
from ghostbook.main import run_setup


def test_run_setup_writes_token(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt="": " 123:abc ")

    path = run_setup(tmp_path / ".env")

    assert dotenv_values(path)["TELEGRAM_TOKEN"] == "123:abc"


def test_bot_command_without_token_exits(monkeypatch) -> None:
    monkeypatch.setattr("sys.argv", ["ghostbook", "bot"])
    monkeypatch.setattr(main_module, "load_dotenv", lambda *a, **k: None)
    monkeypatch.setattr("ghostbook.logging.configure_logger", MagicMock())
    monkeypatch.delenv("TELEGRAM_TOKEN", raising=False)

    with pytest.raises(SystemExit):
        main_module.main()


def test_bot_command_passes_refresh(monkeypatch) -> None:
    bot_cls = MagicMock()
    monkeypatch.setattr("sys.argv", ["ghostbook", "bot", "--refresh"])
    monkeypatch.setattr(main_module, "load_dotenv", lambda *a, **k: None)
    monkeypatch.setattr("ghostbook.logging.configure_logger", MagicMock())
    monkeypatch.setattr("ghostbook.telegram.TelegramBot", bot_cls)

    main_module.main()

    bot_cls.assert_called_once_with(refresh_commands=True)
    bot_cls.return_value.run.assert_called_once()

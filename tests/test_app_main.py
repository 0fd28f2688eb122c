from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from chattranslator.app import config as app_config
from chattranslator.app.config import resolve_args
from chattranslator.app.main import main


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(app_config, "user_config_dir", lambda appname, appauthor=None: str(tmp_path))
    yield tmp_path
    logger = logging.getLogger("chattranslator")
    for h in logger.handlers:
        h.close()
    logger.handlers.clear()


def test_resolve_args_cli_overrides_config(tmp_path: Path) -> None:
    cfg_path = tmp_path / "app.json"
    cfg_path.write_text(json.dumps({"translator": "stub", "target_lang_code": "fa"}), encoding="utf-8")
    args = resolve_args(["--config", str(cfg_path), "--target-lang", "de", "languages"])
    assert args.translator == "stub"
    assert args.target_lang_code == "de"
    assert args.command == "languages"


def test_resolve_args_translate_options(tmp_path: Path) -> None:
    cfg_path = tmp_path / "app.json"
    cfg_path.write_text(json.dumps({"highlight_translations": True}), encoding="utf-8")
    args = resolve_args(
        ["--config", str(cfg_path), "--no-highlight", "translate", "hej", "--channel", "trade", "--local"]
    )
    assert args.highlight_translations is False
    assert args.text == "hej"
    assert args.channel == "trade"
    assert args.local is True


def test_resolve_args_requires_command(tmp_path: Path) -> None:
    cfg_path = tmp_path / "app.json"
    cfg_path.write_text("{}", encoding="utf-8")
    with pytest.raises(SystemExit):
        resolve_args(["--config", str(cfg_path)])


def test_main_login_translate_logout(config_dir: Path, capsys) -> None:
    assert main(["--translator", "stub", "login", "--api-key", "KEY"]) == 0
    stored = json.loads((config_dir / "config.json").read_text(encoding="utf-8"))
    assert stored["credentials"] == "KEY"
    # CLI overrides are not persisted
    assert stored["translator"] == "google"

    assert main(["--translator", "stub", "languages"]) == 0
    assert "da\tDanish" in capsys.readouterr().out

    rc = main(["--translator", "stub", "--no-highlight", "translate", "hej", "--speaker", "Bob", "--channel", "public"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "[public]" in out
    assert "'[EN->EN] Bob'" in out

    assert main(["--translator", "stub", "logout"]) == 0
    stored = json.loads((config_dir / "config.json").read_text(encoding="utf-8"))
    assert stored["credentials"] is None


def test_main_requires_login(config_dir: Path, capsys) -> None:
    assert main(["--translator", "stub", "languages"]) == 1
    assert "not authenticated" in capsys.readouterr().err


def test_main_login_from_credentials_file(config_dir: Path, tmp_path: Path) -> None:
    key_file = tmp_path / "key.txt"
    key_file.write_text("KEY\n", encoding="utf-8")
    assert main(["--translator", "stub", "login", "--credentials-file", str(key_file)]) == 0
    assert main(["--translator", "stub", "login", "--credentials-file", str(tmp_path / "missing.json")]) == 1

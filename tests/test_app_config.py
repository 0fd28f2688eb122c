from __future__ import annotations

import json
from pathlib import Path

import pytest

from chattranslator.app import config as app_config


def test_load_default_config_contains_expected_keys() -> None:
    cfg = app_config.load_default_config()
    assert cfg["translator"] == "google"
    assert cfg["credentials"] is None
    assert cfg["source_lang_code"] == "en"
    assert cfg["target_lang_code"] == "da"
    assert cfg["preview_chat_input"] is True


def test_resolve_defaults_uses_explicit_config(tmp_path: Path) -> None:
    cfg_path = tmp_path / "explicit.json"
    cfg_path.write_text(json.dumps({"target_lang_code": "fa", "target_lang_name": "Persian"}), encoding="utf-8")
    defaults, used = app_config.resolve_defaults(str(cfg_path))
    assert used == cfg_path
    assert defaults["target_lang_code"] == "fa"
    assert defaults["source_lang_code"] == "en"


def test_missing_explicit_config_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        app_config.load_user_config(str(tmp_path / "nope.json"))


def test_ensure_user_config_exists_creates_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(app_config, "user_config_dir", lambda appname, appauthor=None: str(tmp_path))
    created = app_config.ensure_user_config_exists({"translator": "stub", "highlight_translations": False})
    assert created.exists()
    loaded = json.loads(created.read_text(encoding="utf-8"))
    assert loaded["translator"] == "stub"
    assert loaded["highlight_translations"] is False


def test_load_user_config_ignores_unknown_keys_and_bom(tmp_path: Path) -> None:
    cfg_path = tmp_path / "user.json"
    cfg_path.write_text(
        "\ufeff" + json.dumps({"show_detected_language": False, "unexpected": 1}),
        encoding="utf-8",
    )
    loaded, used = app_config.load_user_config(str(cfg_path))
    assert used == cfg_path
    assert loaded["show_detected_language"] is False
    assert "unexpected" not in loaded


def test_save_user_config_merges_and_filters_keys(tmp_path: Path) -> None:
    cfg_path = tmp_path / "user.json"
    cfg_path.write_text(
        json.dumps({"target_lang_code": "fa", "credentials": "old"}),
        encoding="utf-8",
    )
    saved = app_config.save_user_config(
        {"credentials": "new", "junk": "x"},
        config_path=str(cfg_path),
    )
    assert saved == cfg_path
    loaded = json.loads(cfg_path.read_text(encoding="utf-8"))
    assert loaded["target_lang_code"] == "fa"
    assert loaded["credentials"] == "new"
    assert loaded["translator"] == "google"
    assert "junk" not in loaded


def test_display_options_from_config() -> None:
    cfg = app_config.load_default_config()
    cfg["source_lang_color"] = "#00FF00"
    opts = app_config.display_options(cfg)
    assert opts.source_color == "00ff00"
    assert opts.target_color == "ff0000"
    assert opts.known_source_code == "en"
    assert opts.known_target_code == "da"
    assert opts.highlight_enabled is True

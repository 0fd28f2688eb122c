from __future__ import annotations

import argparse
import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from chattranslator.chat.colors import parse_color
from chattranslator.contracts import ChannelKind, DisplayOptions

DEFAULTS: dict[str, Any] = {
    "credentials": None,
    "source_lang_code": "en",
    "source_lang_name": "English",
    "target_lang_code": "da",
    "target_lang_name": "Danish",
    "right_click_chat": True,
    "highlight_translations": True,
    "source_lang_color": "#00ff00",
    "target_lang_color": "#ff0000",
    "preview_chat_input": True,
    "show_detected_language": True,
    "translator": "google",
    "request_timeout_sec": 10.0,
    "async_translate": True,
    "queue_maxsize": 32,
    "max_updates_per_tick": 8,
    "debug": False,
}
CONFIG_KEYS: tuple[str, ...] = tuple(DEFAULTS.keys())


@dataclass(frozen=True)
class AppPaths:
    config_dir: Path
    config_path: Path


def app_paths() -> AppPaths:
    config_dir = Path(user_config_dir("ChatTranslator", "ChatTranslator"))
    return AppPaths(config_dir=config_dir, config_path=config_dir / "config.json")


def _load_json_dict(path: Path) -> dict[str, Any]:
    # Accept UTF-8 with or without BOM for Windows-edited config files.
    with path.open("r", encoding="utf-8-sig") as f:
        loaded = json.load(f)
    if not isinstance(loaded, dict):
        raise ValueError(f"config must be a JSON object: {path}")
    return loaded


def _write_json_dict(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")


def _known_only(payload: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in CONFIG_KEYS:
        if key in payload:
            out[key] = payload[key]
    return out


def load_default_config() -> dict[str, Any]:
    return copy.deepcopy(DEFAULTS)


def load_user_config(config_path: str | None = None) -> tuple[dict[str, Any], Path]:
    defaults = load_default_config()
    if config_path:
        chosen = Path(config_path)
        if not chosen.exists():
            raise SystemExit(f"Config file not found: {chosen}")
    else:
        chosen = ensure_user_config_exists(defaults)
    merged = dict(defaults)
    merged.update(_known_only(_load_json_dict(chosen)))
    return merged, chosen


def save_user_config(values: dict[str, Any], config_path: str | None = None) -> Path:
    payload = _known_only(values)
    if config_path:
        path = Path(config_path)
        existing = _known_only(_load_json_dict(path)) if path.exists() else {}
    else:
        path = ensure_user_config_exists(load_default_config())
        existing = _known_only(_load_json_dict(path))
    merged = load_default_config()
    merged.update(existing)
    merged.update(payload)
    _write_json_dict(path, _known_only(merged))
    return path


def ensure_user_config_exists(defaults: dict[str, Any] | None = None) -> Path:
    paths = app_paths()
    if paths.config_path.exists():
        return paths.config_path
    _write_json_dict(paths.config_path, defaults or load_default_config())
    return paths.config_path


def resolve_defaults(config_path: str | None = None) -> tuple[dict[str, Any], Path]:
    return load_user_config(config_path=config_path)


def display_options(values: dict[str, Any]) -> DisplayOptions:
    return DisplayOptions(
        show_detected_language=bool(values["show_detected_language"]),
        highlight_enabled=bool(values["highlight_translations"]),
        source_color=parse_color(values["source_lang_color"]),
        target_color=parse_color(values["target_lang_color"]),
        known_source_code=values.get("source_lang_code"),
        known_target_code=values.get("target_lang_code"),
    )


def parser_with_defaults(defaults: dict[str, Any]) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chattranslator")
    p.add_argument("--config", default=None, help="JSON config path (CLI flags override config)")
    p.add_argument("--translator", default=defaults["translator"], choices=["google", "stub"], help="backend")
    p.add_argument("--source-lang", dest="source_lang_code", default=defaults["source_lang_code"],
                   help="your language code, e.g. en")
    p.add_argument("--target-lang", dest="target_lang_code", default=defaults["target_lang_code"],
                   help="language you translate into when writing, e.g. da")
    p.add_argument(
        "--highlight",
        dest="highlight_translations",
        action=argparse.BooleanOptionalAction,
        default=defaults["highlight_translations"],
        help="color language codes and translated text",
    )
    p.add_argument(
        "--show-detected-language",
        action=argparse.BooleanOptionalAction,
        default=defaults["show_detected_language"],
        help="tag translations as [FROM->TO] instead of [TO]",
    )
    p.add_argument(
        "--timeout",
        dest="request_timeout_sec",
        type=float,
        default=defaults["request_timeout_sec"],
        help="translation request timeout in seconds",
    )
    p.add_argument("--debug", action="store_true", help="log debug events")

    sub = p.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="store and verify Google credentials")
    creds = login.add_mutually_exclusive_group(required=True)
    creds.add_argument("--api-key", default=None, help="Google Cloud API key")
    creds.add_argument("--credentials-file", default=None, help="service account JSON key file")

    sub.add_parser("logout", help="forget stored credentials")
    sub.add_parser("languages", help="list supported languages")

    tr = sub.add_parser("translate", help="translate a chat line and print the routed message")
    tr.add_argument("text", help="chat text to translate")
    tr.add_argument(
        "--channel",
        default=ChannelKind.GAME_MESSAGE.value,
        choices=[c.value for c in ChannelKind],
        help="visible chat channel",
    )
    tr.add_argument("--speaker", default=None, help="speaker name as shown in chat")
    tr.add_argument("--local", action="store_true", help="the line is your own unsent input")
    return p


def resolve_args(argv: list[str] | None = None) -> argparse.Namespace:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default=None)
    pre_args, _ = pre.parse_known_args(argv)
    defaults, _ = resolve_defaults(config_path=pre_args.config)
    parser = parser_with_defaults(defaults)
    args = parser.parse_args(argv)
    if defaults.get("debug"):
        args.debug = True
    return args

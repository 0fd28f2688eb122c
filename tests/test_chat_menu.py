from __future__ import annotations

from chattranslator.app.config import load_default_config
from chattranslator.chat.menu import HoverTarget, build_menu_entry
from chattranslator.contracts import ChatLine, DisplayOptions


def _cfg(**overrides):
    cfg = load_default_config()
    cfg.update(overrides)
    return cfg


def test_input_hover_translates_into_target_language() -> None:
    line = ChatLine(text="hello", speaker_name="Me", is_local_player=True)
    entry = build_menu_entry(HoverTarget.INPUT, line, _cfg())
    assert entry is not None
    assert entry.source_code == "en"
    assert entry.target_code == "da"
    assert entry.label(DisplayOptions(highlight_enabled=False)) == "Translate from English to Danish"


def test_chat_line_hover_auto_detects_into_own_language() -> None:
    line = ChatLine(text="hej", speaker_name="Bob")
    entry = build_menu_entry(HoverTarget.CHAT_LINE, line, _cfg())
    assert entry is not None
    assert entry.source is None
    assert entry.target_code == "en"
    assert entry.label(DisplayOptions(highlight_enabled=False)) == "Translate to English"


def test_label_highlights_language_names() -> None:
    line = ChatLine(text="hello", speaker_name="Me", is_local_player=True)
    entry = build_menu_entry(HoverTarget.INPUT, line, _cfg())
    options = DisplayOptions(
        highlight_enabled=True,
        source_color="00ff00",
        target_color="ff0000",
        known_source_code="en",
        known_target_code="da",
    )
    assert entry is not None
    assert entry.label(options) == "Translate from <col=00ff00>English</col> to <col=ff0000>Danish</col>"


def test_no_entry_when_disabled_or_empty() -> None:
    line = ChatLine(text="hej", speaker_name="Bob")
    assert build_menu_entry(HoverTarget.CHAT_LINE, line, _cfg(right_click_chat=False)) is None
    assert build_menu_entry(HoverTarget.NONE, line, _cfg()) is None
    assert build_menu_entry(HoverTarget.CHAT_LINE, None, _cfg()) is None
    assert build_menu_entry(HoverTarget.INPUT, ChatLine(text="", speaker_name="Me"), _cfg()) is None

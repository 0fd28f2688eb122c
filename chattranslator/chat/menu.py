from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from chattranslator.chat.colors import color_for_code, wrap_with_color_tag
from chattranslator.contracts import ChatLine, DisplayOptions, Language

EXPLICIT_FORMAT = "Translate from {source} to {target}"
IMPLICIT_FORMAT = "Translate to {target}"


class HoverTarget(str, Enum):
    INPUT = "input"
    CHAT_LINE = "chat_line"
    NONE = "none"


@dataclass(frozen=True)
class TranslateMenuEntry:
    line: ChatLine
    target: Language
    # None = auto-detect
    source: Optional[Language] = None

    @property
    def source_code(self) -> Optional[str]:
        return None if self.source is None else self.source.code

    @property
    def target_code(self) -> str:
        return self.target.code

    def label(self, options: DisplayOptions) -> str:
        target = _highlight_name(self.target, options)
        if self.source is None:
            return IMPLICIT_FORMAT.format(target=target)
        return EXPLICIT_FORMAT.format(source=_highlight_name(self.source, options), target=target)


def build_menu_entry(
    hover: HoverTarget,
    line: Optional[ChatLine],
    config: Mapping[str, Any],
) -> Optional[TranslateMenuEntry]:
    """
    Decide whether a "Translate ..." option belongs in the menu being opened.

    The player's own unsent input is translated from their language to the
    target language; anyone else's line is auto-detected and translated into
    the player's language.
    """
    if not config.get("right_click_chat", True):
        return None
    if hover == HoverTarget.NONE or line is None or not line.text:
        return None

    mine = Language(code=str(config["source_lang_code"]), name=str(config["source_lang_name"]))
    theirs = Language(code=str(config["target_lang_code"]), name=str(config["target_lang_name"]))
    if hover == HoverTarget.INPUT:
        return TranslateMenuEntry(line=line, source=mine, target=theirs)
    return TranslateMenuEntry(line=line, source=None, target=mine)


def _highlight_name(lang: Language, options: DisplayOptions) -> str:
    if not options.highlight_enabled:
        return lang.name
    color = color_for_code(
        lang.code,
        known_source_code=options.known_source_code,
        known_target_code=options.known_target_code,
        source_color=options.source_color,
        target_color=options.target_color,
    )
    return lang.name if color is None else wrap_with_color_tag(lang.name, color)

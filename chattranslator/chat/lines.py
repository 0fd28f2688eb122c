from __future__ import annotations

import re

from chattranslator.chat.colors import remove_tags
from chattranslator.contracts import ChatLine

# "[Friends Chat] Nuzzler: Hey" -> "Nuzzler: Hey"
_CHANNEL_HEADING = re.compile(r"^\[[^\]]+\] ")
_SPEAKER = re.compile(r"^(?P<name>[^:]+): ")


def parse_chat_line(rendered: str, is_local_player: bool = False) -> ChatLine:
    """
    Turn one rendered chat row (possibly with <col> tags) into a ChatLine.
    Rows without a "name: " prefix are treated as game messages.
    """
    text = remove_tags(rendered).strip()
    text = _CHANNEL_HEADING.sub("", text, count=1)

    speaker = None
    m = _SPEAKER.match(text)
    if m:
        speaker = m.group("name").strip() or None
        text = text[m.end():]
    return ChatLine(text=text.strip(), speaker_name=speaker, is_local_player=is_local_player)


def local_input_line(player_name: str, typed_text: str) -> ChatLine:
    return ChatLine(text=typed_text or "", speaker_name=player_name, is_local_player=True)

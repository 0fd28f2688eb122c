from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

_PM_PREFIXES = ("To ", "From ")


class ChannelKind(str, Enum):
    PUBLIC = "public"
    FRIENDS_CHAT = "friends_chat"
    TRADE = "trade"
    PRIVATE_IN = "private_in"
    PRIVATE_OUT = "private_out"
    GAME_MESSAGE = "game_message"


@dataclass(frozen=True)
class ChatLine:
    text: str
    speaker_name: Optional[str] = None
    is_local_player: bool = False

    @property
    def is_game_message(self) -> bool:
        return self.speaker_name is None

    @property
    def is_said_by_player(self) -> bool:
        return self.speaker_name is not None

    @property
    def is_said_by_local_player(self) -> bool:
        return self.is_local_player

    def normalized_for_private_filter(self) -> ChatLine:
        """
        The private chat filter renders speakers as "To <name>" / "From <name>".
        Return a copy with that direction prefix removed.
        """
        name = self.speaker_name
        if name is None:
            return self
        for prefix in _PM_PREFIXES:
            if name.startswith(prefix):
                return replace(self, speaker_name=name[len(prefix):])
        return self


@dataclass(frozen=True)
class TranslationRequest:
    text: str
    # None = let the backend detect the source language
    source_lang: Optional[str] = None
    target_lang: str = "en"


@dataclass(frozen=True)
class TranslationResult:
    source_text: str
    translated_text: str
    detected_source_lang: str
    target_lang: str
    provider: str


@dataclass(frozen=True)
class Language:
    code: str
    name: str


@dataclass(frozen=True)
class DisplayOptions:
    show_detected_language: bool = True
    highlight_enabled: bool = True
    source_color: str = "00ff00"
    target_color: str = "ff0000"
    known_source_code: Optional[str] = None
    known_target_code: Optional[str] = None


@dataclass(frozen=True)
class OutgoingMessage:
    """One (header, body, trailer) triple for the host's add-chat-message call."""
    channel: ChannelKind
    header: str
    body: str
    trailer: str

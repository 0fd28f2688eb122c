from __future__ import annotations

from typing import Optional

from chattranslator.chat.colors import color_for_code, wrap_with_color_tag
from chattranslator.contracts import (
    ChannelKind,
    ChatLine,
    DisplayOptions,
    OutgoingMessage,
    TranslationResult,
)

GAME_SPEAKER = "GAME"
_PRIVATE_KINDS = (ChannelKind.PRIVATE_IN, ChannelKind.PRIVATE_OUT)


class TranslationRouter:
    """
    Formats a finished translation as a message of the kind the player is
    currently filtering on, so the chat box shows it whatever tab is open.

    Routing rules:
      - the emitted channel is the visible channel;
      - the private tab splits into PRIVATE_OUT ("To <name>") and PRIVATE_IN
        ("From <name>", or anything else);
      - an unknown visible channel formats as a game message.
    """

    def route(
        self,
        visible: Optional[ChannelKind],
        line: ChatLine,
        result: TranslationResult,
        options: DisplayOptions,
    ) -> OutgoingMessage:
        from_code, to_code, text = _highlight(
            result.detected_source_lang.upper(),
            result.target_lang.upper(),
            result.translated_text,
            options,
        )
        tag = f"{from_code}->{to_code}" if options.show_detected_language else to_code

        if visible == ChannelKind.PUBLIC:
            return OutgoingMessage(
                channel=ChannelKind.PUBLIC,
                header=f"[{tag}] {_speaker(line)}",
                body="</col>" + text,
                trailer="xx",
            )
        if visible == ChannelKind.FRIENDS_CHAT:
            return OutgoingMessage(
                channel=ChannelKind.FRIENDS_CHAT,
                header=_speaker(line),
                body="</col>" + text,
                trailer="</col>" + tag,
            )
        if visible == ChannelKind.TRADE:
            who = f" {line.speaker_name}: " if line.is_said_by_local_player else ": "
            return OutgoingMessage(
                channel=ChannelKind.TRADE,
                header="",
                body=f"[{tag}]{who}{text}",
                trailer="",
            )
        if visible in _PRIVATE_KINDS:
            channel = private_direction(line)
            normalized = line.normalized_for_private_filter()
            return OutgoingMessage(
                channel=channel,
                header=_speaker(normalized),
                body=f"</col>[{tag}] {text}",
                trailer="",
            )

        who = f"{line.speaker_name}: " if line.is_said_by_player else ""
        return OutgoingMessage(
            channel=ChannelKind.GAME_MESSAGE,
            header="",
            body=f"[{tag}] {who}{text}",
            trailer="",
        )


def private_direction(line: ChatLine) -> ChannelKind:
    name = line.speaker_name or ""
    if name.startswith("To "):
        return ChannelKind.PRIVATE_OUT
    return ChannelKind.PRIVATE_IN


def _speaker(line: ChatLine) -> str:
    return line.speaker_name if line.speaker_name is not None else GAME_SPEAKER


def _highlight(
    from_code: str,
    to_code: str,
    text: str,
    options: DisplayOptions,
) -> tuple[str, str, str]:
    if not options.highlight_enabled:
        return from_code, to_code, text

    def pick(code: str) -> Optional[str]:
        return color_for_code(
            code,
            known_source_code=options.known_source_code,
            known_target_code=options.known_target_code,
            source_color=options.source_color,
            target_color=options.target_color,
        )

    from_color = pick(from_code)
    if from_color is not None:
        from_code = wrap_with_color_tag(from_code, from_color)

    to_color = pick(to_code)
    if to_color is not None:
        to_code = wrap_with_color_tag(to_code, to_color)
        text = wrap_with_color_tag(text, to_color)
    return from_code, to_code, text

from __future__ import annotations

import pytest

from chattranslator.chat.colors import parse_color, remove_tags, wrap_with_color_tag
from chattranslator.chat.lines import local_input_line, parse_chat_line
from chattranslator.contracts import ChatLine


def test_parse_player_line() -> None:
    line = parse_chat_line("Nuzzler: Hej med dig")
    assert line == ChatLine(text="Hej med dig", speaker_name="Nuzzler", is_local_player=False)
    assert line.is_said_by_player


def test_parse_strips_channel_heading_and_tags() -> None:
    line = parse_chat_line("[<col=0000ff>Friends Chat</col>] Nuzzler: <col=7f0000>Hey</col>")
    assert line.speaker_name == "Nuzzler"
    assert line.text == "Hey"


def test_parse_game_message() -> None:
    line = parse_chat_line("Welcome to Gielinor.")
    assert line.is_game_message
    assert line.text == "Welcome to Gielinor."


def test_private_prefix_normalization() -> None:
    out = parse_chat_line("To Bob: hi").normalized_for_private_filter()
    assert out.speaker_name == "Bob"
    inbound = parse_chat_line("From Bob: hi").normalized_for_private_filter()
    assert inbound.speaker_name == "Bob"
    plain = ChatLine(text="hi", speaker_name="Bob")
    assert plain.normalized_for_private_filter() is plain
    game = ChatLine(text="hi")
    assert game.normalized_for_private_filter() is game


def test_local_input_line() -> None:
    line = local_input_line("Me", "hello")
    assert line.is_said_by_local_player
    assert line.speaker_name == "Me"


def test_colors() -> None:
    assert parse_color("#00FF00") == "00ff00"
    assert parse_color("0xff0000") == "ff0000"
    assert parse_color("gray") == "808080"
    with pytest.raises(ValueError):
        parse_color("#12345")
    assert wrap_with_color_tag("EN", "00ff00") == "<col=00ff00>EN</col>"
    assert remove_tags("<col=ff0000>a</col>b") == "ab"

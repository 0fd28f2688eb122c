from __future__ import annotations

import re
from typing import Optional

DEFAULT_INPUT_COLOR = "9090ff"
INCORRECT_COLOR = "ff0000"
UNTYPED_COLOR = "808080"

_HEX6 = re.compile(r"^[0-9a-fA-F]{6}$")
_NAMED = {
    "green": "00ff00",
    "red": "ff0000",
    "gray": "808080",
    "grey": "808080",
    "white": "ffffff",
    "black": "000000",
    "blue": "0000ff",
    "yellow": "ffff00",
}


def parse_color(value: object) -> str:
    """
    Normalize "#RRGGBB", "RRGGBB", "0xRRGGBB" or a few color names to lowercase "rrggbb".
    """
    text = str(value or "").strip().lower()
    if text in _NAMED:
        return _NAMED[text]
    if text.startswith("#"):
        text = text[1:]
    elif text.startswith("0x"):
        text = text[2:]
    if not _HEX6.match(text):
        raise ValueError(f"invalid color: {value!r}")
    return text


def wrap_with_color_tag(text: str, color: str) -> str:
    return f"<col={color}>{text}</col>"


def color_for_code(
    code: str,
    *,
    known_source_code: Optional[str],
    known_target_code: Optional[str],
    source_color: str,
    target_color: str,
) -> Optional[str]:
    """Source color wins when a code matches both."""
    c = code.lower()
    if known_source_code and c == known_source_code.lower():
        return source_color
    if known_target_code and c == known_target_code.lower():
        return target_color
    return None


_TAG = re.compile(r"<[^>]*>")


def remove_tags(text: str) -> str:
    return _TAG.sub("", text or "")
